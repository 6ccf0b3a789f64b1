"""
Horizon REST 클라이언트 테스트

HorizonRestClient HTTP 요청 테스트 (httpx mock 사용).
"""

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from adapters.horizon.endpoints import AccountDetails
from adapters.horizon.errors import (
    DeserializationError,
    HorizonApiError,
    InvalidHost,
    InvalidPathParameter,
    NotFoundError,
    RateLimitError,
)
from adapters.horizon.rest_client import HorizonRestClient
from adapters.interfaces import IHorizonRestClient
from core.config.loader import Settings, get_settings
from core.constants import HorizonEndpoints
from core.types import Order


HOST = "https://horizon.example.org"


def make_response(
    payload: object,
    status_code: int = 200,
    headers: dict | None = None,
) -> MagicMock:
    """httpx.Response 모킹"""
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    response.content = json.dumps(payload).encode("utf-8")
    response.json.return_value = payload
    response.reason_phrase = "Error"
    response.text = json.dumps(payload)
    return response


class TestHorizonRestClientInit:
    """초기화 테스트"""

    def test_base_url_normalized(self) -> None:
        client = HorizonRestClient(base_url=f"{HOST}/")

        assert client.base_url == HOST

    def test_invalid_base_url(self) -> None:
        with pytest.raises(InvalidHost):
            HorizonRestClient(base_url="horizon.example.org")

    def test_implements_protocol(self) -> None:
        assert isinstance(HorizonRestClient(base_url=HOST), IHorizonRestClient)

    def test_from_settings(self, temp_config_file: Path) -> None:
        """horizon.yaml 설정으로 생성 (testnet, timeout 10)"""
        client = HorizonRestClient.from_settings(Settings(temp_config_file))

        assert client.base_url == HorizonEndpoints.TESTNET_URL
        assert client.timeout == 10.0

    def test_from_settings_uses_singleton(self, temp_config_file_custom_url: Path) -> None:
        """인자 없으면 get_settings() 싱글턴 사용"""
        get_settings(temp_config_file_custom_url)

        client = HorizonRestClient.from_settings()

        assert client.base_url == "https://horizon.example.org"
        assert client.timeout == 5.5


class TestHorizonRestClientAccount:
    """계정 조회 테스트"""

    @pytest.mark.asyncio
    async def test_get_account(self, horizon_account_response: dict) -> None:
        """계정 조회 - 요청 URL 및 파싱 결과"""
        client = HorizonRestClient(base_url=HOST)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(horizon_account_response)
            mock_get_client.return_value = mock_http_client

            account = await client.get_account("GABC")

            assert account.sequence == 604941848674305
            assert account.balances[0].asset_code == "USD"

            args, kwargs = mock_http_client.request.call_args
            assert args == ("GET", "https://horizon.example.org/accounts/GABC")
            assert kwargs["headers"] == {"Accept": "application/hal+json"}
            assert "content" not in kwargs
            assert "json" not in kwargs

    @pytest.mark.asyncio
    async def test_get_account_not_found(self) -> None:
        """404 -> NotFoundError"""
        client = HorizonRestClient(base_url=HOST)
        problem = {
            "type": "https://stellar.org/horizon-errors/not_found",
            "title": "Resource Missing",
            "status": 404,
            "detail": "The resource at the url requested was not found.",
        }

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(problem, status_code=404)
            mock_get_client.return_value = mock_http_client

            with pytest.raises(NotFoundError) as exc_info:
                await client.get_account("GABC")

            assert exc_info.value.status == 404
            assert exc_info.value.title == "Resource Missing"

    @pytest.mark.asyncio
    async def test_invalid_account_id_no_request(self) -> None:
        """요청 생성 실패 시 HTTP 요청 없음"""
        client = HorizonRestClient(base_url=HOST)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_get_client.return_value = mock_http_client

            with pytest.raises(InvalidPathParameter):
                await client.get_account("GA/BC")

            mock_http_client.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_body(self) -> None:
        """응답 본문 형식 오류 -> DeserializationError"""
        client = HorizonRestClient(base_url=HOST)
        response = make_response({})
        response.content = b"<html>"

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = response
            mock_get_client.return_value = mock_http_client

            with pytest.raises(DeserializationError):
                await client.execute(AccountDetails("GABC"))


class TestHorizonRestClientAssets:
    """자산 목록 조회 테스트"""

    @pytest.mark.asyncio
    async def test_get_assets(self, horizon_assets_page_response: dict) -> None:
        client = HorizonRestClient(base_url=HOST)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(horizon_assets_page_response)
            mock_get_client.return_value = mock_http_client

            page = await client.get_assets(asset_code="USD", order=Order.DESC, limit=1)

            assert len(page) == 1
            assert page.records[0].num_accounts == 91

            args, _ = mock_http_client.request.call_args
            assert args[1] == (
                "https://horizon.example.org/assets?asset_code=USD&order=desc&limit=1"
            )


class TestHorizonRestClientErrors:
    """에러 응답 테스트"""

    @pytest.mark.asyncio
    async def test_server_error(self) -> None:
        """5xx -> HorizonApiError"""
        client = HorizonRestClient(base_url=HOST)
        problem = {"title": "Internal Server Error", "status": 500, "detail": "boom"}

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(problem, status_code=500)
            mock_get_client.return_value = mock_http_client

            with pytest.raises(HorizonApiError) as exc_info:
                await client.get_account("GABC")

            assert not isinstance(exc_info.value, NotFoundError)
            assert exc_info.value.status == 500
            assert exc_info.value.detail == "boom"

    @pytest.mark.asyncio
    async def test_rate_limited(self) -> None:
        """429 -> RateLimitError (재시도 없음)"""
        client = HorizonRestClient(base_url=HOST)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(
                {"title": "Rate Limit Exceeded", "status": 429},
                status_code=429,
                headers={"Retry-After": "12"},
            )
            mock_get_client.return_value = mock_http_client

            with pytest.raises(RateLimitError) as exc_info:
                await client.get_account("GABC")

            assert exc_info.value.retry_after == 12
            assert mock_http_client.request.call_count == 1

    @pytest.mark.asyncio
    async def test_quota_exhausted_blocks_request(self) -> None:
        """남은 요청 수 0이면 요청 전 RateLimitError"""
        client = HorizonRestClient(base_url=HOST)
        client.rate_tracker.update_from_headers({
            "X-Ratelimit-Limit": "3600",
            "X-Ratelimit-Remaining": "0",
            "X-Ratelimit-Reset": "30",
        })

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_get_client.return_value = mock_http_client

            with pytest.raises(RateLimitError) as exc_info:
                await client.get_account("GABC")

            assert exc_info.value.retry_after == 30
            mock_http_client.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_quota_released_after_reset_window(
        self,
        horizon_account_response: dict,
    ) -> None:
        """리셋 구간이 지나면 다시 요청 전송"""
        client = HorizonRestClient(base_url=HOST)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(
                horizon_account_response,
                headers={"X-Ratelimit-Remaining": "0", "X-Ratelimit-Reset": "1"},
            )
            mock_get_client.return_value = mock_http_client

            await client.get_account("GABC")
            with pytest.raises(RateLimitError):
                await client.get_account("GABC")

            client.rate_tracker.last_updated = datetime.now(timezone.utc) - timedelta(seconds=2)
            account = await client.get_account("GABC")

            assert account.sequence == 604941848674305
            assert mock_http_client.request.call_count == 2

    @pytest.mark.asyncio
    async def test_rate_headers_tracked(self, horizon_account_response: dict) -> None:
        """응답 헤더로 Rate Limit 갱신"""
        client = HorizonRestClient(base_url=HOST)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.return_value = make_response(
                horizon_account_response,
                headers={"X-Ratelimit-Limit": "3600", "X-Ratelimit-Remaining": "3599"},
            )
            mock_get_client.return_value = mock_http_client

            await client.get_account("GABC")

            assert client.rate_tracker.limit == 3600
            assert client.rate_tracker.remaining == 3599

    @pytest.mark.asyncio
    async def test_timeout_propagates(self) -> None:
        """타임아웃은 재시도 없이 전파"""
        client = HorizonRestClient(base_url=HOST)

        with patch.object(client, "_get_client") as mock_get_client:
            mock_http_client = AsyncMock()
            mock_http_client.request.side_effect = httpx.ReadTimeout("timeout")
            mock_get_client.return_value = mock_http_client

            with pytest.raises(httpx.TimeoutException):
                await client.get_account("GABC")

            assert mock_http_client.request.call_count == 1


class TestHorizonRestClientLifecycle:
    """클라이언트 수명 주기 테스트"""

    @pytest.mark.asyncio
    async def test_close_without_client(self) -> None:
        client = HorizonRestClient(base_url=HOST)

        await client.close()

        assert client._client is None

    @pytest.mark.asyncio
    async def test_context_manager_closes(self) -> None:
        async with HorizonRestClient(base_url=HOST) as client:
            http_client = await client._get_client()
            assert not http_client.is_closed

        assert http_client.is_closed
        assert client._client is None
