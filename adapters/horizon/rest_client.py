"""
Horizon REST API 클라이언트

IEndPoint 하나로 모든 조회를 실행하는 얇은 전송 계층.
Rate Limit 헤더 추적, 에러 응답 -> 예외 변환.
재시도/백오프는 하지 않음.
IHorizonRestClient Protocol 준수.
"""

import logging
from typing import Any, TypeVar

import httpx

from adapters.interfaces import IEndPoint
from adapters.models import Account, AssetRecord, HttpRequest, Records
from adapters.horizon.endpoints import AccountDetails, AllAssets, normalize_host
from adapters.horizon.errors import HorizonApiError, NotFoundError, RateLimitError
from adapters.horizon.models import decode_json
from adapters.horizon.rate_limiter import RateLimitTracker
from core.config.loader import Settings, get_settings
from core.constants import Defaults
from core.types import Order

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT")


class HorizonRestClient:
    """Horizon REST API 클라이언트

    IHorizonRestClient Protocol 구현.

    Args:
        base_url: Horizon 베이스 URL
        timeout: 요청 타임아웃 (초)
    """

    def __init__(self, base_url: str, timeout: float = Defaults.TIMEOUT_SEC):
        self.base_url = normalize_host(base_url)
        self.timeout = timeout

        self.rate_tracker = RateLimitTracker()
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "HorizonRestClient":
        """horizon.yaml 설정으로 클라이언트 생성

        Args:
            settings: Settings 인스턴스 (None이면 get_settings())
        """
        if settings is None:
            settings = get_settings()
        config = settings.horizon_config
        logger.info(
            "Horizon client configured",
            extra={"network": settings.network.value, "rest_url": config.rest_url},
        )
        return cls(base_url=config.rest_url, timeout=config.timeout)

    async def __aenter__(self) -> "HorizonRestClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _send(self, request: HttpRequest[Any]) -> httpx.Response:
        """요청 디스크립터 전송"""
        client = await self._get_client()

        kwargs: dict[str, Any] = {"headers": dict(request.headers)}
        if isinstance(request.body, (bytes, str)):
            kwargs["content"] = request.body
        elif request.body is not None:
            kwargs["json"] = request.body

        try:
            return await client.request(request.method, request.url, **kwargs)
        except httpx.TimeoutException:
            logger.warning(
                "Request timeout",
                extra={"url": request.url},
            )
            raise
        except httpx.RequestError as e:
            logger.error(
                "Request error",
                extra={"url": request.url, "error": str(e)},
            )
            raise

    def _raise_for_status(self, response: httpx.Response, url: str) -> None:
        """에러 응답 -> 예외 변환

        Horizon 에러 응답은 application/problem+json:
        {"type": "...", "title": "Resource Missing", "status": 404, "detail": "..."}
        """
        status = response.status_code

        if status == 429:
            header = (
                response.headers.get("Retry-After")
                or response.headers.get("X-Ratelimit-Reset")
            )
            try:
                retry_after = int(header) if header else 1
            except ValueError:
                retry_after = 1
            logger.warning(
                "Rate limited by Horizon",
                extra={"url": url, "retry_after": retry_after},
            )
            raise RateLimitError(retry_after=retry_after)

        if status < 400:
            return

        try:
            problem = response.json()
            title = problem.get("title", response.reason_phrase)
            detail = problem.get("detail", "")
        except (ValueError, AttributeError):
            title = response.reason_phrase
            detail = response.text

        if status == 404:
            raise NotFoundError(status=status, title=title, detail=detail)

        logger.error(
            "Horizon API error",
            extra={"url": url, "status": status, "title": title},
        )
        raise HorizonApiError(status=status, title=title, detail=detail)

    async def execute(self, endpoint: IEndPoint[ResponseT, Any]) -> ResponseT:
        """엔드포인트 실행

        into_request -> HTTP 요청 -> 상태 확인 -> JSON 디코딩 -> parse_response

        Raises:
            RequestConstructionError: 요청 생성 실패
            RateLimitError: 남은 요청 수 소진 또는 429 응답
            NotFoundError: 404 응답
            HorizonApiError: 기타 에러 응답
            DeserializationError: 응답 형식 불일치
        """
        request = endpoint.into_request(self.base_url)

        if self.rate_tracker.should_stop:
            logger.warning(
                "Rate limit threshold reached",
                extra={"rate_info": self.rate_tracker.to_dict()},
            )
            raise RateLimitError(
                retry_after=self.rate_tracker.seconds_until_reset,
                message="Request quota exhausted",
            )

        response = await self._send(request)
        self.rate_tracker.update_from_headers(dict(response.headers))

        if self.rate_tracker.should_warn:
            logger.warning(
                "Horizon rate limit nearly exhausted",
                extra={"rate_info": self.rate_tracker.to_dict()},
            )

        self._raise_for_status(response, request.url)

        logger.debug(
            "Horizon request completed",
            extra={"method": request.method, "url": request.url, "status": response.status_code},
        )
        return endpoint.parse_response(decode_json(response.content))

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    async def get_account(self, account_id: str) -> Account:
        """계정 상세 조회"""
        return await self.execute(AccountDetails(account_id))

    async def get_assets(
        self,
        asset_code: str | None = None,
        asset_issuer: str | None = None,
        cursor: str | None = None,
        order: Order | None = None,
        limit: int | None = None,
    ) -> Records[AssetRecord]:
        """자산 목록 조회 (페이지 단위)"""
        return await self.execute(
            AllAssets(
                asset_code=asset_code,
                asset_issuer=asset_issuer,
                cursor=cursor,
                order=order,
                limit=limit,
            )
        )
