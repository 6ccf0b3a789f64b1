"""
Mock Horizon 클라이언트

테스트용 Mock REST 클라이언트.
IHorizonRestClient Protocol 준수.
"""

from dataclasses import dataclass, field
from typing import Any, TypeVar
from urllib.parse import urlsplit

from adapters.interfaces import IEndPoint
from adapters.models import Account, AssetRecord, HttpRequest, Records
from adapters.horizon.endpoints import AccountDetails, AllAssets
from adapters.horizon.errors import NotFoundError
from core.types import Order

ResponseT = TypeVar("ResponseT")

MOCK_HOST = "https://horizon.mock"


@dataclass
class MockState:
    """Mock 상태 (메모리 내 저장)"""

    # URL 경로 -> JSON 응답
    responses: dict[str, dict[str, Any]] = field(default_factory=dict)

    # 실행된 요청 목록
    requests: list[HttpRequest[Any]] = field(default_factory=list)

    closed: bool = False


class MockHorizonRestClient:
    """Mock REST 클라이언트

    IHorizonRestClient Protocol 구현.
    경로별로 등록된 JSON을 엔드포인트의 parse_response로 변환하여 반환.

    사용 예시:
    ```python
    client = MockHorizonRestClient()
    client.set_response("/accounts/GABC", account_json)

    account = await client.get_account("GABC")
    ```
    """

    def __init__(self, state: MockState | None = None, host: str = MOCK_HOST):
        self.state = state or MockState()
        self.host = host

    # -------------------------------------------------------------------------
    # 상태 조작 메서드 (테스트용)
    # -------------------------------------------------------------------------

    def set_response(self, path: str, payload: dict[str, Any]) -> None:
        """경로에 대한 응답 등록 (쿼리 스트링 무시)"""
        self.state.responses[path] = payload

    def set_account(self, payload: dict[str, Any]) -> None:
        """계정 응답 등록 (payload의 id 기준)"""
        self.set_response(f"/accounts/{payload['id']}", payload)

    @property
    def last_request(self) -> HttpRequest[Any] | None:
        """마지막으로 실행된 요청"""
        return self.state.requests[-1] if self.state.requests else None

    # -------------------------------------------------------------------------
    # IHorizonRestClient 구현
    # -------------------------------------------------------------------------

    async def execute(self, endpoint: IEndPoint[ResponseT, Any]) -> ResponseT:
        request = endpoint.into_request(self.host)
        self.state.requests.append(request)

        path = urlsplit(request.url).path
        payload = self.state.responses.get(path)
        if payload is None:
            raise NotFoundError(status=404, title="Resource Missing", detail=path)

        return endpoint.parse_response(payload)

    async def get_account(self, account_id: str) -> Account:
        return await self.execute(AccountDetails(account_id))

    async def get_assets(
        self,
        asset_code: str | None = None,
        asset_issuer: str | None = None,
        cursor: str | None = None,
        order: Order | None = None,
        limit: int | None = None,
    ) -> Records[AssetRecord]:
        return await self.execute(
            AllAssets(
                asset_code=asset_code,
                asset_issuer=asset_issuer,
                cursor=cursor,
                order=order,
                limit=limit,
            )
        )

    async def close(self) -> None:
        self.state.closed = True
