"""
어댑터 인터페이스 정의

Protocol 기반으로 정의하여 의존성 주입 및 Mock 교체 가능.
모든 구현체는 이 Protocol을 준수해야 함.
"""

from typing import Any, Protocol, TypeVar, runtime_checkable


ResponseT = TypeVar("ResponseT")
ResponseT_co = TypeVar("ResponseT_co", covariant=True)
BodyT_co = TypeVar("BodyT_co", covariant=True)


@runtime_checkable
class IEndPoint(Protocol[ResponseT_co, BodyT_co]):
    """Horizon 엔드포인트 인터페이스

    조회 하나를 나타내는 값 객체. 응답 타입과 요청 본문 타입을 고정하고,
    호스트를 받아 HTTP 요청 디스크립터를 생성.
    전송 계층은 이 두 메서드만으로 모든 엔드포인트를 실행.
    """

    def into_request(self, host: str) -> "HttpRequest[BodyT_co]":
        """HTTP 요청 디스크립터 생성

        Args:
            host: Horizon 베이스 URL (끝의 '/'는 무시)

        Returns:
            메서드, 절대 URL, 헤더, 본문을 담은 요청

        Raises:
            RequestConstructionError: 호스트나 파라미터가 유효하지 않은 경우
        """
        ...

    def parse_response(self, payload: dict[str, Any]) -> ResponseT_co:
        """JSON 응답 -> 응답 리소스

        Raises:
            DeserializationError: 응답 형식이 맞지 않는 경우
        """
        ...


@runtime_checkable
class IHorizonRestClient(Protocol):
    """Horizon REST 클라이언트 인터페이스

    실제 HTTP 클라이언트와 Mock 클라이언트가 모두 구현.
    """

    async def execute(self, endpoint: IEndPoint[ResponseT, Any]) -> ResponseT:
        """엔드포인트 실행

        Args:
            endpoint: 실행할 엔드포인트

        Returns:
            엔드포인트의 응답 리소스
        """
        ...

    async def get_account(self, account_id: str) -> "Account":
        """계정 상세 조회

        Args:
            account_id: 계정 공개키

        Returns:
            계정 정보

        Raises:
            NotFoundError: 계정이 없는 경우
        """
        ...

    async def get_assets(
        self,
        asset_code: str | None = None,
        asset_issuer: str | None = None,
        cursor: str | None = None,
        order: "Order | None" = None,
        limit: int | None = None,
    ) -> "Records[AssetRecord]":
        """자산 목록 조회 (페이지 단위)

        Returns:
            자산 레코드 페이지
        """
        ...

    async def close(self) -> None:
        """연결 종료"""
        ...


# 순환 참조 방지를 위한 타입 힌트 (런타임에는 문자열로 유지)
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.models import Account, AssetRecord, HttpRequest, Records
    from core.types import Order
