"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class NetworkMode(str, Enum):
    """Horizon 네트워크 (메인넷 / 테스트넷)"""

    PUBLIC = "public"
    TESTNET = "testnet"


class Order(str, Enum):
    """결과 정렬 순서

    쿼리 파라미터 `order`로 전송됨.
    """

    ASC = "asc"
    DESC = "desc"

    def to_param(self) -> str:
        """쿼리 스트링용 문자열 반환 ("asc" / "desc")"""
        if self is Order.ASC:
            return "asc"
        return "desc"


class AssetType(str, Enum):
    """자산 유형"""

    NATIVE = "native"
    CREDIT_ALPHANUM4 = "credit_alphanum4"
    CREDIT_ALPHANUM12 = "credit_alphanum12"


class HttpMethod(str, Enum):
    """HTTP 메서드"""

    GET = "GET"
    POST = "POST"
