"""
Horizon 에러 정의

역직렬화 실패, 요청 생성 실패, API 응답 에러를 구분.
모든 에러는 HorizonError를 상속.
"""


class HorizonError(Exception):
    """Horizon 클라이언트 에러 베이스"""
    pass


# -------------------------------------------------------------------------
# 역직렬화
# -------------------------------------------------------------------------

class DeserializationError(HorizonError):
    """JSON 응답 -> 리소스 변환 실패

    Attributes:
        field: 실패한 필드 경로 (예: balances[0].asset_type)
        message: 실패 사유
    """

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        if field:
            super().__init__(f"'{field}': {message}")
        else:
            super().__init__(message)


class MissingFieldError(DeserializationError):
    """필수 필드 누락"""

    def __init__(self, field: str):
        super().__init__(field, "필수 필드가 없습니다")


class InvalidFieldType(DeserializationError):
    """필드 JSON 타입 불일치"""

    def __init__(self, field: str, expected: str, value: object):
        self.expected = expected
        self.value = value
        super().__init__(
            field,
            f"{expected} 타입이어야 합니다 (받은 값: {type(value).__name__})",
        )


class InvalidNumericString(DeserializationError):
    """숫자 문자열 파싱 실패 (10진수 부호 없는 64비트 정수가 아님)"""

    def __init__(self, field: str, value: str):
        self.value = value
        super().__init__(field, f"부호 없는 64비트 정수 문자열이 아닙니다: {value!r}")


# -------------------------------------------------------------------------
# 요청 생성
# -------------------------------------------------------------------------

class RequestConstructionError(HorizonError):
    """엔드포인트 -> HTTP 요청 변환 실패"""
    pass


class InvalidHost(RequestConstructionError):
    """호스트 문자열로 유효한 URL을 만들 수 없음"""

    def __init__(self, host: str, reason: str):
        self.host = host
        self.reason = reason
        super().__init__(f"유효하지 않은 호스트 {host!r}: {reason}")


class InvalidPathParameter(RequestConstructionError):
    """URL 경로에 안전하게 넣을 수 없는 경로 파라미터"""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(f"유효하지 않은 경로 파라미터 {name}={value!r}")


class InvalidQueryParameter(RequestConstructionError):
    """허용 범위를 벗어난 쿼리 파라미터"""

    def __init__(self, name: str, value: object, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"유효하지 않은 쿼리 파라미터 {name}={value!r}: {reason}")


# -------------------------------------------------------------------------
# API 응답
# -------------------------------------------------------------------------

class HorizonApiError(HorizonError):
    """Horizon API 에러

    4xx/5xx 응답 (application/problem+json) 수신 시 발생.
    """

    def __init__(self, status: int, title: str, detail: str = ""):
        self.status = status
        self.title = title
        self.detail = detail
        message = f"Horizon API Error [{status}]: {title}"
        if detail:
            message = f"{message} - {detail}"
        super().__init__(message)


class NotFoundError(HorizonApiError):
    """리소스 없음 (404)"""
    pass


class RateLimitError(HorizonError):
    """Rate Limit 초과 에러

    429 응답 수신 또는 남은 요청 수 소진 시 발생.
    retry_after 초 후 재시도 필요 (재시도는 호출 측 책임).
    """

    def __init__(self, retry_after: int, message: str = "Rate limit exceeded"):
        self.retry_after = retry_after
        self.message = message
        super().__init__(f"{message}. Retry after {retry_after} seconds.")
