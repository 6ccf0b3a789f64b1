"""
Horizon 어댑터

Horizon 원장 조회 API 연동을 담당.
엔드포인트 -> HTTP 요청, JSON 응답 -> 리소스 변환 제공.
"""

from adapters.horizon.endpoints import AccountDetails, AllAssets
from adapters.horizon.errors import (
    HorizonError,
    DeserializationError,
    MissingFieldError,
    InvalidFieldType,
    InvalidNumericString,
    RequestConstructionError,
    InvalidHost,
    InvalidPathParameter,
    InvalidQueryParameter,
    HorizonApiError,
    NotFoundError,
    RateLimitError,
)
from adapters.horizon.models import (
    decode_json,
    parse_account,
    parse_asset,
    parse_balance,
    parse_records,
    parse_signer,
)
from adapters.horizon.rate_limiter import RateLimitTracker
from adapters.horizon.rest_client import HorizonRestClient

__all__ = [
    "HorizonRestClient",
    "RateLimitTracker",
    # Endpoints
    "AccountDetails",
    "AllAssets",
    # Parsers
    "decode_json",
    "parse_account",
    "parse_asset",
    "parse_balance",
    "parse_records",
    "parse_signer",
    # Errors
    "HorizonError",
    "DeserializationError",
    "MissingFieldError",
    "InvalidFieldType",
    "InvalidNumericString",
    "RequestConstructionError",
    "InvalidHost",
    "InvalidPathParameter",
    "InvalidQueryParameter",
    "HorizonApiError",
    "NotFoundError",
    "RateLimitError",
]
