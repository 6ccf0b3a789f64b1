"""
Horizon API 응답 -> 공통 모델 변환

Horizon JSON 응답을 adapters.models의 리소스로 변환.
필드별 디코더를 명시적으로 호출하는 단일 검증 패스로 동작하며,
실패 시 DeserializationError 하위 예외를 필드 경로와 함께 발생.

I/O나 로깅 없이 순수 함수로만 구성.
"""

import json
import re
from types import MappingProxyType
from typing import Any, Callable, Mapping, TypeVar

from adapters.models import (
    Account,
    AssetRecord,
    Balance,
    Base64String,
    Flags,
    Records,
    Signer,
    Thresholds,
)
from adapters.horizon.errors import (
    DeserializationError,
    InvalidFieldType,
    InvalidNumericString,
    MissingFieldError,
)


T = TypeVar("T")

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

_DIGITS_PATTERN = re.compile(r"[0-9]+")
# 선행 0 포함 허용 길이 (int 변환 전 길이 제한)
_U64_MAX_DIGITS = 32


# -------------------------------------------------------------------------
# 필드 디코더
# -------------------------------------------------------------------------

def _path(parent: str, key: str) -> str:
    return f"{parent}.{key}" if parent else key


def _require(data: Mapping[str, Any], key: str, parent: str) -> Any:
    if key not in data:
        raise MissingFieldError(_path(parent, key))
    return data[key]


def _as_object(value: Any, field: str) -> Mapping[str, Any]:
    if not isinstance(value, dict):
        raise InvalidFieldType(field, "object", value)
    return value


def _as_list(value: Any, field: str) -> list[Any]:
    if not isinstance(value, list):
        raise InvalidFieldType(field, "array", value)
    return value


def _as_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise InvalidFieldType(field, "string", value)
    return value


def _as_bool(value: Any, field: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidFieldType(field, "boolean", value)
    return value


def _as_uint(value: Any, field: str, maximum: int = U64_MAX) -> int:
    # bool은 int의 하위 타입이므로 먼저 제외
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldType(field, "unsigned integer", value)
    if value < 0 or value > maximum:
        raise DeserializationError(field, f"범위를 벗어난 정수입니다: {value}")
    return value


def decode_u64_string(value: Any, field: str = "") -> int:
    """숫자 문자열 -> 부호 없는 64비트 정수

    10진수 숫자로만 구성된 문자열만 허용 (부호, 공백, 소수점 불가).

    Args:
        value: JSON 값
        field: 에러 메시지용 필드 경로

    Returns:
        파싱된 정수

    Raises:
        InvalidFieldType: 문자열이 아닌 경우
        InvalidNumericString: 숫자 문자열이 아니거나 64비트 범위 초과
    """
    text = _as_str(value, field)
    if len(text) > _U64_MAX_DIGITS or not _DIGITS_PATTERN.fullmatch(text):
        raise InvalidNumericString(field, text)
    number = int(text)
    if number > U64_MAX:
        raise InvalidNumericString(field, text)
    return number


def required_str(data: Mapping[str, Any], key: str, parent: str = "") -> str:
    """필수 문자열 필드"""
    return _as_str(_require(data, key, parent), _path(parent, key))


def required_uint(
    data: Mapping[str, Any],
    key: str,
    parent: str = "",
    maximum: int = U64_MAX,
) -> int:
    """필수 부호 없는 정수 필드"""
    return _as_uint(_require(data, key, parent), _path(parent, key), maximum)


def required_bool(data: Mapping[str, Any], key: str, parent: str = "") -> bool:
    """필수 불리언 필드"""
    return _as_bool(_require(data, key, parent), _path(parent, key))


def default_str(data: Mapping[str, Any], key: str, parent: str = "") -> str:
    """누락 시 빈 문자열로 채우는 문자열 필드"""
    if key not in data:
        return ""
    return _as_str(data[key], _path(parent, key))


def default_uint(data: Mapping[str, Any], key: str, parent: str = "") -> int:
    """누락 시 0으로 채우는 정수 필드"""
    if key not in data:
        return 0
    return _as_uint(data[key], _path(parent, key))


def optional_str(data: Mapping[str, Any], key: str, parent: str = "") -> str | None:
    """누락되거나 null이면 None인 선택 문자열 필드"""
    if data.get(key) is None:
        return None
    return _as_str(data[key], _path(parent, key))


def decode_json(raw: bytes | str) -> dict[str, Any]:
    """응답 본문 -> JSON 객체

    Args:
        raw: 응답 본문 (bytes 또는 str)

    Returns:
        최상위 JSON 객체

    Raises:
        DeserializationError: JSON이 아니거나 최상위가 객체가 아닌 경우
    """
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        raise DeserializationError("", f"유효하지 않은 JSON입니다: {e}") from e
    return dict(_as_object(data, "$"))


# -------------------------------------------------------------------------
# 리소스 파서
# -------------------------------------------------------------------------

def parse_thresholds(data: Mapping[str, Any], parent: str = "thresholds") -> Thresholds:
    """임계값 응답 -> Thresholds"""
    data = _as_object(data, parent)
    return Thresholds(
        low_threshold=required_uint(data, "low_threshold", parent),
        med_threshold=required_uint(data, "med_threshold", parent),
        high_threshold=required_uint(data, "high_threshold", parent),
    )


def parse_flags(data: Mapping[str, Any], parent: str = "flags") -> Flags:
    """플래그 응답 -> Flags"""
    data = _as_object(data, parent)
    return Flags(
        auth_required=required_bool(data, "auth_required", parent),
        auth_revocable=required_bool(data, "auth_revocable", parent),
        auth_immutable=required_bool(data, "auth_immutable", parent),
    )


def parse_balance(data: Mapping[str, Any], parent: str = "") -> Balance:
    """잔고 응답 -> Balance 모델

    Horizon 계정 응답의 balances 항목 예시:
    {
        "balance": "100.0000000",
        "buying_liabilities": "0.0000000",
        "selling_liabilities": "0.0000000",
        "limit": "100.0000000",
        "last_modified_ledger": 140993,
        "asset_type": "credit_alphanum4",
        "asset_code": "USD",
        "asset_issuer": "GBAUUA74H4XOQYRSOW2RZUA4QL5PB37U3JS5NE3RTB2ELJVMIF5RLMAG"
    }
    """
    data = _as_object(data, parent or "$")
    return Balance(
        balance=required_str(data, "balance", parent),
        buying_liabilities=default_str(data, "buying_liabilities", parent),
        selling_liabilities=default_str(data, "selling_liabilities", parent),
        limit=default_str(data, "limit", parent),
        last_modified_ledger=default_uint(data, "last_modified_ledger", parent),
        asset_type=required_str(data, "asset_type", parent),
        asset_code=optional_str(data, "asset_code", parent),
        asset_issuer=optional_str(data, "asset_issuer", parent),
    )


def parse_signer(data: Mapping[str, Any], parent: str = "") -> Signer:
    """서명자 응답 -> Signer 모델

    {"weight": 1, "key": "GCEZ...", "type": "ed25519_public_key"}
    """
    data = _as_object(data, parent or "$")
    return Signer(
        weight=required_uint(data, "weight", parent, maximum=U32_MAX),
        key=required_str(data, "key", parent),
        type=required_str(data, "type", parent),
    )


def _parse_data_entries(value: Any, field: str) -> Mapping[str, Base64String]:
    entries = _as_object(value, field)
    return MappingProxyType({
        key: Base64String(_as_str(item, f"{field}.{key}"))
        for key, item in entries.items()
    })


def parse_account(data: Mapping[str, Any]) -> Account:
    """계정 응답 -> Account 모델

    Horizon GET /accounts/{account_id} 응답 예시:
    {
        "id": "GCEZWKCA5VLDNRLN3RPRJMRZOX3Z6G5CHCGSNFHEYVXM3XOJMDS674JZ",
        "paging_token": "",
        "account_id": "GCEZWKCA5VLDNRLN3RPRJMRZOX3Z6G5CHCGSNFHEYVXM3XOJMDS674JZ",
        "sequence": "604941848674305",
        "subentry_count": 1,
        "last_modified_ledger": 140917,
        "thresholds": {"low_threshold": 0, "med_threshold": 0, "high_threshold": 0},
        "flags": {"auth_required": false, "auth_revocable": false, "auth_immutable": false},
        "balances": [...],
        "signers": [...],
        "data": {}
    }
    """
    data = _as_object(data, "$")

    balances = tuple(
        parse_balance(item, f"balances[{i}]")
        for i, item in enumerate(_as_list(_require(data, "balances", ""), "balances"))
    )
    signers = tuple(
        parse_signer(item, f"signers[{i}]")
        for i, item in enumerate(_as_list(_require(data, "signers", ""), "signers"))
    )

    return Account(
        id=required_str(data, "id"),
        paging_token=required_str(data, "paging_token"),
        account_id=required_str(data, "account_id"),
        sequence=decode_u64_string(_require(data, "sequence", ""), "sequence"),
        subentry_count=required_uint(data, "subentry_count"),
        last_modified_ledger=required_uint(data, "last_modified_ledger"),
        thresholds=parse_thresholds(_require(data, "thresholds", "")),
        flags=parse_flags(_require(data, "flags", "")),
        balances=balances,
        signers=signers,
        data=_parse_data_entries(_require(data, "data", ""), "data"),
    )


def parse_asset(data: Mapping[str, Any], parent: str = "") -> AssetRecord:
    """자산 응답 -> AssetRecord 모델

    Horizon GET /assets 목록 항목 예시:
    {
        "asset_type": "credit_alphanum4",
        "asset_code": "USD",
        "asset_issuer": "GBAUUA74H4XOQYRSOW2RZUA4QL5PB37U3JS5NE3RTB2ELJVMIF5RLMAG",
        "paging_token": "USD_GBAU..._credit_alphanum4",
        "amount": "100.0000000",
        "num_accounts": 91,
        "flags": {"auth_required": false, "auth_revocable": false, "auth_immutable": false}
    }
    """
    data = _as_object(data, parent or "$")
    return AssetRecord(
        asset_type=required_str(data, "asset_type", parent),
        asset_code=required_str(data, "asset_code", parent),
        asset_issuer=required_str(data, "asset_issuer", parent),
        paging_token=required_str(data, "paging_token", parent),
        amount=required_str(data, "amount", parent),
        num_accounts=required_uint(data, "num_accounts", parent),
        flags=parse_flags(_require(data, "flags", parent), _path(parent, "flags")),
    )


def _link_href(links: Mapping[str, Any], name: str) -> str | None:
    link = links.get(name)
    if link is None:
        return None
    field = f"_links.{name}"
    return _as_str(_require(_as_object(link, field), "href", field), f"{field}.href")


def parse_records(
    data: Mapping[str, Any],
    parse_item: Callable[[Mapping[str, Any], str], T],
) -> Records[T]:
    """페이지 응답 -> Records 모델

    Horizon 목록 응답 형식:
    {
        "_links": {
            "self": {"href": "..."},
            "next": {"href": "...?cursor=...&limit=10&order=asc"},
            "prev": {"href": "..."}
        },
        "_embedded": {"records": [...]}
    }

    Args:
        data: 응답 JSON
        parse_item: 레코드 하나를 변환하는 파서 (data, 필드 경로)
    """
    data = _as_object(data, "$")
    embedded = _as_object(_require(data, "_embedded", ""), "_embedded")
    items = _as_list(_require(embedded, "records", "_embedded"), "_embedded.records")

    links = _as_object(data.get("_links", {}), "_links")

    return Records(
        records=tuple(
            parse_item(item, f"_embedded.records[{i}]")
            for i, item in enumerate(items)
        ),
        self_href=_link_href(links, "self"),
        next_href=_link_href(links, "next"),
        prev_href=_link_href(links, "prev"),
    )
