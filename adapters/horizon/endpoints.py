"""
Horizon 엔드포인트 정의

각 조회를 값 객체로 표현하고, IEndPoint Protocol에 따라
호스트 + 조회 -> HttpRequest 변환과 JSON -> 리소스 변환을 제공.

모든 변환은 상태 없는 순수 함수.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable
from urllib.parse import urlencode, urlsplit

from adapters.models import Account, AssetRecord, HttpRequest, Records
from adapters.horizon.errors import (
    InvalidHost,
    InvalidPathParameter,
    InvalidQueryParameter,
)
from adapters.horizon.models import parse_account, parse_asset, parse_records
from core.constants import PagingLimits
from core.types import HttpMethod, Order


DEFAULT_HEADERS = {"Accept": "application/hal+json"}

# RFC 3986 unreserved 문자만 경로에 허용
_PATH_PARAM_PATTERN = re.compile(r"[A-Za-z0-9\-._~]+")


# -------------------------------------------------------------------------
# URL 구성 헬퍼
# -------------------------------------------------------------------------

def normalize_host(host: str) -> str:
    """호스트 문자열 검증 및 정규화

    http/https 스킴과 호스트가 있어야 하며, 끝의 '/'는 제거.
    경로 접두사(예: https://example.org/horizon)는 유지.

    Args:
        host: Horizon 베이스 URL

    Returns:
        끝의 '/'가 제거된 베이스 URL

    Raises:
        InvalidHost: URL로 사용할 수 없는 경우
    """
    if not isinstance(host, str) or not host:
        raise InvalidHost(str(host), "빈 호스트")

    if any(c.isspace() for c in host):
        raise InvalidHost(host, "공백 문자 포함")

    try:
        parts = urlsplit(host)
        # 숫자가 아니거나 범위를 벗어난 포트는 여기서 ValueError
        parts.port
    except ValueError as e:
        raise InvalidHost(host, str(e)) from e

    if parts.scheme not in ("http", "https"):
        raise InvalidHost(host, "http 또는 https 스킴이 필요합니다")
    if not parts.hostname:
        raise InvalidHost(host, "호스트 이름이 없습니다")
    if parts.query or parts.fragment:
        raise InvalidHost(host, "쿼리/프래그먼트는 허용되지 않습니다")

    return host.rstrip("/")


def encode_path_param(name: str, value: str) -> str:
    """경로 파라미터 검증

    Raises:
        InvalidPathParameter: 비어 있거나 unreserved 외 문자가 있는 경우
    """
    if not isinstance(value, str) or not _PATH_PARAM_PATTERN.fullmatch(value):
        raise InvalidPathParameter(name, str(value))
    return value


def encode_query(params: Iterable[tuple[str, Any]]) -> str:
    """쿼리 스트링 생성

    None 값은 생략, Order는 to_param()으로 인코딩.
    파라미터 순서는 입력 순서를 유지.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params:
        if value is None:
            continue
        if isinstance(value, Order):
            pairs.append((key, value.to_param()))
        else:
            pairs.append((key, str(value)))
    return urlencode(pairs)


def paging_params(
    cursor: str | None,
    order: Order | None,
    limit: int | None,
) -> list[tuple[str, Any]]:
    """페이지 파라미터 (cursor, order, limit)

    Raises:
        InvalidQueryParameter: limit이 허용 범위를 벗어난 경우
    """
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise InvalidQueryParameter("limit", limit, "정수여야 합니다")
        if not PagingLimits.MIN <= limit <= PagingLimits.MAX:
            raise InvalidQueryParameter(
                "limit",
                limit,
                f"{PagingLimits.MIN}~{PagingLimits.MAX} 범위여야 합니다",
            )
    if order is not None and not isinstance(order, Order):
        raise InvalidQueryParameter("order", order, "Order 값이어야 합니다")
    return [("cursor", cursor), ("order", order), ("limit", limit)]


def build_url(host: str, path: str, params: Iterable[tuple[str, Any]] = ()) -> str:
    """베이스 URL + 경로 + 쿼리 스트링"""
    url = f"{normalize_host(host)}{path}"
    query = encode_query(params)
    if query:
        url = f"{url}?{query}"
    return url


# -------------------------------------------------------------------------
# 엔드포인트
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class AccountDetails:
    """계정 상세 조회

    GET /accounts/{account_id} -> Account
    """

    account_id: str

    def into_request(self, host: str) -> HttpRequest[None]:
        account_id = encode_path_param("account_id", self.account_id)
        return HttpRequest(
            method=HttpMethod.GET.value,
            url=build_url(host, f"/accounts/{account_id}"),
            headers=dict(DEFAULT_HEADERS),
        )

    def parse_response(self, payload: dict[str, Any]) -> Account:
        return parse_account(payload)


@dataclass(frozen=True)
class AllAssets:
    """자산 목록 조회

    GET /assets?asset_code=&asset_issuer=&cursor=&order=&limit= -> Records[AssetRecord]

    Attributes:
        asset_code: 자산 코드 필터
        asset_issuer: 발행자 필터
        cursor: 페이지 커서
        order: 정렬 순서
        limit: 페이지 크기 (1~200)
    """

    asset_code: str | None = None
    asset_issuer: str | None = None
    cursor: str | None = None
    order: Order | None = None
    limit: int | None = None

    def into_request(self, host: str) -> HttpRequest[None]:
        params = [
            ("asset_code", self.asset_code),
            ("asset_issuer", self.asset_issuer),
            *paging_params(self.cursor, self.order, self.limit),
        ]
        return HttpRequest(
            method=HttpMethod.GET.value,
            url=build_url(host, "/assets", params),
            headers=dict(DEFAULT_HEADERS),
        )

    def parse_response(self, payload: dict[str, Any]) -> Records[AssetRecord]:
        return parse_records(payload, parse_asset)

    def next_page(self, page: Records[AssetRecord]) -> "AllAssets | None":
        """다음 페이지 조회 (다음 커서가 없으면 None)"""
        cursor = page.next_cursor
        if cursor is None:
            return None
        return AllAssets(
            asset_code=self.asset_code,
            asset_issuer=self.asset_issuer,
            cursor=cursor,
            order=self.order,
            limit=self.limit,
        )
