"""
어댑터 공통 데이터 모델

Horizon API 응답을 표준화한 리소스 모델과 HTTP 요청 디스크립터.
모든 리소스는 불변(frozen) 값 객체이며 구조적 동등성을 가짐.
"""

import base64
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Generic, Mapping, TypeVar
from urllib.parse import parse_qs, urlsplit

from core.types import AssetType


T = TypeVar("T")
BodyT = TypeVar("BodyT")


@dataclass(frozen=True)
class Base64String:
    """base64로 감싼 불투명 값

    파싱 시에는 문자열 여부만 검증하고, 디코딩은 decode() 호출 시 수행.
    """

    value: str

    def decode(self) -> bytes:
        """base64 디코딩

        Raises:
            binascii.Error: base64 형식이 아닌 경우
        """
        return base64.b64decode(self.value, validate=True)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Thresholds:
    """계정 임계값 (작업 유형별 필요 서명 가중치)"""

    low_threshold: int
    med_threshold: int
    high_threshold: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "low_threshold": self.low_threshold,
            "med_threshold": self.med_threshold,
            "high_threshold": self.high_threshold,
        }


@dataclass(frozen=True)
class Flags:
    """발행자 권한 플래그

    Attributes:
        auth_required: 트러스트라인 승인 필요 여부
        auth_revocable: 승인 취소 가능 여부
        auth_immutable: 플래그 변경 불가 여부
    """

    auth_required: bool
    auth_revocable: bool
    auth_immutable: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "auth_required": self.auth_required,
            "auth_revocable": self.auth_revocable,
            "auth_immutable": self.auth_immutable,
        }


@dataclass(frozen=True)
class Balance:
    """잔고 정보

    구버전 Horizon은 liabilities/limit/last_modified_ledger를 생략할 수 있어
    누락 시 빈 문자열 / 0으로 채움.

    Attributes:
        balance: 보유 수량 (소수점 7자리 문자열)
        buying_liabilities: 매수 오퍼 합계
        selling_liabilities: 매도 오퍼 합계
        limit: 트러스트라인 한도 (native 자산은 빈 문자열)
        last_modified_ledger: 마지막 변경 원장 번호
        asset_type: native, credit_alphanum4, credit_alphanum12
        asset_code: 자산 코드 (native이면 None)
        asset_issuer: 발행자 주소 (native이면 None)
    """

    balance: str
    asset_type: str
    buying_liabilities: str = ""
    selling_liabilities: str = ""
    limit: str = ""
    last_modified_ledger: int = 0
    asset_code: str | None = None
    asset_issuer: str | None = None

    @property
    def amount(self) -> Decimal:
        """보유 수량 (Decimal)"""
        return Decimal(self.balance)

    @property
    def is_native(self) -> bool:
        """네이티브 자산 여부"""
        return self.asset_type == AssetType.NATIVE.value

    def to_dict(self) -> dict[str, Any]:
        """와이어 형식으로 변환 (None인 선택 필드는 생략)"""
        result: dict[str, Any] = {
            "balance": self.balance,
            "buying_liabilities": self.buying_liabilities,
            "selling_liabilities": self.selling_liabilities,
            "limit": self.limit,
            "last_modified_ledger": self.last_modified_ledger,
            "asset_type": self.asset_type,
        }
        if self.asset_code is not None:
            result["asset_code"] = self.asset_code
        if self.asset_issuer is not None:
            result["asset_issuer"] = self.asset_issuer
        return result


@dataclass(frozen=True)
class Signer:
    """계정 서명자

    Attributes:
        weight: 서명 가중치
        key: 서명 키 (공개키 등)
        type: 키 유형 (예: ed25519_public_key)
    """

    weight: int
    key: str
    type: str

    def to_dict(self) -> dict[str, Any]:
        return {"weight": self.weight, "key": self.key, "type": self.type}


@dataclass(frozen=True)
class Account:
    """계정 정보

    트랜잭션을 승인하는 키페어로 제어되는 원장 계정.
    https://developers.stellar.org/docs/data/horizon/api-reference/resources/accounts

    Attributes:
        id: 계정 식별자 (URL 템플릿의 :id 로 사용)
        paging_token: 페이지 커서
        account_id: base32 인코딩된 공개키
        sequence: 다음 트랜잭션 제출에 사용할 시퀀스 번호
        subentry_count: 하위 엔트리 수 (최소 잔고 계산에 사용)
        last_modified_ledger: 마지막 변경 원장 번호
        thresholds: 임계값
        flags: 발행자 권한 플래그
        balances: 보유 자산 잔고 목록 (순서 유지)
        signers: 서명자 목록 (순서 유지)
        data: 계정에 첨부된 키/값 데이터 (읽기 전용)
    """

    id: str
    paging_token: str
    account_id: str
    sequence: int
    subentry_count: int
    last_modified_ledger: int
    thresholds: Thresholds
    flags: Flags
    balances: tuple[Balance, ...] = ()
    signers: tuple[Signer, ...] = ()
    data: Mapping[str, Base64String] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # 외부 dict 변경이 반영되지 않도록 복사 후 읽기 전용으로 고정
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @property
    def native_balance(self) -> Balance | None:
        """네이티브 자산 잔고 (없으면 None)"""
        for balance in self.balances:
            if balance.is_native:
                return balance
        return None

    def to_dict(self) -> dict[str, Any]:
        """와이어 형식으로 변환 (sequence는 문자열로 직렬화)"""
        return {
            "id": self.id,
            "paging_token": self.paging_token,
            "account_id": self.account_id,
            "sequence": str(self.sequence),
            "subentry_count": self.subentry_count,
            "last_modified_ledger": self.last_modified_ledger,
            "thresholds": self.thresholds.to_dict(),
            "flags": self.flags.to_dict(),
            "balances": [b.to_dict() for b in self.balances],
            "signers": [s.to_dict() for s in self.signers],
            "data": {k: v.value for k, v in self.data.items()},
        }


@dataclass(frozen=True)
class AssetRecord:
    """자산 통계 (/assets 목록 항목)

    Attributes:
        asset_type: credit_alphanum4 또는 credit_alphanum12
        asset_code: 자산 코드
        asset_issuer: 발행자 주소
        paging_token: 페이지 커서
        amount: 총 발행량 (문자열)
        num_accounts: 트러스트라인 보유 계정 수
        flags: 발행자 권한 플래그
    """

    asset_type: str
    asset_code: str
    asset_issuer: str
    paging_token: str
    amount: str
    num_accounts: int
    flags: Flags

    def to_dict(self) -> dict[str, Any]:
        return {
            "asset_type": self.asset_type,
            "asset_code": self.asset_code,
            "asset_issuer": self.asset_issuer,
            "paging_token": self.paging_token,
            "amount": self.amount,
            "num_accounts": self.num_accounts,
            "flags": self.flags.to_dict(),
        }


@dataclass(frozen=True)
class Records(Generic[T]):
    """페이지 단위 목록 응답

    Horizon의 `_embedded.records`와 `_links`를 담음.

    Attributes:
        records: 레코드 목록 (순서 유지)
        self_href: 현재 페이지 링크
        next_href: 다음 페이지 링크
        prev_href: 이전 페이지 링크
    """

    records: tuple[T, ...] = ()
    self_href: str | None = None
    next_href: str | None = None
    prev_href: str | None = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    @property
    def next_cursor(self) -> str | None:
        """다음 페이지 커서 (next 링크의 cursor 파라미터)"""
        if not self.next_href:
            return None
        cursor = parse_qs(urlsplit(self.next_href).query).get("cursor")
        return cursor[0] if cursor else None


@dataclass(frozen=True)
class HttpRequest(Generic[BodyT]):
    """HTTP 요청 디스크립터

    엔드포인트가 생성하고 전송 계층이 실행.
    읽기 전용 조회는 body가 None (빈 본문).

    Attributes:
        method: HTTP 메서드 (GET, POST)
        url: 쿼리 스트링을 포함한 절대 URL
        headers: 요청 헤더
        body: 요청 본문
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: BodyT | None = None
