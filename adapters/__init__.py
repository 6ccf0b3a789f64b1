"""
어댑터 레이어

외부 서비스(Horizon API)와의 연동을 담당.
Protocol 기반 인터페이스로 Mock 교체 가능.
"""

from adapters.interfaces import (
    IEndPoint,
    IHorizonRestClient,
)
from adapters.models import (
    Account,
    AssetRecord,
    Balance,
    Base64String,
    Flags,
    HttpRequest,
    Records,
    Signer,
    Thresholds,
)

__all__ = [
    # Interfaces
    "IEndPoint",
    "IHorizonRestClient",
    # Models
    "Account",
    "AssetRecord",
    "Balance",
    "Base64String",
    "Flags",
    "HttpRequest",
    "Records",
    "Signer",
    "Thresholds",
]
