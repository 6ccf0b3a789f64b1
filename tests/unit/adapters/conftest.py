"""
어댑터 테스트 픽스처

Horizon 응답 샘플 및 공통 모델 픽스처 제공.
"""

import copy

import pytest

from adapters.models import Balance, Flags, Signer, Thresholds
from adapters.mock.horizon_client import MockHorizonRestClient


ACCOUNT_ID = "GCEZWKCA5VLDNRLN3RPRJMRZOX3Z6G5CHCGSNFHEYVXM3XOJMDS674JZ"
ISSUER_ID = "GBAUUA74H4XOQYRSOW2RZUA4QL5PB37U3JS5NE3RTB2ELJVMIF5RLMAG"


# -------------------------------------------------------------------------
# Horizon 응답 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def horizon_balance_response() -> dict:
    """Horizon 잔고 항목 (전체 필드)"""
    return {
        "balance": "100.0000000",
        "buying_liabilities": "0.0000000",
        "selling_liabilities": "0.0000000",
        "limit": "100.0000000",
        "last_modified_ledger": 140993,
        "asset_type": "credit_alphanum4",
        "asset_code": "USD",
        "asset_issuer": ISSUER_ID,
    }


@pytest.fixture
def horizon_native_balance_response() -> dict:
    """Horizon 네이티브 잔고 항목 (구버전: liabilities 등 생략)"""
    return {
        "balance": "9999.9999900",
        "asset_type": "native",
    }


@pytest.fixture
def horizon_account_response() -> dict:
    """Horizon GET /accounts/{id} 응답"""
    return {
        "id": ACCOUNT_ID,
        "paging_token": "",
        "account_id": ACCOUNT_ID,
        "sequence": "604941848674305",
        "subentry_count": 1,
        "last_modified_ledger": 140917,
        "thresholds": {
            "low_threshold": 0,
            "med_threshold": 0,
            "high_threshold": 0,
        },
        "flags": {
            "auth_required": False,
            "auth_revocable": False,
            "auth_immutable": False,
        },
        "balances": [
            {
                "balance": "100.0000000",
                "asset_type": "credit_alphanum4",
                "asset_code": "USD",
                "asset_issuer": ISSUER_ID,
                "last_modified_ledger": 140993,
            }
        ],
        "signers": [
            {
                "weight": 1,
                "key": ACCOUNT_ID,
                "type": "ed25519_public_key",
            }
        ],
        "data": {},
    }


@pytest.fixture
def horizon_account_response_with_data(horizon_account_response: dict) -> dict:
    """data 엔트리가 있는 계정 응답"""
    response = copy.deepcopy(horizon_account_response)
    response["data"] = {
        "config.memo_required": "MQ==",
        "user-id": "WERCFXYWBS1kYjY5",
    }
    return response


@pytest.fixture
def horizon_asset_response() -> dict:
    """Horizon /assets 목록 항목"""
    return {
        "asset_type": "credit_alphanum4",
        "asset_code": "USD",
        "asset_issuer": ISSUER_ID,
        "paging_token": f"USD_{ISSUER_ID}_credit_alphanum4",
        "amount": "100.0000000",
        "num_accounts": 91,
        "flags": {
            "auth_required": False,
            "auth_revocable": True,
            "auth_immutable": False,
        },
    }


@pytest.fixture
def horizon_assets_page_response(horizon_asset_response: dict) -> dict:
    """Horizon GET /assets 페이지 응답"""
    return {
        "_links": {
            "self": {
                "href": "https://horizon.example.org/assets?cursor=&limit=1&order=desc",
            },
            "next": {
                "href": (
                    "https://horizon.example.org/assets"
                    f"?cursor=USD_{ISSUER_ID}_credit_alphanum4&limit=1&order=desc"
                ),
            },
            "prev": {
                "href": (
                    "https://horizon.example.org/assets"
                    f"?cursor=USD_{ISSUER_ID}_credit_alphanum4&limit=1&order=asc"
                ),
            },
        },
        "_embedded": {
            "records": [horizon_asset_response],
        },
    }


# -------------------------------------------------------------------------
# 공통 모델 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def sample_balance() -> Balance:
    """샘플 잔고"""
    return Balance(
        balance="100.0000000",
        buying_liabilities="0.0000000",
        selling_liabilities="0.0000000",
        limit="100.0000000",
        last_modified_ledger=140993,
        asset_type="credit_alphanum4",
        asset_code="USD",
        asset_issuer=ISSUER_ID,
    )


@pytest.fixture
def sample_signer() -> Signer:
    """샘플 서명자"""
    return Signer(weight=1, key=ACCOUNT_ID, type="ed25519_public_key")


@pytest.fixture
def sample_thresholds() -> Thresholds:
    return Thresholds(low_threshold=0, med_threshold=0, high_threshold=0)


@pytest.fixture
def sample_flags() -> Flags:
    return Flags(auth_required=False, auth_revocable=False, auth_immutable=False)


@pytest.fixture
def mock_horizon_client() -> MockHorizonRestClient:
    """Mock Horizon 클라이언트"""
    return MockHorizonRestClient()
