"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class HorizonEndpoints:
    """Horizon API 엔드포인트 (고정값)

    공식 문서: https://developers.stellar.org/docs/data/horizon
    """

    PUBLIC_URL: str = "https://horizon.stellar.org"
    TESTNET_URL: str = "https://horizon-testnet.stellar.org"


class Defaults:
    """기본값 상수"""

    TIMEOUT_SEC: float = 30.0
    LOG_LEVEL: str = "INFO"


class PagingLimits:
    """페이지 조회 limit 범위 (Horizon 기준)"""

    MIN: int = 1
    MAX: int = 200


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    CONFIG_FILE: Path = CONFIG_DIR / "horizon.yaml"


class RateLimitThresholds:
    """Rate Limit 임계값 (남은 요청 수 기준)"""

    REMAINING_WARN: int = 100  # 경고
    REMAINING_STOP: int = 0  # 요청 중단
