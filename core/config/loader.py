"""
설정 로더

horizon.yaml 로드 및 Horizon 접속 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, HorizonEndpoints, Paths
from core.types import NetworkMode


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ClientConfig:
    """클라이언트 설정 (horizon.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    network: NetworkMode
    horizon_url: str | None = None
    timeout: float = Defaults.TIMEOUT_SEC
    log_level: str = Defaults.LOG_LEVEL


@dataclass(frozen=True)
class HorizonConfig:
    """Horizon 연결 설정"""

    rest_url: str
    timeout: float


class ConfigLoadError(Exception):
    """설정 로드 실패 예외"""

    pass


def load_config(path: Path | None = None) -> ClientConfig:
    """horizon.yaml 파일 로드

    Args:
        path: horizon.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        ClientConfig 인스턴스

    Raises:
        ConfigLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 유효하지 않은 network인 경우
    """
    if path is None:
        path = Paths.CONFIG_FILE

    if not path.exists():
        raise ConfigLoadError(f"horizon.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"horizon.yaml 파싱 실패: {e}") from e

    if data is None:
        raise ConfigLoadError("horizon.yaml이 비어 있습니다")

    if not isinstance(data, dict):
        raise ConfigLoadError("horizon.yaml의 최상위는 매핑이어야 합니다")

    # network 검증
    network_str = data.get("network")
    if network_str is None:
        raise ConfigLoadError("horizon.yaml에 'network' 필드가 없습니다")

    try:
        network = NetworkMode(network_str)
    except ValueError as e:
        valid_networks = [m.value for m in NetworkMode]
        raise ValueError(
            f"유효하지 않은 network입니다: '{network_str}'. "
            f"유효한 값: {valid_networks}"
        ) from e

    horizon_url = data.get("horizon_url")
    if horizon_url is not None and not isinstance(horizon_url, str):
        raise ConfigLoadError("horizon.yaml의 'horizon_url'은 문자열이어야 합니다")

    timeout = data.get("timeout", Defaults.TIMEOUT_SEC)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigLoadError(
            f"horizon.yaml의 'timeout'은 양수여야 합니다: {timeout!r}"
        )

    log_level = data.get("log_level", Defaults.LOG_LEVEL)
    if not isinstance(log_level, str) or log_level.upper() not in LOG_LEVELS:
        raise ConfigLoadError(
            f"horizon.yaml의 'log_level'이 유효하지 않습니다: {log_level!r}. "
            f"유효한 값: {list(LOG_LEVELS)}"
        )

    return ClientConfig(
        network=network,
        horizon_url=horizon_url or None,
        timeout=float(timeout),
        log_level=log_level.upper(),
    )


def get_horizon_config(config: ClientConfig) -> HorizonConfig:
    """네트워크에 따른 Horizon 설정 반환

    horizon_url이 지정되어 있으면 네트워크 기본 URL보다 우선.

    Args:
        config: ClientConfig 인스턴스

    Returns:
        HorizonConfig 인스턴스
    """
    if config.horizon_url:
        rest_url = config.horizon_url
    elif config.network == NetworkMode.PUBLIC:
        rest_url = HorizonEndpoints.PUBLIC_URL
    else:
        rest_url = HorizonEndpoints.TESTNET_URL

    return HorizonConfig(rest_url=rest_url, timeout=config.timeout)


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    horizon.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: ClientConfig | None = None

    def __new__(cls, config_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, config_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_config(config_path)

    @property
    def network(self) -> NetworkMode:
        """현재 네트워크"""
        assert self._config is not None
        return self._config.network

    @property
    def log_level(self) -> str:
        """로그 레벨 이름"""
        assert self._config is not None
        return self._config.log_level

    @property
    def horizon_config(self) -> HorizonConfig:
        """현재 네트워크의 Horizon 설정"""
        assert self._config is not None
        return get_horizon_config(self._config)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(config_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        config_path: horizon.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(config_path)
