"""
pytest 공통 fixture 정의

설정 파일, 임시 디렉토리 등 테스트 공통 fixture
"""

import tempfile
from pathlib import Path

import pytest

from core.config.loader import Settings


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_settings():
    """Settings 싱글턴 초기화 (테스트 간 격리)"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def temp_config_file(temp_dir: Path) -> Path:
    """테스트용 horizon.yaml 파일 생성 (testnet)"""
    config_content = """# 테스트용 horizon.yaml
network: testnet
timeout: 10
"""
    config_path = temp_dir / "horizon.yaml"
    config_path.write_text(config_content, encoding="utf-8")
    return config_path


@pytest.fixture
def temp_config_file_public(temp_dir: Path) -> Path:
    """테스트용 horizon.yaml 파일 생성 (public)"""
    config_content = """network: public
"""
    config_path = temp_dir / "horizon_public.yaml"
    config_path.write_text(config_content, encoding="utf-8")
    return config_path


@pytest.fixture
def temp_config_file_custom_url(temp_dir: Path) -> Path:
    """horizon_url이 지정된 horizon.yaml 파일 생성"""
    config_content = """network: public
horizon_url: "https://horizon.example.org"
timeout: 5.5
"""
    config_path = temp_dir / "horizon_custom.yaml"
    config_path.write_text(config_content, encoding="utf-8")
    return config_path


@pytest.fixture
def temp_config_file_invalid_network(temp_dir: Path) -> Path:
    """잘못된 네트워크의 horizon.yaml 파일 생성"""
    config_content = """network: mainnet_typo
"""
    config_path = temp_dir / "horizon_invalid.yaml"
    config_path.write_text(config_content, encoding="utf-8")
    return config_path
