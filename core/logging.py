"""
로깅 설정 유틸리티

Horizon 클라이언트 로그는 logging.getLogger(__name__)에 extra={...}로
요청 컨텍스트(url, status, rate_info 등)를 실어 보냄.
ContextFormatter가 이 컨텍스트를 "key=value" 꼬리로 붙여 출력.

- 콘솔: StreamHandler
- 파일: TimedRotatingFileHandler (자정마다 새 파일)

사용법:
    from core.logging import configure_logging
    configure_logging(get_settings())
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from core.constants import Paths

if TYPE_CHECKING:
    from core.config.loader import Settings


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BACKUP_COUNT = 7

# httpx 자체 요청 로그는 HorizonRestClient 로그와 중복
NOISY_LOGGERS = ["httpcore", "httpx", "asyncio"]

# LogRecord 기본 속성 (extra로 들어온 키만 골라내기 위함)
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class ContextFormatter(logging.Formatter):
    """extra 컨텍스트를 메시지 뒤에 붙이는 Formatter

    예: "Horizon API error | url=https://... status=500 title=Internal Server Error"
    """

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if not context:
            return base
        tail = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        return f"{base} | {tail}"


def setup_logging(
    process_name: str,
    log_dir: Path | None = None,
    level: int | str = logging.INFO,
) -> logging.Logger:
    """루트 로거에 콘솔/파일 핸들러 구성

    반복 호출 시 기존 핸들러는 닫고 교체.

    Args:
        process_name: 로그 파일명 (확장자 제외)
        log_dir: 로그 디렉토리 (None이면 Paths.LOGS_DIR)
        level: 핸들러 레벨 (정수 또는 "INFO" 같은 이름)

    Returns:
        설정된 루트 Logger
    """
    log_file = get_log_file_path(process_name, log_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    formatter = ContextFormatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    file_handler = TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(
        "Logging configured",
        extra={"log_file": str(log_file), "level": logging.getLevelName(root_logger.level)},
    )
    return root_logger


def configure_logging(
    settings: "Settings",
    process_name: str = "horizon",
    log_dir: Path | None = None,
) -> logging.Logger:
    """horizon.yaml의 log_level로 로깅 구성"""
    return setup_logging(process_name, log_dir=log_dir, level=settings.log_level)


def get_log_file_path(process_name: str, log_dir: Path | None = None) -> Path:
    """로그 파일 경로 반환"""
    if log_dir is None:
        log_dir = Paths.LOGS_DIR
    return log_dir / f"{process_name}.log"
