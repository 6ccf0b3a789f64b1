"""
Horizon Rate Limit 추적

응답 헤더에서 Rate Limit 정보를 추적하고,
남은 요청 수가 임계값 이하이면 경고 또는 요청 제한.
재시도/대기는 하지 않음 (호출 측 책임).
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from core.constants import RateLimitThresholds


@dataclass
class RateLimitTracker:
    """Rate Limit 추적기

    Horizon Rate Limit 헤더:
    - X-Ratelimit-Limit: 구간 내 허용 요청 수
    - X-Ratelimit-Remaining: 남은 요청 수
    - X-Ratelimit-Reset: 구간 리셋까지 남은 시간 (초)

    헤더를 한 번도 받지 못한 상태(remaining None)이거나
    X-Ratelimit-Reset 구간이 지난 경우에는 제한하지 않음.
    """

    limit: int | None = None
    remaining: int | None = None
    reset_after: int = 0
    last_updated: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def update_from_headers(self, headers: Mapping[str, Any]) -> None:
        """응답 헤더에서 Rate Limit 정보 업데이트

        Args:
            headers: HTTP 응답 헤더 (대소문자 무관)
        """
        headers_lower = {k.lower(): v for k, v in headers.items()}

        limit = _to_int(headers_lower.get("x-ratelimit-limit"))
        if limit is not None:
            self.limit = limit

        remaining = _to_int(headers_lower.get("x-ratelimit-remaining"))
        if remaining is not None:
            self.remaining = remaining

        reset_after = _to_int(headers_lower.get("x-ratelimit-reset"))
        if reset_after is not None:
            self.reset_after = reset_after

        self.last_updated = datetime.now(timezone.utc)

    @property
    def in_window(self) -> bool:
        """마지막 헤더 기준 리셋 구간이 아직 유효한지 여부"""
        return datetime.now(timezone.utc) < self.last_updated + timedelta(seconds=self.reset_after)

    @property
    def seconds_until_reset(self) -> int:
        """구간 리셋까지 남은 시간 (초, 올림)"""
        delta = self.last_updated + timedelta(seconds=self.reset_after) - datetime.now(timezone.utc)
        return max(0, math.ceil(delta.total_seconds()))

    @property
    def should_warn(self) -> bool:
        """경고 임계값 도달 여부 (리셋 구간 내에서만)"""
        return (
            self.remaining is not None
            and self.remaining <= RateLimitThresholds.REMAINING_WARN
            and self.in_window
        )

    @property
    def should_stop(self) -> bool:
        """요청 중단 필요 여부 (리셋 구간이 지나면 다시 요청 허용)"""
        return (
            self.remaining is not None
            and self.remaining <= RateLimitThresholds.REMAINING_STOP
            and self.in_window
        )

    def reset(self) -> None:
        """카운터 리셋"""
        self.limit = None
        self.remaining = None
        self.reset_after = 0
        self.last_updated = datetime.now(timezone.utc)

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (로깅용)"""
        return {
            "limit": self.limit,
            "remaining": self.remaining,
            "reset_after": self.reset_after,
            "seconds_until_reset": self.seconds_until_reset,
            "last_updated": self.last_updated.isoformat(),
            "should_warn": self.should_warn,
            "should_stop": self.should_stop,
        }


def _to_int(value: Any) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
