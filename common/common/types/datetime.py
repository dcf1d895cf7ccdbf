from __future__ import annotations

from datetime import datetime, timezone


def now_millis() -> int:
    """현재 시각을 epoch 기준 밀리초(int)로 반환한다."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
