import time
from datetime import datetime, timezone
from typing import Callable


Clock = Callable[[], int]


def now_ms() -> int:
    return int(time.time() * 1000)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
