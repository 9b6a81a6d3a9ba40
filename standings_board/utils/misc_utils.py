# standings_board/utils/misc_utils.py
import time
from typing import Optional

import httpx


def cache_busted_url(url: str, now_ms: Optional[int] = None) -> str:
    """Appends a ``t=<epoch ms>`` query parameter so caches never serve a stale export."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return str(httpx.URL(url).copy_merge_params({"t": str(stamp)}))
