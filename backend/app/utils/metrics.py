from __future__ import annotations

"""
Optional StatsD/Datadog UDP counters for the pricing endpoints.

Usage (non-blocking, no-op when unconfigured):
  from app.utils.metrics import incr, Timer
  incr('estimate.calculated', tags={'rate_type': 'holiday'})
  with Timer('deposit.calculate.ms'):
      ...

Env:
  METRICS_STATSD_ADDR = "host:port" (e.g., "127.0.0.1:8125")
  METRICS_PREFIX = metric name prefix (default "pricing.")
  METRICS_TAGS = "1" enables Datadog-style tag suffix (|#key:val,...)
"""

import logging
import os
import socket
import time
from typing import Dict, Optional

logger = logging.getLogger(__name__)

_SOCK: Optional[socket.socket] = None


def _addr() -> str:
    return os.getenv("METRICS_STATSD_ADDR", "").strip()


def _prefix() -> str:
    return os.getenv("METRICS_PREFIX", "pricing.")


def _use_tags() -> bool:
    return os.getenv("METRICS_TAGS", "1") not in ("0", "false", "False")


def _get_sock() -> Optional[socket.socket]:
    global _SOCK
    addr = _addr()
    if not addr:
        return None
    if _SOCK is not None:
        return _SOCK
    try:
        host, port = addr.split(":", 1)
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.connect((host, int(port)))
    except (OSError, ValueError) as exc:
        logger.warning("StatsD sink %s unavailable: %s", addr, exc)
        return None
    _SOCK = s
    return _SOCK


def _format_tags(tags: Optional[Dict[str, object]]) -> str:
    if not tags or not _use_tags():
        return ""
    parts = [
        f"{str(k).replace(',', '_')}:{str(v).replace(',', '_')}"
        for k, v in tags.items()
        if k is not None
    ]
    return "|#" + ",".join(parts) if parts else ""


def _send(msg: str) -> None:
    s = _get_sock()
    if not s:
        return
    try:
        s.send(msg.encode("utf-8"))
    except OSError:
        # UDP sink is best-effort only
        pass


def incr(name: str, value: int = 1, tags: Optional[Dict[str, object]] = None) -> None:
    _send(f"{_prefix()}{name}:{int(value)}|c{_format_tags(tags)}")


def timing_ms(name: str, ms: float, tags: Optional[Dict[str, object]] = None) -> None:
    _send(f"{_prefix()}{name}:{float(ms):.2f}|ms{_format_tags(tags)}")


class Timer:
    def __init__(self, name: str, tags: Optional[Dict[str, object]] = None):
        self.name = name
        self.tags = tags or {}
        self._t0: Optional[float] = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._t0 is not None:
            timing_ms(self.name, (time.perf_counter() - self._t0) * 1000.0, tags=self.tags)
        return False
