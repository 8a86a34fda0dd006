"""Timeouts and a TTL result cache for the API. The estimator itself holds no state."""
import hashlib
import json
import logging
import os
import threading
import time
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError

_LOG = logging.getLogger(__name__)

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="ncsizer")

_SIZE_TIMEOUT_SEC = int(os.environ.get("NCS_SIZE_TIMEOUT_SEC", "30"))
_REPORT_TIMEOUT_SEC = int(os.environ.get("NCS_REPORT_TIMEOUT_SEC", "120"))


def run_sync_with_timeout(seconds: int, func, *args, **kwargs):
    """Run sync function in a worker thread. Raises TimeoutError when it does not finish in time."""
    future = _executor.submit(func, *args, **kwargs)
    try:
        return future.result(timeout=seconds)
    except FuturesTimeoutError:
        future.cancel()
        _LOG.warning("%s timed out after %ss", getattr(func, "__name__", func), seconds)
        raise TimeoutError(f"Operation timed out after {seconds}s")


class ResultCache:
    """Response dicts keyed by the canonical JSON of the request; oldest entries evicted first."""

    def __init__(self, ttl_sec: int, max_size: int):
        self.ttl_sec = ttl_sec
        self.max_size = max_size
        self._entries: OrderedDict[str, tuple[dict, float]] = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def key(request_dict: dict) -> str:
        canonical = json.dumps(request_dict, sort_keys=True)
        return hashlib.sha256(canonical.encode()).hexdigest()

    def get(self, request_dict: dict) -> dict | None:
        if self.ttl_sec <= 0:
            return None
        k = self.key(request_dict)
        with self._lock:
            hit = self._entries.get(k)
            if hit is None:
                return None
            data, created = hit
            if time.time() - created > self.ttl_sec:
                self._entries.pop(k, None)
                return None
            return data

    def set(self, request_dict: dict, response_dict: dict) -> None:
        if self.ttl_sec <= 0:
            return
        k = self.key(request_dict)
        with self._lock:
            self._entries.pop(k, None)
            while self._entries and len(self._entries) >= self.max_size:
                self._entries.popitem(last=False)
            self._entries[k] = (response_dict, time.time())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


size_cache = ResultCache(
    ttl_sec=int(os.environ.get("NCS_SIZE_CACHE_TTL_SEC", "300")),
    max_size=int(os.environ.get("NCS_SIZE_CACHE_MAX", "500")),
)


def get_size_timeout_sec() -> int:
    return _SIZE_TIMEOUT_SEC


def get_report_timeout_sec() -> int:
    return _REPORT_TIMEOUT_SEC
