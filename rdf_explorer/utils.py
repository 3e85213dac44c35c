"""Generic helpers (profiling, text cleanup)."""

import functools
import logging
import re
import time


def profile_time(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        elapsed = time.time() - start_time
        logging.info(f"[PROFILE] Function '{func.__name__}' executed in {elapsed:.3f} seconds")
        return result
    return wrapper


def safe_text(value: str, limit: int = 1000) -> str:
    text = re.sub(r'[^\x20-\x7E]+', '', value)
    if len(text) > limit:
        text = text[:limit] + "... [truncated]"
    return text
