"""Cheap token estimate used to decide whether output needs pagination."""

import math
from typing import Optional

from .config import Config


def estimate_tokens(text: str, ratio: Optional[float] = None) -> int:
    """
    Approximate the token cost of ``text`` from its length.

    This is a threshold gate, not a tokenizer: ``floor(len(text) * ratio)``.

    Args:
        text: Text to measure
        ratio: Tokens per character (default: Config.TOKEN_ESTIMATE_RATIO)

    Returns:
        Estimated token count
    """
    if ratio is None:
        ratio = Config.TOKEN_ESTIMATE_RATIO
    return math.floor(len(text) * ratio)
