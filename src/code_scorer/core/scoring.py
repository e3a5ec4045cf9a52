"""Score parsing and status presentation.

The model is asked for a bare number. Parsing accepts only a reply whose whole
trimmed content is numeric, and the value is passed through as-is: scores
outside 0-100 are displayed unclamped.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Optional

from .models import Score, ScoreTier

logger = logging.getLogger(__name__)

STATUS_PLACEHOLDER = "Code Score: N/A"

# Plain ASCII decimal notation with optional sign, fraction and exponent.
_NUMERIC = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_score(content: Optional[str]) -> Optional[Score]:
    """Interpret the entire reply as one number.

    Returns None when the reply is missing, empty, or anything other than a
    single finite number. Integral values come back as ``int``.
    """
    if content is None:
        return None

    text = content.strip()
    if not _NUMERIC.fullmatch(text):
        logger.debug("Reply is not a bare number: %r", content[:80])
        return None

    value = float(text)
    if not math.isfinite(value):
        return None
    if value.is_integer():
        return int(value)
    return value


def tier_for_score(score: Score) -> ScoreTier:
    """Map a score to its display tier. First matching lower bound wins."""
    if score >= 90:
        return ScoreTier.CELEBRATION
    if score >= 80:
        return ScoreTier.THUMBS_UP
    if score >= 70:
        return ScoreTier.THINKING
    return ScoreTier.THUMBS_DOWN


def format_status_text(score: Score) -> str:
    """Status bar text for a score, e.g. ``Code Score: 85/100 👍``."""
    tier = tier_for_score(score)
    return f"Code Score: {score}/100 {tier.marker}"
