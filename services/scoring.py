"""
Scoring helpers shared by the search strategies.

Each strategy keeps its own formula; the helpers here only provide the
pieces they have in common.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Iterable, Optional

from models.candidate import Candidate, ScoredCandidate

logger = logging.getLogger(__name__)

SMART_DEFAULT_COVERAGE = 0.6
SMART_BOOST = 0.3
SMART_FLOOR = 0.5
SMART_CEILING = 0.95

JD_DEFAULT_COVERAGE = 1.0
JD_BOOST_PER_HIT = 0.02
JD_MAX_BOOST = 0.15

MANUAL_RELEVANCE = 0.6

SEARCH_FIELDS = (
    "current_role",
    "desired_role",
    "current_company",
    "summary",
    "resume_text",
    "technical_skills",
    "soft_skills",
)

FILTER_FIELDS = (
    "current_role",
    "summary",
    "resume_text",
    "current_company",
    "technical_skills",
    "soft_skills",
)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def coverage(matched: int, total: int, default: float) -> float:
    if total > 0:
        return matched / total
    return default


def smart_relevance(cov: float) -> float:
    return clamp(cov + SMART_BOOST, SMART_FLOOR, SMART_CEILING)


def jd_boost(hits: int) -> float:
    return min(JD_MAX_BOOST, hits * JD_BOOST_PER_HIT)


def jd_relevance(cov: float, hits: int) -> float:
    return clamp(cov + jd_boost(hits), 0.0, 1.0)


def match_percentage(cov: float) -> int:
    # half-up, so 12.5% shows as 13 rather than banker's 12
    return int(math.floor(clamp(cov, 0.0, 1.0) * 100 + 0.5))


def build_text_blob(candidate: Candidate, fields: Iterable[str] = SEARCH_FIELDS) -> str:
    parts: list[str] = []
    for field in fields:
        value = getattr(candidate, field)
        if isinstance(value, list):
            parts.extend(value)
        elif value:
            parts.append(value)
    return " ".join(parts).lower()


def matched_terms(terms: Iterable[str], blob: str) -> list[str]:
    return [t for t in terms if t and t.lower() in blob]


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparsable uploaded_at '%s'", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def recency_key(value: Optional[str]) -> tuple[bool, float]:
    # valid timestamps outrank unparsable ones, including pre-1970 dates
    parsed = _parse_timestamp(value)
    if parsed is None:
        return False, 0.0
    return True, parsed.timestamp()


def sort_results(results: list[ScoredCandidate]) -> list[ScoredCandidate]:
    """Relevance first, most recent upload second, unparsable uploads last."""
    return sorted(
        results,
        key=lambda c: (c.relevance_score, recency_key(c.uploaded_at)),
        reverse=True,
    )


def score(candidate: Candidate, relevance: float, percentage: int, keywords: list[str]) -> ScoredCandidate:
    return ScoredCandidate(
        **candidate.model_dump(),
        relevance_score=relevance,
        match_percentage=percentage,
        matching_keywords=list(keywords),
    )
