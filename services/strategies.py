"""
Search strategies: one per request variant.

Every strategy that talks to the candidate store goes through
try_remote_then_fallback, so a store outage degrades to local scoring over
the cached pool instead of an error.
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from models.candidate import Candidate, ScoredCandidate
from models.search import JobDescriptionQuery, ManualQuery, SmartQuery
from services.keywords import keywords_or_query
from services.scoring import (
    FILTER_FIELDS,
    JD_DEFAULT_COVERAGE,
    MANUAL_RELEVANCE,
    SMART_DEFAULT_COVERAGE,
    build_text_blob,
    coverage,
    jd_relevance,
    match_percentage,
    matched_terms,
    score,
    smart_relevance,
    sort_results,
)
from services.vocabulary import LOGISTICS_SKILLS

logger = logging.getLogger(__name__)

EXPERIENCE_PATTERN = re.compile(r"(\d+)\s*year", re.IGNORECASE)


def try_remote_then_fallback(
    primary: Callable[[], list[ScoredCandidate]],
    fallback: Callable[[], list[ScoredCandidate]],
    label: str,
) -> list[ScoredCandidate]:
    """Run primary; on an exception or an empty result, run fallback instead."""
    try:
        results = primary()
    except Exception as e:
        logger.warning("%s remote search failed, scoring locally: %s", label, e)
        return fallback()

    if not results:
        logger.info("%s remote search returned nothing, scoring locally", label)
        return fallback()

    logger.info("%s remote search returned %d candidates", label, len(results))
    return results


def score_locally(
    pool: Sequence[Candidate],
    terms: list[str],
    keywords: list[str],
) -> list[ScoredCandidate]:
    """Blob-substring scoring over the cached pool. Candidates matching no term are dropped."""
    results = []
    for candidate in pool:
        matched = matched_terms(terms, build_text_blob(candidate))
        if not matched:
            continue
        cov = coverage(len(matched), len(terms), SMART_DEFAULT_COVERAGE)
        results.append(score(candidate, smart_relevance(cov), match_percentage(cov), keywords))

    logger.debug("Local scoring matched %d of %d candidates", len(results), len(pool))
    return results


def parse_experience_years(text: str) -> int:
    match = EXPERIENCE_PATTERN.search(text or "")
    if not match:
        return 0
    return int(match.group(1))


class SearchStrategy(ABC):

    name = "base"

    def __init__(self, store, search_limit: int = 500):
        self.store = store
        self.search_limit = search_limit

    def search(self, variant, pool: Sequence[Candidate]) -> list[ScoredCandidate]:
        try:
            results = self.run(variant, pool)
        except Exception as e:
            logger.error("%s search failed, returning no results: %s", self.name, e)
            return []
        return sort_results(results)

    @abstractmethod
    def run(self, variant, pool: Sequence[Candidate]) -> list[ScoredCandidate]:
        pass


class SmartStrategy(SearchStrategy):
    """Free-text query: store full-text search first, keyword scoring over the pool second."""

    name = "smart"

    def run(self, variant: SmartQuery, pool: Sequence[Candidate]) -> list[ScoredCandidate]:
        query = variant.query.strip()
        terms = keywords_or_query(query)
        processed = " ".join(terms)
        logger.info("Smart search | query='%s' terms=%s", query, terms)

        def remote() -> list[ScoredCandidate]:
            found = self.store.full_text_search(processed, self.search_limit)
            return [self._score_remote(c, terms, query) for c in found]

        return try_remote_then_fallback(
            remote,
            lambda: score_locally(pool, terms, terms or [query]),
            "Smart",
        )

    @staticmethod
    def _score_remote(candidate: Candidate, terms: list[str], query: str) -> ScoredCandidate:
        matched = matched_terms(terms, build_text_blob(candidate))
        cov = coverage(len(matched), len(terms), SMART_DEFAULT_COVERAGE)
        keywords = matched or terms or [query]
        return score(candidate, smart_relevance(cov), match_percentage(cov), keywords)


class JobDescriptionStrategy(SearchStrategy):
    """Job description: intersect it with the skill vocabulary and rank by skill hits."""

    name = "jd"

    def __init__(self, store, search_limit: int = 500, vocabulary: Sequence[str] = LOGISTICS_SKILLS):
        super().__init__(store, search_limit)
        self.vocabulary = list(vocabulary)

    def skills_for(self, text: str) -> tuple[list[str], list[str]]:
        """(skills found in the text, skills to search with). An empty match searches the whole vocabulary."""
        lowered = (text or "").lower()
        matched = [s for s in self.vocabulary if s.lower() in lowered]
        return matched, matched or list(self.vocabulary)

    def run(self, variant: JobDescriptionQuery, pool: Sequence[Candidate]) -> list[ScoredCandidate]:
        matched_skills, skills = self.skills_for(variant.text)
        keywords = matched_skills or skills
        logger.info("JD search | matched_skills=%s searching_with=%d skills", matched_skills, len(skills))

        def remote() -> list[ScoredCandidate]:
            found = self.store.skill_search(skills)
            return [self._score_skills(c, skills, keywords) for c in found]

        def local() -> list[ScoredCandidate]:
            fallback_query = " ".join(skills)
            return score_locally(pool, keywords_or_query(fallback_query), keywords)

        return try_remote_then_fallback(remote, local, "JD")

    @staticmethod
    def _score_skills(candidate: Candidate, skills: list[str], keywords: list[str]) -> ScoredCandidate:
        blob = build_text_blob(candidate)
        own_skills = {s.lower() for s in candidate.technical_skills}
        hits = 0
        for skill in skills:
            s = skill.lower()
            if s in own_skills or s in blob:
                hits += 1
        cov = coverage(hits, len(skills), JD_DEFAULT_COVERAGE)
        return score(candidate, jd_relevance(cov, hits), match_percentage(cov), keywords)


class ManualStrategy(SearchStrategy):
    """
    Structured filters. Nothing is ranked: every candidate that passes all
    filters gets the same score, so the final order is by upload date.
    """

    name = "manual"

    def run(self, variant: ManualQuery, pool: Sequence[Candidate]) -> list[ScoredCandidate]:
        keywords = [k.strip().lower() for k in variant.keywords if k and k.strip()]
        location = (variant.location or "").strip().lower()
        education = (variant.education or "").strip().lower()
        logger.info(
            "Manual search | keywords=%s location='%s' education='%s' experience=%s-%s",
            keywords, location, education, variant.min_experience, variant.max_experience,
        )

        results = []
        for candidate in pool:
            found = matched_terms(keywords, build_text_blob(candidate, FILTER_FIELDS))
            if keywords and not found:
                continue
            if location and location not in candidate.location.lower():
                continue
            if education and not self._has_education(candidate, education):
                continue
            if not self._has_experience(candidate, variant.min_experience, variant.max_experience):
                continue
            cov = coverage(len(found), len(keywords), 1.0)
            results.append(score(candidate, MANUAL_RELEVANCE, match_percentage(cov), keywords))

        logger.info("Manual search kept %d of %d candidates", len(results), len(pool))
        return results

    @staticmethod
    def _has_education(candidate: Candidate, education: str) -> bool:
        return (
            education in candidate.highest_qualification.lower()
            or education in candidate.degree.lower()
        )

    @staticmethod
    def _has_experience(
        candidate: Candidate,
        min_experience: Optional[float],
        max_experience: Optional[float],
    ) -> bool:
        if min_experience is None and max_experience is None:
            return True
        years = parse_experience_years(candidate.total_experience)
        low = min_experience if min_experience is not None else 0
        high = max_experience if max_experience is not None else math.inf
        return low <= years <= high
