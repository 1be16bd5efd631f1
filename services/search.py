import logging
from typing import Union

from models.candidate import ScoredCandidate
from models.search import (
    JobDescriptionQuery,
    ManualQuery,
    PaginatedResults,
    Pagination,
    SearchRequest,
    SearchVariant,
    SmartQuery,
)
from services.cache import CandidateCache
from services.pagination import paginate
from services.strategies import (
    JobDescriptionStrategy,
    ManualStrategy,
    SearchStrategy,
    SmartStrategy,
)

logger = logging.getLogger(__name__)


class SearchValidationError(ValueError):
    """A search request is missing what its search type needs."""


def parse_request(request: SearchRequest) -> SearchVariant:
    pagination = Pagination(
        enabled=request.paginate,
        page=request.page,
        per_page=request.per_page,
    )
    search_type = (request.search_type or "").strip().lower()

    if search_type == "smart":
        if not request.query.strip():
            raise SearchValidationError("Search query is required")
        return SmartQuery(query=request.query.strip(), pagination=pagination)

    if search_type == "jd":
        if not request.job_description.strip():
            raise SearchValidationError("Job description is required")
        return JobDescriptionQuery(text=request.job_description, pagination=pagination)

    if search_type == "manual":
        filters = request.filters
        keywords = [k.strip() for k in filters.keywords if k and k.strip()]
        if not keywords:
            raise SearchValidationError("Keywords are required for manual search")
        return ManualQuery(
            keywords=keywords,
            location=filters.location,
            min_experience=filters.min_experience,
            max_experience=filters.max_experience,
            education=filters.education,
            pagination=pagination,
        )

    raise SearchValidationError("Invalid search type")


class SearchService:
    """
    Entry point for candidate search. Owns the candidate cache and one
    strategy per request variant.
    """

    def __init__(self, store, cache_ttl_seconds: float = 60.0, search_limit: int = 500, cache: CandidateCache = None):
        self.store = store
        self.cache = cache or CandidateCache(store.fetch_all_candidates, ttl_seconds=cache_ttl_seconds)
        self.strategies: dict[type, SearchStrategy] = {
            SmartQuery: SmartStrategy(store, search_limit),
            JobDescriptionQuery: JobDescriptionStrategy(store, search_limit),
            ManualQuery: ManualStrategy(store, search_limit),
        }

    def search(self, request: SearchRequest) -> Union[list[ScoredCandidate], PaginatedResults]:
        variant = parse_request(request)
        logger.info("Search request | type=%s paginate=%s", request.search_type, variant.pagination.enabled)

        strategy = self.strategies[type(variant)]

        pool = self.cache.get()
        logger.info("Candidate pool size: %d", len(pool))

        results = strategy.search(variant, pool)
        logger.info("Search complete | type=%s results=%d", strategy.name, len(results))

        if variant.pagination.enabled:
            return paginate(results, variant.pagination.page, variant.pagination.per_page)
        return results
