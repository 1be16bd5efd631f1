import math

from models.candidate import ScoredCandidate
from models.search import PaginatedResults


def paginate(results: list[ScoredCandidate], page: int, per_page: int) -> PaginatedResults:
    """
    Slice one page out of the ranked list. Out-of-range pages are pulled
    back to the nearest valid page; an empty list still has page 1.
    """
    per_page = max(1, per_page)
    total = len(results)
    total_pages = max(1, math.ceil(total / per_page))
    current = min(max(1, page), total_pages)
    start = (current - 1) * per_page

    return PaginatedResults(
        items=results[start:start + per_page],
        total=total,
        page=current,
        per_page=per_page,
    )
