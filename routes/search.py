import asyncio
import logging
from typing import Optional, Union

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from config import settings
from database import postgres
from models.candidate import ScoredCandidate
from models.search import PaginatedResults, SearchRequest
from routes.auth import require_auth
from services.search import SearchService, SearchValidationError

logger = logging.getLogger(__name__)
router = APIRouter(dependencies=[Depends(require_auth)])

_service: Optional[SearchService] = None


def get_search_service() -> SearchService:
    global _service
    if _service is None:
        _service = SearchService(
            postgres,
            cache_ttl_seconds=settings.cache_ttl_seconds,
            search_limit=settings.search_result_limit,
        )
    return _service


def request_from_params(params) -> SearchRequest:
    """
    Build a SearchRequest from query parameters, accepting every parameter
    name the search page has used over time (type/searchType, keywords/query/q,
    jobDescription/jd/description).
    """
    def first(*names: str) -> Optional[str]:
        for name in names:
            value = params.get(name)
            if value is not None:
                return value
        return None

    text = first("keywords", "query", "q") or ""
    filters = {"keywords": text}
    for name in ("location", "education", "minExperience", "maxExperience"):
        value = params.get(name)
        if value:
            filters[name] = value

    data = {
        "searchType": first("type", "searchType") or "smart",
        "query": text,
        "jobDescription": first("jobDescription", "jd", "description") or "",
        "filters": filters,
        "paginate": params.get("paginate") == "true",
    }
    if params.get("page"):
        data["page"] = params.get("page")
    if params.get("perPage"):
        data["perPage"] = params.get("perPage")

    return SearchRequest(**data)


async def _run_search(service: SearchService, request: SearchRequest):
    loop = asyncio.get_event_loop()
    try:
        return await loop.run_in_executor(None, service.search, request)
    except SearchValidationError as e:
        logger.warning("Rejected search request: %s", e)
        return JSONResponse(status_code=400, content={"error": str(e)})


@router.post("/search", response_model=Union[PaginatedResults, list[ScoredCandidate]])
async def search(request: SearchRequest, service: SearchService = Depends(get_search_service)):
    """Rank candidates for a smart query, a job description or manual filters."""
    logger.info("Search request | type=%s", request.search_type)
    return await _run_search(service, request)


@router.get("/search", response_model=Union[PaginatedResults, list[ScoredCandidate]])
async def search_by_params(request: Request, service: SearchService = Depends(get_search_service)):
    try:
        search_request = request_from_params(request.query_params)
    except ValidationError as e:
        logger.warning("Invalid search parameters: %s", e)
        return JSONResponse(status_code=400, content={"error": "Invalid search parameters"})

    logger.info("Search request (query string) | type=%s", search_request.search_type)
    return await _run_search(service, search_request)
