import re
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from models.candidate import ScoredCandidate

MAX_PER_PAGE = 100


class ManualFilters(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    keywords: list[str] = []
    location: Optional[str] = None
    min_experience: Optional[float] = None
    max_experience: Optional[float] = None
    education: Optional[str] = None

    @field_validator("keywords", mode="before")
    @classmethod
    def split_keyword_string(cls, v):
        # the search form sends one free-text box, API clients send a list
        if v is None:
            return []
        if isinstance(v, str):
            return [k for k in re.split(r"[\s,]+", v) if k]
        return v


class SearchRequest(BaseModel):
    """Transport shape of a search call. Variant checks live in the search service."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    search_type: str = "smart"
    query: str = ""
    job_description: str = ""
    filters: ManualFilters = ManualFilters()
    paginate: bool = False
    page: int = 1
    per_page: int = 20

    @field_validator("query", "job_description", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("filters", "paginate", "page", "per_page", mode="before")
    @classmethod
    def none_to_default(cls, v, info: ValidationInfo):
        if v is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return v

    @field_validator("page")
    @classmethod
    def floor_page(cls, v: int) -> int:
        if v < 1:
            return 1
        return v

    @field_validator("per_page")
    @classmethod
    def cap_per_page(cls, v: int) -> int:
        if v < 1:
            return 1
        if v > MAX_PER_PAGE:
            return MAX_PER_PAGE
        return v


class Pagination(BaseModel):
    enabled: bool = False
    page: int = 1
    per_page: int = 20


class SmartQuery(BaseModel):
    query: str
    pagination: Pagination = Pagination()


class JobDescriptionQuery(BaseModel):
    text: str
    pagination: Pagination = Pagination()


class ManualQuery(BaseModel):
    keywords: list[str]
    location: Optional[str] = None
    min_experience: Optional[float] = None
    max_experience: Optional[float] = None
    education: Optional[str] = None
    pagination: Pagination = Pagination()


SearchVariant = Union[SmartQuery, JobDescriptionQuery, ManualQuery]


class PaginatedResults(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[ScoredCandidate]
    total: int
    page: int
    per_page: int
