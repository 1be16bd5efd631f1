import pytest

from models.search import JobDescriptionQuery, ManualQuery, PaginatedResults, SearchRequest, SmartQuery
from services.pagination import paginate
from services.scoring import score
from services.search import SearchService, SearchValidationError, parse_request


def driver_pool(make_candidate, count=25):
    return [
        make_candidate(
            id=f"d{i:02d}",
            current_role="Driver",
            uploaded_at=f"2024-01-{i + 1:02d}T00:00:00Z",
        )
        for i in range(count)
    ]


class TestParseRequest:

    @pytest.mark.parametrize("body,message", [
        ({"searchType": "smart", "query": "   "}, "Search query is required"),
        ({"searchType": "jd"}, "Job description is required"),
        ({"searchType": "manual", "filters": {"keywords": []}}, "Keywords are required for manual search"),
        ({"searchType": "manual", "filters": {"keywords": ["  "]}}, "Keywords are required for manual search"),
        ({"searchType": "fuzzy", "query": "driver"}, "Invalid search type"),
    ])
    def test_rejects_incomplete_requests(self, body, message):
        with pytest.raises(SearchValidationError, match=message):
            parse_request(SearchRequest(**body))

    def test_builds_manual_variant(self):
        variant = parse_request(SearchRequest(**{
            "searchType": "manual",
            "filters": {"keywords": ["driver", " "], "location": "Pune", "minExperience": 1},
            "paginate": True,
            "perPage": 10,
        }))
        assert variant.keywords == ["driver"]
        assert variant.location == "Pune"
        assert variant.min_experience == 1
        assert variant.pagination.enabled is True
        assert variant.pagination.per_page == 10


class TestSearchService:

    def test_validation_happens_before_any_store_access(self, make_store):
        store = make_store()
        service = SearchService(store)

        with pytest.raises(SearchValidationError):
            service.search(SearchRequest(searchType="smart"))

        assert store.fetch_count == 0
        assert store.calls == []

    def test_dispatches_to_strategy_by_type(self, make_store, make_candidate):
        store = make_store(candidates=[make_candidate(current_role="Driver")], fail_remote=True)
        service = SearchService(store)

        assert len(service.search(SearchRequest(searchType="smart", query="driver"))) == 1
        assert store.calls[-1] == ("text", "driver")

        service.search(SearchRequest(searchType="jd", jobDescription="fleet management role"))
        assert store.calls[-1] == ("skills", ["fleet management"])

        manual = service.search(SearchRequest(searchType="manual", filters={"keywords": ["driver"]}))
        assert manual[0].relevance_score == 0.6

    def test_every_variant_has_a_strategy(self, make_store):
        service = SearchService(make_store())
        assert set(service.strategies) == {SmartQuery, JobDescriptionQuery, ManualQuery}

    def test_pool_is_cached_between_requests(self, make_store, make_candidate):
        store = make_store(candidates=[make_candidate(current_role="Driver")])
        service = SearchService(store, cache_ttl_seconds=60)

        request = SearchRequest(searchType="manual", filters={"keywords": ["driver"]})
        service.search(request)
        service.search(request)

        assert store.fetch_count == 1

    def test_store_outage_gives_no_results_instead_of_error(self, make_store):
        service = SearchService(make_store(fail_fetch=True, fail_remote=True))

        assert service.search(SearchRequest(searchType="smart", query="fleet manager")) == []
        assert service.search(SearchRequest(searchType="manual", filters={"keywords": ["driver"]})) == []

    def test_smart_fallback_scenario(self, make_store, make_candidate):
        pool = [make_candidate(resume_text="Five years of fleet manager experience")]
        service = SearchService(make_store(candidates=pool, fail_remote=True))

        results = service.search(SearchRequest(searchType="smart", query="fleet manager"))

        assert len(results) == 1
        assert results[0].relevance_score == 0.95
        assert results[0].match_percentage == 100
        assert results[0].matching_keywords == ["fleet", "manager"]

    def test_pagination_scenario(self, make_store, make_candidate):
        service = SearchService(make_store(candidates=driver_pool(make_candidate)))
        body = {"searchType": "manual", "filters": {"keywords": ["driver"]}}

        ranked = service.search(SearchRequest(**body))
        page = service.search(SearchRequest(**body, paginate=True, page=3, perPage=10))

        assert isinstance(page, PaginatedResults)
        assert page.total == 25
        assert page.page == 3
        assert page.per_page == 10
        assert [c.id for c in page.items] == [c.id for c in ranked[20:25]]

    def test_pages_concatenate_to_full_ranking(self, make_store, make_candidate):
        service = SearchService(make_store(candidates=driver_pool(make_candidate, 23)))
        body = {"searchType": "manual", "filters": {"keywords": ["driver"]}}

        ranked = service.search(SearchRequest(**body))
        collected = []
        for page in range(1, 5):
            collected.extend(service.search(SearchRequest(**body, paginate=True, page=page, perPage=7)).items)

        assert [c.id for c in collected] == [c.id for c in ranked]

    def test_repeated_searches_are_identical(self, make_store, make_candidate):
        pool = [
            make_candidate(current_role="Fleet Manager", uploaded_at="2024-02-01T00:00:00Z"),
            make_candidate(summary="fleet operations", uploaded_at="2024-03-01T00:00:00Z"),
            make_candidate(resume_text="manager of a depot"),
        ]
        service = SearchService(make_store(candidates=pool, fail_remote=True))
        request = SearchRequest(searchType="smart", query="fleet manager")

        first = service.search(request)
        second = service.search(request)

        assert [(c.id, c.relevance_score, c.match_percentage) for c in first] == \
               [(c.id, c.relevance_score, c.match_percentage) for c in second]


class TestPaginate:

    def test_last_partial_page(self, make_candidate):
        results = [score(make_candidate(), 0.6, 60, []) for _ in range(25)]

        page = paginate(results, 3, 10)

        assert page.items == results[20:25]
        assert page.total == 25
        assert page.page == 3

    def test_page_past_the_end_is_pulled_back(self, make_candidate):
        results = [score(make_candidate(), 0.6, 60, []) for _ in range(5)]

        page = paginate(results, 9, 2)

        assert page.page == 3
        assert page.items == results[4:5]

    def test_empty_results_still_have_a_first_page(self):
        page = paginate([], 4, 10)
        assert page.page == 1
        assert page.total == 0
        assert page.items == []

    def test_page_below_one(self):
        assert paginate([], 0, 10).page == 1
