"""
Shared fixtures: an in-memory candidate store and a candidate factory.
"""

import pytest

from models.candidate import Candidate


class FakeStore:
    """Stands in for database.postgres. Records every remote call."""

    def __init__(self, candidates=None, text_results=None, skill_results=None,
                 fail_fetch=False, fail_remote=False):
        self.candidates = list(candidates or [])
        self.text_results = list(text_results or [])
        self.skill_results = list(skill_results or [])
        self.fail_fetch = fail_fetch
        self.fail_remote = fail_remote
        self.fetch_count = 0
        self.calls = []

    def fetch_all_candidates(self):
        self.fetch_count += 1
        if self.fail_fetch:
            raise ConnectionError("database unavailable")
        return list(self.candidates)

    def full_text_search(self, processed_query, limit=500):
        self.calls.append(("text", processed_query))
        if self.fail_remote:
            raise ConnectionError("full-text search unavailable")
        return list(self.text_results)

    def skill_search(self, skills):
        self.calls.append(("skills", list(skills)))
        if self.fail_remote:
            raise ConnectionError("skill search unavailable")
        return list(self.skill_results)

    def count_candidates(self):
        if self.fail_fetch:
            raise ConnectionError("database unavailable")
        return len(self.candidates)


@pytest.fixture
def make_store():
    return FakeStore


@pytest.fixture
def make_candidate():
    counter = {"n": 0}

    def _make(**fields) -> Candidate:
        counter["n"] += 1
        fields.setdefault("id", f"cand-{counter['n']}")
        fields.setdefault("name", f"Candidate {counter['n']}")
        return Candidate(**fields)

    return _make
