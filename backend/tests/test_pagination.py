"""Tests for the search results pagination view model."""

import math

import pytest
from pydantic import ValidationError

from wikisearch.search.pagination import PageState, build_page_state

from tests.fixtures import make_search_response


class TestBuildPageState:
    def test_first_of_three_pages(self):
        state = build_page_state("golang", make_search_response(total_hits=55), 20, 1)
        assert state.total_pages == 3
        assert state.current_page == 1
        assert state.next_page == 2
        assert state.previous_page == 0
        assert state.is_last_page is False

    def test_last_of_three_pages(self):
        response = make_search_response(total_hits=55, offset=40)
        state = build_page_state("golang", response, 20, 3)
        assert state.total_pages == 3
        assert state.current_page == 3
        assert state.next_page == 4
        assert state.is_last_page is True

    def test_middle_page(self):
        response = make_search_response(total_hits=55, offset=20)
        state = build_page_state("golang", response, 20, 2)
        assert state.current_page == 2
        assert state.previous_page == 1
        assert state.next_page == 3
        assert state.is_last_page is True

    def test_exact_multiple_of_page_size(self):
        response = make_search_response(total_hits=40, offset=20)
        state = build_page_state("golang", response, 20, 2)
        assert state.total_pages == 2
        assert state.is_last_page is True

    def test_no_hits_means_zero_pages(self):
        state = build_page_state("zzzz", make_search_response(total_hits=0), 20, 1)
        assert state.total_pages == 0
        assert state.is_last_page is True
        assert state.results.results == []

    def test_keeps_query_and_response(self):
        response = make_search_response(query="rust", total_hits=3)
        state = build_page_state("rust", response, 20, 1)
        assert state.query == "rust"
        assert state.results == response

    @pytest.mark.parametrize("total_hits", [0, 1, 19, 20, 21, 55, 100, 12345])
    def test_total_pages_is_ceiling(self, total_hits):
        state = build_page_state("q", make_search_response(total_hits=total_hits), 20, 1)
        assert state.total_pages == math.ceil(total_hits / 20)
        assert (state.total_pages == 0) == (total_hits == 0)

    @pytest.mark.parametrize("requested_page", [1, 2, 3, 7, 50])
    def test_page_numbers_follow_requested_page(self, requested_page):
        state = build_page_state("q", make_search_response(total_hits=1000), 20, requested_page)
        assert state.next_page == requested_page + 1
        assert state.current_page == requested_page
        assert state.previous_page == requested_page - 1
        assert state.is_last_page == (state.next_page >= state.total_pages)


class TestPageState:
    def test_next_page_of_one_is_current_page(self):
        state = PageState(
            query="q", total_pages=0, next_page=1, results=make_search_response(total_hits=0)
        )
        assert state.current_page == 1
        assert state.previous_page == 0

    def test_zero_pages_is_always_last(self):
        for next_page in (0, 1, 5):
            state = PageState(
                query="q",
                total_pages=0,
                next_page=next_page,
                results=make_search_response(total_hits=0),
            )
            assert state.is_last_page is True

    def test_is_frozen(self):
        state = build_page_state("q", make_search_response(), 20, 1)
        with pytest.raises(ValidationError):
            state.next_page = 5
