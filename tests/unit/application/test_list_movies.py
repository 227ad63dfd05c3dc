"""
Unit tests for ListMoviesUseCase (Catalog Query Engine).

Runs against the in-memory repository, which mirrors the Postgres ordering
and filter semantics.
"""

import pytest

from catalog_api.application.usecases.categories import CreateCategoryUseCase
from catalog_api.application.usecases.movies import (
    CreateMovieInput,
    CreateMovieUseCase,
    ListMoviesInput,
    ListMoviesUseCase,
)

pytestmark = pytest.mark.unit


def _add(movie_repo, title, **kwargs):
    result = CreateMovieUseCase(movie_repo).execute(CreateMovieInput(title=title, **kwargs))
    assert result.error is None, result.error
    return result.movie


@pytest.fixture
def list_movies(movie_repo):
    return ListMoviesUseCase(movie_repo)


def _titles(result):
    return [m.title for m in result.movies]


class TestPagination:
    @pytest.mark.parametrize("count,page_size", [(0, 10), (7, 3), (10, 5), (23, 10)])
    def test_pages_partition_the_filtered_set(self, movie_repo, list_movies, count, page_size):
        for i in range(count):
            _add(movie_repo, f"Movie {i:02d}")

        first = list_movies.execute(ListMoviesInput(page=1, page_size=page_size))
        expected_pages = -(-count // page_size)
        assert first.total == count
        assert first.total_pages == expected_pages

        seen = []
        for page in range(1, expected_pages + 1):
            result = list_movies.execute(ListMoviesInput(page=page, page_size=page_size))
            assert len(result.movies) <= page_size
            seen.extend(m.id for m in result.movies)

        assert len(seen) == count
        assert len(set(seen)) == count

    def test_page_past_the_end_is_empty_but_reports_total(self, movie_repo, list_movies):
        for i in range(3):
            _add(movie_repo, f"Movie {i}")

        result = list_movies.execute(ListMoviesInput(page=5, page_size=2))

        assert result.movies == []
        assert result.total == 3
        assert result.total_pages == 2

    @pytest.mark.parametrize("page", [None, 0, -3])
    def test_non_positive_page_is_first_page(self, list_movies, page):
        assert list_movies.execute(ListMoviesInput(page=page)).page == 1

    @pytest.mark.parametrize("page_size,expected", [(None, 10), (0, 10), (-1, 10), (500, 100)])
    def test_page_size_bounds(self, list_movies, page_size, expected):
        result = list_movies.execute(ListMoviesInput(page_size=page_size))
        assert result.page_size == expected

    def test_custom_page_bounds(self, movie_repo):
        use_case = ListMoviesUseCase(movie_repo, default_page_size=5, max_page_size=20)
        assert use_case.execute(ListMoviesInput()).page_size == 5
        assert use_case.execute(ListMoviesInput(page_size=50)).page_size == 20


class TestSorting:
    def test_rating_desc_orders_non_increasing(self, movie_repo, list_movies):
        for title, rating in [("A", 5.5), ("B", 9.1), ("C", 7.0), ("D", 9.1)]:
            _add(movie_repo, title, rating=rating)

        result = list_movies.execute(ListMoviesInput(sort_by="rating_desc"))
        ratings = [m.rating for m in result.movies]

        assert ratings == sorted(ratings, reverse=True)

    def test_title_asc(self, movie_repo, list_movies):
        for title in ["Casablanca", "Alien", "Brazil"]:
            _add(movie_repo, title)

        result = list_movies.execute(ListMoviesInput(sort_by="title_asc"))
        assert _titles(result) == ["Alien", "Brazil", "Casablanca"]

    def test_year_sort_places_missing_year_last(self, movie_repo, list_movies):
        _add(movie_repo, "Undated")
        _add(movie_repo, "Old", release_year=1950)
        _add(movie_repo, "New", release_year=2020)

        asc = list_movies.execute(ListMoviesInput(sort_by="year_asc"))
        desc = list_movies.execute(ListMoviesInput(sort_by="year_desc"))

        assert _titles(asc) == ["Old", "New", "Undated"]
        assert _titles(desc) == ["New", "Old", "Undated"]

    def test_default_is_newest_first(self, movie_repo, list_movies):
        for title in ["First", "Second", "Third"]:
            _add(movie_repo, title)

        assert _titles(list_movies.execute(ListMoviesInput())) == [
            "Third",
            "Second",
            "First",
        ]

    @pytest.mark.parametrize("sort_by", ["bogus", "RATING_DESC", ""])
    def test_unknown_sort_falls_back_to_default(self, movie_repo, list_movies, sort_by):
        for title in ["First", "Second"]:
            _add(movie_repo, title, rating=1.0 if title == "First" else 0.5)

        fallback = list_movies.execute(ListMoviesInput(sort_by=sort_by))
        default = list_movies.execute(ListMoviesInput())

        assert fallback.error is None
        assert _titles(fallback) == _titles(default)


class TestFilters:
    def test_search_matches_title_or_description_case_insensitive(
        self, movie_repo, list_movies
    ):
        _add(movie_repo, "The Matrix", description="Simulated reality")
        _add(movie_repo, "Inception", description="Dreams within a MATRIX of dreams")
        _add(movie_repo, "Up", description="Balloons")

        result = list_movies.execute(ListMoviesInput(search="matrix"))

        assert sorted(_titles(result)) == ["Inception", "The Matrix"]
        assert result.total == 2

    def test_blank_search_is_ignored(self, movie_repo, list_movies):
        _add(movie_repo, "A")
        _add(movie_repo, "B")
        assert list_movies.execute(ListMoviesInput(search="   ")).total == 2

    def test_year_filter_is_exact(self, movie_repo, list_movies):
        _add(movie_repo, "A", release_year=1999)
        _add(movie_repo, "B", release_year=2000)

        assert _titles(list_movies.execute(ListMoviesInput(year=1999))) == ["A"]

    def test_categories_filter_uses_overlap(self, movie_repo, list_movies):
        _add(movie_repo, "A", categories=["Drama"])
        _add(movie_repo, "B", categories=["Comedy", "Romance"])
        _add(movie_repo, "C", categories=["Horror"])

        result = list_movies.execute(ListMoviesInput(categories=["Drama", "Romance"]))
        assert sorted(_titles(result)) == ["A", "B"]

    def test_category_id_filter_uses_association(
        self, movie_repo, category_repo, list_movies
    ):
        drama = CreateCategoryUseCase(category_repo).execute("Drama").category
        _add(movie_repo, "A", categories=["Drama"])
        _add(movie_repo, "B", categories=["Comedy"])

        result = list_movies.execute(ListMoviesInput(category_id=drama.id))
        assert _titles(result) == ["A"]

    def test_filters_combine_with_and(self, movie_repo, list_movies):
        _add(movie_repo, "Space A", release_year=2001, categories=["SciFi"])
        _add(movie_repo, "Space B", release_year=2002, categories=["SciFi"])
        _add(movie_repo, "Space C", release_year=2001, categories=["Drama"])

        result = list_movies.execute(
            ListMoviesInput(search="space", year=2001, categories=["SciFi"])
        )
        assert _titles(result) == ["Space A"]
        assert result.total == 1
