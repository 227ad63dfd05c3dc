"""Unit tests for movie create / get / update / delete use cases."""

import pytest

from catalog_api.application.usecases.categories import CreateCategoryUseCase
from catalog_api.application.usecases.movies import (
    CreateMovieInput,
    CreateMovieUseCase,
    DeleteMovieUseCase,
    GetMovieUseCase,
    MovieErrorCode,
    UpdateMovieInput,
    UpdateMovieUseCase,
)
from catalog_api.crosscutting.exceptions import DuplicateKeyError

pytestmark = pytest.mark.unit


@pytest.fixture
def create(movie_repo):
    return CreateMovieUseCase(movie_repo)


@pytest.fixture
def update(movie_repo):
    return UpdateMovieUseCase(movie_repo)


class TestCreateMovie:
    def test_creates_with_normalized_fields(self, create):
        result = create.execute(
            CreateMovieInput(
                title="  Alien ",
                description=" In space ",
                release_year=1979,
                duration=117,
                categories=["Horror", " SciFi ", "Horror", ""],
                rating=8.5,
            )
        )

        assert result.error is None
        movie = result.movie
        assert movie.id > 0
        assert movie.title == "Alien"
        assert movie.description == "In space"
        assert movie.categories == ["Horror", "SciFi"]
        assert movie.created_at is not None

    def test_blank_title_is_validation_error(self, create):
        result = create.execute(CreateMovieInput(title="   "))

        assert result.movie is None
        assert result.error.code == MovieErrorCode.VALIDATION_ERROR
        assert result.error.message == "Title is required"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"release_year": 1800},
            {"release_year": 2500},
            {"rating": -0.5},
            {"rating": 10.5},
            {"duration": -1},
            {"categories": [f"c{i}" for i in range(25)]},
        ],
    )
    def test_out_of_range_fields_are_rejected(self, create, overrides):
        result = create.execute(CreateMovieInput(title="Alien", **overrides))
        assert result.error.code == MovieErrorCode.VALIDATION_ERROR

    def test_duplicate_title_is_conflict(self, create):
        create.execute(CreateMovieInput(title="Alien"))
        result = create.execute(CreateMovieInput(title="Alien"))

        assert result.error.code == MovieErrorCode.CONFLICT

    def test_store_constraint_is_final_authority(self, movie_repo):
        movie_repo.exists_by_title = lambda title, exclude_id=None: False
        use_case = CreateMovieUseCase(movie_repo)
        use_case.execute(CreateMovieInput(title="Alien"))

        result = use_case.execute(CreateMovieInput(title="Alien"))
        assert result.error.code == MovieErrorCode.CONFLICT

    def test_links_existing_categories_by_name(self, create, category_repo, catalog_store):
        drama = CreateCategoryUseCase(category_repo).execute("Drama").category
        movie = create.execute(CreateMovieInput(title="Heat", categories=["Drama"])).movie

        assert (movie.id, drama.id) in catalog_store.movie_categories


class TestGetMovie:
    def test_returns_existing_movie(self, create, movie_repo):
        movie = create.execute(CreateMovieInput(title="Alien")).movie
        result = GetMovieUseCase(movie_repo).execute(movie.id)
        assert result.movie.title == "Alien"

    def test_missing_movie_is_not_found(self, movie_repo):
        result = GetMovieUseCase(movie_repo).execute(404)
        assert result.error.code == MovieErrorCode.NOT_FOUND
        assert result.error.message == "Movie not found"


class TestUpdateMovie:
    def test_partial_update_keeps_unspecified_fields(self, create, update):
        movie = create.execute(
            CreateMovieInput(title="Alien", release_year=1979, rating=8.0)
        ).movie

        result = update.execute(UpdateMovieInput(movie_id=movie.id, rating=8.5))

        assert result.error is None
        assert result.movie.rating == 8.5
        assert result.movie.release_year == 1979
        assert result.movie.title == "Alien"

    def test_keeping_own_title_is_allowed(self, create, update):
        movie = create.execute(CreateMovieInput(title="Alien")).movie
        result = update.execute(UpdateMovieInput(movie_id=movie.id, title="Alien"))
        assert result.error is None

    def test_taking_another_title_is_conflict(self, create, update):
        create.execute(CreateMovieInput(title="Alien"))
        other = create.execute(CreateMovieInput(title="Aliens")).movie

        result = update.execute(UpdateMovieInput(movie_id=other.id, title="Alien"))
        assert result.error.code == MovieErrorCode.CONFLICT

    def test_blank_title_is_rejected(self, create, update):
        movie = create.execute(CreateMovieInput(title="Alien")).movie
        result = update.execute(UpdateMovieInput(movie_id=movie.id, title="  "))
        assert result.error.code == MovieErrorCode.VALIDATION_ERROR

    def test_missing_movie_is_not_found(self, update):
        result = update.execute(UpdateMovieInput(movie_id=999, rating=5.0))
        assert result.error.code == MovieErrorCode.NOT_FOUND

    def test_category_change_resyncs_associations(self, create, update, category_repo):
        drama = CreateCategoryUseCase(category_repo).execute("Drama").category
        movie = create.execute(CreateMovieInput(title="Heat", categories=["Drama"])).movie

        update.execute(UpdateMovieInput(movie_id=movie.id, categories=["Crime"]))

        assert category_repo.is_in_use(drama.id) is False

    def test_duplicate_from_store_maps_to_conflict(self, create, movie_repo):
        movie = create.execute(CreateMovieInput(title="Alien")).movie

        def _raise(*args, **kwargs):
            raise DuplicateKeyError("dup", constraint="uq_movies_title")

        movie_repo.update = _raise
        result = UpdateMovieUseCase(movie_repo).execute(
            UpdateMovieInput(movie_id=movie.id, title="Other")
        )
        assert result.error.code == MovieErrorCode.CONFLICT


class TestDeleteMovie:
    def test_delete_removes_movie_and_dependents(
        self, create, movie_repo, category_repo, catalog_store
    ):
        drama = CreateCategoryUseCase(category_repo).execute("Drama").category
        movie = create.execute(CreateMovieInput(title="Heat", categories=["Drama"])).movie
        catalog_store.add_favorite(user_id=1, movie_id=movie.id)

        result = DeleteMovieUseCase(movie_repo).execute(movie.id)

        assert result.deleted is True
        assert movie_repo.get_by_id(movie.id) is None
        assert not any(pair[0] == movie.id for pair in catalog_store.movie_categories)
        assert not any(pair[1] == movie.id for pair in catalog_store.user_favorites)
        assert category_repo.is_in_use(drama.id) is False

    def test_delete_missing_movie_is_not_found(self, movie_repo):
        result = DeleteMovieUseCase(movie_repo).execute(999)

        assert result.deleted is False
        assert result.error.code == MovieErrorCode.NOT_FOUND

    def test_second_delete_is_not_found(self, create, movie_repo):
        movie = create.execute(CreateMovieInput(title="Alien")).movie
        use_case = DeleteMovieUseCase(movie_repo)

        assert use_case.execute(movie.id).deleted is True
        assert use_case.execute(movie.id).error.code == MovieErrorCode.NOT_FOUND
