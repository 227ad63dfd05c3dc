"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (APP_ENV=test, no .env / YAML sources)
  - Provide in-memory repositories and identity collaborators
  - Build the full FastAPI app wired to the container's in-memory repositories

Notes:
  - Argon2 runs with minimal cost so hashing stays fast
  - Container singletons are reset per HTTP test for isolation
"""

import os

os.environ["APP_ENV"] = "test"
os.environ.pop("CONFIG_FILE", None)
os.environ.pop("DEV_SEED_ADMIN", None)
os.environ.pop("E2E_SEED_ADMIN", None)

from catalog_api.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None
app_config.Settings.model_config["yaml_file"] = None
app_config.get_settings.cache_clear()

from datetime import timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from catalog_api import container  # noqa: E402
from catalog_api.identity.auth_service import AuthService  # noqa: E402
from catalog_api.identity.passwords import PasswordHasher  # noqa: E402
from catalog_api.identity.token_codec import TokenCodec  # noqa: E402
from catalog_api.infrastructure.repositories.in_memory import (  # noqa: E402
    InMemoryCatalogStore,
    InMemoryCategoryRepository,
    InMemoryMovieRepository,
    InMemoryUserRepository,
)

TEST_SECRET = "unit-test-signing-secret-0123456789abcdef"


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Identity fixtures
# ============================================================================


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(TEST_SECRET, ttl=timedelta(hours=24))


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def auth_service(user_repo, codec, hasher) -> AuthService:
    return AuthService(users=user_repo, codec=codec, hasher=hasher)


# ============================================================================
# Catalog fixtures
# ============================================================================


@pytest.fixture
def catalog_store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore()


@pytest.fixture
def movie_repo(catalog_store) -> InMemoryMovieRepository:
    return InMemoryMovieRepository(catalog_store)


@pytest.fixture
def category_repo(catalog_store) -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository(catalog_store)


# ============================================================================
# HTTP fixtures
# ============================================================================


@pytest.fixture
def app(codec, hasher):
    """
    App completa (routers + middleware + handlers) sobre los repos in-memory
    del container. El AuthService comparte el Credential Store del container,
    así una promoción vía repo se ve en la etapa admin.
    """
    from catalog_api.api.main import create_app

    container.reset_singletons()
    fastapi_app = create_app(app_config.get_settings())
    service = AuthService(
        users=container.get_user_repository(), codec=codec, hasher=hasher
    )
    fastapi_app.dependency_overrides[container.get_auth_service] = lambda: service
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()
    container.reset_singletons()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def register_user(client):
    """Registra un usuario vía API y devuelve el body de AuthResponse."""

    def _register(email="user@example.com", password="password123", name="User"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def user_headers(register_user):
    body = register_user()
    return {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def admin_headers(register_user):
    """Bearer de un usuario promovido a admin en el Credential Store."""
    body = register_user(email="admin@example.com", name="Admin")
    container.get_user_repository().set_admin(body["user_id"], True)
    return {"Authorization": f"Bearer {body['token']}"}
