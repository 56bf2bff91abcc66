from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.deps import Settings, clear_loader_caches, get_settings
from src.api.main import create_app

PROJECT_ROOT = Path(__file__).parent.parent


def project_environ(**overrides: str) -> dict[str, str]:
    """Settings environment pointing at the real project files regardless of cwd."""
    return {
        "SSR_SITE_CONFIG": str(PROJECT_ROOT / "site.yaml"),
        "SSR_TEMPLATE_PATH": str(PROJECT_ROOT / "templates" / "index.html"),
        "SSR_STATIC_DIR": str(PROJECT_ROOT / "static"),
        **overrides,
    }


def clear_dependency_caches() -> None:
    get_settings.cache_clear()
    clear_loader_caches()


@pytest.fixture
def project_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Same paths as project_environ, via the process environment (CLI tests)."""
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.delenv("SSR_BASE_URL", raising=False)
    monkeypatch.delenv("SSR_LOG_LEVEL", raising=False)
    for key, value in project_environ().items():
        monkeypatch.setenv(key, value)
    clear_dependency_caches()
    yield
    clear_dependency_caches()


@pytest.fixture
def app() -> Iterator[FastAPI]:
    clear_loader_caches()
    yield create_app(Settings(environ=project_environ()))
    clear_loader_caches()


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    # Context manager runs the lifespan (config + template load)
    with TestClient(app) as test_client:
        yield test_client
