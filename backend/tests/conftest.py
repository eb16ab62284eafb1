"""
Pytest configuration for backend tests.

Why: Force AnyIO to use the asyncio backend and keep every test on fresh,
in-memory portal state. The durable session cache of the module-level app is
redirected into a throwaway directory so importing `backend.web.main` never
touches the working directory.
"""
from __future__ import annotations

from datetime import date
from pathlib import Path
import os
import sys
import tempfile

import pytest

# Ensure the repo root is importable (backend.* namespace packages)
REPO_ROOT = Path(__file__).resolve().parents[2]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

os.environ.setdefault("PORTAL_SESSION_CACHE", str(Path(tempfile.mkdtemp(prefix="portal-tests-")) / "session.json"))

from backend.identity_access.directory import UserDirectory  # noqa: E402
from backend.identity_access.domain import ROLE_CONTRIBUTOR, ROLE_EXPLORER  # noqa: E402
from backend.identity_access.session import SessionManager  # noqa: E402
from backend.identity_access.stores import InMemorySessionCache  # noqa: E402
from backend.innovations.catalog import InnovationCatalog  # noqa: E402

FIXED_TODAY = date(2025, 3, 1)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def _clear_portal_env(monkeypatch: pytest.MonkeyPatch):
    """Keep env-driven toggles from leaking across tests (dev defaults)."""
    for var in ("PORTAL_ENV", "PORTAL_SEED_DEMO", "PORTAL_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def directory() -> UserDirectory:
    d = UserDirectory()
    d.add("Dr. Sarah Johnson", "sarah@example.com", "password", ROLE_CONTRIBUTOR)
    d.add("John Explorer", "john@example.com", "password", ROLE_EXPLORER)
    return d


@pytest.fixture
def catalog() -> InnovationCatalog:
    return InnovationCatalog(today=lambda: FIXED_TODAY)


@pytest.fixture
def cache() -> InMemorySessionCache:
    return InMemorySessionCache()


@pytest.fixture
def manager(directory: UserDirectory, catalog: InnovationCatalog, cache: InMemorySessionCache) -> SessionManager:
    return SessionManager(directory, catalog, cache)


@pytest.fixture
def contributor(directory: UserDirectory):
    identity = directory.find_by_email_and_secret("sarah@example.com", "password")
    assert identity is not None
    return identity


@pytest.fixture
def explorer(directory: UserDirectory):
    identity = directory.find_by_email_and_secret("john@example.com", "password")
    assert identity is not None
    return identity


@pytest.fixture
def app(manager: SessionManager):
    from backend.web.config import PortalConfig
    from backend.web.main import create_app

    cfg = PortalConfig(environment="dev", session_cache_path="unused", seed_demo_data=False, log_level="INFO")
    return create_app(manager=manager, cfg=cfg)
