"Innovation Portal"
from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from backend.identity_access.directory import UserDirectory, seed_demo_accounts
from backend.identity_access.domain import ROLE_CONTRIBUTOR
from backend.identity_access.session import SessionManager
from backend.identity_access.stores import FileSessionCache, SessionCacheProtocol
from backend.innovations.catalog import InnovationCatalog, seed_demo_innovations
from backend.web import config as _cfg
from backend.web.routes.auth import auth_router
from backend.web.routes.innovations import innovations_router


def _should_load_dotenv() -> bool:
    """Decide if we should load a local .env file.

    - Never load under pytest to avoid contaminating test env.
    - Allow explicit opt-out via PORTAL_ENABLE_DOTENV (default true outside pytest).
    """
    if "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST"):
        return False
    flag = (os.getenv("PORTAL_ENABLE_DOTENV", "true") or "").strip().lower()
    return flag in ("1", "true", "yes")


if _should_load_dotenv():
    load_dotenv()

logger = logging.getLogger("portal.web")


def build_session_manager(cfg: _cfg.PortalConfig, *, cache: SessionCacheProtocol | None = None) -> SessionManager:
    """Wire directory, catalog and durable cache into one session manager.

    Demo accounts and innovations are seeded when enabled. The caller decides
    when to call `restore()`.
    """
    directory = UserDirectory()
    catalog = InnovationCatalog()
    if cfg.seed_demo_data:
        identities = seed_demo_accounts(directory)
        owner = next((i for i in identities if i.role == ROLE_CONTRIBUTOR), None)
        if owner is not None:
            seed_demo_innovations(catalog, owner)
        logger.info("portal.seeded accounts=%s innovations=%s", len(directory), len(catalog))
    return SessionManager(directory, catalog, cache or FileSessionCache(cfg.session_cache_path))


def create_app(manager: SessionManager | None = None, cfg: _cfg.PortalConfig | None = None) -> FastAPI:
    """Build the FastAPI app around an explicit session manager.

    Without a manager one is built from the environment. The session is
    restored from the durable cache exactly once, here.
    """
    _cfg.ensure_secure_config_on_startup()
    cfg = cfg or _cfg.load_portal_config()
    logging.getLogger("portal").setLevel(cfg.log_level)
    if manager is None:
        manager = build_session_manager(cfg)
    restored = manager.restore()
    logger.info(
        "portal.startup env=%s restored=%s",
        cfg.environment,
        "yes" if restored is not None else "no",
    )

    app = FastAPI(title="Innovation Portal", description="Submit and discover innovations", version="0.1.0")
    app.state.portal = manager
    app.include_router(auth_router)
    app.include_router(innovations_router)

    @app.get("/health")
    async def health():
        return JSONResponse({"status": "healthy"}, headers={"Cache-Control": "no-store"})

    return app


app = create_app()
