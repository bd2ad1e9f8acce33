"""Application factory for regcheck.

Assembles a Starlette app serving the availability endpoint:

- routes from `regcheck.endpoints`
- CORS for browser signup forms (GET only)
- JSON exception handlers from `regcheck.errors`
- a lifespan that logs startup/shutdown and closes the database

Services are published on `app.state`: `config`, `user_repo`, `checker`
and, when the app opened it, `db`.

Run with uvicorn's factory mode:

    uvicorn regcheck.app:create_app --factory
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware

from regcheck.audit import Auditor
from regcheck.checker import AvailabilityChecker, UserStore
from regcheck.config import RegcheckConfig, build_config
from regcheck.database import Database, SQLiteUserRepo, init_database
from regcheck.endpoints import routes
from regcheck.errors import register_exception_handlers

logger = logging.getLogger("regcheck")


def create_app(
    config: RegcheckConfig | None = None,
    *,
    user_repo: UserStore | None = None,
    auditor: Auditor | None = None,
    debug: bool | None = None,
) -> Starlette:
    """Build the regcheck ASGI application.

    Args:
        config: Configuration accessor (default: `build_config()`)
        user_repo: Store to check against. If None, the configured
            DATABASE_URL is opened, initialized and wrapped in
            `SQLiteUserRepo`.
        auditor: Observability collaborator passed to the checker
        debug: Starlette debug mode. If None, taken from REGCHECK_DEBUG.

    Returns:
        A configured Starlette application.
    """
    if config is None:
        config = build_config()
    if debug is None:
        debug = config.debug

    db: Database | None = None
    if user_repo is None:
        db = init_database(url=config.database_url)
        user_repo = SQLiteUserRepo(db)

    @asynccontextmanager
    async def lifespan(app):
        logger.info("regcheck starting up")
        try:
            yield
        except asyncio.CancelledError:
            logger.info("regcheck cancelled")
        finally:
            if db is not None:
                db.close()
            logger.info("regcheck shutting down")

    middleware = [
        Middleware(
            CORSMiddleware,
            allow_origins=config.cors_allow_origins,
            allow_methods=["GET"],
        ),
    ]

    app = Starlette(
        debug=debug,
        routes=routes,
        middleware=middleware,
        lifespan=lifespan,
    )
    register_exception_handlers(app)

    app.state.config = config
    app.state.db = db
    app.state.user_repo = user_repo
    app.state.checker = AvailabilityChecker(user_repo, auditor)

    return app
