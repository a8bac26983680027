"""
Application assembly.

Every collaborator is constructed here and handed to its consumer through
its constructor: engine -> repositories -> services -> routers.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.engine import Engine

from .._version import __version__
from ..coaches import resolve_coaches
from ..config import AppConfig
from ..db import SqlRepository, create_schema, make_engine
from ..entities import Employee, Student
from ..repository import InMemoryRepository
from ..service import CrudService
from .demo import DemoController
from .errors import install_error_handlers
from .routes import make_crud_router

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None, engine: Optional[Engine] = None) -> FastAPI:
    """
    Create and wire the FastAPI application.

    Args:
        config: Application config; read from CRUDDEMO_* variables when omitted
        engine: Pre-built engine for the sql backend. When omitted one is
            created from config.db and disposed on shutdown.
    """
    config = config or AppConfig.from_env()
    owns_engine = False

    if config.storage == "sql":
        if engine is None:
            engine = make_engine(config.db)
            owns_engine = True
        create_schema(engine)
        employee_repo = SqlRepository(engine, Employee)
        student_repo = SqlRepository(engine, Student)
    else:
        employee_repo = InMemoryRepository(Employee)
        student_repo = InMemoryRepository(Student)

    reject_unknown = config.reject_unknown_patch_fields
    employee_service = CrudService(employee_repo, reject_unknown_patch_fields=reject_unknown)
    student_service = CrudService(student_repo, reject_unknown_patch_fields=reject_unknown)

    my_coach, another_coach = resolve_coaches(config.coach, config.another_coach)
    demo = DemoController(my_coach, another_coach)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("cruddemo started (storage=%s)", config.storage)
        yield
        if owns_engine and engine is not None:
            engine.dispose()

    app = FastAPI(title="cruddemo", version=__version__, lifespan=lifespan)
    install_error_handlers(app)

    app.include_router(make_crud_router(employee_service, "employees"), prefix=config.api_prefix)
    app.include_router(
        make_crud_router(student_service, "students", searchable={"lastName": "last_name"}),
        prefix=config.api_prefix,
    )
    app.include_router(demo.router())

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "healthy"}

    @app.get("/metrics")
    def metrics() -> Response:
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.state.config = config
    app.state.employee_service = employee_service
    app.state.student_service = student_service
    return app
