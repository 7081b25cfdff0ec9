import random
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stepflow.config import settings
from stepflow.api import workflows, executions, users
from stepflow.core.exceptions import InternalError, StepflowError
from stepflow.core.logging import logger
from stepflow.services.store import MemoryStore

_REQUEST_LOCATIONS = ("body", "path", "query", "header")


def _field_errors(exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        errors.append({
            "path": ".".join(str(part) for part in loc),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        })
    return errors


def build_store() -> MemoryStore:
    rng = random.Random(settings.EXECUTION_SEED)
    return MemoryStore(success_rate=settings.EXECUTION_SUCCESS_RATE, rng=rng)


def create_app(store: Optional[MemoryStore] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logger.info(f"{settings.PROJECT_NAME} starting")
        yield
        # Shutdown
        app.state.store.clear()
        logger.info(f"{settings.PROJECT_NAME} stopped, in-memory state discarded")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else build_store()

    # Set all CORS enabled origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(users.router, prefix=f"{settings.API_PREFIX}/users", tags=["users"])
    app.include_router(workflows.router, prefix=f"{settings.API_PREFIX}/workflows", tags=["workflows"])
    app.include_router(executions.router, prefix=f"{settings.API_PREFIX}/workflows", tags=["executions"])

    @app.get("/")
    async def root():
        return {"message": "Stepflow API is running"}

    @app.get(f"{settings.API_PREFIX}/health")
    async def health_check():
        return {"status": "ok"}

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request data", "errors": _field_errors(exc)},
        )

    @app.exception_handler(StepflowError)
    async def stepflow_error_handler(request: Request, exc: StepflowError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(status_code=500, content=InternalError().to_dict())

    return app


app = create_app()
