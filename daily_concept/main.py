from __future__ import annotations

import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from daily_concept.db.store import KeyValueStore
from daily_concept.routers import daily, generate, metrics, recommend
from daily_concept.services.daily import DailyTopicService
from daily_concept.services.generation import ContentGenerator
from daily_concept.services.recommender import Recommender
from daily_concept.utils import slog
from daily_concept.utils.catalog import Catalog, load_default_catalog
from daily_concept.utils.config import storage_path
from daily_concept.utils.errors import EmptyCatalogError, GenerationFailedError
from daily_concept.utils.logging import configure_logging
from daily_concept.utils.metrics import record_endpoint, record_request
from daily_concept.utils.sampling import RandomSource


def create_app(
    catalog: Optional[Catalog] = None,
    store: Optional[KeyValueStore] = None,
    generator: Optional[ContentGenerator] = None,
    rng: Optional[RandomSource] = None,
) -> FastAPI:
    """
    Build the API with its collaborators.
    The catalog is built once here and shared by reference with the recommender.
    """
    configure_logging()

    app = FastAPI(title="Daily Concept", version="0.1.0")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    catalog = catalog if catalog is not None else load_default_catalog()
    recommender = Recommender(catalog, rng=rng)
    store = store if store is not None else KeyValueStore(storage_path())
    generator = generator or ContentGenerator()

    app.state.catalog = catalog
    app.state.recommender = recommender
    app.state.generator = generator
    app.state.store = store
    app.state.daily = DailyTopicService(store, recommender, generator)

    @app.exception_handler(GenerationFailedError)
    async def _generation_failed(request: Request, exc: GenerationFailedError):
        # only the fixed user-facing message leaves the process
        return JSONResponse(status_code=502, content={"detail": exc.message})

    @app.exception_handler(EmptyCatalogError)
    async def _empty_catalog(request: Request, exc: EmptyCatalogError):
        slog.log_event("catalog.empty", path=str(request.url.path), error=str(exc))
        return JSONResponse(status_code=503, content={"detail": "No topics available right now."})

    @app.middleware("http")
    async def _logging_middleware(request, call_next):
        start = time.perf_counter()
        req_id = slog.new_request_id()
        client_ip = request.client.host if request.client else None
        request.state.log_context = {}
        try:
            response = await call_next(request)
        except Exception as e:
            latency_ms = int((time.perf_counter() - start) * 1000)
            ctx = getattr(request.state, "log_context", {})
            slog.log_event(
                "request.error",
                request_id=req_id,
                path=str(request.url.path),
                method=request.method,
                latency_ms=latency_ms,
                client_ip=client_ip,
                error=str(e),
                **(ctx or {}),
            )
            raise
        latency_ms = int((time.perf_counter() - start) * 1000)
        ctx = getattr(request.state, "log_context", {}) or {}
        slog.finalize_request_log(
            request_id=req_id,
            method=request.method,
            path=str(request.url.path),
            status=response.status_code,
            latency_ms=latency_ms,
            client_ip=client_ip,
            ctx=ctx,
        )
        record_request(latency_ms=latency_ms)
        record_endpoint(method=request.method, path=str(request.url.path), latency_ms=latency_ms)
        response.headers["X-Request-ID"] = req_id
        return response

    @app.get("/health")
    def health():
        return {"status": "ok", "categories": len(catalog)}

    app.include_router(recommend.router)
    app.include_router(generate.router)
    app.include_router(daily.router)
    app.include_router(metrics.router)
    return app


app = create_app()
