"""FastAPI server the map UI calls to assess a route."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .errors import RunCancelled
from .features import to_feature_collection
from .models import AssessRequest, RunState
from .pipeline import RouteAssessmentPipeline, create_pipeline

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    "not_found": 404,
    "no_route": 404,
    "provider_error": 502,
}

_client: httpx.AsyncClient | None = None
_pipeline: RouteAssessmentPipeline | None = None


async def get_pipeline() -> RouteAssessmentPipeline:
    """The single pipeline shared by the interactive session.

    Runs on the event loop, so the lazy build below cannot interleave.
    """
    global _client, _pipeline
    if _pipeline is None:
        settings = get_settings()
        _client = httpx.AsyncClient(timeout=settings.request_timeout_s)
        _pipeline = create_pipeline(settings, _client)
    return _pipeline


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if _client is not None:
        await _client.aclose()


app = FastAPI(title="Route Risk", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/assess")
async def assess_route(
    request: AssessRequest,
    format: str = Query("json", pattern="^(json|geojson)$"),
    pipeline: RouteAssessmentPipeline = Depends(get_pipeline),
):
    """Assess waterlogging risk along the driving route between two locations.

    Returns the full assessment as JSON, or with ``format=geojson`` a
    FeatureCollection with the route line and styled sample markers.
    """
    logger.info(
        "Assess: '%s' -> '%s'",
        request.origin.display_text(),
        request.destination.display_text(),
    )
    try:
        result = await pipeline.run(request.origin, request.destination)
    except RunCancelled as e:
        raise HTTPException(status_code=409, detail=str(e))

    if result.state is RunState.ERROR:
        status_code = ERROR_STATUS_CODES.get(result.error_code or "", 500)
        raise HTTPException(status_code=status_code, detail=result.status)

    if format == "geojson":
        return to_feature_collection(result)
    return result


@app.get("/state")
async def current_state(pipeline: RouteAssessmentPipeline = Depends(get_pipeline)):
    """Current run state and the last status message."""
    return {"state": pipeline.state.value, "status": pipeline.status}


@app.get("/health")
async def health_check():
    return {"status": "ok", "version": __version__}
