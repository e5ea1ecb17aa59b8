"""HTTP surface for running the intel pipeline."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field, field_validator

from travel_intel.errors import ConfigurationError
from travel_intel.pipeline.base import Pipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["intel"])


class IntelRequest(BaseModel):
    """Request body for an intel run."""

    model_config = ConfigDict(populate_by_name=True)

    country_name: str = Field(alias="countryName")

    @field_validator("country_name")
    @classmethod
    def country_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("countryName must not be blank")
        return v.strip()


class IntelResponse(BaseModel):
    """Report plus the execution trace of the run that produced it."""

    report: dict[str, Any]
    trace: list[str]


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str


def get_pipeline(request: Request) -> Pipeline:
    """Get the pipeline from app state."""
    return request.app.state.pipeline


PipelineDep = Annotated[Pipeline, Depends(get_pipeline)]


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for load balancer."""
    return HealthResponse(status="healthy")


@router.post("/intel", response_model=IntelResponse)
async def run_intel_endpoint(body: IntelRequest, pipeline: PipelineDep):
    """Run the intel pipeline for one country."""
    logger.info("Intel request for %s", body.country_name)
    try:
        report, trace = await pipeline.run(body.country_name)
    except ConfigurationError as e:
        logger.error("Intel run aborted: %s", e)
        raise HTTPException(status_code=503, detail=str(e)) from e
    return IntelResponse(report=report.model_dump(mode="json"), trace=trace)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Close the pipeline's HTTP connections on shutdown."""
    yield
    logger.info("Shutting down, closing pipeline clients")
    await app.state.pipeline.aclose()


def create_app(pipeline: Pipeline | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        pipeline: Pipeline to serve. Built from the default config file if omitted.
    """
    if pipeline is None:
        from travel_intel.config import create_from_config, get_default_config_path, load_config

        pipeline, _run_logger = create_from_config(load_config(get_default_config_path()))

    app = FastAPI(title="Travel Intel", lifespan=lifespan)
    app.state.pipeline = pipeline
    app.include_router(router)
    return app
