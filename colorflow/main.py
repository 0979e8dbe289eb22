"""colorflow microservice -- FastAPI application.

Endpoints:
    POST /generate  -- Grow an image and return it as PNG
    GET  /health    -- Health check
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from .config import DEFAULT_NUM_SEEDS, DEFAULT_SEED, DEFAULT_SPREAD, GrowthConfig
from .engine import GrowthError, grow
from .renderer import image_filename, render_png

structlog.configure(
    processors=[
        structlog.dev.ConsoleRenderer(),
    ],
)

logger = structlog.get_logger(__name__)

# Largest scale served over HTTP (64x64 pixels, 4096 colors)
MAX_REQUEST_SCALE = 4

app = FastAPI(
    title="colorflow",
    description="Directional color-growth image synthesis",
    version="0.1.0",
)


# --------------------------------------------------------------------------
# Request / Response models
# --------------------------------------------------------------------------


class GenerateRequest(BaseModel):
    """Request body for /generate."""

    scale: int = Field(
        ...,
        ge=2,
        le=MAX_REQUEST_SCALE,
        description="Lattice scale; the image is scale**3 pixels square",
        examples=[2, 3],
    )
    spread: float = Field(
        default=DEFAULT_SPREAD,
        allow_inf_nan=False,
        description="Angular tolerance in radians",
    )
    num_seeds: int = Field(
        default=DEFAULT_NUM_SEEDS,
        ge=1,
        description="Number of random starting colors",
    )
    seed: int = Field(
        default=DEFAULT_SEED,
        ge=0,
        description="PRNG seed",
    )
    seed_spacing: bool = Field(
        default=True,
        description="Enforce minimum spacing between seeds",
    )


class HealthResponse(BaseModel):
    """Response body for /health."""

    status: str
    service: str
    version: str


# --------------------------------------------------------------------------
# Endpoints
# --------------------------------------------------------------------------


@app.post(
    "/generate",
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "PNG image"},
        422: {"description": "Invalid parameters"},
    },
)
async def generate_png(request: GenerateRequest) -> Response:
    """Grow an image for the requested parameters."""
    try:
        config = GrowthConfig(
            scale=request.scale,
            spread=request.spread,
            num_seeds=request.num_seeds,
            seed=request.seed,
            seed_spacing=request.seed_spacing,
        )
        grid = grow(config)
        png_bytes = render_png(grid)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except GrowthError as e:
        logger.error("generate_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Generation failed")

    return Response(
        content=png_bytes,
        media_type="image/png",
        headers={"Content-Disposition": f'inline; filename="{image_filename(config)}"'},
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for Docker and load balancer probes."""
    return HealthResponse(
        status="healthy",
        service="colorflow",
        version="0.1.0",
    )
