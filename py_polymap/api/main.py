"""FastAPI main application."""

import logging
import time
from typing import Optional

import structlog
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..core.map_generator import generate_map
from ..core.options import MapOptions

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Polygon Map Generator API",
    description="Seeded Voronoi terrain maps for interactive viewers",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class MapGenerationRequest(BaseModel):
    """Request to generate a new map."""

    width: float = Field(settings.default_map_width, gt=0, description="Map width")
    height: float = Field(settings.default_map_height, gt=0, description="Map height")
    num_polygons: int = Field(settings.default_num_polygons, ge=0, description="Number of cells")
    seed: Optional[str] = Field(None, description="Seed for reproducible generation")
    point_relaxation_iterations: int = Field(
        settings.default_point_relaxation_iterations, ge=0
    )
    corner_relaxation_iterations: int = Field(
        settings.default_corner_relaxation_iterations, ge=0
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Polygon Map Generator API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/maps/defaults", response_model=MapGenerationRequest)
async def map_defaults():
    """Default generation options."""
    return MapGenerationRequest()


@app.post("/maps/generate")
def create_map(request: MapGenerationRequest):
    """
    Generate a map and return it in full.

    Generation is synchronous; the response carries the complete graph.
    """
    if request.num_polygons > settings.max_num_polygons:
        raise HTTPException(
            status_code=400,
            detail=f"num_polygons must not exceed {settings.max_num_polygons}",
        )

    logger.info("Map generation requested", request=request.model_dump())

    options = MapOptions(**request.model_dump())
    start_time = time.time()
    game_map = generate_map(options)
    elapsed = time.time() - start_time

    result = game_map.to_dict()
    result["generation_time_seconds"] = round(elapsed, 3)
    return result


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
