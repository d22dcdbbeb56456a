"""Map generation options."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MapOptions(BaseModel):
    """Validated input to a single map generation run."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(..., gt=0, description="Map width, origin at (0, 0)")
    height: float = Field(..., gt=0, description="Map height, origin at (0, 0)")
    num_polygons: int = Field(..., ge=0, description="Number of Voronoi cells")
    seed: Optional[str] = Field(None, description="Seed string; random when omitted")
    point_relaxation_iterations: int = Field(
        0, ge=0, description="Lloyd relaxation passes over the sites"
    )
    corner_relaxation_iterations: int = Field(
        0, ge=0, description="Smoothing passes over interior corners"
    )
