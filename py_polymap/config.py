"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Map generation defaults
    default_map_width: float = Field(default=600, description="Default map width")
    default_map_height: float = Field(default=600, description="Default map height")
    default_num_polygons: int = Field(default=1000, description="Default number of cells")
    default_point_relaxation_iterations: int = Field(
        default=3, description="Default Lloyd relaxation passes"
    )
    default_corner_relaxation_iterations: int = Field(
        default=1, description="Default corner smoothing passes"
    )
    max_num_polygons: int = Field(default=20000, description="Largest accepted cell count")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (json or plain)")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="POLYMAP_"
    )


settings = Settings()
