from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Generation settings pulled from environment variables."""

    # Retry Configuration
    max_iterations: int = Field(
        default=1000, gt=0, description="Diagram builds (and sampling draws) allowed before giving up"
    )
    max_seeds: int = Field(
        default=50000, gt=0, description="Densified seed sites allowed per diagram before giving up"
    )

    # Bounds Configuration
    bounds_margin: float = Field(
        default=0.01, ge=0, description="Bounding box margin as a fraction of min(width, height)"
    )

    # Decomposition Configuration
    simplify_tolerance: float = Field(
        default=0.0001, ge=0, description="Simplification tolerance for decomposed shapes (0 disables)"
    )

    # Sampling Configuration
    random_seed: Optional[str] = Field(
        default=None, description="Seed for empty site sampling (random per call when unset)"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    class Config:
        env_prefix = "VORONOI_GEOM_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Instantiate singleton settings object
settings = Settings()
