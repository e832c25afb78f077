from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Surface generation settings pulled from ``CRINKLE_*`` environment variables."""

    # Surface Configuration
    levels: int = Field(default=8, ge=0, le=24, description="Finest recursion level")
    smooth: bool = Field(default=True, description="Enable crease removal")
    length: float = Field(default=1.0, gt=0, description="Update square side at the finest level")
    start: float = Field(default=0.0, description="Height of the initial flat surface")
    mean: float = Field(default=0.0, description="Mean height of base-level samples")
    fractal_dim: float = Field(default=0.65, description="Fractal dimension")
    seed: Optional[int] = Field(default=None, description="Noise seed for reproducible surfaces")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="json", description="Logging format (json or console)"
    )

    class Config:
        env_prefix = "CRINKLE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
