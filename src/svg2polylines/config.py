"""Runtime configuration from environment variables."""

import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings

# Flattening tolerance the original C-ABI library was built with.
DEFAULT_FLATTENING_TOLERANCE = 0.15
DEFAULT_SIMPLIFY_TOLERANCE = 0.5


class Settings(BaseSettings):
    flattening_tolerance: float = DEFAULT_FLATTENING_TOLERANCE
    simplify_tolerance: float = DEFAULT_SIMPLIFY_TOLERANCE
    # Near-duplicate point filter applied while accumulating; off when unset or 0.
    prefilter_tolerance: Optional[float] = None
    log_level: str = "info"

    model_config = {
        "env_prefix": "SVG2POLYLINES_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("flattening_tolerance", "simplify_tolerance")
    @classmethod
    def _positive(cls, value: float) -> float:
        if not value > 0:
            raise ValueError("tolerance must be a positive number")
        return value

    @field_validator("prefilter_tolerance")
    @classmethod
    def _not_negative(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not value >= 0:
            raise ValueError("tolerance must not be negative")
        return value


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the CLI and web entrypoints."""
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
