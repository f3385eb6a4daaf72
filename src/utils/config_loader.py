"""
Configuration loader for the admin console
"""

import os
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

BASE_URL_ENV = "INSURANCE_API_BASE_URL"
FALLBACK_BASE_URL = "http://localhost:8080/api"


class PaginationDefaults(BaseModel):
    """Pagination defaults; must match the backend's own defaults"""

    page: int = Field(default=0, ge=0)
    size: int = Field(default=5, ge=1, le=500)
    sort_field: str = "id"
    sort_direction: Literal["asc", "desc"] = "asc"
    page_size_options: List[int] = Field(default_factory=lambda: [5, 10, 20, 50])


class ApiSettings(BaseModel):
    """
    Backend connection settings.

    The base URL is resolved on every request, in this order:
    1. runtime override (constructor value, then the INSURANCE_API_BASE_URL env var)
    2. default shipped with the build (config/console_config.yml)
    3. hardcoded local fallback
    """

    base_url_override: Optional[str] = None
    default_base_url: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    pagination: PaginationDefaults = Field(default_factory=PaginationDefaults)

    def resolve_base_url(self) -> str:
        candidates = (
            self.base_url_override,
            os.getenv(BASE_URL_ENV),
            self.default_base_url,
            FALLBACK_BASE_URL,
        )
        for candidate in candidates:
            if candidate and candidate.strip():
                return candidate.strip().rstrip("/")
        return FALLBACK_BASE_URL


class ConsoleConfig(BaseModel):
    """Complete console configuration file"""

    api: dict = Field(default_factory=dict)
    pagination: PaginationDefaults = Field(default_factory=PaginationDefaults)


def load_api_settings(config_path: Optional[Path] = None, base_url_override: Optional[str] = None) -> ApiSettings:
    """
    Load and validate API settings from YAML file

    Args:
        config_path: Path to config file. Defaults to config/console_config.yml
        base_url_override: Explicit runtime override, wins over everything else

    Returns:
        Validated ApiSettings object

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config" / "console_config.yml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        config_data = yaml.safe_load(f) or {}

    try:
        config = ConsoleConfig(**config_data)
        settings = ApiSettings(
            base_url_override=base_url_override,
            default_base_url=config.api.get("base_url"),
            timeout_seconds=config.api.get("timeout_seconds"),
            pagination=config.pagination,
        )
        logger.info(f"Successfully loaded console config from {config_path}")
        return settings
    except ValidationError as e:
        logger.error(f"Console config validation failed: {e}")
        raise
