"""
Backend selection for the console.

The ONLY place that decides whether views talk to the real REST backend or to
the in-process mock backend.
"""

import logging
import os
from typing import Optional

import httpx

from src.integrations.clients.real_http.insurance_api import InsuranceApiClient
from src.utils.config_loader import ApiSettings, load_api_settings

logger = logging.getLogger(__name__)

MOCK_BASE_URL = "http://mock-backend/api"


def _should_use_mock_backend() -> bool:
    mode = os.getenv("INTEGRATIONS_MODE", "").strip().lower()
    return mode in {"mock", "test", "demo"}


def build_api_client(settings: Optional[ApiSettings] = None, *, mock: Optional[bool] = None) -> InsuranceApiClient:
    settings = settings or load_api_settings()
    use_mock = _should_use_mock_backend() if mock is None else mock
    if not use_mock:
        logger.info("Using insurance backend at %s", settings.resolve_base_url())
        return InsuranceApiClient(settings)

    from src.api.mock_backend import create_mock_backend_app
    from src.integrations.clients.mocks.insurance_backend import InMemoryInsuranceBackend, seed_demo_data

    app = create_mock_backend_app(seed_demo_data(InMemoryInsuranceBackend()))
    mock_settings = settings.model_copy(update={"base_url_override": MOCK_BASE_URL})
    logger.info("Using in-process mock insurance backend")
    return InsuranceApiClient(mock_settings, transport=httpx.ASGITransport(app=app))
