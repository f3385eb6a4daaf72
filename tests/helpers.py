"""Shared constants and API client builders for the test suite."""

from datetime import date, datetime

import httpx

from src.integrations.clients.real_http.insurance_api import InsuranceApiClient
from src.utils.config_loader import ApiSettings

FIXED_TODAY = date(2030, 1, 15)
FIXED_NOW = datetime(2030, 1, 15, 9, 30)
TEST_BASE_URL = "http://testserver/api"


def api_for_app(app) -> InsuranceApiClient:
    """API client wired straight into an ASGI app (no sockets)."""
    return InsuranceApiClient(
        ApiSettings(base_url_override=TEST_BASE_URL),
        transport=httpx.ASGITransport(app=app),
    )


def api_for_handler(handler, **settings) -> InsuranceApiClient:
    """API client whose every request is answered by ``handler(request)``."""
    settings.setdefault("base_url_override", TEST_BASE_URL)
    return InsuranceApiClient(ApiSettings(**settings), transport=httpx.MockTransport(handler))
