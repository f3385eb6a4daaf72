"""
Mock integration backend.

An in-memory stand-in for the insurance REST backend. It assigns ids and
timestamps, pages and sorts collections, and applies the same server-side
validation as the real service, without any network or database.

It is used when:
- the real backend is not reachable during development
- tests need to exercise the HTTP client end-to-end (via httpx.ASGITransport)

Important:
- The mock is reached through the SAME HTTP client as the real backend
  (see src/api/mock_backend.py); controllers never talk to it directly.
"""

from .insurance_backend import EntityNotFound, InMemoryInsuranceBackend, seed_demo_data

__all__ = ["EntityNotFound", "InMemoryInsuranceBackend", "seed_demo_data"]
