"""
Real HTTP integration clients.

These clients communicate with the insurance REST backend over HTTP:
- clients: /clients CRUD
- policies: /policies CRUD, paged listing, listing by owning client

Important:
- Must implement the same interfaces as the in-process mock backend exposes
- Must return data shaped according to src/integrations/contracts/*

Switching:
The selection of mock vs real backend should happen in src/console/dependencies.py only.
"""

from .insurance_api import InsuranceApiClient, PolicyResourceClient, ResourceClient

__all__ = ["InsuranceApiClient", "PolicyResourceClient", "ResourceClient"]
