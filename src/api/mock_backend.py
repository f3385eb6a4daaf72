"""
Mock insurance REST backend.

Serves the in-memory backend over the same routes as the real service so the
console (and the HTTP client tests) can run without it:

    GET/POST        /clients             GET/PUT/DELETE /clients/{id}
    GET             /clients/paged
    GET/POST        /policies            GET/PUT/DELETE /policies/{id}
    GET             /policies/paged      GET            /policies/client/{clientId}

``envelope=True`` wraps single-entity and list payloads as
``{data, message, success}``; ``envelope=False`` returns bare entities and
arrays, like the older backend builds. Paged listings are never enveloped.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, FastAPI, HTTPException, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from src.integrations.clients.mocks.insurance_backend import EntityNotFound, InMemoryInsuranceBackend
from src.integrations.contracts.entities import ClientCreate, PolicyCreate
from src.utils.config_loader import PaginationDefaults

logger = logging.getLogger(__name__)

_DEFAULTS = PaginationDefaults()


def _dump(value: Any) -> Any:
    if isinstance(value, list):
        return [_dump(item) for item in value]
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", by_alias=True)
    return value


def _call(action: Callable[[], Any]) -> Any:
    """Run a backend action, translating its errors into HTTP responses."""
    try:
        return action()
    except EntityNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (ValueError, ValidationError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _parse(model, payload: dict):
    return _call(lambda: model.model_validate(payload))


def build_router(backend: InMemoryInsuranceBackend, envelope: bool = True) -> APIRouter:
    router = APIRouter()

    def reply(payload: Any, message: str = "") -> Any:
        body = _dump(payload)
        if not envelope:
            return body
        return {"data": body, "message": message, "success": True}

    def acknowledge(message: str) -> Any:
        if not envelope:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return {"data": None, "message": message, "success": True}

    # -- Clients --

    @router.get("/clients", tags=["Clients"])
    async def list_clients():
        return reply(backend.list_clients(), "Clients retrieved successfully")

    @router.get("/clients/paged", tags=["Clients"])
    async def page_clients(
        page: int = Query(default=_DEFAULTS.page, ge=0),
        size: int = Query(default=_DEFAULTS.size, ge=1),
        sort: str = Query(default=_DEFAULTS.sort_field),
        direction: str = Query(default=_DEFAULTS.sort_direction),
    ):
        return _dump(_call(lambda: backend.page_clients(page, size, sort, direction)))

    @router.get("/clients/{client_id}", tags=["Clients"])
    async def get_client(client_id: int):
        return reply(_call(lambda: backend.get_client(client_id)), "Client retrieved successfully")

    @router.post("/clients", tags=["Clients"], status_code=status.HTTP_201_CREATED)
    async def create_client(payload: dict):
        request = _parse(ClientCreate, payload)
        return reply(_call(lambda: backend.create_client(request)), "Client created successfully")

    @router.put("/clients/{client_id}", tags=["Clients"])
    async def update_client(client_id: int, payload: dict):
        request = _parse(ClientCreate, payload)
        return reply(_call(lambda: backend.update_client(client_id, request)), "Client updated successfully")

    @router.delete("/clients/{client_id}", tags=["Clients"])
    async def delete_client(client_id: int):
        _call(lambda: backend.delete_client(client_id))
        return acknowledge("Client deleted successfully")

    # -- Policies --

    @router.get("/policies", tags=["Policies"])
    async def list_policies():
        return reply(backend.list_policies(), "Policies retrieved successfully")

    @router.get("/policies/paged", tags=["Policies"])
    async def page_policies(
        page: int = Query(default=_DEFAULTS.page, ge=0),
        size: int = Query(default=_DEFAULTS.size, ge=1),
        sort: str = Query(default=_DEFAULTS.sort_field),
        direction: str = Query(default=_DEFAULTS.sort_direction),
    ):
        return _dump(_call(lambda: backend.page_policies(page, size, sort, direction)))

    @router.get("/policies/client/{client_id}", tags=["Policies"])
    async def policies_for_client(client_id: int):
        return reply(backend.policies_for_client(client_id), "Policies retrieved successfully")

    @router.get("/policies/{policy_id}", tags=["Policies"])
    async def get_policy(policy_id: int):
        return reply(_call(lambda: backend.get_policy(policy_id)), "Policy retrieved successfully")

    @router.post("/policies", tags=["Policies"], status_code=status.HTTP_201_CREATED)
    async def create_policy(payload: dict):
        request = _parse(PolicyCreate, payload)
        return reply(_call(lambda: backend.create_policy(request)), "Policy created successfully")

    @router.put("/policies/{policy_id}", tags=["Policies"])
    async def update_policy(policy_id: int, payload: dict):
        request = _parse(PolicyCreate, payload)
        return reply(_call(lambda: backend.update_policy(policy_id, request)), "Policy updated successfully")

    @router.delete("/policies/{policy_id}", tags=["Policies"])
    async def delete_policy(policy_id: int):
        _call(lambda: backend.delete_policy(policy_id))
        return acknowledge("Policy deleted successfully")

    return router


def create_mock_backend_app(
    backend: Optional[InMemoryInsuranceBackend] = None,
    *,
    envelope: bool = True,
    prefix: str = "/api",
) -> FastAPI:
    app = FastAPI(
        title="Mock Insurance Backend",
        description="In-memory stand-in for the insurance clients/policies REST API",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.backend = backend or InMemoryInsuranceBackend()
    app.include_router(build_router(app.state.backend, envelope=envelope), prefix=prefix)
    logger.info("Mock insurance backend ready (envelope=%s, prefix=%s)", envelope, prefix)
    return app
