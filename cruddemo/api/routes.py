"""
CRUD router factory.

One router per resource, all forwarding to a CrudService. Bodies arrive as
plain JSON objects; the service validates them into entities.
"""
from typing import Any, Mapping, Optional

from fastapi import APIRouter, Body, Request
from fastapi.responses import PlainTextResponse

from ..service import CrudService


def make_crud_router(
    service: CrudService,
    resource: str,
    searchable: Optional[Mapping[str, str]] = None,
) -> APIRouter:
    """
    Build the six CRUD routes for one resource.

    Args:
        service: Service the routes forward to
        resource: Path segment, e.g. "employees"
        searchable: Query parameter -> column for equality filters on the
            list route (e.g. {"lastName": "last_name"})
    """
    router = APIRouter(prefix=f"/{resource}", tags=[resource])
    filters = dict(searchable or {})
    name = service.entity_name

    @router.get("")
    def list_entities(request: Request) -> list[dict[str, Any]]:
        criteria = {}
        for param, column in filters.items():
            value = request.query_params.get(param)
            if value is not None:
                criteria[column] = value
        return [e.to_json() for e in service.find_all_by(criteria)]

    @router.get("/{entity_id}")
    def get_entity(entity_id: int) -> dict[str, Any]:
        return service.find_by_id(entity_id).to_json()

    @router.post("", status_code=201)
    def create_entity(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        # a client-supplied id is discarded: this route always inserts
        return service.create(payload).to_json()

    @router.put("")
    def replace_entity(payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        return service.replace(payload).to_json()

    @router.patch("/{entity_id}")
    def patch_entity(entity_id: int, payload: dict[str, Any] = Body(...)) -> dict[str, Any]:
        return service.patch(entity_id, payload).to_json()

    @router.delete("/{entity_id}", response_class=PlainTextResponse)
    def delete_entity(entity_id: int) -> str:
        service.delete_by_id(entity_id)
        return f"Deleted {name} id - {entity_id}"

    return router
