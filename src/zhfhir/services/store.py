"""ResourceStore — in-memory CRUD over FHIR resources.

Resources are plain JSON dicts keyed by ``resourceType`` then ``id``.
Nothing is persisted. A single lock guards the map so one store can be
shared between threads.
"""

from __future__ import annotations

import copy
import logging
import threading
import uuid
from collections.abc import Mapping
from typing import Any

from zhfhir.services.result import ServiceResult

logger = logging.getLogger(__name__)


class ResourceStore:
    """Create, read, update, delete and list resources in memory."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._resources: dict[str, dict[str, dict[str, Any]]] = {}

    def create(self, resource_type: str, resource: Any) -> ServiceResult:
        """Store *resource* under a freshly generated id."""
        op = "create"
        if not isinstance(resource, Mapping):
            return _invalid(op, resource)
        resource_id = str(uuid.uuid4())
        stored = self._put(resource_type, resource_id, resource)
        logger.debug("Created %s/%s", resource_type, resource_id)
        return ServiceResult(ok=True, op=op, data=stored)

    def read(self, resource_type: str, resource_id: str) -> ServiceResult:
        op = "read"
        with self._lock:
            found = self._resources.get(resource_type, {}).get(resource_id)
            if found is None:
                return ServiceResult.failure(
                    op,
                    "NOT_FOUND",
                    f"{resource_type}/{resource_id} not found",
                    resource_type=resource_type,
                    id=resource_id,
                )
            return ServiceResult(ok=True, op=op, data=copy.deepcopy(found))

    def update(self, resource_type: str, resource_id: str, resource: Any) -> ServiceResult:
        """Replace (or create) the resource at *resource_id*."""
        op = "update"
        if not isinstance(resource, Mapping):
            return _invalid(op, resource)
        stored = self._put(resource_type, resource_id, resource)
        return ServiceResult(ok=True, op=op, data=stored)

    def delete(self, resource_type: str, resource_id: str) -> ServiceResult:
        """Remove a resource. Deleting a missing resource still succeeds."""
        with self._lock:
            removed = self._resources.get(resource_type, {}).pop(resource_id, None)
        return ServiceResult(
            ok=True,
            op="delete",
            data={
                "resource_type": resource_type,
                "id": resource_id,
                "deleted": removed is not None,
            },
        )

    def search(self, resource_type: str) -> ServiceResult:
        """Every stored resource of *resource_type* as a ``searchset`` Bundle."""
        with self._lock:
            stored = self._resources.get(resource_type, {})
            resources = [copy.deepcopy(res) for res in stored.values()]
        bundle = {
            "resourceType": "Bundle",
            "type": "searchset",
            "total": len(resources),
            "entry": [{"resource": res} for res in resources],
        }
        return ServiceResult(ok=True, op="search", data=bundle)

    def _put(
        self, resource_type: str, resource_id: str, resource: Mapping[str, Any]
    ) -> dict[str, Any]:
        stored = copy.deepcopy(dict(resource))
        stored["id"] = resource_id
        stored["resourceType"] = resource_type
        with self._lock:
            self._resources.setdefault(resource_type, {})[resource_id] = stored
        return copy.deepcopy(stored)


def _invalid(op: str, resource: Any) -> ServiceResult:
    return ServiceResult.failure(
        op,
        "INVALID_RESOURCE",
        f"Resource must be a JSON object, got {type(resource).__name__}",
    )
