# Copyright 2025 ApeCloud, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import copy
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Tuple

import yaml
from pydantic import ValidationError

from jenkins_operator.exceptions import ConflictError, PlatformStoreError, ResourceNotFoundError
from jenkins_operator.platform.kinds import DEPLOYMENT_CONFIG, KINDS_BY_NAME, ROUTE, ResourceKind
from jenkins_operator.schema.resources import Resource

logger = logging.getLogger(__name__)


def parse_resource(kind: ResourceKind, namespace: str, name: str, body: Dict[str, Any]) -> Resource:
    """Validate a stored object against the model of its kind"""
    try:
        return kind.model.model_validate(body)
    except ValidationError as e:
        raise PlatformStoreError(f"{kind.kind} {namespace}/{name}: invalid object: {e}") from e


class PlatformStore(ABC):
    """Typed CRUD access to namespaced platform resources"""

    @abstractmethod
    async def get(self, kind: ResourceKind, namespace: str, name: str) -> Resource:
        """
        Read a resource

        Raises:
            ResourceNotFoundError: If the resource does not exist
            PlatformStoreError: On any other failure
        """
        pass

    @abstractmethod
    async def create(self, kind: ResourceKind, resource: Resource) -> Resource:
        """Create a resource and return the stored object"""
        pass

    @abstractmethod
    async def update(self, kind: ResourceKind, resource: Resource) -> Resource:
        """Replace an existing resource and return the stored object"""
        pass


def _default_route(body: Dict[str, Any], router_domain: str):
    spec = body.setdefault("spec", {})
    metadata = body["metadata"]
    if not spec.get("host"):
        spec["host"] = f"{metadata['name']}-{metadata['namespace']}.{router_domain}"
    spec.setdefault("wildcardPolicy", "None")
    spec.setdefault("to", {}).setdefault("weight", 100)


def _default_deployment_config(body: Dict[str, Any], router_domain: str):
    spec = body.setdefault("spec", {})
    spec.setdefault("revisionHistoryLimit", 10)
    spec.setdefault("test", False)
    spec.setdefault("strategy", {}).setdefault("resources", {})


class InMemoryPlatformStore(PlatformStore):
    """Local dict-backed store for tests, dry runs and single-process use

    Mimics the platform behaviours the reconciler depends on: system-managed
    metadata on write, server-side defaulting, uniqueness per
    (kind, namespace, name) and optimistic concurrency on resourceVersion.
    """

    def __init__(self, router_domain: str = "apps.example.com"):
        self.router_domain = router_domain
        self._objects: Dict[Tuple[str, str, str], Dict[str, Any]] = {}
        self.writes: List[Tuple[str, str, str, str]] = []
        self.defaulters: Dict[str, Callable[[Dict[str, Any], str], None]] = {
            ROUTE.kind: _default_route,
            DEPLOYMENT_CONFIG.kind: _default_deployment_config,
        }

    async def get(self, kind: ResourceKind, namespace: str, name: str) -> Resource:
        body = self._objects.get((kind.kind, namespace, name))
        if body is None:
            raise ResourceNotFoundError(kind.kind, namespace, name)
        return parse_resource(kind, namespace, name, copy.deepcopy(body))

    def seed(self, path: str):
        """Preload objects from a multi-document YAML manifest file"""
        with open(path) as f:
            documents = [doc for doc in yaml.safe_load_all(f) if doc]

        for body in documents:
            kind = KINDS_BY_NAME.get(body.get("kind"))
            if kind is None:
                raise PlatformStoreError(f"Unsupported kind {body.get('kind')!r} in {path}")
            metadata = body.get("metadata") or {}
            if not metadata.get("name") or not metadata.get("namespace"):
                raise PlatformStoreError(f"{kind.kind} in {path} has no metadata.name/namespace")
            resource = parse_resource(kind, metadata["namespace"], metadata["name"], body)
            self._insert(kind, resource.to_dict())
        logger.info(f"Seeded {len(documents)} objects from {path}")

    def _insert(self, kind: ResourceKind, body: Dict[str, Any]) -> Tuple[str, str, str]:
        metadata = body["metadata"]
        key = (kind.kind, metadata["namespace"], metadata["name"])
        if key in self._objects:
            raise ConflictError(
                f"{kind.kind} {metadata['name']} already exists", status=409, reason="AlreadyExists"
            )

        metadata["uid"] = str(uuid.uuid4())
        metadata["resourceVersion"] = "1"
        metadata["generation"] = 1
        metadata["creationTimestamp"] = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        defaulter = self.defaulters.get(kind.kind)
        if defaulter:
            defaulter(body, self.router_domain)

        self._objects[key] = body
        return key

    async def create(self, kind: ResourceKind, resource: Resource) -> Resource:
        body = resource.to_dict()
        key = self._insert(kind, body)
        self.writes.append(("create", kind.kind, key[1], key[2]))
        logger.debug(f"Stored new {kind.kind} {key[1]}/{key[2]}")
        return parse_resource(kind, key[1], key[2], copy.deepcopy(body))

    async def update(self, kind: ResourceKind, resource: Resource) -> Resource:
        body = resource.to_dict()
        metadata = body["metadata"]
        key = (kind.kind, metadata["namespace"], metadata["name"])
        current = self._objects.get(key)
        if current is None:
            raise ResourceNotFoundError(kind.kind, key[1], key[2])

        current_version = current["metadata"]["resourceVersion"]
        if metadata.get("resourceVersion") != current_version:
            raise ConflictError(
                f"Operation cannot be fulfilled on {kind.kind} {key[2]}: the object has been modified",
                status=409,
                reason="Conflict",
            )

        # System-managed metadata is owned by the store
        for field in ("uid", "creationTimestamp"):
            metadata[field] = current["metadata"][field]
        metadata["resourceVersion"] = str(int(current_version) + 1)
        defaulter = self.defaulters.get(kind.kind)
        if defaulter:
            defaulter(body, self.router_domain)
        generation = current["metadata"].get("generation", 1)
        metadata["generation"] = generation + 1 if body.get("spec") != current.get("spec") else generation

        self._objects[key] = body
        self.writes.append(("update", kind.kind, key[1], key[2]))
        logger.debug(f"Stored update of {kind.kind} {key[1]}/{key[2]}")
        return parse_resource(kind, key[1], key[2], copy.deepcopy(body))
