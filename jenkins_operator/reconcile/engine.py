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

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from jenkins_operator.exceptions import (
    OwnershipSetupError,
    PlatformStoreError,
    ResourceNotFoundError,
    StoreReadError,
    StoreWriteError,
)
from jenkins_operator.platform.kinds import ResourceKind, kind_of
from jenkins_operator.platform.ownership import set_controller_reference
from jenkins_operator.platform.store import PlatformStore
from jenkins_operator.reconcile.equality import overlay, spec_matches
from jenkins_operator.schema.resources import Resource

module_logger = logging.getLogger(__name__)


class ReconcileAction(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"


@dataclass
class ReconcileResult:
    kind: str
    namespace: str
    name: str
    action: ReconcileAction
    resource: Resource

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "namespace": self.namespace,
            "name": self.name,
            "action": self.action.value,
            "resource_version": self.resource.metadata.resource_version,
        }


class ConvergenceEngine:
    """
    Brings one derived resource in line with its desired state.

    ``reconcile`` creates the resource when it is absent, updates it when the
    live spec has drifted and otherwise leaves it alone, so it is safe to call
    on every event. Errors are never retried here; the caller decides whether
    to run the reconcile again.
    """

    def __init__(self, store: PlatformStore, logger: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger or module_logger

    async def reconcile(self, owner: Resource, desired: Resource) -> ReconcileResult:
        """
        Reconcile ``desired`` against the platform store

        Args:
            owner: The resource owning ``desired``, must carry a uid
            desired: Freshly built desired resource

        Returns:
            ReconcileResult describing what was done

        Raises:
            OwnershipSetupError: If the resource type is not managed or the
                owner reference cannot be attached
            StoreReadError: If the live resource could not be read
            StoreWriteError: If the create or update was rejected
        """
        namespace, name = desired.metadata.namespace, desired.metadata.name
        try:
            kind = kind_of(desired)
        except ValueError as e:
            raise OwnershipSetupError(desired.kind, namespace or "", name or "", str(e)) from e

        set_controller_reference(owner, desired)

        try:
            live = await self.store.get(kind, namespace, name)
        except ResourceNotFoundError:
            return await self._create(kind, desired)
        except PlatformStoreError as e:
            raise StoreReadError(kind.kind, namespace, name, e) from e

        if spec_matches(desired, live):
            self.logger.debug(f"{kind.kind} {namespace}/{name} is up to date")
            return ReconcileResult(kind.kind, namespace, name, ReconcileAction.UNCHANGED, live)

        return await self._update(kind, desired, live)

    async def _create(self, kind: ResourceKind, desired: Resource) -> ReconcileResult:
        namespace, name = desired.metadata.namespace, desired.metadata.name
        self.logger.debug(f"Creating a new {kind.kind} {namespace}/{name}")
        try:
            created = await self.store.create(kind, desired)
        except PlatformStoreError as e:
            raise StoreWriteError(kind.kind, namespace, name, "create", e) from e

        self.logger.info(f"{kind.kind} {namespace}/{name} has been created")
        return ReconcileResult(kind.kind, namespace, name, ReconcileAction.CREATED, created)

    async def _update(self, kind: ResourceKind, desired: Resource, live: Resource) -> ReconcileResult:
        namespace, name = desired.metadata.namespace, desired.metadata.name
        merged_spec = overlay(live.to_dict().get("spec", {}), desired.to_dict()["spec"])
        live.spec = type(desired.spec).model_validate(merged_spec)
        try:
            updated = await self.store.update(kind, live)
        except PlatformStoreError as e:
            raise StoreWriteError(kind.kind, namespace, name, "update", e) from e

        self.logger.info(f"{kind.kind} {namespace}/{name} has been updated")
        return ReconcileResult(kind.kind, namespace, name, ReconcileAction.UPDATED, updated)
