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

from typing import Dict

from jenkins_operator.exceptions import OwnershipSetupError
from jenkins_operator.schema.resources import OwnerReference, Resource


def labels_for(name: str) -> Dict[str, str]:
    """Label set selecting every object that belongs to one Jenkins instance"""
    return {"app": name}


def set_controller_reference(owner: Resource, child: Resource) -> Resource:
    """
    Make ``owner`` the managing controller of ``child`` so that deleting the
    owner cascades to the child. The child is modified in place.

    Raises:
        OwnershipSetupError: If the owner cannot be referenced from the child
    """
    owner_meta = owner.metadata
    child_meta = child.metadata

    def fail(detail: str):
        raise OwnershipSetupError(child.kind, child_meta.namespace or "", child_meta.name or "", detail)

    if not owner.api_version or not owner.kind:
        fail("owner has no apiVersion/kind")
    if not owner_meta.name or not owner_meta.uid:
        fail(f"owner {owner.kind} {owner_meta.name} has no name/uid, it must be read from the platform first")
    if not owner_meta.namespace:
        fail(f"cluster-scoped owner {owner.kind} {owner_meta.name} is not supported")
    if owner_meta.namespace != child_meta.namespace:
        fail(f"cross-namespace owner references are disallowed (owner namespace {owner_meta.namespace})")

    reference = OwnerReference(
        api_version=owner.api_version,
        kind=owner.kind,
        name=owner_meta.name,
        uid=owner_meta.uid,
        controller=True,
        block_owner_deletion=True,
    )

    references = []
    for existing in child_meta.owner_references or []:
        same_owner = existing.kind == reference.kind and existing.name == reference.name
        if existing.controller and not (same_owner and existing.uid == reference.uid):
            fail(f"object is already owned by another {existing.kind} controller {existing.name}")
        if not same_owner:
            references.append(existing)
    references.append(reference)
    child_meta.owner_references = references
    return child
