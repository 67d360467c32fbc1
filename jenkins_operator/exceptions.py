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

from typing import Optional


class OperatorError(Exception):
    """Base class for every error raised by the operator"""


# Platform store signals


class PlatformStoreError(OperatorError):
    """A platform store call failed"""

    def __init__(self, message: str, status: Optional[int] = None, reason: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.reason = reason


class ResourceNotFoundError(PlatformStoreError):
    """The requested resource does not exist in the platform store"""

    def __init__(self, kind: str, namespace: str, name: str):
        super().__init__(f"{kind} {name} in namespace {namespace} not found", status=404, reason="NotFound")
        self.kind = kind
        self.namespace = namespace
        self.name = name


class ConflictError(PlatformStoreError):
    """The platform store rejected a write because of a conflicting object"""


# Reconciliation errors


class ReconcileError(OperatorError):
    """Failure carrying the identity of the resource being reconciled"""

    def __init__(self, message: str, kind: str, namespace: str, name: str, operation: str):
        super().__init__(message)
        self.kind = kind
        self.namespace = namespace
        self.name = name
        self.operation = operation


class PrerequisiteMissingError(ReconcileError):
    """A resource the desired state depends on does not exist yet"""

    def __init__(self, kind: str, namespace: str, name: str):
        super().__init__(
            f"{kind} {name} in namespace {namespace} not found",
            kind=kind,
            namespace=namespace,
            name=name,
            operation="resolve",
        )


class OwnershipSetupError(ReconcileError):
    """The owner reference could not be attached to a child resource"""

    def __init__(self, kind: str, namespace: str, name: str, detail: str):
        super().__init__(
            f"Failed to set owner of {kind} {namespace}/{name}: {detail}",
            kind=kind,
            namespace=namespace,
            name=name,
            operation="set-owner",
        )
        self.detail = detail


class StoreReadError(ReconcileError):
    """Reading a resource failed for a reason other than absence"""

    def __init__(self, kind: str, namespace: str, name: str, cause: Exception):
        super().__init__(
            f"Failed to get {kind} {namespace}/{name}: {cause}",
            kind=kind,
            namespace=namespace,
            name=name,
            operation="get",
        )
        self.cause = cause


class StoreWriteError(ReconcileError):
    """Creating or updating a resource failed"""

    def __init__(self, kind: str, namespace: str, name: str, operation: str, cause: Exception):
        super().__init__(
            f"Failed to {operation} {kind} {namespace}/{name}: {cause}",
            kind=kind,
            namespace=namespace,
            name=name,
            operation=operation,
        )
        self.cause = cause
