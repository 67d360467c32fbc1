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

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from jenkins_operator.config import Settings
from jenkins_operator.exceptions import ConflictError, PlatformStoreError, ResourceNotFoundError
from jenkins_operator.platform.kinds import ResourceKind
from jenkins_operator.platform.store import PlatformStore, parse_resource
from jenkins_operator.schema.resources import Resource

logger = logging.getLogger(__name__)


class KubernetesPlatformStore(PlatformStore):
    """Platform store backed by the Kubernetes custom objects API"""

    def __init__(self, api: client.CustomObjectsApi, request_timeout: Optional[float] = None):
        self.api = api
        self.request_timeout = request_timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "KubernetesPlatformStore":
        """Load cluster credentials and build a store"""
        try:
            if settings.in_cluster:
                config.load_incluster_config()
            else:
                config.load_kube_config(config_file=settings.kube_config_path, context=settings.kube_context)
        except config.ConfigException as e:
            raise PlatformStoreError(f"Failed to load Kubernetes configuration: {e}") from e

        logger.info(f"Kubernetes platform store initialized (in_cluster={settings.in_cluster})")
        return cls(client.CustomObjectsApi(), request_timeout=settings.request_timeout_seconds)

    def _options(self) -> Dict[str, Any]:
        if self.request_timeout is None:
            return {}
        return {"_request_timeout": self.request_timeout}

    async def _call(self, kind: ResourceKind, namespace: str, name: str, fn: Callable[[], Dict[str, Any]]):
        try:
            return await asyncio.to_thread(fn)
        except ApiException as e:
            if e.status == 404:
                raise ResourceNotFoundError(kind.kind, namespace, name) from e
            message = f"{kind.kind} {namespace}/{name}: (status={e.status}) {e.reason}"
            if e.status == 409:
                raise ConflictError(message, status=e.status, reason=e.reason) from e
            raise PlatformStoreError(message, status=e.status, reason=e.reason) from e
        except HTTPError as e:
            raise PlatformStoreError(f"{kind.kind} {namespace}/{name}: {e}") from e

    async def get(self, kind: ResourceKind, namespace: str, name: str) -> Resource:
        body = await self._call(
            kind,
            namespace,
            name,
            lambda: self.api.get_namespaced_custom_object(
                kind.group, kind.version, namespace, kind.plural, name, **self._options()
            ),
        )
        return parse_resource(kind, namespace, name, body)

    async def create(self, kind: ResourceKind, resource: Resource) -> Resource:
        namespace, name = resource.metadata.namespace, resource.metadata.name
        body = await self._call(
            kind,
            namespace,
            name,
            lambda: self.api.create_namespaced_custom_object(
                kind.group, kind.version, namespace, kind.plural, resource.to_dict(), **self._options()
            ),
        )
        return parse_resource(kind, namespace, name, body)

    async def update(self, kind: ResourceKind, resource: Resource) -> Resource:
        namespace, name = resource.metadata.namespace, resource.metadata.name
        body = await self._call(
            kind,
            namespace,
            name,
            lambda: self.api.replace_namespaced_custom_object(
                kind.group, kind.version, namespace, kind.plural, name, resource.to_dict(), **self._options()
            ),
        )
        return parse_resource(kind, namespace, name, body)
