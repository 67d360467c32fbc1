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

from jenkins_operator.exceptions import PlatformStoreError, PrerequisiteMissingError, ResourceNotFoundError, StoreReadError
from jenkins_operator.platform.kinds import ROUTE
from jenkins_operator.platform.store import PlatformStore
from jenkins_operator.reconcile.defaults import ROUTE_HTTP_SCHEME, ROUTE_HTTPS_SCHEME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedEndpoint:
    host: str
    protocol: str

    @property
    def url(self) -> str:
        return f"{self.protocol}://{self.host}"


class EndpointResolver:
    """Looks up the externally reachable endpoint of a Jenkins instance"""

    def __init__(self, store: PlatformStore):
        self.store = store

    async def resolve(self, namespace: str, name: str) -> ResolvedEndpoint:
        """
        Resolve the Route host and the protocol it is served with

        Raises:
            PrerequisiteMissingError: If the Route does not exist
            StoreReadError: If the Route could not be read
        """
        try:
            route = await self.store.get(ROUTE, namespace, name)
        except ResourceNotFoundError as e:
            raise PrerequisiteMissingError(ROUTE.kind, namespace, name) from e
        except PlatformStoreError as e:
            raise StoreReadError(ROUTE.kind, namespace, name, e) from e

        protocol = ROUTE_HTTP_SCHEME
        if route.spec.tls is not None and route.spec.tls.termination:
            protocol = ROUTE_HTTPS_SCHEME

        endpoint = ResolvedEndpoint(host=route.spec.host or "", protocol=protocol)
        logger.debug(f"Resolved Route {namespace}/{name} to {endpoint.url}")
        return endpoint
