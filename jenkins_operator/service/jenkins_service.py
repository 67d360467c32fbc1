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
from typing import List, Optional

from jenkins_operator.exceptions import PlatformStoreError, ResourceNotFoundError, StoreReadError
from jenkins_operator.platform.kinds import JENKINS
from jenkins_operator.platform.store import PlatformStore
from jenkins_operator.reconcile.builders import build_deployment_config, build_route
from jenkins_operator.reconcile.engine import ConvergenceEngine, ReconcileResult
from jenkins_operator.reconcile.resolver import EndpointResolver, ResolvedEndpoint
from jenkins_operator.schema.resources import Jenkins

logger = logging.getLogger(__name__)


class JenkinsPlatformService:
    """Service keeping the OpenShift footprint of Jenkins instances in sync"""

    def __init__(self, store: PlatformStore, logger: Optional[logging.Logger] = None):
        self.store = store
        self.engine = ConvergenceEngine(store, logger=logger)
        self.resolver = EndpointResolver(store)

    async def get_instance(self, namespace: str, name: str) -> Jenkins:
        """
        Read a Jenkins custom resource

        Raises:
            ResourceNotFoundError: If the instance does not exist
            StoreReadError: If the instance could not be read
        """
        try:
            return await self.store.get(JENKINS, namespace, name)
        except ResourceNotFoundError:
            raise
        except PlatformStoreError as e:
            raise StoreReadError(JENKINS.kind, namespace, name, e) from e

    async def get_route(self, namespace: str, name: str) -> ResolvedEndpoint:
        return await self.resolver.resolve(namespace, name)

    async def create_external_endpoint(self, instance: Jenkins) -> ReconcileResult:
        """Ensure the Route of the instance exists and matches its desired spec"""
        return await self.engine.reconcile(instance, build_route(instance))

    async def create_deploy_conf(self, instance: Jenkins) -> ReconcileResult:
        """
        Ensure the DeploymentConfig of the instance exists and matches its
        desired spec. The Route must already exist, its URL is part of the
        container environment.
        """
        endpoint = await self.resolver.resolve(instance.metadata.namespace, instance.metadata.name)
        return await self.engine.reconcile(instance, build_deployment_config(instance, endpoint))

    async def reconcile(self, instance: Jenkins) -> List[ReconcileResult]:
        """Run a full pass for one instance: Route first, then DeploymentConfig"""
        logger.info(f"Reconciling Jenkins {instance.metadata.namespace}/{instance.metadata.name}")
        results = [await self.create_external_endpoint(instance)]
        results.append(await self.create_deploy_conf(instance))
        logger.info(
            f"Jenkins {instance.metadata.namespace}/{instance.metadata.name} reconciled: "
            + ", ".join(f"{r.kind}={r.action.value}" for r in results)
        )
        return results
