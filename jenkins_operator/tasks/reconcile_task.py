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
from typing import Any, Dict, List

from celery import current_app

from jenkins_operator.config import settings
from jenkins_operator.exceptions import (
    OperatorError,
    PrerequisiteMissingError,
    ResourceNotFoundError,
    StoreReadError,
    StoreWriteError,
)
from jenkins_operator.platform import get_platform_store
from jenkins_operator.service.jenkins_service import JenkinsPlatformService

logger = logging.getLogger(__name__)


async def _reconcile_instance(namespace: str, name: str) -> List[Dict[str, Any]]:
    service = JenkinsPlatformService(get_platform_store())
    try:
        instance = await service.get_instance(namespace, name)
    except ResourceNotFoundError:
        # Deleted instance, its children go away through garbage collection
        logger.info(f"Jenkins {namespace}/{name} no longer exists, nothing to reconcile")
        return []
    results = await service.reconcile(instance)
    return [result.to_dict() for result in results]


@current_app.task(bind=True, max_retries=settings.reconcile_max_retries)
def reconcile_jenkins_task(self, namespace: str, name: str):
    """
    Reconcile the derived resources of one Jenkins instance

    Store failures and a Route that does not exist yet are retried. A
    missing instance ends the task. Ownership and configuration errors are
    raised without retry.

    Args:
        namespace: Namespace of the Jenkins custom resource
        name: Name of the Jenkins custom resource
    """
    try:
        logger.info(f"Starting reconciliation of Jenkins {namespace}/{name}")
        results = asyncio.run(_reconcile_instance(namespace, name))
        logger.info(f"Reconciliation of Jenkins {namespace}/{name} completed")
        return results
    except (PrerequisiteMissingError, StoreReadError, StoreWriteError) as e:
        logger.error(f"Reconciliation of Jenkins {namespace}/{name} failed, will retry: {e}", exc_info=True)
        raise self.retry(exc=e, countdown=settings.reconcile_retry_countdown)
    except OperatorError as e:
        logger.error(f"Reconciliation of Jenkins {namespace}/{name} cannot proceed: {e}", exc_info=True)
        raise
