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
from http import HTTPStatus
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from jenkins_operator.exceptions import OperatorError, PrerequisiteMissingError, ResourceNotFoundError
from jenkins_operator.platform import get_platform_store
from jenkins_operator.service.jenkins_service import JenkinsPlatformService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_platform_service() -> JenkinsPlatformService:
    return JenkinsPlatformService(get_platform_store())


@router.get("/healthz")
async def healthz_view() -> Dict[str, str]:
    return {"status": "ok"}


@router.post("/api/v1/jenkins/{namespace}/{name}/reconcile")
async def reconcile_jenkins_view(
    namespace: str, name: str, service: JenkinsPlatformService = Depends(get_platform_service)
) -> List[Dict[str, Any]]:
    """Run one reconcile pass for a Jenkins instance"""
    try:
        instance = await service.get_instance(namespace, name)
        results = await service.reconcile(instance)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e))
    except PrerequisiteMissingError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(e))
    except OperatorError as e:
        logger.error(f"Failed to reconcile Jenkins {namespace}/{name}: {e}", exc_info=True)
        raise HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=str(e))
    return [result.to_dict() for result in results]
