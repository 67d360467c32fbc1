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

from dataclasses import dataclass
from typing import Type

from jenkins_operator.schema.resources import DeploymentConfig, Jenkins, Resource, Route


@dataclass(frozen=True)
class ResourceKind:
    """API coordinates of a resource type served by the platform store"""

    kind: str
    group: str
    version: str
    plural: str
    model: Type[Resource]

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"


DEPLOYMENT_CONFIG = ResourceKind("DeploymentConfig", "apps.openshift.io", "v1", "deploymentconfigs", DeploymentConfig)
ROUTE = ResourceKind("Route", "route.openshift.io", "v1", "routes", Route)
JENKINS = ResourceKind("Jenkins", "v2.edp.epam.com", "v1alpha1", "jenkins", Jenkins)

_KINDS_BY_MODEL = {k.model: k for k in (DEPLOYMENT_CONFIG, ROUTE, JENKINS)}
KINDS_BY_NAME = {k.kind: k for k in (DEPLOYMENT_CONFIG, ROUTE, JENKINS)}


def kind_of(resource: Resource) -> ResourceKind:
    try:
        return _KINDS_BY_MODEL[type(resource)]
    except KeyError:
        raise ValueError(f"Unsupported resource type: {type(resource).__name__}")
