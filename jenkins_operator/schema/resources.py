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

"""
Typed views of the platform objects handled by the operator.

Field names are snake_case in Python and camelCase on the wire. Every model
keeps unknown fields (``extra="allow"``) so that values defaulted by the
platform survive a read-modify-write cycle untouched.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PlatformModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation, omitting unset optional fields"""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


# Metadata


class OwnerReference(PlatformModel):
    api_version: str
    kind: str
    name: str
    uid: str
    controller: Optional[bool] = None
    block_owner_deletion: Optional[bool] = None


class ObjectMeta(PlatformModel):
    name: Optional[str] = None
    namespace: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None
    owner_references: Optional[List[OwnerReference]] = None
    uid: Optional[str] = None
    resource_version: Optional[str] = None
    generation: Optional[int] = None
    creation_timestamp: Optional[str] = None


class Resource(PlatformModel):
    api_version: str
    kind: str
    metadata: ObjectMeta
    spec: Any = None


# Jenkins custom resource


class JenkinsSpec(PlatformModel):
    image: str
    version: str


class Jenkins(Resource):
    api_version: str = "v2.edp.epam.com/v1alpha1"
    kind: str = "Jenkins"
    spec: JenkinsSpec


# Pod template building blocks


class SecretKeySelector(PlatformModel):
    name: str
    key: str


class EnvVarSource(PlatformModel):
    secret_key_ref: Optional[SecretKeySelector] = None


class EnvVar(PlatformModel):
    name: str
    value: Optional[str] = None
    value_from: Optional[EnvVarSource] = None


class ContainerPort(PlatformModel):
    container_port: int
    protocol: Optional[str] = None


class HTTPGetAction(PlatformModel):
    path: str
    port: Union[int, str]
    scheme: Optional[str] = None


class Probe(PlatformModel):
    http_get: Optional[HTTPGetAction] = None
    timeout_seconds: Optional[int] = None
    initial_delay_seconds: Optional[int] = None
    success_threshold: Optional[int] = None
    period_seconds: Optional[int] = None
    failure_threshold: Optional[int] = None


class VolumeMount(PlatformModel):
    name: str
    mount_path: str
    read_only: Optional[bool] = None
    sub_path: Optional[str] = None


class ResourceRequirements(PlatformModel):
    requests: Optional[Dict[str, str]] = None
    limits: Optional[Dict[str, str]] = None


class Container(PlatformModel):
    name: str
    image: str
    image_pull_policy: Optional[str] = None
    command: Optional[List[str]] = None
    env: Optional[List[EnvVar]] = None
    ports: Optional[List[ContainerPort]] = None
    readiness_probe: Optional[Probe] = None
    volume_mounts: Optional[List[VolumeMount]] = None
    resources: Optional[ResourceRequirements] = None
    security_context: Optional[Dict[str, Any]] = None
    termination_message_path: Optional[str] = None
    termination_message_policy: Optional[str] = None


class PersistentVolumeClaimVolumeSource(PlatformModel):
    claim_name: str
    read_only: Optional[bool] = None


class Volume(PlatformModel):
    name: str
    persistent_volume_claim: Optional[PersistentVolumeClaimVolumeSource] = None


class PodSpec(PlatformModel):
    containers: List[Container]
    init_containers: Optional[List[Container]] = None
    volumes: Optional[List[Volume]] = None
    security_context: Optional[Dict[str, Any]] = None
    restart_policy: Optional[str] = None
    dns_policy: Optional[str] = None
    termination_grace_period_seconds: Optional[int] = None
    scheduler_name: Optional[str] = None
    service_account: Optional[str] = None
    service_account_name: Optional[str] = None


class PodTemplateSpec(PlatformModel):
    metadata: Optional[ObjectMeta] = None
    spec: PodSpec


# DeploymentConfig (apps.openshift.io/v1)


class DeploymentTriggerPolicy(PlatformModel):
    type: str


class RecreateDeploymentStrategyParams(PlatformModel):
    timeout_seconds: Optional[int] = None


class DeploymentStrategy(PlatformModel):
    type: str
    recreate_params: Optional[RecreateDeploymentStrategyParams] = None
    active_deadline_seconds: Optional[int] = None


class DeploymentConfigSpec(PlatformModel):
    replicas: int
    triggers: Optional[List[DeploymentTriggerPolicy]] = None
    strategy: DeploymentStrategy
    selector: Optional[Dict[str, str]] = None
    template: Optional[PodTemplateSpec] = None


class DeploymentConfig(Resource):
    api_version: str = "apps.openshift.io/v1"
    kind: str = "DeploymentConfig"
    spec: DeploymentConfigSpec


# Route (route.openshift.io/v1)


class TLSConfig(PlatformModel):
    termination: Optional[str] = None
    insecure_edge_termination_policy: Optional[str] = None


class RouteTargetReference(PlatformModel):
    kind: str
    name: str
    weight: Optional[int] = None


class RoutePort(PlatformModel):
    target_port: Union[int, str]


class RouteSpec(PlatformModel):
    host: Optional[str] = None
    to: RouteTargetReference
    port: Optional[RoutePort] = None
    tls: Optional[TLSConfig] = None


class Route(Resource):
    api_version: str = "route.openshift.io/v1"
    kind: str = "Route"
    spec: RouteSpec
