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
Desired-state builders for the resources derived from a Jenkins instance.

Builders are pure: the same instance and endpoint always produce the same
object, and nothing here talks to the platform.
"""

from jenkins_operator.platform.ownership import labels_for
from jenkins_operator.reconcile.defaults import (
    JENKINS_ACTIVE_DEADLINE_SECONDS,
    JENKINS_DEFAULT_MEMORY_REQUEST,
    JENKINS_DEFAULT_UI_PORT,
    JENKINS_HOME,
    JENKINS_PASSWORD_SECRET_NAME,
    JENKINS_RECREATE_TIMEOUT,
    JENKINS_SSH_FILES,
    JENKINS_TERMINATION_GRACE_PERIOD,
)
from jenkins_operator.reconcile.resolver import ResolvedEndpoint
from jenkins_operator.schema.resources import (
    Container,
    ContainerPort,
    DeploymentConfig,
    DeploymentConfigSpec,
    DeploymentStrategy,
    DeploymentTriggerPolicy,
    EnvVar,
    EnvVarSource,
    HTTPGetAction,
    Jenkins,
    ObjectMeta,
    PersistentVolumeClaimVolumeSource,
    PodSpec,
    PodTemplateSpec,
    Probe,
    RecreateDeploymentStrategyParams,
    ResourceRequirements,
    Route,
    RoutePort,
    RouteSpec,
    RouteTargetReference,
    SecretKeySelector,
    TLSConfig,
    Volume,
    VolumeMount,
)


def data_claim_name(name: str) -> str:
    return f"{name}-data"


def password_secret_name(name: str) -> str:
    return f"{name}-{JENKINS_PASSWORD_SECRET_NAME}"


def grant_permissions_command() -> list:
    ssh_dir = f"{JENKINS_HOME}/.ssh/"
    files = " ".join(JENKINS_SSH_FILES)
    return [
        "sh",
        "-c",
        f"if [ -d {ssh_dir} ]; then cd {ssh_dir};"
        f" for file in {files};"
        " do if [ -f $file ]; then chmod 400 $file; fi; done; fi;",
    ]


def build_deployment_config(instance: Jenkins, endpoint: ResolvedEndpoint) -> DeploymentConfig:
    """Desired DeploymentConfig running the Jenkins master for ``instance``"""
    name = instance.metadata.name
    labels = labels_for(name)
    volume_name = f"{name}-jenkins-data"

    init_container = Container(
        name="grant-permissions",
        image="busybox",
        image_pull_policy="IfNotPresent",
        command=grant_permissions_command(),
        termination_message_path="/dev/termination-log",
        termination_message_policy="File",
    )

    env = [
        EnvVar(name="OPENSHIFT_ENABLE_OAUTH", value="false"),
        EnvVar(name="OPENSHIFT_ENABLE_REDIRECT_PROMPT", value="true"),
        EnvVar(name="KUBERNETES_MASTER", value="https://kubernetes.default:443"),
        EnvVar(name="KUBERNETES_TRUST_CERTIFICATES", value="true"),
        EnvVar(name="JNLP_SERVICE_NAME", value=f"{name}-jnlp"),
        EnvVar(
            name="JENKINS_PASSWORD",
            value_from=EnvVarSource(
                secret_key_ref=SecretKeySelector(name=password_secret_name(name), key="password")
            ),
        ),
        EnvVar(name="JENKINS_UI_URL", value=endpoint.url),
    ]

    jenkins_container = Container(
        name=name,
        image=f"{instance.spec.image}:{instance.spec.version}",
        image_pull_policy="Always",
        env=env,
        ports=[ContainerPort(container_port=JENKINS_DEFAULT_UI_PORT, protocol="TCP")],
        readiness_probe=Probe(
            http_get=HTTPGetAction(path="/login", port=JENKINS_DEFAULT_UI_PORT, scheme="HTTP"),
            timeout_seconds=10,
            initial_delay_seconds=60,
            success_threshold=1,
            period_seconds=10,
            failure_threshold=3,
        ),
        volume_mounts=[VolumeMount(name=volume_name, mount_path=JENKINS_HOME)],
        resources=ResourceRequirements(requests={"memory": JENKINS_DEFAULT_MEMORY_REQUEST}),
        termination_message_path="/dev/termination-log",
        termination_message_policy="File",
    )

    pod_spec = PodSpec(
        security_context={},
        restart_policy="Always",
        service_account=name,
        service_account_name=name,
        dns_policy="ClusterFirst",
        termination_grace_period_seconds=JENKINS_TERMINATION_GRACE_PERIOD,
        scheduler_name="default-scheduler",
        init_containers=[init_container],
        containers=[jenkins_container],
        volumes=[
            Volume(
                name=volume_name,
                persistent_volume_claim=PersistentVolumeClaimVolumeSource(claim_name=data_claim_name(name)),
            )
        ],
    )

    return DeploymentConfig(
        metadata=ObjectMeta(name=name, namespace=instance.metadata.namespace, labels=labels),
        spec=DeploymentConfigSpec(
            replicas=1,
            triggers=[DeploymentTriggerPolicy(type="ConfigChange")],
            strategy=DeploymentStrategy(
                type="Recreate",
                recreate_params=RecreateDeploymentStrategyParams(timeout_seconds=JENKINS_RECREATE_TIMEOUT),
                active_deadline_seconds=JENKINS_ACTIVE_DEADLINE_SECONDS,
            ),
            selector=dict(labels),
            template=PodTemplateSpec(metadata=ObjectMeta(labels=dict(labels)), spec=pod_spec),
        ),
    )


def build_route(instance: Jenkins) -> Route:
    """Desired Route exposing the Jenkins UI with edge TLS termination"""
    name = instance.metadata.name
    return Route(
        metadata=ObjectMeta(name=name, namespace=instance.metadata.namespace, labels=labels_for(name)),
        spec=RouteSpec(
            tls=TLSConfig(termination="edge", insecure_edge_termination_policy="Redirect"),
            to=RouteTargetReference(kind="Service", name=name),
            port=RoutePort(target_port=JENKINS_DEFAULT_UI_PORT),
        ),
    )
