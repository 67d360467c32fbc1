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
Unit tests for the ConvergenceEngine.

Test Coverage:
=============

1. Lifecycle: Absent -> Created -> Unchanged / Updated
2. Idempotence: repeated calls issue no writes
3. Drift: external changes are reverted, platform-owned fields are kept
4. Errors: ownership, read, create and update failures carry context
"""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from jenkins_operator.exceptions import (
    ConflictError,
    OwnershipSetupError,
    PlatformStoreError,
    ResourceNotFoundError,
    StoreReadError,
    StoreWriteError,
)
from jenkins_operator.platform.kinds import DEPLOYMENT_CONFIG, ROUTE
from jenkins_operator.platform.store import PlatformStore
from jenkins_operator.reconcile.builders import build_deployment_config, build_route
from jenkins_operator.reconcile.engine import ConvergenceEngine, ReconcileAction
from jenkins_operator.reconcile.resolver import ResolvedEndpoint
from jenkins_operator.schema.resources import ObjectMeta, Resource
from tests.unit_test.factories import make_instance

ENDPOINT = ResolvedEndpoint(host="ci.example.com", protocol="https")


def mock_store():
    store = MagicMock(spec=PlatformStore)
    store.get = AsyncMock()
    store.create = AsyncMock()
    store.update = AsyncMock()
    return store


class TestReconcileLifecycle:
    """Test suite for create / unchanged / update transitions."""

    @pytest.mark.asyncio
    async def test_absent_resource_is_created(self, store, instance):
        result = await ConvergenceEngine(store).reconcile(instance, build_deployment_config(instance, ENDPOINT))

        assert result.action == ReconcileAction.CREATED
        assert (result.kind, result.namespace, result.name) == ("DeploymentConfig", "team-a", "ci")
        assert store.writes == [("create", "DeploymentConfig", "team-a", "ci")]
        assert result.resource.metadata.resource_version == "1"

    @pytest.mark.asyncio
    async def test_created_resource_is_owned_by_instance(self, store, instance):
        await ConvergenceEngine(store).reconcile(instance, build_route(instance))

        live = await store.get(ROUTE, "team-a", "ci")
        [reference] = live.metadata.owner_references
        assert reference.uid == instance.metadata.uid
        assert reference.kind == "Jenkins"
        assert reference.controller is True

    @pytest.mark.asyncio
    async def test_repeated_reconcile_issues_no_writes(self, store, instance):
        engine = ConvergenceEngine(store)
        first = await engine.reconcile(instance, build_deployment_config(instance, ENDPOINT))
        assert first.action == ReconcileAction.CREATED
        store.writes.clear()

        for _ in range(3):
            result = await engine.reconcile(instance, build_deployment_config(instance, ENDPOINT))
            assert result.action == ReconcileAction.UNCHANGED

        assert store.writes == []

    @pytest.mark.asyncio
    async def test_replica_drift_is_reverted(self, store, instance):
        engine = ConvergenceEngine(store)
        await engine.reconcile(instance, build_deployment_config(instance, ENDPOINT))

        live = await store.get(DEPLOYMENT_CONFIG, "team-a", "ci")
        live.spec.replicas = 3
        await store.update(DEPLOYMENT_CONFIG, live)
        store.writes.clear()

        result = await engine.reconcile(instance, build_deployment_config(instance, ENDPOINT))

        assert result.action == ReconcileAction.UPDATED
        assert store.writes == [("update", "DeploymentConfig", "team-a", "ci")]
        live = await store.get(DEPLOYMENT_CONFIG, "team-a", "ci")
        assert live.spec.replicas == 1

        again = await engine.reconcile(instance, build_deployment_config(instance, ENDPOINT))
        assert again.action == ReconcileAction.UNCHANGED

    @pytest.mark.asyncio
    async def test_changed_instance_version_updates_image(self, store, instance):
        engine = ConvergenceEngine(store)
        await engine.reconcile(instance, build_deployment_config(instance, ENDPOINT))

        instance.spec.version = "2.4"
        result = await engine.reconcile(instance, build_deployment_config(instance, ENDPOINT))

        assert result.action == ReconcileAction.UPDATED
        live = await store.get(DEPLOYMENT_CONFIG, "team-a", "ci")
        assert live.spec.template.spec.containers[0].image == "jenkins:2.4"

    @pytest.mark.asyncio
    async def test_update_keeps_platform_owned_fields(self, store, instance):
        engine = ConvergenceEngine(store)
        created = await engine.reconcile(instance, build_route(instance))
        assigned_host = created.resource.spec.host
        assert assigned_host == "ci-team-a.apps.example.com"

        live = await store.get(ROUTE, "team-a", "ci")
        live.spec.tls.termination = "passthrough"
        await store.update(ROUTE, live)

        result = await engine.reconcile(instance, build_route(instance))

        assert result.action == ReconcileAction.UPDATED
        live = await store.get(ROUTE, "team-a", "ci")
        assert live.spec.tls.termination == "edge"
        assert live.spec.host == assigned_host
        assert live.metadata.uid == created.resource.metadata.uid
        assert live.metadata.owner_references[0].uid == instance.metadata.uid

    @pytest.mark.asyncio
    async def test_update_sends_live_resource_version(self, instance):
        store = mock_store()
        live = build_deployment_config(instance, ENDPOINT)
        live.metadata.resource_version = "17"
        live.spec.replicas = 3
        store.get.return_value = live
        store.update.side_effect = lambda kind, resource: resource

        result = await ConvergenceEngine(store).reconcile(instance, build_deployment_config(instance, ENDPOINT))

        assert result.action == ReconcileAction.UPDATED
        sent = store.update.await_args.args[1]
        assert sent.metadata.resource_version == "17"
        assert sent.spec.replicas == 1
        store.create.assert_not_awaited()


class TestReconcileErrors:
    """Test suite for error wrapping and propagation."""

    @pytest.mark.asyncio
    async def test_ownership_failure_happens_before_store_access(self):
        store = mock_store()
        owner_without_uid = make_instance()

        with pytest.raises(OwnershipSetupError):
            await ConvergenceEngine(store).reconcile(owner_without_uid, build_route(owner_without_uid))

        store.get.assert_not_awaited()
        store.create.assert_not_awaited()
        store.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_read_failure_is_wrapped(self, instance):
        store = mock_store()
        cause = PlatformStoreError("forbidden", status=403, reason="Forbidden")
        store.get.side_effect = cause

        with pytest.raises(StoreReadError) as exc_info:
            await ConvergenceEngine(store).reconcile(instance, build_route(instance))

        error = exc_info.value
        assert (error.kind, error.namespace, error.name, error.operation) == ("Route", "team-a", "ci", "get")
        assert error.cause is cause
        assert error.__cause__ is cause
        store.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_failure_is_wrapped(self, instance):
        store = mock_store()
        store.get.side_effect = ResourceNotFoundError("Route", "team-a", "ci")
        store.create.side_effect = PlatformStoreError("quota exceeded", status=403)

        with pytest.raises(StoreWriteError) as exc_info:
            await ConvergenceEngine(store).reconcile(instance, build_route(instance))

        assert exc_info.value.operation == "create"
        assert "Failed to create Route team-a/ci" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_conflicting_update_is_wrapped(self, instance):
        store = mock_store()
        live = build_route(instance)
        live.spec.port.target_port = 9090
        store.get.return_value = live
        store.update.side_effect = ConflictError("the object has been modified", status=409)

        with pytest.raises(StoreWriteError) as exc_info:
            await ConvergenceEngine(store).reconcile(instance, build_route(instance))

        assert exc_info.value.operation == "update"
        assert isinstance(exc_info.value.cause, ConflictError)

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate_unchanged(self, instance):
        store = mock_store()
        store.get.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            await ConvergenceEngine(store).reconcile(instance, build_route(instance))

    @pytest.mark.asyncio
    async def test_unsupported_resource_type_is_an_ownership_error(self, instance):
        store = mock_store()
        config_map = Resource(
            api_version="v1", kind="ConfigMap", metadata=ObjectMeta(name="ci", namespace="team-a")
        )

        with pytest.raises(OwnershipSetupError) as exc_info:
            await ConvergenceEngine(store).reconcile(instance, config_map)

        assert (exc_info.value.kind, exc_info.value.namespace, exc_info.value.name) == ("ConfigMap", "team-a", "ci")
        assert isinstance(exc_info.value.__cause__, ValueError)
        store.get.assert_not_awaited()


class TestReconcileLogging:
    @pytest.mark.asyncio
    async def test_injected_logger_is_used(self, store, instance):
        logger = MagicMock(spec=logging.Logger)

        await ConvergenceEngine(store, logger=logger).reconcile(instance, build_route(instance))

        logger.info.assert_called_once_with("Route team-a/ci has been created")
