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

import pytest
import pytest_asyncio

from jenkins_operator.platform import reset_platform_store
from jenkins_operator.platform.kinds import JENKINS, ROUTE
from jenkins_operator.platform.store import InMemoryPlatformStore
from tests.unit_test.factories import make_instance, make_route


@pytest.fixture(autouse=True)
def fresh_platform_store():
    """Drop the process-wide store so every test builds its own"""
    reset_platform_store()
    yield
    reset_platform_store()


@pytest.fixture
def store():
    return InMemoryPlatformStore()


@pytest_asyncio.fixture
async def instance(store):
    """A Jenkins instance stored in the platform, so it carries a uid"""
    created = await store.create(JENKINS, make_instance())
    store.writes.clear()
    return created


@pytest_asyncio.fixture
async def edge_route(store, instance):
    """Route pre-created by someone else with edge termination"""
    created = await store.create(ROUTE, make_route())
    store.writes.clear()
    return created
