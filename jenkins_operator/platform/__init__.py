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

from typing import Optional

from jenkins_operator.config import Settings, settings as default_settings
from jenkins_operator.platform.store import InMemoryPlatformStore, PlatformStore

# Shared by every request, command and task of the process
_platform_store: Optional[PlatformStore] = None


def create_platform_store(settings: Optional[Settings] = None) -> PlatformStore:
    """Factory for the configured platform store backend"""
    settings = settings or default_settings
    if settings.store_backend == "memory":
        store = InMemoryPlatformStore(router_domain=settings.memory_router_domain)
        if settings.memory_seed_file:
            store.seed(settings.memory_seed_file)
        return store
    elif settings.store_backend == "kubernetes":
        from jenkins_operator.platform.kubernetes_store import KubernetesPlatformStore

        return KubernetesPlatformStore.from_settings(settings)
    else:
        raise ValueError(f"Unknown platform store backend: {settings.store_backend}")


def get_platform_store() -> PlatformStore:
    """Process-wide platform store, built from the global settings on first use"""
    global _platform_store
    if _platform_store is None:
        _platform_store = create_platform_store(default_settings)
    return _platform_store


def reset_platform_store():
    global _platform_store
    _platform_store = None


__all__ = [
    "PlatformStore",
    "InMemoryPlatformStore",
    "create_platform_store",
    "get_platform_store",
    "reset_platform_store",
]
