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

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Operator settings loaded from JENKINS_OPERATOR_* environment variables"""

    model_config = SettingsConfigDict(env_prefix="JENKINS_OPERATOR_", env_file=".env", extra="ignore")

    # Platform store
    store_backend: str = "kubernetes"
    in_cluster: bool = False
    kube_config_path: Optional[str] = None
    kube_context: Optional[str] = None
    request_timeout_seconds: Optional[float] = 30.0
    memory_router_domain: str = "apps.example.com"
    # Multi-document YAML of objects preloaded into the memory backend
    memory_seed_file: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    # Celery
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_result_backend: str = "redis://localhost:6379/1"
    reconcile_retry_countdown: int = 60
    reconcile_max_retries: int = 5


settings = Settings()
