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
Celery application for the operator workers

    celery -A config.celery worker -l info
"""

from celery import Celery

from jenkins_operator.config import settings

app = Celery(
    "jenkins_operator",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
    include=["jenkins_operator.tasks.reconcile_task"],
)

app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    # Reconcile tasks are idempotent and safe to run again after a worker crash
    task_acks_late=True,
)
