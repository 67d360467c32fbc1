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

# Jenkins workload defaults
JENKINS_DEFAULT_UI_PORT = 8080
JENKINS_RECREATE_TIMEOUT = 6000
JENKINS_ACTIVE_DEADLINE_SECONDS = 21600
JENKINS_TERMINATION_GRACE_PERIOD = 30
JENKINS_DEFAULT_MEMORY_REQUEST = "500Mi"
JENKINS_PASSWORD_SECRET_NAME = "admin-password"
JENKINS_HOME = "/var/lib/jenkins"

# Files under $JENKINS_HOME/.ssh that must not be group/world readable
JENKINS_SSH_FILES = ("config", "id_rsa", "jenkins-slave-id_rsa")

ROUTE_HTTPS_SCHEME = "https"
ROUTE_HTTP_SCHEME = "http"
