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
K8s-style convergence of Jenkins instances

Key components:
- EndpointResolver: Reads the Route of an instance and derives its public URL
- builders: Pure functions producing the desired DeploymentConfig and Route
- ConvergenceEngine: Get-or-create, then compare-and-update, one resource at a time

The engine compares only the fields a builder sets, so calling it again
without any change issues no write.
"""

from .engine import ConvergenceEngine, ReconcileAction, ReconcileResult
from .resolver import EndpointResolver, ResolvedEndpoint

__all__ = [
    "ConvergenceEngine",
    "ReconcileAction",
    "ReconcileResult",
    "EndpointResolver",
    "ResolvedEndpoint",
]
