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
Structural comparison of desired and live specs.

Only the fields a builder sets take part in the comparison. A field the
builder leaves unset is owned by the platform (server-side defaults, the
Route host, ...) and never counts as drift. Lists are compared element by
element and must have the same length, so an added or removed entry is
drift even when the remaining entries match.
"""

import copy
from typing import Any, Dict

from jenkins_operator.schema.resources import Resource


def matches_desired(desired: Any, live: Any) -> bool:
    """True when every value set in ``desired`` is present and equal in ``live``"""
    if isinstance(desired, dict):
        if not isinstance(live, dict):
            return False
        return all(key in live and matches_desired(value, live[key]) for key, value in desired.items())
    if isinstance(desired, list):
        if not isinstance(live, list) or len(desired) != len(live):
            return False
        return all(matches_desired(d, l) for d, l in zip(desired, live))
    # bool is an int subclass, True must not match 1
    if isinstance(desired, bool) or isinstance(live, bool):
        return type(desired) is type(live) and desired == live
    return desired == live


def spec_matches(desired: Resource, live: Resource) -> bool:
    """Compare the spec of a freshly built resource with the stored one"""
    return matches_desired(desired.to_dict().get("spec", {}), live.to_dict().get("spec", {}))


def overlay(live: Dict[str, Any], desired: Dict[str, Any]) -> Dict[str, Any]:
    """Desired values replace live ones; keys only the live side has are kept"""
    merged = copy.deepcopy(live)
    for key, value in desired.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = overlay(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
