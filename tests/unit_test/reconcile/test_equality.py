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
Unit tests for the desired/live spec comparison.

The comparison decides whether the engine writes at all, so these tests pin
down which differences count as drift and which are platform-owned noise.
"""

from jenkins_operator.reconcile.builders import build_route
from jenkins_operator.reconcile.equality import matches_desired, overlay, spec_matches
from jenkins_operator.schema.resources import Route
from tests.unit_test.factories import make_instance


class TestMatchesDesired:
    """Test suite for the recursive subset comparison."""

    def test_identical_values_match(self):
        desired = {"replicas": 1, "selector": {"app": "ci"}, "triggers": [{"type": "ConfigChange"}]}
        assert matches_desired(desired, dict(desired))

    def test_fields_only_on_live_side_are_ignored(self):
        desired = {"replicas": 1, "strategy": {"type": "Recreate"}}
        live = {"replicas": 1, "revisionHistoryLimit": 10, "strategy": {"type": "Recreate", "resources": {}}}
        assert matches_desired(desired, live)

    def test_missing_field_on_live_side_is_drift(self):
        assert not matches_desired({"selector": {"app": "ci"}}, {})

    def test_changed_scalar_is_drift(self):
        assert not matches_desired({"replicas": 1}, {"replicas": 3})

    def test_extra_list_element_is_drift(self):
        desired = {"env": [{"name": "A", "value": "1"}]}
        live = {"env": [{"name": "A", "value": "1"}, {"name": "B", "value": "2"}]}
        assert not matches_desired(desired, live)

    def test_list_elements_compare_as_subsets(self):
        desired = {"containers": [{"name": "ci", "image": "jenkins:2.3"}]}
        live = {"containers": [{"name": "ci", "image": "jenkins:2.3", "terminationMessagePath": "/dev/x"}]}
        assert matches_desired(desired, live)

    def test_bool_does_not_match_int(self):
        assert not matches_desired({"readOnly": True}, {"readOnly": 1})
        assert matches_desired({"readOnly": False}, {"readOnly": False})

    def test_type_mismatch_is_drift(self):
        assert not matches_desired({"selector": {"app": "ci"}}, {"selector": "app=ci"})
        assert not matches_desired({"env": []}, {"env": None})


class TestSpecMatches:
    """Test suite for resource-level comparison."""

    def test_platform_defaults_do_not_count_as_drift(self):
        desired = build_route(make_instance())
        live = Route.model_validate(
            {
                "apiVersion": "route.openshift.io/v1",
                "kind": "Route",
                "metadata": {"name": "ci", "namespace": "team-a", "resourceVersion": "42", "uid": "abc"},
                "spec": {
                    "host": "ci-team-a.apps.example.com",
                    "wildcardPolicy": "None",
                    "to": {"kind": "Service", "name": "ci", "weight": 100},
                    "port": {"targetPort": 8080},
                    "tls": {"termination": "edge", "insecureEdgeTerminationPolicy": "Redirect"},
                },
                "status": {"ingress": []},
            }
        )
        assert spec_matches(desired, live)

    def test_metadata_is_not_compared(self):
        desired = build_route(make_instance())
        live = build_route(make_instance())
        live.metadata.labels = {"app": "something-else"}
        live.metadata.resource_version = "7"
        assert spec_matches(desired, live)

    def test_changed_termination_is_drift(self):
        desired = build_route(make_instance())
        live = build_route(make_instance())
        live.spec.tls.termination = "passthrough"
        assert not spec_matches(desired, live)


class TestOverlay:
    """Test suite for merging a desired spec onto a live spec."""

    def test_desired_values_win(self):
        merged = overlay({"replicas": 3}, {"replicas": 1})
        assert merged == {"replicas": 1}

    def test_live_only_keys_are_kept(self):
        merged = overlay(
            {"host": "ci.example.com", "tls": {"termination": "passthrough", "key": "k"}},
            {"tls": {"termination": "edge"}},
        )
        assert merged == {"host": "ci.example.com", "tls": {"termination": "edge", "key": "k"}}

    def test_lists_are_replaced(self):
        merged = overlay({"env": [{"name": "A"}, {"name": "B"}]}, {"env": [{"name": "A"}]})
        assert merged == {"env": [{"name": "A"}]}

    def test_inputs_are_not_modified(self):
        live = {"strategy": {"type": "Rolling"}}
        desired = {"strategy": {"type": "Recreate"}}
        overlay(live, desired)
        assert live == {"strategy": {"type": "Rolling"}}
        assert desired == {"strategy": {"type": "Recreate"}}
