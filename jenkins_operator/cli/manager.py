#!/usr/bin/env python3
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
CLI tool for reconciling Jenkins instances

Usage:
    python -m jenkins_operator.cli.manager --help
    python -m jenkins_operator.cli.manager reconcile --namespace team-a --name ci
    python -m jenkins_operator.cli.manager resolve --namespace team-a --name ci
    python -m jenkins_operator.cli.manager render --file jenkins.yaml --host ci.example.com
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

import yaml

from jenkins_operator.config import settings
from jenkins_operator.exceptions import OperatorError

logger = logging.getLogger(__name__)


async def run_reconciliation(namespace: str, name: str):
    """Run one reconcile pass for an instance read from the cluster"""
    from jenkins_operator.platform import get_platform_store
    from jenkins_operator.service.jenkins_service import JenkinsPlatformService

    service = JenkinsPlatformService(get_platform_store())
    instance = await service.get_instance(namespace, name)
    results = await service.reconcile(instance)
    print(json.dumps([r.to_dict() for r in results], indent=2))


async def resolve_endpoint(namespace: str, name: str):
    """Print the externally visible URL of an instance"""
    from jenkins_operator.platform import get_platform_store
    from jenkins_operator.reconcile.resolver import EndpointResolver

    endpoint = await EndpointResolver(get_platform_store()).resolve(namespace, name)
    print(json.dumps({"host": endpoint.host, "protocol": endpoint.protocol, "url": endpoint.url}, indent=2))


def render_resources(path: str, host: str, protocol: str):
    """Print the desired Route and DeploymentConfig for an instance manifest"""
    from jenkins_operator.reconcile.builders import build_deployment_config, build_route
    from jenkins_operator.reconcile.resolver import ResolvedEndpoint
    from jenkins_operator.schema.resources import Jenkins

    with open(path) as f:
        instance = Jenkins.model_validate(yaml.safe_load(f))

    endpoint = ResolvedEndpoint(host=host, protocol=protocol)
    documents = [build_route(instance).to_dict(), build_deployment_config(instance, endpoint).to_dict()]
    print(yaml.safe_dump_all(documents, sort_keys=False), end="")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Jenkins operator management tool")
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, help_text in (
        ("reconcile", "Reconcile the Route and DeploymentConfig of an instance"),
        ("resolve", "Show the external URL of an instance"),
    ):
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("--namespace", required=True, help="Namespace of the Jenkins resource")
        sub.add_argument("--name", required=True, help="Name of the Jenkins resource")

    render = subparsers.add_parser("render", help="Print desired resources without contacting the cluster")
    render.add_argument("--file", required=True, help="Path to a Jenkins manifest (YAML)")
    render.add_argument("--host", required=True, help="Route host to embed in JENKINS_UI_URL")
    render.add_argument("--protocol", default="https", choices=["http", "https"])
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=settings.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    args = build_parser().parse_args(argv)

    try:
        if args.command == "reconcile":
            asyncio.run(run_reconciliation(args.namespace, args.name))
        elif args.command == "resolve":
            asyncio.run(resolve_endpoint(args.namespace, args.name))
        elif args.command == "render":
            render_resources(args.file, args.host, args.protocol)
    except OperatorError as e:
        logger.error(f"{args.command} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
