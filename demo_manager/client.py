# /*
# Copyright (c) 2025, NVIDIA CORPORATION.  All rights reserved.
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
# */

"""Handles for the kind lifecycle manager and the target cluster's API.

Every kubectl and helm call is pinned to an explicit kubeconfig context so
that no stage depends on whatever context happens to be active.
"""

from __future__ import annotations

import json

import yaml

from demo_manager.utils import run_tool


class KindProvider:
    """Create, list, and delete kind clusters."""

    def clusters(self) -> list[str]:
        """Return the names of all existing kind clusters."""
        output = run_tool("kind", "get", "clusters")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def create(self, name: str, config: dict, image: str | None = None) -> None:
        """Create a kind cluster from a kind ``Cluster`` config.

        Args:
            name: Cluster name.
            config: Parsed kind cluster configuration.
            image: Node image override, or None for kind's default.
        """
        args = ["create", "cluster", "--name", name, "--config=-"]
        if image:
            args += ["--image", image]
        run_tool("kind", *args, stdin=yaml.safe_dump(config, sort_keys=False))

    def delete(self, name: str) -> None:
        run_tool("kind", "delete", "cluster", "--name", name)


class ClusterClient:
    """kubectl and helm bound to a single kubeconfig context.

    Attributes:
        context: kubeconfig context every command runs against.
    """

    def __init__(self, context: str) -> None:
        self.context = context

    def kubectl(self, *args: str, stdin: str | None = None) -> str:
        return run_tool("kubectl", "--context", self.context, *args, stdin=stdin)

    def helm(self, *args: str) -> str:
        return run_tool("helm", "--kube-context", self.context, *args)

    def activate(self) -> None:
        """Make this cluster the operator's current kubectl context."""
        run_tool("kubectl", "config", "use-context", self.context)

    def get_objects(self, kind: str, namespace: str | None = None, selector: str | None = None) -> list[dict]:
        """List objects of a kind as parsed JSON.

        Args:
            kind: Resource kind (e.g. ``pods``, ``nodes``).
            namespace: Namespace to list in, or None for cluster-scoped kinds.
            selector: Label selector, or None for all objects.

        Returns:
            The ``items`` of the returned list, empty if nothing matches.
        """
        args = ["get", kind, "-o", "json"]
        if namespace:
            args += ["-n", namespace]
        if selector:
            args += ["-l", selector]
        return json.loads(self.kubectl(*args)).get("items", [])

    def apply(self, manifests: list[dict], server_side: bool = False) -> None:
        """Apply manifests from memory via ``kubectl apply -f -``."""
        args = ["apply", "-f", "-"]
        if server_side:
            args.append("--server-side")
        self.kubectl(*args, stdin=yaml.safe_dump_all(manifests, sort_keys=False))

    def apply_url(self, url: str, server_side: bool = False) -> None:
        args = ["apply", "-f", url]
        if server_side:
            args.append("--server-side")
        self.kubectl(*args)

    def ensure_namespace(self, name: str) -> None:
        """Create a namespace, or leave it untouched if it already exists."""
        self.apply([{"apiVersion": "v1", "kind": "Namespace", "metadata": {"name": name}}])

    def label_node(self, node: str, labels: dict[str, str]) -> None:
        """Set labels on a node, overwriting existing values."""
        pairs = [f"{key}={value}" for key, value in labels.items()]
        self.kubectl("label", "node", node, *pairs, "--overwrite")
