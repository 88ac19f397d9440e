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

"""In-memory stand-ins for kind and the cluster API used across tests."""

from __future__ import annotations

import pytest

from demo_manager import prerequisites
from demo_manager.config import TimeoutConfig
from demo_manager.constants import FAKE_DCGM_SELECTOR, LABEL_CONTROL_PLANE
from demo_manager.errors import ToolInvocationError
from demo_manager.orchestrator import build_context
from demo_manager.payloads import load_payloads

WORKLOAD_SELECTORS = [
    "app.kubernetes.io/name=nvsentinel",
    "app.kubernetes.io/name=fault-quarantine",
    "app.kubernetes.io/name=mongodb",
    "app.kubernetes.io/name=gpu-health-monitor",
]


class FakeClusterClient:
    """Records every call and serves node/pod state from memory."""

    def __init__(self, context: str = "kind-nvsentinel-demo") -> None:
        self.context = context
        self.events: list[tuple] = []
        self.nodes: list[dict] = []
        self.pods: dict[str, list[bool]] = {sel: [True] for sel in [*WORKLOAD_SELECTORS, FAKE_DCGM_SELECTOR]}
        self.namespaces: set[str] = set()
        self.applied: list[dict] = []
        self.failures: dict[str, Exception] = {}

    def _maybe_fail(self, method: str) -> None:
        if method in self.failures:
            raise self.failures[method]

    def kubectl(self, *args: str, stdin: str | None = None) -> str:
        self.events.append(("kubectl", *args))
        self._maybe_fail("kubectl")
        if args[:2] == ("get", "nodes"):
            return "".join(f"{node['name']}   Ready\n" for node in self.nodes)
        if args[:2] == ("get", "pods"):
            return "".join(f"{sel}   1/1   Running\n" for sel in self.pods)
        return ""

    def helm(self, *args: str) -> str:
        self.events.append(("helm", *args))
        self._maybe_fail("helm")
        return ""

    def activate(self) -> None:
        self.events.append(("activate", self.context))

    def get_objects(self, kind: str, namespace: str | None = None, selector: str | None = None) -> list[dict]:
        self.events.append(("get", kind, namespace, selector))
        if kind == "nodes":
            nodes = self.nodes
            if selector and selector.startswith("!"):
                nodes = [n for n in nodes if selector[1:] not in n["labels"]]
            return [_obj(n["name"], n["ready"], n["labels"]) for n in nodes]
        return [_obj(f"{selector}-{i}", ready) for i, ready in enumerate(self.pods.get(selector, []))]

    def apply(self, manifests: list[dict], server_side: bool = False) -> None:
        self.events.append(("apply", *(m["kind"] for m in manifests)))
        self._maybe_fail("apply")
        for manifest in manifests:
            if manifest["kind"] == "Namespace":
                self.namespaces.add(manifest["metadata"]["name"])
            else:
                self.applied.append(manifest)

    def apply_url(self, url: str, server_side: bool = False) -> None:
        self.events.append(("apply_url", url, server_side))
        self._maybe_fail("apply_url")

    def ensure_namespace(self, name: str) -> None:
        self.apply([{"apiVersion": "v1", "kind": "Namespace", "metadata": {"name": name}}])

    def label_node(self, node: str, labels: dict[str, str]) -> None:
        self.events.append(("label", node))
        for n in self.nodes:
            if n["name"] == node:
                n["labels"].update(labels)


class FakeKind:
    """kind stand-in that refuses to create a cluster whose name is taken."""

    def __init__(self, client: FakeClusterClient) -> None:
        self.client = client
        self.topologies: dict[str, list[str]] = {}
        self.calls: list[tuple[str, str]] = []

    def clusters(self) -> list[str]:
        return list(self.topologies)

    def create(self, name: str, config: dict, image: str | None = None) -> None:
        self.calls.append(("create", name))
        if name in self.topologies:
            raise ToolInvocationError(f"kind create cluster --name {name}", 1, "node(s) already exist")
        roles = [node["role"] for node in config["nodes"]]
        self.topologies[name] = roles
        self.client.nodes = [
            {
                "name": f"{name}-{role}" if roles.count(role) == 1 else f"{name}-{role}{i}",
                "ready": True,
                "labels": {LABEL_CONTROL_PLANE: ""} if role == "control-plane" else {},
            }
            for i, role in enumerate(roles)
        ]

    def delete(self, name: str) -> None:
        self.calls.append(("delete", name))
        del self.topologies[name]
        self.client.nodes = []


def _obj(name: str, ready: bool, labels: dict | None = None) -> dict:
    return {
        "metadata": {"name": name, "labels": labels or {}},
        "status": {"conditions": [{"type": "Ready", "status": "True" if ready else "False"}]},
    }


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("NVSENTINEL_VERSION", "NVSENTINEL_NAMESPACE", "NVSENTINEL_VALUES_DIR", "DEMO_CLUSTER_NAME"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def tools_present(monkeypatch):
    monkeypatch.setattr(prerequisites, "command_exists", lambda cmd: True)
    monkeypatch.setattr(prerequisites, "docker_daemon_reachable", lambda: True)


@pytest.fixture
def fake_client():
    return FakeClusterClient()


@pytest.fixture
def fake_kind(fake_client):
    return FakeKind(fake_client)


@pytest.fixture
def fast_timeouts():
    return TimeoutConfig(nodes=0, simulator=0, workload_group=0, poll_interval=0)


@pytest.fixture
def ctx(fake_kind, fake_client, fast_timeouts, tools_present):
    return build_context(
        kind=fake_kind,
        client=fake_client,
        timeouts=fast_timeouts,
        payloads=load_payloads(),
    )
