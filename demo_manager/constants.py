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

"""Constants, dependency loading, and dep_value helper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

# -- Resolved paths --
PACKAGE_DIR = Path(__file__).resolve().parent
MANIFESTS_DIR = PACKAGE_DIR / "manifests"
VALUES_DIR = PACKAGE_DIR / "values"


def load_dependencies() -> dict:
    """Load pinned versions and fixed demo data from dependencies.yaml.

    Returns:
        Parsed YAML content as a nested dictionary.
    """
    deps_file = PACKAGE_DIR / "dependencies.yaml"
    with open(deps_file) as f:
        return yaml.safe_load(f)


DEPENDENCIES = load_dependencies()


def dep_value(*keys: str, default: Any = None) -> Any:
    """Safely traverse the DEPENDENCIES dict by key path.

    Args:
        *keys: Sequence of dictionary keys to traverse.
        default: Value to return if any key is missing.

    Returns:
        The value at the nested key path, or *default* if not found.
    """
    node = DEPENDENCIES
    for key in keys:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


REQUIRED_TOOLS: list[str] = dep_value("required_tools", default=["docker", "kind", "kubectl", "helm", "jq"])

# -- Cluster --
DEFAULT_CLUSTER_NAME = "nvsentinel-demo"
KIND_CONTEXT_PREFIX = "kind-"

# -- Namespaces --
NS_NVSENTINEL = dep_value("nvsentinel", "namespace", default="nvsentinel")
NS_CERT_MANAGER = dep_value("cert_manager", "namespace", default="cert-manager")
NS_GPU_OPERATOR = dep_value("fake_dcgm", "namespace", default="gpu-operator")

# -- Helm releases --
HELM_RELEASE_CERT_MANAGER = dep_value("cert_manager", "release", default="cert-manager")
HELM_RELEASE_NVSENTINEL = dep_value("nvsentinel", "release", default="nvsentinel")

# -- Helm repos --
HELM_REPO_JETSTACK = dep_value("cert_manager", "repo", default="jetstack")
HELM_REPO_JETSTACK_URL = dep_value("cert_manager", "repo_url", default="https://charts.jetstack.io")
HELM_CHART_CERT_MANAGER = dep_value("cert_manager", "chart", default="jetstack/cert-manager")
NVSENTINEL_OCI = dep_value("nvsentinel", "chart", default="oci://ghcr.io/nvidia/nvsentinel")

# -- Helm override keys --
HELM_KEY_CERT_MANAGER_CRDS = "crds.enabled"

# -- Prometheus operator CRDs --
PROMETHEUS_OPERATOR_GITHUB_REPO = "prometheus-operator/prometheus-operator"
PROMETHEUS_CRD_PATH = "example/prometheus-operator-crd"
PROMETHEUS_CRDS: list[str] = dep_value(
    "prometheus_operator", "crds", default=["monitoring.coreos.com_podmonitors.yaml"])

# -- Labels --
LABEL_CONTROL_PLANE = "node-role.kubernetes.io/control-plane"
FAKE_DCGM_SELECTOR = dep_value("fake_dcgm", "selector", default="app=nvidia-dcgm")
FAKE_DCGM_PORT = dep_value("fake_dcgm", "port", default=5555)

# -- Relative paths --
REL_KIND_CLUSTER_YAML = "kind-cluster.yaml"
REL_FAKE_DCGM_YAML = "fake-dcgm.yaml"
REL_NODE_LABELS_YAML = "node-labels.yaml"
REL_DEMO_VALUES = "demo-values.yaml"
REL_DEMO_VALUES_ARM = "demo-values-arm.yaml"

# -- Host architectures that need the arm values overlay --
ARM_MACHINES = ("arm64", "aarch64")

# -- Component defaults --
DEFAULT_NVSENTINEL_VERSION = dep_value("nvsentinel", "version", default="v0.6.0")
DEFAULT_CERT_MANAGER_VERSION = dep_value("cert_manager", "version", default="v1.16.2")
DEFAULT_PROMETHEUS_OPERATOR_VERSION = dep_value("prometheus_operator", "version", default="v0.68.0")

# -- Timeouts (seconds) --
DEFAULT_NODES_TIMEOUT = 120
DEFAULT_CERT_MANAGER_TIMEOUT = 300
DEFAULT_APPLICATION_TIMEOUT = 600
DEFAULT_SIMULATOR_TIMEOUT = 120
DEFAULT_WORKLOAD_GROUP_TIMEOUT = 300
DEFAULT_POLL_INTERVAL_SECONDS = 2

# -- Readiness --
READY_CONDITION = "Ready"
