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

"""Declarative demo payloads: cluster topology, fake DCGM, node labels, workload groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from demo_manager.constants import (
    MANIFESTS_DIR,
    REL_FAKE_DCGM_YAML,
    REL_KIND_CLUSTER_YAML,
    REL_NODE_LABELS_YAML,
    dep_value,
)


@dataclass(frozen=True)
class WorkloadGroup:
    """A set of NVSentinel pods that must all become Ready.

    Attributes:
        name: Display name used in progress and failure messages.
        selector: Pod label selector identifying the group.
    """

    name: str
    selector: str


@dataclass(frozen=True)
class Payloads:
    """Static data the setup stages apply to the cluster.

    Attributes:
        cluster_config: kind ``Cluster`` configuration.
        simulator_manifests: fake DCGM DaemonSet and Service.
        node_labels: Labels applied to every worker node.
        workload_groups: Groups the readiness gate waits on, in order.
    """

    cluster_config: dict
    simulator_manifests: list[dict]
    node_labels: dict[str, str]
    workload_groups: list[WorkloadGroup] = field(default_factory=list)


def _load_yaml(path: Path) -> dict:
    with open(path) as f:
        return yaml.safe_load(f)


def _load_yaml_all(path: Path) -> list[dict]:
    with open(path) as f:
        return [doc for doc in yaml.safe_load_all(f) if doc]


def load_workload_groups() -> list[WorkloadGroup]:
    """Read the readiness gate's workload groups from dependencies.yaml."""
    return [
        WorkloadGroup(name=group["name"], selector=group["selector"])
        for group in dep_value("nvsentinel", "workload_groups", default=[])
    ]


def load_payloads(manifests_dir: Path = MANIFESTS_DIR) -> Payloads:
    """Load the embedded demo payloads.

    Args:
        manifests_dir: Directory holding the kind config, fake DCGM manifests,
            and node label set.

    Returns:
        The parsed payloads.
    """
    labels = _load_yaml(manifests_dir / REL_NODE_LABELS_YAML) or {}
    return Payloads(
        cluster_config=_load_yaml(manifests_dir / REL_KIND_CLUSTER_YAML),
        simulator_manifests=_load_yaml_all(manifests_dir / REL_FAKE_DCGM_YAML),
        node_labels={str(key): str(value) for key, value in labels.items()},
        workload_groups=load_workload_groups(),
    )
