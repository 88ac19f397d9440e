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

from __future__ import annotations

from demo_manager.payloads import load_payloads


def test_embedded_payloads():
    payloads = load_payloads()

    assert [n["role"] for n in payloads.cluster_config["nodes"]] == ["control-plane", "worker"]
    assert [m["kind"] for m in payloads.simulator_manifests] == ["DaemonSet", "Service"]
    assert payloads.node_labels == {
        "nvidia.com/gpu.present": "true",
        "nvsentinel.dgxc.nvidia.com/driver.installed": "true",
        "nvsentinel.dgxc.nvidia.com/kata.enabled": "false",
        "nvsentinel.dgxc.nvidia.com/dcgm.version": "4.x",
    }
    assert [g.name for g in payloads.workload_groups] == [
        "Platform Connectors", "Fault Quarantine", "MongoDB", "GPU Health Monitor"]


def test_payloads_can_be_loaded_from_another_directory(tmp_path):
    (tmp_path / "kind-cluster.yaml").write_text(
        "kind: Cluster\napiVersion: kind.x-k8s.io/v1alpha4\nnodes:\n  - role: control-plane\n")
    (tmp_path / "fake-dcgm.yaml").write_text("---\napiVersion: v1\nkind: Service\nmetadata:\n  name: x\n")
    (tmp_path / "node-labels.yaml").write_text("example.com/flag: true\n")

    payloads = load_payloads(tmp_path)

    assert payloads.cluster_config["nodes"] == [{"role": "control-plane"}]
    assert [m["kind"] for m in payloads.simulator_manifests] == ["Service"]
    assert payloads.node_labels == {"example.com/flag": "True"}
