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

from demo_manager import prerequisites
from demo_manager.errors import ToolInvocationError
from demo_manager.orchestrator import STAGE_KEYS, build_context, build_stages, run_demo_setup
from demo_manager.pipeline import FailurePolicy, IdempotencyPolicy

from conftest import WORKLOAD_SELECTORS


def test_stage_order():
    assert STAGE_KEYS == (
        "prerequisites",
        "cluster",
        "cert-manager",
        "prometheus-crds",
        "nvsentinel",
        "fake-dcgm",
        "label-nodes",
        "wait-ready",
        "status",
    )


def test_stage_policies():
    stages = {stage.key: stage for stage in build_stages()}

    assert stages["cluster"].idempotency is IdempotencyPolicy.RECREATE
    assert stages["nvsentinel"].idempotency is IdempotencyPolicy.APPLY_IF_ABSENT
    assert stages["status"].failure_policy is FailurePolicy.BEST_EFFORT
    assert all(
        stage.failure_policy is FailurePolicy.ABORT for key, stage in stages.items() if key != "status"
    )


def test_end_to_end_demo_setup(ctx, fake_kind, fake_client):
    outcome = run_demo_setup(ctx)

    assert outcome.exit_code == 0
    assert [r.stage for r in outcome.results] == list(STAGE_KEYS)
    assert all(r.ok for r in outcome.results)
    assert fake_kind.topologies == {"nvsentinel-demo": ["control-plane", "worker"]}
    assert {"nvsentinel", "gpu-operator"} <= fake_client.namespaces
    pod_probes = [e[3] for e in fake_client.events if e[:2] == ("get", "pods")]
    assert pod_probes == ["app=nvidia-dcgm", *WORKLOAD_SELECTORS]


def test_application_install_waits_for_node_readiness(ctx, fake_client):
    run_demo_setup(ctx)

    events = fake_client.events
    node_wait = events.index(("get", "nodes", None, None))
    nvsentinel_install = next(
        i for i, e in enumerate(events) if e[0] == "helm" and "nvsentinel" in e[1:4])
    assert node_wait < nvsentinel_install


def test_failed_group_stops_the_gate(ctx, fake_client):
    fake_client.pods["app.kubernetes.io/name=fault-quarantine"] = [False]

    outcome = run_demo_setup(ctx)

    assert outcome.exit_code == 1
    assert outcome.failed_stage.stage == "wait-ready"
    assert outcome.failed_stage.error == "Fault Quarantine failed to become ready within 0s"
    probed = [e[3] for e in fake_client.events if e[:2] == ("get", "pods")]
    assert "app.kubernetes.io/name=nvsentinel" in probed
    assert "app.kubernetes.io/name=mongodb" not in probed
    assert "app.kubernetes.io/name=gpu-health-monitor" not in probed
    assert not outcome.ran("status")


def test_missing_tools_stop_before_the_cluster_is_touched(ctx, fake_kind, monkeypatch):
    monkeypatch.setattr(prerequisites, "command_exists", lambda cmd: cmd == "docker")

    outcome = run_demo_setup(ctx)

    assert [r.stage for r in outcome.results] == ["prerequisites"]
    assert outcome.failed_stage.error.startswith("Missing required tools: kind kubectl helm")
    assert fake_kind.calls == []


def test_status_failure_does_not_fail_the_run(ctx, fake_client):
    fake_client.failures["kubectl"] = ToolInvocationError("kubectl get nodes", 1, "gone")

    outcome = run_demo_setup(ctx)

    assert outcome.exit_code == 0
    assert not outcome.results[-1].ok


def test_ready_banner_is_not_printed_when_status_listing_fails(ctx, fake_client, capsys):
    fake_client.failures["kubectl"] = ToolInvocationError("kubectl get nodes", 1, "gone")

    run_demo_setup(ctx)

    err = capsys.readouterr().err
    assert "Demo Environment Ready" not in err
    assert "Cluster status did not complete" in err


def test_ready_banner_follows_a_successful_run(ctx, capsys):
    outcome = run_demo_setup(ctx)

    assert outcome.exit_code == 0
    assert "Demo Environment Ready" in capsys.readouterr().err


def test_build_context_applies_overrides(fake_kind):
    ctx = build_context(cluster_name="other-demo", version="v1.2.3", kind=fake_kind)

    assert ctx.cluster_cfg.cluster_name == "other-demo"
    assert ctx.client.context == "kind-other-demo"
    assert ctx.comp_cfg.version == "v1.2.3"
    assert ctx.kind is fake_kind
