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

"""Orchestration functions that compose domain modules into workflows."""

from __future__ import annotations

from demo_manager import info
from demo_manager.client import ClusterClient, KindProvider
from demo_manager.cluster import create_cluster, label_worker_nodes, node_readiness
from demo_manager.components import (
    deploy_fake_dcgm,
    fake_dcgm_readiness,
    install_cert_manager,
    install_nvsentinel,
    install_prometheus_crds,
)
from demo_manager.config import ClusterConfig, ComponentConfig, TimeoutConfig
from demo_manager.constants import FAKE_DCGM_PORT
from demo_manager.payloads import Payloads, load_payloads
from demo_manager.pipeline import (
    FailurePolicy,
    IdempotencyPolicy,
    PipelineContext,
    PipelineOutcome,
    Stage,
    run_stages,
)
from demo_manager.prerequisites import check_prerequisites
from demo_manager.status import announce_workload_wait, print_status, workload_readiness


# ============================================================================
# Stage definitions
# ============================================================================

def build_stages() -> list[Stage]:
    """Return the nine demo setup stages in execution order."""
    return [
        Stage(
            key="prerequisites",
            name="Checking prerequisites",
            action=lambda ctx: check_prerequisites(),
        ),
        Stage(
            key="cluster",
            name="Creating KIND cluster",
            action=create_cluster,
            idempotency=IdempotencyPolicy.RECREATE,
            gates=node_readiness,
            success_message="All nodes are ready",
        ),
        Stage(
            key="cert-manager",
            name="Installing cert-manager",
            action=install_cert_manager,
            idempotency=IdempotencyPolicy.APPLY_IF_ABSENT,
        ),
        Stage(
            key="prometheus-crds",
            name="Installing Prometheus CRDs",
            action=install_prometheus_crds,
            idempotency=IdempotencyPolicy.APPLY_IF_ABSENT,
        ),
        Stage(
            key="nvsentinel",
            name="Installing NVSentinel",
            action=install_nvsentinel,
            idempotency=IdempotencyPolicy.APPLY_IF_ABSENT,
        ),
        Stage(
            key="fake-dcgm",
            name="Deploying fake DCGM",
            action=deploy_fake_dcgm,
            idempotency=IdempotencyPolicy.APPLY_IF_ABSENT,
            gates=fake_dcgm_readiness,
            success_message=f"Fake DCGM deployed and ready (port {FAKE_DCGM_PORT} is listening)",
        ),
        Stage(
            key="label-nodes",
            name="Labeling worker nodes",
            action=label_worker_nodes,
            idempotency=IdempotencyPolicy.APPLY_IF_ABSENT,
        ),
        Stage(
            key="wait-ready",
            name="Waiting for NVSentinel workloads",
            action=announce_workload_wait,
            gates=workload_readiness,
            success_message="All pods are ready",
        ),
        Stage(
            key="status",
            name="Cluster status",
            action=print_status,
            failure_policy=FailurePolicy.BEST_EFFORT,
        ),
    ]


STAGE_KEYS = tuple(stage.key for stage in build_stages())


# ============================================================================
# Public API
# ============================================================================

def build_context(
    *,
    cluster_name: str | None = None,
    version: str | None = None,
    cluster_cfg: ClusterConfig | None = None,
    comp_cfg: ComponentConfig | None = None,
    timeouts: TimeoutConfig | None = None,
    payloads: Payloads | None = None,
    kind: KindProvider | None = None,
    client: ClusterClient | None = None,
) -> PipelineContext:
    """Resolve configuration and build the context handed to every stage.

    Args:
        cluster_name: CLI override for the cluster name, or None.
        version: CLI override for the NVSentinel version, or None.
        cluster_cfg: Cluster configuration, or None to load from env.
        comp_cfg: Component configuration, or None to load from env.
        timeouts: Timeout configuration, or None to load from env.
        payloads: Declarative payloads, or None for the embedded ones.
        kind: kind lifecycle manager, or None for the real one.
        client: Cluster client, or None to bind one to the cluster's context.

    Returns:
        The pipeline context.
    """
    cluster_cfg = cluster_cfg or ClusterConfig()
    comp_cfg = comp_cfg or ComponentConfig()
    if cluster_name is not None:
        cluster_cfg = cluster_cfg.model_copy(update={"cluster_name": cluster_name})
    if version is not None:
        comp_cfg = comp_cfg.model_copy(update={"version": version})

    return PipelineContext(
        kind=kind or KindProvider(),
        client=client or ClusterClient(cluster_cfg.context),
        cluster_cfg=cluster_cfg,
        comp_cfg=comp_cfg,
        timeouts=timeouts or TimeoutConfig(),
        payloads=payloads or load_payloads(),
    )


def run_demo_setup(ctx: PipelineContext) -> PipelineOutcome:
    """Run every setup stage in order, stopping at the first fatal failure.

    Args:
        ctx: Pipeline context.

    Returns:
        Outcome of the stages that ran.
    """
    info("Starting NVSentinel demo setup...")
    return run_stages(build_stages(), ctx)


def run_stage(key: str, ctx: PipelineContext) -> PipelineOutcome:
    """Run a single setup stage against an existing demo cluster.

    Args:
        key: Stage key (see ``STAGE_KEYS``).
        ctx: Pipeline context.

    Returns:
        Outcome holding the stage's result.

    Raises:
        KeyError: If *key* does not name a stage.
    """
    stages = {stage.key: stage for stage in build_stages()}
    return run_stages([stages[key]], ctx)
