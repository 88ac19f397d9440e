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

"""kind cluster lifecycle and demo node labels."""

from __future__ import annotations

from demo_manager import info, success, warn
from demo_manager.client import ClusterClient, KindProvider
from demo_manager.constants import LABEL_CONTROL_PLANE
from demo_manager.pipeline import PipelineContext
from demo_manager.readiness import ReadinessProbe


# ============================================================================
# Cluster operations
# ============================================================================

def delete_cluster(kind: KindProvider, cluster_name: str) -> bool:
    """Delete the kind cluster if it exists.

    Args:
        kind: kind lifecycle manager.
        cluster_name: Name of the cluster to delete.

    Returns:
        True if a cluster was deleted, False if none existed.
    """
    if cluster_name not in kind.clusters():
        warn(f"Cluster '{cluster_name}' not found or already deleted")
        return False
    info(f"Deleting KIND cluster '{cluster_name}'...")
    kind.delete(cluster_name)
    success(f"Cluster '{cluster_name}' deleted")
    return True


def create_cluster(ctx: PipelineContext) -> None:
    """Create a fresh kind cluster, destroying any cluster of the same name.

    Recreating is how reruns stay idempotent: the live topology is never
    diffed against the desired one. The operator's kubectl context is then
    switched to the new cluster.

    Args:
        ctx: Pipeline context carrying the cluster config and kind payload.
    """
    name = ctx.cluster_cfg.cluster_name
    info(f"Creating KIND cluster: {name}")

    if name in ctx.kind.clusters():
        warn(f"Cluster '{name}' already exists. Deleting it first...")
        ctx.kind.delete(name)

    ctx.kind.create(name, ctx.payloads.cluster_config, image=ctx.cluster_cfg.kind_node_image)
    success("Cluster created successfully")

    ctx.client.activate()
    info("Waiting for nodes to be ready...")


def node_readiness(ctx: PipelineContext) -> list[ReadinessProbe]:
    return [ReadinessProbe(description="Cluster nodes", kind="nodes", timeout=ctx.timeouts.nodes)]


# ============================================================================
# Demo node labels
# ============================================================================

def worker_nodes(client: ClusterClient) -> list[str]:
    """Return the names of all nodes without the control-plane role, sorted."""
    nodes = client.get_objects("nodes", selector=f"!{LABEL_CONTROL_PLANE}")
    return sorted(node["metadata"]["name"] for node in nodes)


def label_worker_nodes(ctx: PipelineContext) -> None:
    """Apply the simulated GPU label set to every worker node.

    Control-plane nodes are never labeled. Existing values are overwritten,
    so relabeling is a no-op when the labels already match.

    Args:
        ctx: Pipeline context carrying the client and label set.
    """
    info("Labeling worker nodes for GPU simulation...")
    nodes = worker_nodes(ctx.client)
    if not nodes:
        warn("No worker nodes found to label")
        return
    for node in nodes:
        ctx.client.label_node(node, ctx.payloads.node_labels)
        info(f"  Labeled {node}")
    success(f"Labeled {len(nodes)} worker node(s) for demo")
