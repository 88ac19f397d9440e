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

"""Workload readiness gate and final status report."""

from __future__ import annotations

from rich.markup import escape
from rich.panel import Panel

from demo_manager import console, info, success
from demo_manager.pipeline import PipelineContext
from demo_manager.readiness import ReadinessProbe


def announce_workload_wait(ctx: PipelineContext) -> None:
    names = ", ".join(group.name for group in ctx.payloads.workload_groups)
    info(f"Waiting for all pods to be ready (this may take 2-3 minutes): {names}")


def workload_readiness(ctx: PipelineContext) -> list[ReadinessProbe]:
    """One probe per NVSentinel workload group, each with its own timeout.

    Groups are awaited in order; the first one that times out fails the
    stage and later groups are not checked.
    """
    return [
        ReadinessProbe(
            description=group.name,
            kind="pods",
            timeout=ctx.timeouts.workload_group,
            selector=group.selector,
            namespace=ctx.comp_cfg.namespace,
        )
        for group in ctx.payloads.workload_groups
    ]


def print_status(ctx: PipelineContext) -> None:
    """Print cluster nodes and NVSentinel pods.

    Both listings are fetched before anything is printed, so a failing
    query never follows the ready banner.
    """
    nodes = ctx.client.kubectl("get", "nodes")
    pods = ctx.client.kubectl("get", "pods", "-n", ctx.comp_cfg.namespace)

    console.print(Panel.fit("NVSentinel Demo Environment Ready! 🎉", style="bold green"))
    console.print(f"Cluster: {escape(ctx.cluster_cfg.cluster_name)}")
    console.print(f"Namespace: {escape(ctx.comp_cfg.namespace)}")
    console.print()
    console.print("[bold]Nodes:[/bold]")
    console.print(escape(nodes), end="")
    console.print()
    console.print("[bold]NVSentinel Pods:[/bold]")
    console.print(escape(pods), end="")
    console.print()
    success("Setup complete!")
