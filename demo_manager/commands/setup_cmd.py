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

"""Composite setup subcommands (demo, label-nodes, wait-ready, status)."""

from __future__ import annotations

import typer

from demo_manager.orchestrator import build_context, run_demo_setup, run_stage

app = typer.Typer(help="Composite setup workflows.")


@app.command()
def demo(
    version: str | None = typer.Option(
        None, "--version", help="NVSentinel chart version (overrides NVSENTINEL_VERSION)"),
    cluster_name: str | None = typer.Option(
        None, "--cluster-name", help="kind cluster name (overrides DEMO_CLUSTER_NAME)"),
) -> None:
    """Full demo setup: kind cluster + cert-manager + CRDs + NVSentinel + fake DCGM.

    Any existing cluster with the same name is deleted first, so rerunning
    always starts from a clean cluster.
    """
    ctx = build_context(cluster_name=cluster_name, version=version)
    outcome = run_demo_setup(ctx)
    raise typer.Exit(code=outcome.exit_code)


@app.command("label-nodes")
def label_nodes(
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="kind cluster name"),
) -> None:
    """Apply simulated GPU labels to worker nodes."""
    outcome = run_stage("label-nodes", build_context(cluster_name=cluster_name))
    raise typer.Exit(code=outcome.exit_code)


@app.command("wait-ready")
def wait_ready(
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="kind cluster name"),
) -> None:
    """Wait for every NVSentinel workload group to become ready."""
    outcome = run_stage("wait-ready", build_context(cluster_name=cluster_name))
    raise typer.Exit(code=outcome.exit_code)


@app.command()
def status(
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="kind cluster name"),
) -> None:
    """Print cluster nodes and NVSentinel pods."""
    run_stage("status", build_context(cluster_name=cluster_name))
