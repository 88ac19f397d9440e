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

"""Install subcommands (cert-manager, prometheus-crds, nvsentinel, fake-dcgm)."""

from __future__ import annotations

import typer

from demo_manager.orchestrator import build_context, run_stage

app = typer.Typer(help="Install components into an existing demo cluster.")


def _install(key: str, cluster_name: str | None, version: str | None = None) -> None:
    outcome = run_stage(key, build_context(cluster_name=cluster_name, version=version))
    raise typer.Exit(code=outcome.exit_code)


@app.command("cert-manager")
def cert_manager(
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="kind cluster name"),
) -> None:
    """Install cert-manager via Helm."""
    _install("cert-manager", cluster_name)


@app.command("prometheus-crds")
def prometheus_crds(
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="kind cluster name"),
) -> None:
    """Install the Prometheus PodMonitor CRD."""
    _install("prometheus-crds", cluster_name)


@app.command()
def nvsentinel(
    version: str | None = typer.Option(
        None, "--version", help="NVSentinel chart version (overrides NVSENTINEL_VERSION)"),
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="kind cluster name"),
) -> None:
    """Install NVSentinel from its OCI registry via Helm."""
    _install("nvsentinel", cluster_name, version)


@app.command("fake-dcgm")
def fake_dcgm(
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="kind cluster name"),
) -> None:
    """Deploy the fake DCGM DaemonSet and wait for port readiness."""
    _install("fake-dcgm", cluster_name)
