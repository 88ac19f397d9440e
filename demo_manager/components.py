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

"""cert-manager, Prometheus CRDs, NVSentinel, and fake DCGM installation."""

from __future__ import annotations

import copy
from pathlib import Path

from demo_manager import info, success
from demo_manager.config import ComponentConfig
from demo_manager.constants import (
    FAKE_DCGM_SELECTOR,
    HELM_CHART_CERT_MANAGER,
    HELM_KEY_CERT_MANAGER_CRDS,
    HELM_RELEASE_CERT_MANAGER,
    HELM_RELEASE_NVSENTINEL,
    HELM_REPO_JETSTACK,
    HELM_REPO_JETSTACK_URL,
    NS_CERT_MANAGER,
    PROMETHEUS_CRDS,
    REL_DEMO_VALUES,
    REL_DEMO_VALUES_ARM,
)
from demo_manager.errors import DemoSetupError, ToolInvocationError
from demo_manager.pipeline import PipelineContext
from demo_manager.readiness import ReadinessProbe
from demo_manager.utils import is_arm_host, prometheus_crd_url


# ============================================================================
# cert-manager
# ============================================================================

def install_cert_manager(ctx: PipelineContext) -> None:
    """Install or upgrade cert-manager via Helm and wait for it.

    Args:
        ctx: Pipeline context with the cert-manager version and timeout.
    """
    info(f"Installing cert-manager {ctx.comp_cfg.cert_manager_version}...")
    ctx.client.helm("repo", "add", HELM_REPO_JETSTACK, HELM_REPO_JETSTACK_URL, "--force-update")
    ctx.client.helm(
        "upgrade", "--install", HELM_RELEASE_CERT_MANAGER, HELM_CHART_CERT_MANAGER,
        "--namespace", NS_CERT_MANAGER,
        "--create-namespace",
        "--version", ctx.comp_cfg.cert_manager_version,
        "--set", f"{HELM_KEY_CERT_MANAGER_CRDS}=true",
        "--wait",
        "--timeout", f"{ctx.timeouts.cert_manager}s",
    )
    success("cert-manager installed")


# ============================================================================
# Prometheus CRDs
# ============================================================================

def install_prometheus_crds(ctx: PipelineContext) -> None:
    """Install only the Prometheus CRDs NVSentinel needs (PodMonitor).

    Args:
        ctx: Pipeline context with the prometheus-operator version.

    Raises:
        DemoSetupError: If kubectl reports that applying a CRD failed.
    """
    info("Installing Prometheus CRDs (for PodMonitor support)...")
    for crd in PROMETHEUS_CRDS:
        url = prometheus_crd_url(ctx.comp_cfg.prometheus_operator_version, crd)
        try:
            ctx.client.apply_url(url, server_side=True)
        except ToolInvocationError as err:
            raise DemoSetupError(f"Failed to install Prometheus CRDs: {err}") from err
    success("Prometheus CRDs installed")


# ============================================================================
# NVSentinel
# ============================================================================

def values_files(comp_cfg: ComponentConfig, machine: str | None = None) -> list[Path]:
    """Resolve the Helm values files, adding the arm overlay on ARM hosts.

    Args:
        comp_cfg: Component configuration with the values directory.
        machine: Host machine name override, or None to detect it.

    Returns:
        Values files in the order they are passed to Helm.

    Raises:
        DemoSetupError: If a values file is missing.
    """
    files = [comp_cfg.values_dir / REL_DEMO_VALUES]
    if is_arm_host(machine):
        files.append(comp_cfg.values_dir / REL_DEMO_VALUES_ARM)
    for path in files:
        if not path.is_file():
            raise DemoSetupError(f"Helm values file not found: {path}")
    return files


def install_nvsentinel(ctx: PipelineContext) -> None:
    """Install or upgrade NVSentinel from its OCI registry and wait for it.

    Args:
        ctx: Pipeline context with the NVSentinel version, namespace, and timeout.
    """
    comp_cfg = ctx.comp_cfg
    info("Installing NVSentinel (minimal configuration)...")
    ctx.client.ensure_namespace(comp_cfg.namespace)

    info(f"Installing NVSentinel {comp_cfg.version} from OCI registry...")
    info("(Set NVSENTINEL_VERSION env var to use a different version)")
    info("This includes a MongoDB pod and may take ~1-2 minutes to initialize")

    values_args = [arg for path in values_files(comp_cfg) for arg in ("--values", str(path))]
    ctx.client.helm(
        "upgrade", "--install", HELM_RELEASE_NVSENTINEL, comp_cfg.chart,
        "--version", comp_cfg.version,
        "--namespace", comp_cfg.namespace,
        *values_args,
        "--wait",
        "--timeout", f"{ctx.timeouts.application}s",
    )
    success("NVSentinel installed")


# ============================================================================
# Fake DCGM
# ============================================================================

def simulator_manifests(ctx: PipelineContext) -> list[dict]:
    """Return the fake DCGM manifests placed in the configured namespace."""
    manifests = copy.deepcopy(ctx.payloads.simulator_manifests)
    for manifest in manifests:
        manifest.setdefault("metadata", {})["namespace"] = ctx.comp_cfg.simulator_namespace
    return manifests


def deploy_fake_dcgm(ctx: PipelineContext) -> None:
    """Deploy the fake DCGM DaemonSet and Service for GPU simulation.

    Args:
        ctx: Pipeline context with the simulator namespace and manifests.
    """
    info("Deploying fake DCGM for GPU simulation...")
    ctx.client.ensure_namespace(ctx.comp_cfg.simulator_namespace)
    ctx.client.apply(simulator_manifests(ctx))
    info("Waiting for fake DCGM to be ready...")


def fake_dcgm_readiness(ctx: PipelineContext) -> list[ReadinessProbe]:
    return [
        ReadinessProbe(
            description="Fake DCGM",
            kind="pods",
            timeout=ctx.timeouts.simulator,
            selector=FAKE_DCGM_SELECTOR,
            namespace=ctx.comp_cfg.simulator_namespace,
        )
    ]
