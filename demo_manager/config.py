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

"""Configuration classes and config models."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from demo_manager.constants import (
    DEFAULT_APPLICATION_TIMEOUT,
    DEFAULT_CERT_MANAGER_TIMEOUT,
    DEFAULT_CERT_MANAGER_VERSION,
    DEFAULT_CLUSTER_NAME,
    DEFAULT_NODES_TIMEOUT,
    DEFAULT_NVSENTINEL_VERSION,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_PROMETHEUS_OPERATOR_VERSION,
    DEFAULT_SIMULATOR_TIMEOUT,
    DEFAULT_WORKLOAD_GROUP_TIMEOUT,
    KIND_CONTEXT_PREFIX,
    NS_GPU_OPERATOR,
    NS_NVSENTINEL,
    NVSENTINEL_OCI,
    VALUES_DIR,
)


# ============================================================================
# Configuration classes
# ============================================================================

class ClusterConfig(BaseSettings):
    """kind cluster configuration, auto-loaded from DEMO_* env vars.

    The node topology (one control-plane, one worker) is fixed by the
    embedded kind config and is not configurable here.

    Attributes:
        cluster_name: Name of the kind cluster.
        kind_node_image: kind node image override, or None for kind's default.
    """

    model_config = SettingsConfigDict(env_prefix="DEMO_", extra="ignore")

    cluster_name: str = Field(default=DEFAULT_CLUSTER_NAME, pattern=r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")
    kind_node_image: str | None = None

    @property
    def context(self) -> str:
        """kubeconfig context name kind assigns to the cluster."""
        return f"{KIND_CONTEXT_PREFIX}{self.cluster_name}"


class ComponentConfig(BaseSettings):
    """Component versions and namespaces, auto-loaded from NVSENTINEL_* env vars.

    Attributes:
        version: NVSentinel Helm chart version (``NVSENTINEL_VERSION``).
        namespace: Namespace NVSentinel is installed into.
        chart: OCI reference of the NVSentinel chart.
        cert_manager_version: cert-manager Helm chart version.
        prometheus_operator_version: prometheus-operator release the CRDs come from.
        simulator_namespace: Namespace for the fake DCGM workload.
        values_dir: Directory holding the demo Helm values overlays.
    """

    model_config = SettingsConfigDict(env_prefix="NVSENTINEL_", extra="ignore")

    version: str = Field(default=DEFAULT_NVSENTINEL_VERSION, min_length=1)
    namespace: str = NS_NVSENTINEL
    chart: str = NVSENTINEL_OCI
    cert_manager_version: str = Field(default=DEFAULT_CERT_MANAGER_VERSION, min_length=1)
    prometheus_operator_version: str = Field(default=DEFAULT_PROMETHEUS_OPERATOR_VERSION, min_length=1)
    simulator_namespace: str = NS_GPU_OPERATOR
    values_dir: Path = VALUES_DIR


class TimeoutConfig(BaseSettings):
    """Per-stage readiness timeouts in seconds, auto-loaded from DEMO_TIMEOUT_* env vars.

    Attributes:
        nodes: Wait for all cluster nodes to become Ready.
        cert_manager: Helm ``--timeout`` for cert-manager.
        application: Helm ``--timeout`` for NVSentinel, which waits on MongoDB.
        simulator: Wait for the fake DCGM pods to accept connections.
        workload_group: Wait for each NVSentinel workload group.
        poll_interval: Seconds between readiness probe evaluations.
    """

    model_config = SettingsConfigDict(env_prefix="DEMO_TIMEOUT_", extra="ignore")

    nodes: float = Field(default=DEFAULT_NODES_TIMEOUT, ge=0)
    cert_manager: int = Field(default=DEFAULT_CERT_MANAGER_TIMEOUT, ge=1)
    application: int = Field(default=DEFAULT_APPLICATION_TIMEOUT, ge=1)
    simulator: float = Field(default=DEFAULT_SIMULATOR_TIMEOUT, ge=0)
    workload_group: float = Field(default=DEFAULT_WORKLOAD_GROUP_TIMEOUT, ge=0)
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS, ge=0)
