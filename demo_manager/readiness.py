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

"""Readiness probes evaluated by polling the live cluster state."""

from __future__ import annotations

from dataclasses import dataclass

from tenacity import RetryError, retry, retry_if_result, stop_after_delay, wait_fixed

from demo_manager import console, logger
from demo_manager.client import ClusterClient
from demo_manager.constants import READY_CONDITION
from demo_manager.errors import ReadinessTimeoutError


def is_ready(obj: dict) -> bool:
    """Return True if a node or pod reports condition ``Ready=True``."""
    conditions = obj.get("status", {}).get("conditions") or []
    return any(
        cond.get("type") == READY_CONDITION and cond.get("status") == "True"
        for cond in conditions
    )


@dataclass(frozen=True)
class ReadinessProbe:
    """A (selector, namespace, timeout) check against live objects.

    The probe is satisfied when at least one object matches and every
    matching object is Ready. Objects that do not exist yet count as not
    ready, so pods still being created by a controller are waited for.

    Attributes:
        description: What is being waited for; names the failure.
        kind: Resource kind to list (``nodes`` or ``pods``).
        timeout: Seconds to wait before giving up.
        selector: Label selector, or None for all objects of the kind.
        namespace: Namespace, or None for cluster-scoped kinds.
    """

    description: str
    kind: str
    timeout: float
    selector: str | None = None
    namespace: str | None = None

    def is_satisfied(self, client: ClusterClient) -> bool:
        objects = client.get_objects(self.kind, namespace=self.namespace, selector=self.selector)
        ready = sum(1 for obj in objects if is_ready(obj))
        logger.debug("%s: %d/%d ready", self.description, ready, len(objects))
        return bool(objects) and ready == len(objects)


def wait_until_ready(probe: ReadinessProbe, client: ClusterClient, poll_interval: float) -> None:
    """Block until *probe* is satisfied or its timeout elapses.

    Args:
        probe: The readiness probe to evaluate.
        client: Cluster the probe is evaluated against.
        poll_interval: Seconds between evaluations.

    Raises:
        ReadinessTimeoutError: If the probe is still unsatisfied at its timeout.
    """

    @retry(
        retry=retry_if_result(lambda ok: not ok),
        stop=stop_after_delay(probe.timeout),
        wait=wait_fixed(poll_interval),
    )
    def _poll() -> bool:
        return probe.is_satisfied(client)

    with console.status(f"Waiting for {probe.description} to be ready..."):
        try:
            _poll()
        except RetryError as err:
            raise ReadinessTimeoutError(probe.description, probe.timeout) from err
