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

"""Stage model and the fail-fast driver that runs stages in order.

Stages run strictly one after another. A stage's action runs first, then
each of its readiness probes is awaited in order. The first fatal result
stops the run; stages after it never start.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from rich.markup import escape
from rich.panel import Panel

from demo_manager import console, error, logger, success, warn
from demo_manager.client import ClusterClient, KindProvider
from demo_manager.config import ClusterConfig, ComponentConfig, TimeoutConfig
from demo_manager.payloads import Payloads
from demo_manager.readiness import ReadinessProbe, wait_until_ready


class IdempotencyPolicy(str, Enum):
    """How a stage stays safe to rerun."""

    RECREATE = "destructive-recreate"
    APPLY_IF_ABSENT = "apply-if-absent"
    NONE = "none"


class FailurePolicy(str, Enum):
    """What a stage failure means for the rest of the run."""

    ABORT = "abort-pipeline"
    BEST_EFFORT = "best-effort"


class StageStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PipelineContext:
    """Everything a stage needs, passed explicitly to every stage.

    Attributes:
        kind: kind cluster lifecycle manager.
        client: kubectl/helm handle bound to the demo cluster's context.
        cluster_cfg: kind cluster configuration.
        comp_cfg: Component versions and namespaces.
        timeouts: Per-stage readiness timeouts.
        payloads: Declarative data applied by the stages.
    """

    kind: KindProvider
    client: ClusterClient
    cluster_cfg: ClusterConfig
    comp_cfg: ComponentConfig
    timeouts: TimeoutConfig
    payloads: Payloads


StageAction = Callable[[PipelineContext], None]
StageGates = Callable[[PipelineContext], list[ReadinessProbe]]


@dataclass(frozen=True)
class Stage:
    """One ordered unit of setup work.

    Attributes:
        key: Short identifier used by the CLI.
        name: Display name.
        action: Side-effecting body.
        idempotency: How rerunning the stage stays safe. Descriptive only;
            the action itself implements it.
        failure_policy: Whether a failure aborts the run.
        gates: Builds the readiness probes awaited after the action, or None.
        success_message: Printed once the action and every gate succeeded.
    """

    key: str
    name: str
    action: StageAction
    idempotency: IdempotencyPolicy = IdempotencyPolicy.NONE
    failure_policy: FailurePolicy = FailurePolicy.ABORT
    gates: StageGates | None = None
    success_message: str | None = None

    def run(self, ctx: PipelineContext, ordinal: int) -> StageResult:
        """Run the action and await every gate, converting failures into a result."""
        try:
            self.action(ctx)
            for probe in self.gates(ctx) if self.gates else []:
                wait_until_ready(probe, ctx.client, ctx.timeouts.poll_interval)
        except Exception as e:
            logger.debug("Stage %s failed", self.key, exc_info=True)
            fatal = self.failure_policy is FailurePolicy.ABORT
            if fatal:
                error(str(e))
            else:
                warn(f"{self.name} did not complete: {e}")
            return StageResult(self.key, ordinal, StageStatus.FAILED, fatal=fatal, error=str(e))

        if self.success_message:
            success(self.success_message)
        return StageResult(self.key, ordinal, StageStatus.SUCCEEDED)


@dataclass(frozen=True)
class StageResult:
    """Outcome of a single stage.

    Attributes:
        stage: Key of the stage.
        ordinal: One-based position in the run.
        status: Whether the stage succeeded.
        fatal: True if the failure aborted the run.
        error: Failure message, or None on success.
    """

    stage: str
    ordinal: int
    status: StageStatus
    fatal: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is StageStatus.SUCCEEDED


@dataclass
class PipelineOutcome:
    """Results of every stage that ran, in order."""

    results: list[StageResult] = field(default_factory=list)

    @property
    def failed_stage(self) -> StageResult | None:
        return next((r for r in self.results if r.fatal), None)

    @property
    def succeeded(self) -> bool:
        return self.failed_stage is None

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    def ran(self, key: str) -> bool:
        return any(r.stage == key for r in self.results)


def run_stages(stages: list[Stage], ctx: PipelineContext) -> PipelineOutcome:
    """Run stages in order, stopping at the first fatal failure.

    Args:
        stages: Stages in execution order.
        ctx: Context handed to every stage.

    Returns:
        Outcome holding a result for each stage that ran.
    """
    outcome = PipelineOutcome()
    total = len(stages)
    for ordinal, stage in enumerate(stages, start=1):
        console.print(Panel.fit(escape(f"[{ordinal}/{total}] {stage.name}"), style="bold blue"))
        result = stage.run(ctx, ordinal)
        outcome.results.append(result)
        if result.fatal:
            logger.info("Aborting after stage '%s'", stage.key)
            break
    return outcome
