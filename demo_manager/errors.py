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

"""Exceptions raised by demo setup stages."""

from __future__ import annotations


class DemoSetupError(RuntimeError):
    """Base class for every failure that aborts the demo setup."""


class MissingDependenciesError(DemoSetupError):
    """One or more required host tools are missing.

    Attributes:
        missing: Every missing tool, in the order they were checked.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Missing required tools: {' '.join(self.missing)}. "
            "Please install them and try again."
        )


class ToolInvocationError(DemoSetupError):
    """An external tool exited with a non-zero status.

    Attributes:
        command: The command line that failed.
        exit_code: The tool's exit status.
        stderr: Captured standard error, stripped.
    """

    def __init__(self, command: str, exit_code: int, stderr: str = "") -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(f"'{command}' failed with exit code {exit_code}{detail}")


class ReadinessTimeoutError(DemoSetupError):
    """A readiness probe was not satisfied before its timeout elapsed.

    Attributes:
        target: Human-readable name of what was being waited for.
        timeout: The timeout that elapsed, in seconds.
    """

    def __init__(self, target: str, timeout: float) -> None:
        self.target = target
        self.timeout = timeout
        super().__init__(f"{target} failed to become ready within {timeout:g}s")
