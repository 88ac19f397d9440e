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

"""Utility functions for tool invocation, command checks, and host detection."""

from __future__ import annotations

import platform

import sh

from demo_manager import logger
from demo_manager.constants import (
    ARM_MACHINES,
    PROMETHEUS_CRD_PATH,
    PROMETHEUS_OPERATOR_GITHUB_REPO,
)
from demo_manager.errors import ToolInvocationError


def prometheus_crd_url(version: str, crd_file: str) -> str:
    """Build the raw GitHub URL of a prometheus-operator CRD manifest.

    Args:
        version: prometheus-operator release tag (e.g. ``v0.68.0``).
        crd_file: CRD manifest file name.

    Returns:
        Full raw.githubusercontent.com URL.
    """
    return (
        f"https://raw.githubusercontent.com/{PROMETHEUS_OPERATOR_GITHUB_REPO}/"
        f"{version}/{PROMETHEUS_CRD_PATH}/{crd_file}"
    )


def is_arm_host(machine: str | None = None) -> bool:
    """Return True when the host processor belongs to the ARM family.

    Args:
        machine: Machine name to test, or None to read ``platform.machine()``.
    """
    machine = machine if machine is not None else platform.machine()
    return machine.lower() in ARM_MACHINES


def command_exists(cmd: str) -> bool:
    """Check if a command exists on the system PATH.

    Args:
        cmd: Name of the CLI command to check.

    Returns:
        True if the command can be invoked.
    """
    try:
        return bool(sh.which(cmd))
    except sh.ErrorReturnCode:
        return False


def _decode(stream: bytes | str | None) -> str:
    if stream is None:
        return ""
    if isinstance(stream, bytes):
        return stream.decode(errors="replace")
    return stream


def run_tool(tool: str, *args: str, stdin: str | None = None) -> str:
    """Run an external tool via sh and return its stdout.

    Args:
        tool: Executable name (e.g. ``kubectl``).
        *args: Command line arguments.
        stdin: Text to feed on standard input, or None.

    Returns:
        The command's standard output.

    Raises:
        ToolInvocationError: If the command exits with a non-zero status.
    """
    command_line = " ".join((tool, *args))
    logger.debug("Running: %s", command_line)
    try:
        return str(sh.Command(tool)(*args, _in=stdin))
    except sh.ErrorReturnCode as err:
        raise ToolInvocationError(command_line, err.exit_code, _decode(err.stderr)) from err
