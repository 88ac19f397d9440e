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

"""Host prerequisite checks."""

from __future__ import annotations

import docker

from demo_manager import info, logger, success
from demo_manager.constants import REQUIRED_TOOLS
from demo_manager.errors import MissingDependenciesError
from demo_manager.utils import command_exists

DOCKER_DAEMON_UNREACHABLE = "docker (daemon not reachable)"


def docker_daemon_reachable() -> bool:
    """Ping the Docker daemon kind will create node containers on."""
    try:
        client = docker.from_env()
    except Exception as e:
        logger.debug("Failed to connect to Docker: %s", e)
        return False
    try:
        return bool(client.ping())
    except Exception as e:
        logger.debug("Docker daemon did not answer ping: %s", e)
        return False
    finally:
        client.close()


def find_missing(tools: list[str], check_docker_daemon: bool = True) -> list[str]:
    """Return every missing tool rather than stopping at the first.

    Args:
        tools: Tool names that must be on PATH.
        check_docker_daemon: Also require a reachable daemon when ``docker`` is listed.

    Returns:
        Missing tools in the order given, plus a daemon entry if unreachable.
    """
    missing = [tool for tool in tools if not command_exists(tool)]
    if check_docker_daemon and "docker" in tools and "docker" not in missing:
        if not docker_daemon_reachable():
            missing.append(DOCKER_DAEMON_UNREACHABLE)
    return missing


def check_prerequisites(tools: list[str] | None = None, check_docker_daemon: bool = True) -> None:
    """Verify that all required host tools are invocable.

    Args:
        tools: Tool names to check, or None for the required demo tools.
        check_docker_daemon: Also require a reachable Docker daemon.

    Raises:
        MissingDependenciesError: Naming every missing tool at once.
    """
    info("Checking prerequisites...")
    missing = find_missing(list(tools) if tools is not None else REQUIRED_TOOLS, check_docker_daemon)
    if missing:
        raise MissingDependenciesError(missing)
    success("All prerequisites found")
