#!/usr/bin/env python3
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

"""
cli.py - CLI for the NVSentinel local fault injection demo environment.

Subcommands:
    setup      Composite workflows (demo, label-nodes, wait-ready, status)
    install    Install single components into an existing demo cluster
    delete     Delete demo resources (cluster)

Environment Variables:
    - NVSENTINEL_VERSION (default: v0.6.0)
    - DEMO_CLUSTER_NAME (default: nvsentinel-demo)
    - DEMO_TIMEOUT_* per-stage readiness timeouts in seconds (see TimeoutConfig)

Examples:
    # Full demo setup (deletes and recreates the cluster if it exists)
    ./cli.py setup demo

    # Install a different NVSentinel version
    NVSENTINEL_VERSION=v0.5.0 ./cli.py setup demo

    # Re-run the readiness gate against the existing cluster
    ./cli.py setup wait-ready

    # Delete the demo cluster
    ./cli.py delete cluster

For detailed usage information, run: ./cli.py --help
"""

from __future__ import annotations

import logging
import sys

import typer

from demo_manager import error
from demo_manager.commands import delete_cmd, install_cmd, setup_cmd

app = typer.Typer(
    help="CLI for the NVSentinel local demo environment.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every external command"),
) -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.add_typer(setup_cmd.app, name="setup")
app.add_typer(install_cmd.app, name="install")
app.add_typer(delete_cmd.app, name="delete")


def main() -> None:
    try:
        app()
    except Exception as e:
        error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
