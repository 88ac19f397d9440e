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

"""Delete subcommands (cluster)."""

from __future__ import annotations

import typer

from demo_manager.client import KindProvider
from demo_manager.cluster import delete_cluster
from demo_manager.config import ClusterConfig

app = typer.Typer(help="Delete demo resources.")


@app.command()
def cluster(
    cluster_name: str | None = typer.Option(None, "--cluster-name", help="kind cluster name"),
) -> None:
    """Delete the demo kind cluster."""
    cluster_cfg = ClusterConfig()
    if cluster_name is not None:
        cluster_cfg = cluster_cfg.model_copy(update={"cluster_name": cluster_name})
    delete_cluster(KindProvider(), cluster_cfg.cluster_name)
