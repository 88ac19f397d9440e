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

"""demo_manager - NVSentinel local demo environment setup package."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)
logger = logging.getLogger("demo_manager")


def info(msg: str) -> None:
    console.print(f"[yellow]ℹ️  {escape(msg)}[/yellow]")


def success(msg: str) -> None:
    console.print(f"[green]✅ {escape(msg)}[/green]")


def warn(msg: str) -> None:
    console.print(f"[yellow]⚠️  {escape(msg)}[/yellow]")


def error(msg: str) -> None:
    console.print(f"[red]❌ {escape(msg)}[/red]")
