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

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from cli import app
from demo_manager.commands import delete_cmd, install_cmd, setup_cmd

runner = CliRunner()


@pytest.fixture
def use_fake_context(monkeypatch, ctx):
    captured = {}

    def build_context(**overrides):
        captured.update(overrides)
        return ctx

    monkeypatch.setattr(setup_cmd, "build_context", build_context)
    monkeypatch.setattr(install_cmd, "build_context", build_context)
    return captured


def test_help_lists_subcommands():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for name in ("setup", "install", "delete"):
        assert name in result.output


def test_setup_demo_succeeds(use_fake_context, fake_kind):
    result = runner.invoke(app, ["setup", "demo", "--version", "v0.6.1"])

    assert result.exit_code == 0, result.output
    assert use_fake_context == {"cluster_name": None, "version": "v0.6.1"}
    assert fake_kind.clusters() == ["nvsentinel-demo"]


def test_setup_demo_exits_non_zero_on_failure(use_fake_context, fake_client):
    fake_client.pods["app.kubernetes.io/name=mongodb"] = [False]

    result = runner.invoke(app, ["setup", "demo"])

    assert result.exit_code == 1


def test_install_single_component(use_fake_context, fake_client):
    result = runner.invoke(app, ["install", "cert-manager"])

    assert result.exit_code == 0, result.output
    assert [e[1] for e in fake_client.events if e[0] == "helm"] == ["repo", "upgrade"]


def test_label_nodes_without_workers_fails(use_fake_context):
    result = runner.invoke(app, ["setup", "label-nodes"])

    assert result.exit_code == 1


def test_delete_cluster(monkeypatch, fake_kind):
    fake_kind.topologies["custom"] = ["control-plane", "worker"]
    monkeypatch.setattr(delete_cmd, "KindProvider", lambda: fake_kind)

    result = runner.invoke(app, ["delete", "cluster", "--cluster-name", "custom"])

    assert result.exit_code == 0, result.output
    assert fake_kind.calls == [("delete", "custom")]
