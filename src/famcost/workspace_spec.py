from __future__ import annotations

from pathlib import Path

from famcost.workspace import Workspace


class DescribeWorkspace:
    class DescribeResolve:
        def it_should_use_explicit_path_when_provided(self):
            ws = Workspace.resolve(explicit=Path("/tmp/family-cost"))
            assert ws.root == Path("/tmp/family-cost")

        def it_should_use_famcost_data_env_var_when_set(self, monkeypatch):
            monkeypatch.setenv("FAMCOST_DATA", "/tmp/env-family-cost")
            ws = Workspace.resolve()
            assert ws.root == Path("/tmp/env-family-cost")

        def it_should_prefer_explicit_over_env_var(self, monkeypatch):
            monkeypatch.setenv("FAMCOST_DATA", "/tmp/env-family-cost")
            ws = Workspace.resolve(explicit=Path("/tmp/explicit"))
            assert ws.root == Path("/tmp/explicit")

        def it_should_fall_back_to_cwd_when_no_env_var(self, monkeypatch):
            monkeypatch.delenv("FAMCOST_DATA", raising=False)
            ws = Workspace.resolve()
            assert ws.root == Path.cwd()

    class DescribePaths:
        def it_should_compute_settings_path(self):
            ws = Workspace(root=Path("/data"))
            assert ws.settings_path == Path("/data/config/famcost.yml")

        def it_should_compute_sqlite_store_path(self):
            ws = Workspace(root=Path("/data"))
            assert ws.sqlite_store_path == Path("/data/data/records.db")

        def it_should_compute_json_store_path(self):
            ws = Workspace(root=Path("/data"))
            assert ws.json_store_path == Path("/data/data/records.json")
