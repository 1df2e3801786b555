from __future__ import annotations

from famcost.cli.command import init as cmd_init
from famcost.config import DEFAULT_TIMEZONE, DEFAULT_UNITS, load_settings
from famcost.workspace import Workspace


class DescribeInitCommand:
    def it_should_create_directories_and_starter_settings(self, tmp_path):
        workspace = Workspace(root=tmp_path)

        rc = cmd_init.run(workspace=workspace)

        assert rc == 0
        assert workspace.data_dir.is_dir()
        assert workspace.config_dir.is_dir()
        settings = load_settings(workspace.settings_path)
        assert settings.units == DEFAULT_UNITS
        assert settings.timezone == DEFAULT_TIMEZONE

    def it_should_not_overwrite_existing_settings(self, tmp_path):
        workspace = Workspace(root=tmp_path)
        workspace.config_dir.mkdir(parents=True)
        workspace.settings_path.write_text("units: [Car]\n", encoding="utf-8")

        rc = cmd_init.run(workspace=workspace)

        assert rc == 0
        assert workspace.settings_path.read_text(encoding="utf-8") == "units: [Car]\n"
