"""Shared fixtures: keep every test away from the user's real config."""

import pytest

from liveorder import config as config_module
from liveorder.cli.commands import config_cmd


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    for name in (
        "LIVEORDER_STYLES",
        "LIVEORDER_SYNTHESIZE_MODULEDOC",
        "LIVEORDER_OUTPUT_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    config_module.reset_config()
    yield config_file
    config_module.reset_config()
