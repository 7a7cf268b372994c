import json

import pytest

from services import config_manager as config_manager_module
from services.config_manager import ConfigManager


def test_defaults_when_no_file(config_dir):
    manager = ConfigManager.get_instance()

    assert manager.config_file == config_dir / "config.json"
    assert manager.get("diff")["maxCells"] == 4_000_000
    assert ConfigManager.get_instance() is manager


def test_partial_file_is_filled_from_defaults(config_dir):
    (config_dir / "config.json").write_text(json.dumps({"diff": {"contextLines": 5}}))

    config = ConfigManager.get_instance().get_config()

    assert config["diff"] == {"maxCells": 4_000_000, "contextLines": 5, "highlightChanges": True}
    assert config["server"]["port"] == 8000


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_unreadable_file_falls_back_to_defaults(config_dir, content):
    (config_dir / "config.json").write_text(content)

    assert ConfigManager.get_instance().get_config()["diff"]["maxCells"] == 4_000_000


def test_save_merges_sections(config_dir):
    manager = ConfigManager.get_instance()
    manager.save_config({"diff": {"maxCells": 10}})

    stored = json.loads((config_dir / "config.json").read_text())
    assert stored["diff"]["maxCells"] == 10
    assert stored["diff"]["highlightChanges"] is True

    manager.set("logging", {"level": "debug"})
    assert manager.get_config()["logging"]["level"] == "debug"


def test_get_config_returns_a_copy(config_dir):
    manager = ConfigManager.get_instance()
    config = manager.get_config()
    config["diff"]["maxCells"] = 1

    assert manager.get_config()["diff"]["maxCells"] == 4_000_000


@pytest.mark.parametrize(
    "diff_settings",
    [
        {"maxCells": -1},
        {"maxCells": "big"},
        {"maxCells": None},
        {"contextLines": -2},
        {"highlightChanges": "yes"},
        "not a section",
    ],
)
def test_bad_stored_diff_settings_fall_back_to_defaults(config_dir, caplog, diff_settings):
    (config_dir / "config.json").write_text(json.dumps({"diff": diff_settings, "server": {"port": 9000}}))

    config = ConfigManager.get_instance().get_config()

    assert config["diff"] == {"maxCells": 4_000_000, "contextLines": 3, "highlightChanges": True}
    assert config["server"]["port"] == 9000
    assert "Invalid 'diff' settings" in caplog.text


@pytest.mark.parametrize("server", [{"port": "abc"}, {"port": 70000}, {"host": ""}])
def test_bad_stored_server_settings_fall_back_to_defaults(config_dir, server):
    (config_dir / "config.json").write_text(json.dumps({"server": server}))

    assert ConfigManager.get_instance().get_config()["server"] == {"host": "0.0.0.0", "port": 8000}


def test_stored_log_level_is_normalized(config_dir):
    (config_dir / "config.json").write_text(json.dumps({"logging": {"level": "DEBUG"}}))

    assert ConfigManager.get_instance().get_config()["logging"]["level"] == "debug"


def test_failed_save_keeps_previous_file(config_dir, monkeypatch):
    manager = ConfigManager.get_instance()
    manager.save_config({"diff": {"maxCells": 10}})
    before = (config_dir / "config.json").read_text()

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(config_manager_module.os, "replace", fail_replace)

    with pytest.raises(RuntimeError, match="disk full"):
        manager.save_config({"diff": {"maxCells": 20}})

    assert (config_dir / "config.json").read_text() == before
    assert [path.name for path in config_dir.iterdir()] == ["config.json"]
