from pathlib import Path
from unittest.mock import patch

import pytest

import sdlocal_config
from sdlocal.config import Config
from sdlocal.entry import default_entry


def run_cli(path, *args):
    return sdlocal_config.main(["--config", str(path), *args])


def test_create_and_use(tmp_path):
    path = tmp_path / "config"

    assert run_cli(path, "create", "ci") == 0
    assert run_cli(path, "use", "ci") == 0

    config = Config.load(path)
    assert config.names() == ["ci", "default"]
    assert config.current == "ci"


def test_set_updates_current_entry(tmp_path):
    path = tmp_path / "config"
    run_cli(path, "set", "api-url", "https://api.example.com")
    run_cli(path, "set", "launcher-version", "v2")
    run_cli(path, "set", "launcher-version")

    entry = Config.load(path).entry("default")
    assert entry.api_url == "https://api.example.com"
    assert entry.launcher.version == "stable"


def test_set_rejects_unknown_key(tmp_path):
    with pytest.raises(SystemExit):
        run_cli(tmp_path / "config", "set", "bogus", "x")


def test_delete_current_fails(tmp_path, capsys):
    path = tmp_path / "config"

    assert run_cli(path, "delete", "default") == 1

    assert "config `default` is current config" in capsys.readouterr().err
    assert Config.load(path).names() == ["default"]


def test_delete_after_switch(tmp_path):
    path = tmp_path / "config"
    run_cli(path, "create", "ci")
    run_cli(path, "use", "ci")

    assert run_cli(path, "delete", "default") == 0
    assert Config.load(path).entries == {"ci": default_entry()}


def test_use_unknown_entry(tmp_path, capsys):
    assert run_cli(tmp_path / "config", "use", "nope") == 1
    assert "config `nope` does not exist" in capsys.readouterr().err


def test_view_marks_current_and_masks_token(tmp_path, capsys):
    path = tmp_path / "config"
    run_cli(path, "create", "ci")
    run_cli(path, "set", "token", "secret")
    capsys.readouterr()

    assert run_cli(path, "view") == 0

    out = capsys.readouterr().out
    assert "* default" in out
    assert "  ci" in out
    assert "secret" not in out
    assert "token: ******" in out


def test_parse_error_reported(tmp_path, capsys):
    path = tmp_path / "config"
    path.write_text("entries: [broken\n")

    assert run_cli(path, "view") == 1
    assert "failed to parse config file: " in capsys.readouterr().err



def test_undecodable_file_reported(tmp_path, capsys):
    path = tmp_path / "config"
    path.write_bytes(b"entries:\n  default:\n    token: \xff\xfe\xfd\ncurrent: default\n")

    assert run_cli(path, "view") == 1
    assert "failed to parse config file: " in capsys.readouterr().err

def test_default_config_path_under_home(tmp_path):
    with patch("sdlocal_config.Path.home", return_value=tmp_path):
        assert sdlocal_config.default_config_path() == Path(tmp_path) / ".sdlocal" / "config"
        assert sdlocal_config.main(["view"]) == 0
    assert (tmp_path / ".sdlocal" / "config").is_file()
