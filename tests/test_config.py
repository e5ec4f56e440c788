# tests/test_config.py
from __future__ import annotations

from ballot_node import config


def test_defaults_when_file_missing(tmp_path, monkeypatch):
    for name in ("BALLOT_ADMIN_ID", "BALLOT_CALLER_HEADER", "BALLOT_LOG_LEVEL", "BALLOT_PORT"):
        monkeypatch.delenv(name, raising=False)

    cfg = config.load_config(str(tmp_path))
    assert config.get_admin_id(cfg) == "admin"
    assert config.get_caller_header(cfg) == "X-Caller-Id"
    assert config.get_bind_port(cfg) == 8000
    assert config.get_log_level(cfg) == "INFO"


def test_yaml_is_merged(tmp_path, monkeypatch):
    monkeypatch.delenv("BALLOT_ADMIN_ID", raising=False)
    (tmp_path / config.CONFIG_FILENAME).write_text(
        "election:\n  admin_id: alice\ncors:\n  origins: http://example.org\n"
    )
    cfg = config.load_config(str(tmp_path))
    assert config.get_admin_id(cfg) == "alice"
    assert config.get_cors_origins(cfg) == ["http://example.org"]
    # untouched sections keep defaults
    assert config.get_bind_host(cfg) == "0.0.0.0"


def test_bad_yaml_falls_back(tmp_path, monkeypatch):
    monkeypatch.delenv("BALLOT_ADMIN_ID", raising=False)
    (tmp_path / config.CONFIG_FILENAME).write_text("election: [unclosed\n")
    cfg = config.load_config(str(tmp_path))
    assert config.get_admin_id(cfg) == "admin"


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("BALLOT_ADMIN_ID", "root")
    monkeypatch.setenv("BALLOT_PORT", "9001")
    monkeypatch.setenv("BALLOT_LOG_LEVEL", "debug")
    cfg = config.load_config(str(tmp_path))
    assert config.get_admin_id(cfg) == "root"
    assert config.get_bind_port(cfg) == 9001
    assert config.get_log_level(cfg) == "DEBUG"


def test_default_config_is_a_copy():
    a = config.default_config()
    a["election"]["admin_id"] = "changed"
    assert config.default_config()["election"]["admin_id"] == "admin"
