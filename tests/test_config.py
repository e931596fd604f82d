from __future__ import annotations

from pathlib import Path

from scanbridge import config


def test_load_toml_missing_and_invalid(tmp_path: Path) -> None:
    missing = tmp_path / "missing.toml"
    assert config._load_toml(missing) == {}

    invalid = tmp_path / "invalid.toml"
    invalid.write_text("not = [toml", encoding="utf-8")
    assert config._load_toml(invalid) == {}

    assert config._load_toml(tmp_path) == {}


def test_load_config_default_path(tmp_path: Path) -> None:
    cfg = tmp_path / config.DEFAULT_CONFIG_NAME
    cfg.write_text("[discovery]\nscan_all = false\n", encoding="utf-8")
    data = config.load_config(root=tmp_path, config_path=None)
    assert data["discovery"]["scan_all"] is False


def test_load_settings_defaults_without_file(tmp_path: Path) -> None:
    settings = config.load_settings(root=tmp_path)
    assert settings == config.BridgeSettings()
    assert settings.scan_all is None
    assert settings.min_version == "5.6"
    assert settings.hosted_url == "https://sonarcloud.io"


def test_load_settings_reads_sections(tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    path.write_text(
        "[discovery]\n"
        "scan_all = 'off'\n"
        "excluded_dirs = ['vendor, third_party', 'generated']\n"
        "[server]\n"
        "min_version = 7.9\n"
        "hosted_url = 'https://hosted.example'\n",
        encoding="utf-8",
    )
    settings = config.load_settings(root=tmp_path, config_path=path)
    assert settings.scan_all is False
    assert settings.excluded_dirs == ("vendor", "third_party", "generated")
    assert settings.min_version == "7.9"
    assert settings.hosted_url == "https://hosted.example"


def test_load_settings_ignores_malformed_sections(tmp_path: Path) -> None:
    path = tmp_path / config.DEFAULT_CONFIG_NAME
    path.write_text("discovery = 3\n[server]\nmin_version = ''\nhosted_url = true\n", encoding="utf-8")
    assert config.load_settings(root=tmp_path) == config.BridgeSettings()


def test_config_helpers_cover_bool_and_lists() -> None:
    assert config._normalize_name_list(["a, b", "c"]) == ["a", "b", "c"]
    assert config._normalize_name_list(None) == []
    assert config._normalize_name_list(3) == []
    assert config._as_bool(True) is True
    assert config._as_bool(0) is False
    assert config._as_bool(2) is True
    assert config._as_bool("yes") is True
    assert config._as_bool("nope") is False
    assert config._as_bool(None) is False
