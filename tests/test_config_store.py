from pathlib import Path
import json

from chartviz.gui.app.config_store import AppConfig, CONFIG_VERSION, load_config, save_config


def test_load_returns_defaults_when_missing(tmp_path: Path):
    cfg = load_config(tmp_path)
    assert cfg.version == CONFIG_VERSION
    assert cfg.last_import_dir is None
    assert cfg.window_x is None
    assert not cfg.is_geometry_complete()


def test_save_and_reload_round_trip(tmp_path: Path):
    cfg = AppConfig(
        window_x=10, window_y=20, window_w=800, window_h=600, last_export_dir="exports"
    )
    path = save_config(cfg, tmp_path)
    assert path.name == "app_state.json"
    assert not path.with_suffix(".json.tmp").exists()
    loaded = load_config(tmp_path)
    assert loaded.to_dict() == cfg.to_dict()
    assert loaded.is_geometry_complete()


def test_corrupt_file_graceful_fallback(tmp_path: Path):
    (tmp_path / "app_state.json").write_text("not json", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert isinstance(cfg, AppConfig)
    assert cfg.window_x is None


def test_non_object_payload_falls_back(tmp_path: Path):
    (tmp_path / "app_state.json").write_text("[1, 2]", encoding="utf-8")
    assert load_config(tmp_path) == AppConfig()


def test_bad_geometry_values_become_none(tmp_path: Path):
    data = {"version": CONFIG_VERSION, "window_x": "left", "window_w": 640}
    (tmp_path / "app_state.json").write_text(json.dumps(data), encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg.window_x is None
    assert cfg.window_w == 640


def test_version_mismatch_resets_but_preserves_dirs(tmp_path: Path):
    data = {
        "version": CONFIG_VERSION + 10,
        "window_x": 1,
        "window_y": 2,
        "window_w": 3,
        "window_h": 4,
        "maximized": True,
        "last_import_dir": "in",
        "last_export_dir": "out",
    }
    (tmp_path / "app_state.json").write_text(json.dumps(data), encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg.window_x is None
    assert cfg.maximized is False
    assert (cfg.last_import_dir, cfg.last_export_dir) == ("in", "out")
