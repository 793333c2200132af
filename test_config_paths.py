import json
import tempfile
from pathlib import Path

import config_paths
from options import Options


def test_load_config_defaults_without_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "csvgrid"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        # point module paths to temp
        orig_dir = config_paths.CONFIG_DIR
        orig_json = config_paths.CONFIG_JSON
        try:
            config_paths.CONFIG_DIR = str(cfg_dir)
            config_paths.CONFIG_JSON = str(cfg_dir / "config.json")
            cfg = config_paths.load_config()
            assert cfg["CSV_SEPARATOR"] is None
            assert cfg["BORDER_TYPE"] == 1
            assert cfg["FORCE_ASCII_ART"] is False
            assert cfg["MAX_COLUMNS"] == 1024
        finally:
            config_paths.CONFIG_DIR = orig_dir
            config_paths.CONFIG_JSON = orig_json


def test_load_config_reads_json_overrides():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_dir = Path(tmp) / "csvgrid"
        cfg_dir.mkdir(parents=True, exist_ok=True)
        cfg_path = cfg_dir / "config.json"
        cfg_path.write_text(
            json.dumps(
                {
                    "csv_separator": ";",
                    "border_type": 2,
                    "force_ascii_art": True,
                    "double_header": True,
                    "max_columns": 64,
                }
            )
        )

        orig_dir = config_paths.CONFIG_DIR
        orig_json = config_paths.CONFIG_JSON
        try:
            config_paths.CONFIG_DIR = str(cfg_dir)
            config_paths.CONFIG_JSON = str(cfg_path)
            cfg = config_paths.load_config()
            assert cfg["CSV_SEPARATOR"] == ";"
            assert cfg["BORDER_TYPE"] == 2
            assert cfg["FORCE_ASCII_ART"] is True
            assert cfg["DOUBLE_HEADER"] is True
            assert cfg["MAX_COLUMNS"] == 64

            opts = Options.from_config(cfg, border_type=0)
            assert opts.border_type == 0
            assert opts.separator == ";"
            assert opts.linestyle == "a"
        finally:
            config_paths.CONFIG_DIR = orig_dir
            config_paths.CONFIG_JSON = orig_json


def test_load_config_ignores_invalid_values():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_path = Path(tmp) / "config.json"
        cfg_path.write_text(
            json.dumps({"csv_separator": ";;", "border_type": 7, "force8bit": "yes", "max_columns": True})
        )
        orig_json = config_paths.CONFIG_JSON
        try:
            config_paths.CONFIG_JSON = str(cfg_path)
            cfg = config_paths.load_config()
            assert cfg["CSV_SEPARATOR"] is None
            assert cfg["BORDER_TYPE"] == 1
            assert cfg["FORCE8BIT"] is False
            assert cfg["MAX_COLUMNS"] == 1024
        finally:
            config_paths.CONFIG_JSON = orig_json


def test_load_config_survives_broken_json():
    with tempfile.TemporaryDirectory() as tmp:
        cfg_path = Path(tmp) / "config.json"
        cfg_path.write_text("{not json")
        orig_json = config_paths.CONFIG_JSON
        try:
            config_paths.CONFIG_JSON = str(cfg_path)
            assert config_paths.load_config()["BORDER_TYPE"] == 1
        finally:
            config_paths.CONFIG_JSON = orig_json
