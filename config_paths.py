import json
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "csvgrid")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")

# default settings
CSV_SEPARATOR_DEFAULT = None
BORDER_TYPE_DEFAULT = 1
FORCE_ASCII_ART_DEFAULT = False
FORCE8BIT_DEFAULT = False
DOUBLE_HEADER_DEFAULT = False
MAX_COLUMNS_DEFAULT = 1024


def load_config():
    cfg = {
        "CSV_SEPARATOR": CSV_SEPARATOR_DEFAULT,
        "BORDER_TYPE": BORDER_TYPE_DEFAULT,
        "FORCE_ASCII_ART": FORCE_ASCII_ART_DEFAULT,
        "FORCE8BIT": FORCE8BIT_DEFAULT,
        "DOUBLE_HEADER": DOUBLE_HEADER_DEFAULT,
        "MAX_COLUMNS": MAX_COLUMNS_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return cfg

    if not isinstance(data, dict):
        return cfg

    sep = data.get("csv_separator")
    if isinstance(sep, str) and len(sep.encode("utf-8")) == 1:
        cfg["CSV_SEPARATOR"] = sep

    border = data.get("border_type")
    if isinstance(border, int) and not isinstance(border, bool) and border in (0, 1, 2):
        cfg["BORDER_TYPE"] = border

    for key in ("force_ascii_art", "force8bit", "double_header"):
        value = data.get(key)
        if isinstance(value, bool):
            cfg[key.upper()] = value

    max_columns = data.get("max_columns")
    if isinstance(max_columns, int) and not isinstance(max_columns, bool) and max_columns > 0:
        cfg["MAX_COLUMNS"] = max_columns

    return cfg
