from dataclasses import dataclass

import config_paths
from layout import LINESTYLE_ASCII, LINESTYLE_UNICODE, TableLayoutConfig


@dataclass(frozen=True)
class Options:
    separator: str | None = None
    force8bit: bool = False
    force_ascii_art: bool = False
    border_type: int = config_paths.BORDER_TYPE_DEFAULT
    double_header: bool = False
    title: str | None = None
    max_columns: int = config_paths.MAX_COLUMNS_DEFAULT
    pathname: str | None = None

    @classmethod
    def from_config(cls, cfg: dict, **overrides) -> "Options":
        values = {
            "separator": cfg.get("CSV_SEPARATOR"),
            "force8bit": cfg.get("FORCE8BIT", False),
            "force_ascii_art": cfg.get("FORCE_ASCII_ART", False),
            "border_type": cfg.get("BORDER_TYPE", config_paths.BORDER_TYPE_DEFAULT),
            "double_header": cfg.get("DOUBLE_HEADER", False),
            "max_columns": cfg.get("MAX_COLUMNS", config_paths.MAX_COLUMNS_DEFAULT),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def linestyle(self) -> str:
        if self.force_ascii_art or self.force8bit:
            return LINESTYLE_ASCII
        return LINESTYLE_UNICODE

    def layout_config(self) -> TableLayoutConfig:
        return TableLayoutConfig(
            border=self.border_type,
            linestyle=self.linestyle,
            double_header=self.double_header,
        )
