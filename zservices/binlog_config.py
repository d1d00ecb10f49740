"""Configuration of the MySQL binlog service."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_CHARSET = "utf8mb4"
DEFAULT_DISCARD_NO_META_ROW_EVENT = True
DEFAULT_DUMP_EXECUTION_PATH = ""
DEFAULT_IGNORE_WKB_DATA_PARSE_ERROR = True


@dataclass
class BinlogConfig:
    """MySQL binlog service settings; table regexes match ``db.table``."""

    host: str = ""
    user_name: str = ""
    password: str = ""
    charset: str = ""
    include_table_regex: list[str] = field(default_factory=list)
    exclude_table_regex: list[str] = field(default_factory=list)
    discard_no_meta_row_event: bool = DEFAULT_DISCARD_NO_META_ROW_EVENT
    dump_execution_path: str = DEFAULT_DUMP_EXECUTION_PATH
    ignore_wkb_data_parse_error: bool = DEFAULT_IGNORE_WKB_DATA_PARSE_ERROR

    def check(self) -> None:
        """Raise ValueError without a host; default the charset."""
        if not self.host:
            raise ValueError("host is empty")
        if not self.charset:
            self.charset = DEFAULT_CHARSET