"""Binlog event handler interface and a base handler that only logs."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

logger = logging.getLogger("zservices.binlog")

UPDATE_ACTION = "update"
INSERT_ACTION = "insert"
DELETE_ACTION = "delete"

# Start from the oldest position. Rows written before a table change are read
# with the current table structure, which may not match them.
OLDEST_POS = "oldest"
# Start from the latest position, ignoring earlier records.
LATEST_POS = "latest"


class EventHandler(Protocol):
    """What the binlog service calls while reading the binlog."""

    def get_start_pos(self) -> tuple[str, int]: ...

    def on_event_parse_err(self, event: Any, err: Exception) -> bool: ...

    def on_table_changed(self, schema: str, table: str, sql: str) -> None: ...

    def on_row(self, records: Sequence[Any]) -> None: ...

    def on_pos_synced(self, binlog_name: str, pos: int, force: bool) -> None: ...


class BaseEventHandler:
    """Handler that starts from the latest position and logs every event."""

    def get_start_pos(self) -> tuple[str, int]:
        """Start at the latest position."""
        return LATEST_POS, 0

    def on_event_parse_err(self, event: Any, err: Exception) -> bool:
        """Log the error and skip the event."""
        logger.warning("OnEventParseErr event=%r err=%s", event, err)
        return True

    def on_table_changed(self, schema: str, table: str, sql: str) -> None:
        logger.debug("OnTableChanged schema=%s table=%s sql=%s", schema, table, sql)

    def on_row(self, records: Sequence[Any]) -> None:
        for index, record in enumerate(records):
            logger.debug("OnRow %d %s", index, record)

    def on_pos_synced(self, binlog_name: str, pos: int, force: bool) -> None:
        logger.debug("OnPosSynced binlogName=%s pos=%d force=%s", binlog_name, pos, force)