import logging

from zservices.binlog_events import LATEST_POS, BaseEventHandler

LOGGER = "zservices.binlog"


def test_get_start_pos_is_latest():
    assert BaseEventHandler().get_start_pos() == (LATEST_POS, 0)
    assert LATEST_POS == "latest"


def test_on_event_parse_err_skips_and_warns(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    skip = BaseEventHandler().on_event_parse_err({"table": "t"}, ValueError("bad row"))
    assert skip is True
    assert any(r.levelno == logging.WARNING and "bad row" in r.getMessage() for r in caplog.records)


def test_on_table_changed_logs_sql(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    BaseEventHandler().on_table_changed("db", "users", "ALTER TABLE users ADD c INT")
    messages = [r.getMessage() for r in caplog.records]
    assert any("ALTER TABLE users ADD c INT" in m and "users" in m for m in messages)


def test_on_row_logs_each_record(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    BaseEventHandler().on_row(["first", "second", "third"])
    messages = [r.getMessage() for r in caplog.records if r.name == LOGGER]
    assert len(messages) == 3
    assert "second" in messages[1]


def test_on_pos_synced_logs_position(caplog):
    caplog.set_level(logging.DEBUG, logger=LOGGER)
    BaseEventHandler().on_pos_synced("mysql-bin.000001", 154, True)
    messages = [r.getMessage() for r in caplog.records]
    assert any("mysql-bin.000001" in m and "154" in m for m in messages)