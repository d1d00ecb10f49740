import pytest

from zservices.binlog_events import LATEST_POS
from zservices.pos_file import (
    DEFAULT_POS_FILE_MAX_SIZE,
    DEFAULT_POS_FILE_NAME,
    POS_ROTATE_FILE_NAME_SUFFIX,
    PosFileError,
    PosFileHandler,
)


def test_defaults():
    handler = PosFileHandler()
    assert handler.filename == DEFAULT_POS_FILE_NAME
    assert handler.max_size == DEFAULT_POS_FILE_MAX_SIZE
    assert handler.binlog_name == LATEST_POS
    assert handler.rotate_filename == DEFAULT_POS_FILE_NAME + POS_ROTATE_FILE_NAME_SUFFIX


def test_missing_file_returns_default_position(tmp_path):
    path = tmp_path / "binlog.pos"
    assert PosFileHandler(path).get_start_pos() == (LATEST_POS, 0)
    handler = PosFileHandler(path, binlog_name="mysql-bin.000001", pos=4)
    assert handler.get_start_pos() == ("mysql-bin.000001", 4)


def test_synced_positions_round_trip(tmp_path):
    path = tmp_path / "binlog.pos"
    with PosFileHandler(path) as handler:
        handler.on_pos_synced("mysql-bin.000002", 120, False)
        handler.on_pos_synced("mysql-bin.000002", 240, True)
    assert path.read_text().splitlines() == ["mysql-bin.000002,120", "mysql-bin.000002,240"]
    assert PosFileHandler(path).get_start_pos() == ("mysql-bin.000002", 240)


def test_unlimited_size_never_rotates(tmp_path):
    path = tmp_path / "binlog.pos"
    with PosFileHandler(path, max_size=0) as handler:
        for pos in range(50):
            handler.on_pos_synced("b", pos, False)
    assert len(path.read_text().splitlines()) == 50
    assert PosFileHandler(path).get_start_pos() == ("b", 49)


def test_long_file_reads_last_line(tmp_path):
    path = tmp_path / "binlog.pos"
    lines = [f"mysql-bin.{i:06d},{i * 100}" for i in range(20)]
    path.write_text("\n".join(lines) + "\n")
    assert PosFileHandler(path).get_start_pos() == ("mysql-bin.000019", 1900)


def test_last_line_without_newline(tmp_path):
    path = tmp_path / "binlog.pos"
    path.write_text("a,1\nb,2")
    assert PosFileHandler(path).get_start_pos() == ("b", 2)


def test_existing_rotate_file_is_an_error(tmp_path):
    path = tmp_path / "binlog.pos"
    (tmp_path / ("binlog.pos" + POS_ROTATE_FILE_NAME_SUFFIX)).write_text("x,1\n")
    with pytest.raises(PosFileError):
        PosFileHandler(path).get_start_pos()


@pytest.mark.parametrize("content", ["", "\n"])
def test_empty_file_is_an_error(tmp_path, content):
    path = tmp_path / "binlog.pos"
    path.write_text(content)
    with pytest.raises(PosFileError):
        PosFileHandler(path).get_start_pos()


@pytest.mark.parametrize("content", ["abc\n", ",5\n", "name,x\n", "a,b,c\n"])
def test_malformed_file_is_an_error(tmp_path, content):
    path = tmp_path / "binlog.pos"
    path.write_text(content)
    with pytest.raises(PosFileError):
        PosFileHandler(path).get_start_pos()


def test_directory_is_an_error(tmp_path):
    handler = PosFileHandler(tmp_path)
    with pytest.raises(PosFileError):
        handler.get_start_pos()
    with pytest.raises(PosFileError):
        handler.on_pos_synced("a", 1, False)