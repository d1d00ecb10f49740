"""Binlog event handler that keeps the synced position in an append-only file."""

from __future__ import annotations

import io
import os
import re

from zservices.binlog_events import LATEST_POS, BaseEventHandler

DEFAULT_POS_FILE_NAME = "binlog.pos"
DEFAULT_POS_FILE_MAX_SIZE = 5 << 20
POS_ROTATE_FILE_NAME_SUFFIX = ".new"

_READ_SIZE = 64
_POS_RE = re.compile(r"[+-]?\d+")


class PosFileError(Exception):
    """Raised when the position file cannot be read, parsed or written."""


class PosFileHandler(BaseEventHandler):
    """Appends ``name,pos`` lines to a file and reads the last one back on start.

    When the file would grow past ``max_size`` bytes (no limit if <= 0) it is
    replaced by a new file holding only the latest line.
    """

    def __init__(
        self,
        filename: str | os.PathLike[str] = DEFAULT_POS_FILE_NAME,
        max_size: int = DEFAULT_POS_FILE_MAX_SIZE,
        binlog_name: str = LATEST_POS,
        pos: int = 0,
    ) -> None:
        self.filename = os.fspath(filename)
        self.max_size = max_size
        self.binlog_name = binlog_name
        self.pos = pos
        self._file: io.RawIOBase | None = None
        self._size = 0

    @property
    def rotate_filename(self) -> str:
        return self.filename + POS_ROTATE_FILE_NAME_SUFFIX

    def get_start_pos(self) -> tuple[str, int]:
        """The last stored position, or the defaults when there is no file."""
        self._check_rotate_file_absent()
        found = self._read_pos()
        if found is None:
            return self.binlog_name, self.pos
        name, pos = found
        if not name:
            raise PosFileError("pos file is empty")
        return name, pos

    def on_pos_synced(self, binlog_name: str, pos: int, force: bool) -> None:
        """Append the position; with ``force`` it is flushed to disk."""
        fh = self._prepare()
        line = f"{binlog_name},{pos}\n".encode()
        self._size += len(line)
        if self.max_size > 0 and self._size > self.max_size:
            self._rotate(line)
            return
        fh.write(line)
        if force:
            os.fsync(fh.fileno())

    def close(self) -> None:
        """Close the position file if it is open."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> PosFileHandler:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _check_rotate_file_absent(self) -> None:
        try:
            os.stat(self.rotate_filename)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise PosFileError(f"checking the pos rotate file failed: {exc}") from exc
        raise PosFileError("the pos rotate file exists, please check it")

    def _read_pos(self) -> tuple[str, int] | None:
        if os.path.isdir(self.filename):
            raise PosFileError("pos file is a directory")
        try:
            with open(self.filename, "rb") as fh:
                size = os.fstat(fh.fileno()).st_size
                if size == 0:
                    return "", 0
                if size > _READ_SIZE:
                    fh.seek(-_READ_SIZE, os.SEEK_END)
                data = fh.read()
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PosFileError(f"reading the pos file failed: {exc}") from exc

        if data.endswith(b"\n"):
            data = data[:-1]
        if not data:
            return "", 0
        last = data[data.rfind(b"\n") + 1 :].decode("utf-8", errors="replace")
        parts = last.split(",")
        if len(parts) != 2 or not parts[0] or not _POS_RE.fullmatch(parts[1]):
            raise PosFileError("cannot parse the position from the pos file, bad format")
        return parts[0], int(parts[1]) & 0xFFFFFFFF

    def _prepare(self) -> io.RawIOBase:
        if self._file is not None:
            return self._file
        if os.path.isdir(self.filename):
            raise PosFileError("pos file is a directory")
        try:
            fh = open(self.filename, "ab", buffering=0)
        except OSError as exc:
            raise PosFileError(f"opening the pos file failed: {exc}") from exc
        try:
            self._size = os.fstat(fh.fileno()).st_size
        except OSError as exc:
            fh.close()
            raise PosFileError(f"reading pos file info failed: {exc}") from exc
        self._file = fh
        return fh

    def _rotate(self, line: bytes) -> None:
        fh = self._file
        self._file = None
        try:
            if fh is not None:
                try:
                    os.fsync(fh.fileno())
                finally:
                    fh.close()
            with open(self.rotate_filename, "wb") as new:
                new.write(line)
                new.flush()
                os.fsync(new.fileno())
            os.replace(self.rotate_filename, self.filename)
        except OSError as exc:
            raise PosFileError(f"rotating the pos file failed: {exc}") from exc