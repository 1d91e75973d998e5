"""Size-bounded append-only log file.

When appending a line would push the file past its byte ceiling, the oldest
whole lines are discarded first. The surviving tail is written to a temporary
file next to the log and swapped in with ``os.replace``, so a failure before
the swap leaves the previous contents untouched.
"""

from __future__ import annotations

import os
import shutil
import tempfile
import threading
from pathlib import Path
from typing import BinaryIO

from boundlog.exceptions import FileUnavailableError, RotationFailureError
from boundlog.logger import log
from boundlog.output.console import error_console


class BoundedLogFile:
    """Append-mode log file kept under ``max_bytes`` by trimming its oldest lines.

    A ``max_bytes`` of zero or less disables the ceiling.
    """

    def __init__(self, path: str | os.PathLike, max_bytes: int = 0, encoding: str = "utf-8"):
        self._lock = threading.Lock()
        self._fh: BinaryIO | None = None
        self._path = Path(path)
        self._max_bytes = max_bytes
        self.encoding = encoding
        self.open(path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def usable(self) -> bool:
        """False once the file could not be (re)opened."""
        return self._fh is not None

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    @max_bytes.setter
    def max_bytes(self, value: int) -> None:
        self._max_bytes = value

    def open(self, path: str | os.PathLike) -> None:
        """(Re)open the sink at ``path``, creating parent directories.

        Raises FileUnavailableError if the file cannot be opened; the sink is
        then unusable until a later successful ``open``.
        """
        with self._lock:
            self._close_handle()
            self._path = Path(path)
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._fh = open(self._path, "a+b")
            except OSError as e:
                self._fh = None
                raise FileUnavailableError(str(self._path), e.strerror or str(e)) from e
            log.debug("Opened log file %s (max_bytes=%d)", self._path, self._max_bytes)

    def close(self) -> None:
        with self._lock:
            self._close_handle()

    def size(self) -> int:
        """Current size of the log file in bytes (0 if unusable)."""
        with self._lock:
            if self._fh is None:
                return 0
            return self._current_size()

    def append(self, line: str) -> bool:
        """Append ``line``, trimming the oldest content first if needed.

        Returns False when the line could not be written; the failure is
        reported on the diagnostics channel rather than raised.
        """
        data = line.encode(self.encoding, errors="replace")
        with self._lock:
            if self._fh is None:
                return False
            try:
                self._make_room(len(data))
            except RotationFailureError as e:
                log.warning("%s", e)
                return False
            except FileUnavailableError as e:
                self._report_unavailable(e)
                return False

            try:
                self._fh.write(data)
                self._fh.flush()
            except OSError as e:
                log.warning("Failed to write to %s: %s", self._path, e)
                return False
            return True

    def enforce_limit(self) -> bool:
        """Trim the existing file down to the ceiling without appending."""
        with self._lock:
            if self._fh is None:
                return False
            try:
                self._make_room(0)
            except RotationFailureError as e:
                log.warning("%s", e)
                return False
            except FileUnavailableError as e:
                self._report_unavailable(e)
                return False
            return True

    def __enter__(self) -> BoundedLogFile:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"BoundedLogFile({str(self._path)!r}, max_bytes={self._max_bytes})"

    # The helpers below expect the lock to be held.

    def _close_handle(self) -> None:
        if self._fh is not None:
            try:
                self._fh.close()
            except OSError as e:
                log.warning("Failed to close %s: %s", self._path, e)
            self._fh = None

    def _current_size(self) -> int:
        assert self._fh is not None
        self._fh.flush()
        return os.fstat(self._fh.fileno()).st_size

    def _make_room(self, incoming: int) -> None:
        """Discard the oldest lines until ``incoming`` more bytes fit under the ceiling."""
        if self._max_bytes <= 0:
            return
        assert self._fh is not None

        try:
            deficit = self._current_size() + incoming - self._max_bytes
            if deficit <= 0:
                return

            # A final line without a newline counts as a whole line.
            self._fh.seek(0)
            discarded = 0
            while deficit > 0:
                chunk = self._fh.readline()
                if not chunk:
                    break
                deficit -= len(chunk)
                discarded += len(chunk)
            kept = self._fh.read()
        except OSError as e:
            raise RotationFailureError(str(self._path), str(e)) from e

        self._rewrite(kept)
        log.debug("Trimmed %d bytes from %s, kept %d", discarded, self._path, len(kept))

    def _rewrite(self, kept: bytes) -> None:
        """Replace the file's contents with ``kept`` and reopen it for appending."""
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self._path.name}.", dir=self._path.parent)
        except OSError as e:
            raise RotationFailureError(str(self._path), str(e)) from e

        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(kept)
            try:
                shutil.copymode(self._path, tmp_name)
            except OSError as e:
                log.debug("Could not copy permissions of %s: %s", self._path, e)
            self._close_handle()
            os.replace(tmp_name, self._path)
        except OSError as e:
            _discard(tmp_name)
            self._reopen()
            raise RotationFailureError(str(self._path), str(e)) from e

        self._reopen()

    def _reopen(self) -> None:
        if self._fh is not None:
            return
        try:
            self._fh = open(self._path, "a+b")
        except OSError as e:
            self._fh = None
            raise FileUnavailableError(str(self._path), e.strerror or str(e)) from e

    def _report_unavailable(self, error: FileUnavailableError) -> None:
        log.error("%s; file logging disabled", error)
        error_console.print(f"boundlog: {error}; file logging disabled", style="status.failed", markup=False)


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        log.warning("Could not remove temporary file %s: %s", path, e)
