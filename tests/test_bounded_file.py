"""Tests for the size-bounded log file."""

from __future__ import annotations

import io
import threading
from unittest.mock import patch

import pytest
from rich.console import Console

from boundlog.core.bounded_file import BoundedLogFile
from boundlog.exceptions import FileUnavailableError
from boundlog.output.console import BOUNDLOG_THEME


def numbered(i: int, width: int = 20) -> str:
    """A newline-terminated line of exactly ``width`` bytes."""
    head = f"entry {i:04d} "
    return head + "x" * (width - len(head) - 1) + "\n"


@pytest.fixture
def bounded(log_path):
    files: list[BoundedLogFile] = []

    def _make(max_bytes: int = 0) -> BoundedLogFile:
        bf = BoundedLogFile(log_path, max_bytes=max_bytes)
        files.append(bf)
        return bf

    yield _make

    for bf in files:
        bf.close()


class TestAppend:
    """Tests for BoundedLogFile.append."""

    def test_creates_parent_directories(self, bounded, log_path):
        assert not log_path.parent.exists()
        bf = bounded()
        assert log_path.parent.is_dir()
        assert bf.usable

    def test_unbounded_keeps_everything(self, bounded, log_path):
        bf = bounded(max_bytes=0)
        for i in range(100):
            assert bf.append(numbered(i))
        assert log_path.stat().st_size == 100 * 20
        assert bf.size() == 2000

    def test_within_ceiling_no_trim(self, bounded, log_path):
        bf = bounded(max_bytes=100)
        for i in range(5):
            assert bf.append(numbered(i))
        assert log_path.read_text() == "".join(numbered(i) for i in range(5))

    def test_existing_content_is_kept(self, bounded, log_path):
        log_path.parent.mkdir(parents=True)
        log_path.write_text("old line\n")
        bf = bounded()
        bf.append("new line\n")
        assert log_path.read_text() == "old line\nnew line\n"

    def test_trims_oldest_lines_first(self, bounded, log_path):
        bf = bounded(max_bytes=100)
        for i in range(6):
            assert bf.append(numbered(i))
        assert log_path.read_text() == "".join(numbered(i) for i in range(1, 6))

    def test_scenario_two_kilobyte_ceiling(self, bounded, log_path):
        """200 lines of 20 bytes under a 2048 byte ceiling."""
        bf = bounded(max_bytes=2048)
        for i in range(200):
            assert bf.append(numbered(i))
            assert log_path.stat().st_size <= 2048

        lines = log_path.read_text().splitlines(keepends=True)
        assert lines[-1] == numbered(199)
        # Retained lines are the newest ones, contiguous and in order.
        first = 200 - len(lines)
        assert lines == [numbered(i) for i in range(first, 200)]
        assert len(lines) == 2048 // 20

    def test_size_never_exceeds_ceiling_or_largest_line(self, bounded, log_path):
        bf = bounded(max_bytes=64)
        largest = 0
        for i, width in enumerate([10, 30, 50, 90, 12, 40, 25, 70, 8]):
            line = numbered(i, width) if width >= 13 else "y" * (width - 1) + "\n"
            largest = max(largest, len(line))
            assert bf.append(line)
            assert log_path.stat().st_size <= max(64, largest)
            assert log_path.read_text().endswith(line)

    def test_oversized_line_written_alone(self, bounded, log_path):
        bf = bounded(max_bytes=50)
        bf.append(numbered(0))
        big = "z" * 79 + "\n"
        assert bf.append(big)
        assert log_path.read_text() == big

    def test_unterminated_last_line_discarded_whole(self, bounded, log_path):
        log_path.parent.mkdir(parents=True)
        log_path.write_bytes(b"aaaa\nbbbb")
        bf = bounded(max_bytes=6)
        assert bf.append("cc\n")
        assert log_path.read_bytes() == b"cc\n"

    def test_unterminated_last_line_kept_when_it_fits(self, bounded, log_path):
        log_path.parent.mkdir(parents=True)
        log_path.write_bytes(b"aaaa\nbbbb")
        bf = bounded(max_bytes=8)
        assert bf.append("cc\n")
        assert log_path.read_bytes() == b"bbbbcc\n"

    def test_sizes_are_counted_in_bytes(self, bounded, log_path):
        bf = bounded(max_bytes=20)
        bf.append("é" * 5 + "\n")  # 11 bytes
        bf.append("ü" * 5 + "\n")
        assert log_path.read_bytes() == ("ü" * 5 + "\n").encode("utf-8")

    def test_no_temporary_files_left_behind(self, bounded, log_path):
        bf = bounded(max_bytes=40)
        for i in range(10):
            bf.append(numbered(i))
        assert list(log_path.parent.iterdir()) == [log_path]


class TestFailures:
    """Tests for I/O failure handling."""

    def test_unopenable_path_raises(self, tmp_path):
        with pytest.raises(FileUnavailableError) as exc_info:
            BoundedLogFile(tmp_path)
        assert exc_info.value.path == str(tmp_path)

    def test_rewrite_failure_keeps_previous_content(self, bounded, log_path):
        bf = bounded(max_bytes=100)
        for i in range(5):
            bf.append(numbered(i))
        before = log_path.read_bytes()

        with patch("boundlog.core.bounded_file.os.replace", side_effect=OSError("disk full")):
            assert bf.append(numbered(5)) is False

        assert log_path.read_bytes() == before
        assert list(log_path.parent.iterdir()) == [log_path]
        assert bf.usable

        # The next append retries the same trim.
        assert bf.append(numbered(6))
        assert log_path.read_text() == "".join(numbered(i) for i in (1, 2, 3, 4, 6))

    def test_temp_file_failure_keeps_handle_open(self, bounded, log_path):
        bf = bounded(max_bytes=40)
        bf.append(numbered(0))
        bf.append(numbered(1))

        with patch("boundlog.core.bounded_file.tempfile.mkstemp", side_effect=OSError("read-only")):
            assert bf.append(numbered(2)) is False

        assert bf.usable
        assert log_path.read_text() == numbered(0) + numbered(1)

    def test_reopen_failure_makes_sink_unusable(self, bounded, log_path):
        bf = bounded(max_bytes=40)
        bf.append(numbered(0))
        bf.append(numbered(1))

        warnings = Console(file=io.StringIO(), width=200, color_system=None, theme=BOUNDLOG_THEME)
        with patch("boundlog.core.bounded_file.error_console", warnings):
            with patch("boundlog.core.bounded_file.open", side_effect=OSError("gone"), create=True):
                assert bf.append(numbered(2)) is False

            assert not bf.usable
            assert bf.append(numbered(3)) is False
            assert bf.append(numbered(4)) is False

        reported = warnings.file.getvalue()
        assert reported.count("is unavailable") == 1
        assert "file logging disabled" in reported
        assert "unavailable" not in log_path.read_text()
        assert bf.size() == 0
        # Content already rewritten is intact.
        assert log_path.read_text() == numbered(1)

    def test_reopen_after_failure(self, bounded, log_path):
        bf = bounded(max_bytes=40)
        with patch("boundlog.core.bounded_file.open", side_effect=OSError("gone"), create=True):
            for i in range(3):
                bf.append(numbered(i))
        assert not bf.usable

        bf.open(log_path)
        assert bf.usable
        assert bf.append(numbered(9))


class TestLimits:
    """Tests for ceiling changes and concurrent appends."""

    def test_enforce_limit_trims_existing_file(self, bounded, log_path):
        bf = bounded(max_bytes=0)
        for i in range(10):
            bf.append(numbered(i))
        bf.max_bytes = 60
        assert bf.enforce_limit()
        assert log_path.read_text() == "".join(numbered(i) for i in range(7, 10))

    def test_enforce_limit_noop_when_unbounded(self, bounded, log_path):
        bf = bounded(max_bytes=0)
        bf.append(numbered(0))
        assert bf.enforce_limit()
        assert log_path.read_text() == numbered(0)

    def test_concurrent_appends_stay_bounded(self, bounded, log_path):
        bf = bounded(max_bytes=1024)

        def writer(offset: int) -> None:
            for i in range(50):
                bf.append(numbered(offset + i))

        threads = [threading.Thread(target=writer, args=(n * 1000,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        content = log_path.read_text()
        assert len(content.encode()) <= 1024
        for line in content.splitlines(keepends=True):
            assert len(line) == 20 and line.startswith("entry ")

    def test_close_is_idempotent(self, bounded):
        bf = bounded()
        bf.close()
        bf.close()
        assert not bf.usable
        assert bf.append("late\n") is False

    def test_context_manager_closes(self, log_path):
        with BoundedLogFile(log_path) as bf:
            bf.append("inside\n")
        assert not bf.usable
        assert log_path.read_text() == "inside\n"
