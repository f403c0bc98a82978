"""Tests for tcd_log and its file mirror."""

import pytest

from tcd_codec import conf, log
from tcd_codec import table as tcd
from tcd_codec.records import Record


@pytest.fixture
def logging_on(monkeypatch):
    monkeypatch.setattr(log, "_enabled", True)
    monkeypatch.setattr(log, "first_line", True)


class TestLogFile:
    def test_lines_mirrored_to_file(self, logging_on, monkeypatch, tmp_path, capsys):
        log_file = tmp_path / "logs" / "tcd.log"
        monkeypatch.setattr(conf, "LOG_FILE", log_file)
        tcd.decode_bytes(tcd.encode_bytes([Record(1, "a")]))
        text = log_file.read_text(encoding="utf-8")
        assert "--- New tcd_codec Session ---" in text
        assert "decoded 1 records" in text
        assert "decoded 1 records" in capsys.readouterr().err

    def test_unwritable_log_file_does_not_fail_codec(self, logging_on, monkeypatch, tmp_path, capsys):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        monkeypatch.setattr(conf, "LOG_FILE", blocker / "tcd.log")
        t = tcd.decode_bytes(tcd.encode_bytes([Record(1, "a")]))
        assert t == [Record(1, "a")]
        err = capsys.readouterr().err
        assert "cannot append to" in err
        assert "decoded 1 records" in err

    def test_disabled_writes_nothing(self, monkeypatch, capsys):
        monkeypatch.setattr(log, "_enabled", False)
        log.tcd_log("hidden")
        assert capsys.readouterr().err == ""
