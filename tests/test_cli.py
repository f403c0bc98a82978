"""Tests for the tcd command-line interface."""

import io

import pytest

from tcd_codec import cli, log
from tcd_codec.records import Record
from tcd_codec.table import load, save


@pytest.fixture
def tcd_file(tmp_path):
    fp = tmp_path / "TString.tcd"
    save([Record(5, "ABC"), Record(7, "Zebra"), Record(5, "abacus")], fp)
    return fp


@pytest.fixture(autouse=True)
def quiet_log(monkeypatch):
    monkeypatch.setattr(log, "_enabled", False)


class TestShowAndFind:
    def test_show(self, tcd_file, capsys):
        assert cli.main(["show", str(tcd_file)]) == 0
        out = capsys.readouterr().out
        assert out == "0: ABC\n1: Zebra\n2: abacus\nCount: 3\n"

    def test_show_ids(self, tcd_file, capsys):
        cli.main(["show", "--ids", str(tcd_file)])
        assert "1: [7] Zebra" in capsys.readouterr().out

    def test_find_prefix(self, tcd_file, capsys):
        assert cli.main(["find", str(tcd_file), "1: z"]) == 0
        assert capsys.readouterr().out == "1: Zebra\n"

    def test_find_all(self, tcd_file, capsys):
        assert cli.main(["find", "--all", str(tcd_file), "ab"]) == 0
        assert capsys.readouterr().out == "0: ABC\n2: abacus\n"

    def test_find_no_match(self, tcd_file, capsys):
        assert cli.main(["find", str(tcd_file), "nothing"]) == 1
        assert "no record matches" in capsys.readouterr().err


class TestExportAndBuild:
    def test_export_stdout(self, tcd_file, capsys):
        assert cli.main(["export", str(tcd_file)]) == 0
        assert capsys.readouterr().out == "5|ABC\n7|Zebra\n5|abacus\n"

    def test_export_then_build(self, tcd_file, tmp_path):
        lines = tmp_path / "strings.txt"
        out = tmp_path / "rebuilt.tcd"
        assert cli.main(["export", str(tcd_file), "-o", str(lines)]) == 0
        assert cli.main(["build", str(lines), "-o", str(out)]) == 0
        assert out.read_bytes() == tcd_file.read_bytes()

    def test_build_from_stdin(self, tmp_path, monkeypatch):
        out = tmp_path / "new.tcd"
        monkeypatch.setattr("sys.stdin", io.StringIO("5|ABC\n\n7|Z\n"))
        assert cli.main(["build", "-o", str(out)]) == 0
        assert out.read_bytes() == bytes([2, 0, 5, 0, 3, 0x41, 0x42, 0x43, 7, 0, 1, 0x5A])

    def test_build_bad_line(self, tmp_path, monkeypatch, capsys):
        out = tmp_path / "new.tcd"
        monkeypatch.setattr("sys.stdin", io.StringIO("oops\n"))
        assert cli.main(["build", "-o", str(out)]) == 2
        assert capsys.readouterr().err.startswith("error: ")
        assert not out.exists()


class TestEdit:
    def test_add_default(self, tcd_file):
        assert cli.main(["add", str(tcd_file)]) == 0
        assert load(tcd_file)[-1] == Record(0, "New string")

    def test_add_with_values(self, tcd_file):
        cli.main(["add", str(tcd_file), "--id", "42", "--text", "hello"])
        assert load(tcd_file)[3] == Record(42, "hello")

    def test_delete(self, tcd_file):
        assert cli.main(["delete", str(tcd_file), "1"]) == 0
        assert [r.text for r in load(tcd_file)] == ["ABC", "abacus"]

    def test_delete_bad_index(self, tcd_file, capsys):
        assert cli.main(["delete", str(tcd_file), "9"]) == 2
        assert "no record at index 9" in capsys.readouterr().err
        assert len(load(tcd_file)) == 3

    def test_set(self, tcd_file):
        assert cli.main(["set", str(tcd_file), "0", "--id", "1", "--text", "one"]) == 0
        assert load(tcd_file)[0] == Record(1, "one")

    def test_set_bad_id(self, tcd_file, capsys):
        assert cli.main(["set", str(tcd_file), "0", "--id", "70000"]) == 2
        assert load(tcd_file)[0] == Record(5, "ABC")


class TestErrors:
    def test_missing_file(self, tmp_path, capsys):
        assert cli.main(["show", str(tmp_path / "missing.tcd")]) == 2
        assert capsys.readouterr().err.startswith("error: ")

    def test_truncated_file(self, tmp_path, capsys):
        fp = tmp_path / "bad.tcd"
        fp.write_bytes(b"\x02\x00\x05\x00\x03AB")
        assert cli.main(["show", str(fp)]) == 2
        assert "record 0" in capsys.readouterr().err

    def test_verbose_logs_to_stderr(self, tcd_file, capsys):
        cli.main(["-v", "show", str(tcd_file)])
        assert "decoded 3 records" in capsys.readouterr().err
