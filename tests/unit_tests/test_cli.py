import pytest

from linecompare import compare
from linecompare.cli import NO_MEMORY, SYNTAX, main
from linecompare.report import IDENTICAL_MESSAGE, SEPARATOR


@pytest.fixture
def fruit_files(tmp_path):
    old = tmp_path / "old.txt"
    new = tmp_path / "new.txt"
    old.write_text("apple\nbanana\ncherry\n")
    new.write_text("apple\nblueberry\ncherry\n")
    return str(old), str(new)


@pytest.mark.parametrize("engine", ["sequential", "block"])
def test_reports_difference(fruit_files, capsys, engine):
    old, new = fruit_files
    assert main([old, new], engine=engine) == 0

    captured = capsys.readouterr()
    assert captured.out == (
        f'"{old}",    2: banana\n'
        f'"{new}",    2: blueberry\n'
        f'{SEPARATOR}\n'
    )


def test_identical_files(fruit_files, capsys):
    old, _ = fruit_files
    assert main([old, old]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert IDENTICAL_MESSAGE in captured.err


def test_engine_option(fruit_files, capsys):
    old, new = fruit_files
    assert main(["--engine", "block", "--no-mmap", "--no-pad", old, new]) == 0
    assert "blueberry" in capsys.readouterr().out


@pytest.mark.parametrize("argv", [["-h"], [], ["only-one"], ["a", "b", "c"]])
def test_usage_exits_successfully(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        code = main(argv)
        raise SystemExit(code)
    assert excinfo.value.code == 0
    assert SYNTAX in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    missing = str(tmp_path / "missing.txt")
    assert main([missing, missing]) == 1
    assert f'failed to open input file "{missing}"' in capsys.readouterr().err


def test_bad_max_gap(fruit_files, capsys):
    old, new = fruit_files
    assert main(["--max-gap", "0", old, new], engine="sequential") == 1
    assert "max_gap" in capsys.readouterr().err


def test_out_of_memory(fruit_files, capsys, monkeypatch):
    def no_memory(buffer):
        raise MemoryError

    monkeypatch.setattr(compare, "build_line_table", no_memory)
    old, new = fruit_files
    assert main([old, new]) == 1
    assert NO_MEMORY in capsys.readouterr().err


def test_help_flag_after_files(fruit_files, capsys):
    old, new = fruit_files
    assert main([old, new, "-h"]) == 0
    captured = capsys.readouterr()
    assert captured.out == ""
    assert SYNTAX in captured.err


def test_file_named_like_help_flag(fruit_files, capsys, monkeypatch, tmp_path):
    old, _ = fruit_files
    monkeypatch.chdir(tmp_path)
    (tmp_path / "-h").write_text("apple\nbanana\ncherry\nextra\n")

    assert main(["--no-pad", old, "--", "-h"]) == 0
    captured = capsys.readouterr()
    assert captured.out == '"-h",    4: extra\n' + f'{SEPARATOR}\n'
