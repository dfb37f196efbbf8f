"""
End-to-end tests for the command line entry point.
"""

import io

import pytest

from main import EXIT_CAPACITY, EXIT_MALFORMED, EXIT_OK, main

from trail_maps import DISCONNECTED_MAP, LOOP_MAP, SAMPLE_MAP


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_text(SAMPLE_MAP)
    return str(path)


def first_line(capsys):
    return capsys.readouterr().out.strip().splitlines()[0]


def test_default_is_slippery(sample_file, capsys):
    assert main([sample_file]) == EXIT_OK
    assert first_line(capsys) == "94"


@pytest.mark.parametrize("args", [["--mode", "dry"], ["--part", "2"], ["-p", "2"]])
def test_dry_mode(sample_file, capsys, args):
    assert main([sample_file, *args]) == EXIT_OK
    assert first_line(capsys) == "154"


def test_memoized_bounds(sample_file, capsys):
    assert main([sample_file, "--part", "2", "--memoize-bounds", "-q"]) == EXIT_OK
    assert first_line(capsys) == "154"


def test_stdin_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(SAMPLE_MAP))
    assert main(["-"]) == EXIT_OK
    assert first_line(capsys) == "94"


def test_stats(sample_file, capsys):
    assert main([sample_file, "--stats"]) == EXIT_OK
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "94"
    assert "Search Diagnostics" in out
    assert "States Expanded" in out


def test_dot_output(sample_file, capsys):
    assert main([sample_file, "--dot"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "digraph G" in out
    assert "0,1" in out


def test_compare_output(tmp_path, capsys):
    path = tmp_path / "loop.txt"
    path.write_text(LOOP_MAP)
    assert main([str(path), "--compare"]) == EXIT_OK
    out = capsys.readouterr().out
    assert "Grid DFS" in out
    assert out.strip().endswith("Solvers agree")


def test_unreachable(tmp_path, capsys):
    path = tmp_path / "split.txt"
    path.write_text(DISCONNECTED_MAP)
    assert main([str(path)]) == EXIT_OK
    assert first_line(capsys) == "unreachable"


@pytest.mark.parametrize("text", ["#.#\n#..\n#.", "#.#\n#x#\n#.#\n", "###\n#.#\n#.#\n"])
def test_malformed_map(tmp_path, capsys, text):
    path = tmp_path / "bad.txt"
    path.write_text(text)
    assert main([str(path)]) == EXIT_MALFORMED
    assert capsys.readouterr().out == ""


def test_capacity_exceeded(tmp_path, capsys):
    path = tmp_path / "loop.txt"
    path.write_text(LOOP_MAP)
    assert main([str(path), "--max-junctions", "5"]) == EXIT_CAPACITY
    assert capsys.readouterr().out == ""


def test_mode_and_part_are_exclusive(sample_file):
    with pytest.raises(SystemExit):
        main([sample_file, "--mode", "dry", "--part", "1"])
