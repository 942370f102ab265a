import numpy as np
import pytest

from polylinesimplifier.errors import PolylineParseError
from polylinesimplifier.main import main
from polylinesimplifier.polyline_io import (
    format_points,
    format_results,
    parse_polyline,
    read_polylines,
)


def test_parse_polyline():
    points = parse_polyline("0,0 1,0.1  2,-0.1\t3,0\n")
    np.testing.assert_array_equal(points, [[0, 0], [1, 0.1], [2, -0.1], [3, 0]])


def test_parse_blank_line_gives_empty_polyline():
    assert parse_polyline("   \n").shape == (0, 2)


@pytest.mark.parametrize("line", ["0,0 1;1", "0,0 1,2,3", "0,0 a,1"])
def test_parse_malformed_line(line):
    with pytest.raises(PolylineParseError) as excinfo:
        parse_polyline(line, line_number=7)
    assert excinfo.value.line_number == 7


def test_read_polylines(tmp_path):
    path = tmp_path / "lines.txt"
    path.write_text("0,0 1,1 2,0\n\n5,5 6,6\n")
    polylines = read_polylines(path)
    assert [p.shape for p in polylines] == [(3, 2), (0, 2), (2, 2)]


def test_read_polylines_reports_line_number(tmp_path):
    path = tmp_path / "lines.txt"
    path.write_text("0,0 1,1\n0,0 x\n")
    with pytest.raises(PolylineParseError, match="line 2"):
        read_polylines(path)


def test_format_points():
    assert format_points([(0, 0), (1.5, -2)]) == (
        "(0.0000000000000000, 0.0000000000000000) "
        "(1.5000000000000000, -2.0000000000000000)"
    )
    assert format_points(None) == "<failed>"


def test_format_results():
    text = format_results([[(0, 0), (1, 0), (2, 0)]], [[(0, 0), (2, 0)]])
    lines = text.splitlines()
    assert lines[0] == "Polyline:"
    assert lines[2] == "Simplified:"
    assert lines[3].count("(") == 2


def test_cli_simplifies_file(tmp_path, capsys):
    path = tmp_path / "lines.txt"
    path.write_text("0,0 1,0.1 2,-0.1 3,0\n0,0 0,10 10,10 10,0\n0,0 5,5\n")

    exit_code = main([str(path), "1.0", "--threads", "4", "--print-results"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert out.count("Time for calculations") == 4
    assert out.count("Simplified:") == 3
    assert "The number of lines in file are 3" in out


def test_cli_reports_failed_polylines(tmp_path, capsys):
    path = tmp_path / "lines.txt"
    path.write_text("0,0 1,1\n\n3,3\n")

    exit_code = main([str(path), "0.5", "--threads", "2"])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "Simplified 1 polylines" in captured.out
    assert "Polyline 1:" in captured.err
    assert "Polyline 2:" in captured.err


def test_cli_rejects_unsupported_thread_count(tmp_path):
    path = tmp_path / "lines.txt"
    path.write_text("0,0 1,1\n")
    with pytest.raises(SystemExit) as excinfo:
        main([str(path), "1.0", "--threads", "3"])
    assert excinfo.value.code == 2


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.txt"), "1.0"]) == 2
    assert "Error reading" in capsys.readouterr().err


def test_cli_negative_epsilon(tmp_path, capsys):
    path = tmp_path / "lines.txt"
    path.write_text("0,0 1,1\n")
    assert main([str(path), "-1"]) == 2
