import json
from pathlib import Path

from salarybox.cli import main


def _write_players(tmp_path: Path) -> Path:
    path = tmp_path / "players.csv"
    path.write_text(
        "Player Name,Team,Position,Salary\n"
        "p1,A,P,100\n"
        "p2,A,C,200\n"
        "p3,A,P,300\n"
        "p4,A,C,400\n"
        "p5,A,P,10000\n",
        encoding="utf-8",
    )
    return path


def test_cli_writes_outputs(tmp_path: Path, capsys):
    players = _write_players(tmp_path)
    output = tmp_path / "outliers.csv"
    chart = tmp_path / "chart.html"

    code = main([
        str(players),
        "--filter",
        "group-outliers",
        "--output",
        str(output),
        "--chart",
        str(chart),
    ])

    assert code == 0
    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Team,Player,Team,Position,Salary"
    assert lines[1] == "A,p5,A,P,10000"
    assert "plotly" in chart.read_text(encoding="utf-8").lower()
    out = capsys.readouterr().out
    assert "A: n=4 median=250" in out


def test_cli_json_output(tmp_path: Path, capsys):
    players = _write_players(tmp_path)

    code = main([str(players), "--filter", "top10", "--group-by", "position", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "empty"
    assert [entry["rank"] for entry in payload["highlights"]] == [1, 2, 3, 4, 5]


def test_cli_column_override(tmp_path: Path, capsys):
    path = tmp_path / "club.csv"
    path.write_text("Club,Role,Pay\nA,P,100\n", encoding="utf-8")

    code = main([str(path), "--column", "position=Role", "--column", "salary=Pay"])

    assert code == 0
    assert "A: n=1" in capsys.readouterr().out


def test_cli_missing_columns(tmp_path: Path, capsys):
    path = tmp_path / "bad.csv"
    path.write_text("Player,Salary\nSam,100\n", encoding="utf-8")

    code = main([str(path)])

    assert code == 2
    assert "team, position" in capsys.readouterr().err


def test_cli_bad_column_entry(tmp_path: Path, capsys):
    players = _write_players(tmp_path)

    assert main([str(players), "--column", "salary"]) == 2
    assert main([str(players), "--column", "age=Age"]) == 2
