from decimal import Decimal

import pytest

from salarybox.ingest import MissingColumnError, cell_text, detect_columns, parse_salary


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12,345万円", 12345.0),
        ("$9,400", 9400.0),
        ("1,200.5", 1200.5),
        (" 800 ", 800.0),
        ("12.5.3", 12.5),
        (".75", 0.75),
        (3200, 3200.0),
        (45.5, 45.5),
        (Decimal("10.25"), 10.25),
    ],
)
def test_parse_salary_valid(raw, expected):
    assert parse_salary(raw) == pytest.approx(expected)


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "N/A",
        "未定",
        ".",
        ",,",
        None,
        True,
        float("nan"),
        float("inf"),
        10**400,
        Decimal("sNaN"),
        ["100"],
        {"v": 1},
    ],
)
def test_parse_salary_rejects_without_raising(raw):
    assert parse_salary(raw) is None


def test_parse_salary_drops_sign_characters():
    assert parse_salary("-500") == 500.0


def test_cell_text_formats_numbers():
    assert cell_text(None) == ""
    assert cell_text(12345.0) == "12345"
    assert cell_text(1.5) == "1.5"
    assert cell_text("A") == "A"


def test_detect_columns_japanese_headers():
    records = [{"選手名": "山田", "チーム名": "A", "ポジション": "投手", "年俸(万円)": "1,000"}]

    binding = detect_columns(records)

    assert binding.team == "チーム名"
    assert binding.position == "ポジション"
    assert binding.salary == "年俸(万円)"
    assert binding.name == "選手名"


def test_detect_columns_english_headers_case_insensitive():
    records = [{"Player Name": "Sam", "TEAM": "NYM", "Position": "P", "Salary ($)": "9000"}]

    binding = detect_columns(records, keywords="en")

    assert binding.team == "TEAM"
    assert binding.salary == "Salary ($)"
    assert binding.name == "Player Name"


def test_detect_columns_first_match_wins():
    records = [{"Team": "A", "Team Code": "a", "Position": "P", "Salary": 1, "Base Salary": 2}]

    binding = detect_columns(records)

    assert binding.team == "Team"
    assert binding.salary == "Salary"


def test_detect_columns_uses_first_non_empty_record():
    records = [{}, {"Team": "A", "Position": "P", "Salary": 1}]

    binding = detect_columns(records)

    assert binding.position == "Position"


def test_detect_columns_name_is_optional():
    binding = detect_columns([{"Team": "A", "Position": "P", "Salary": 1}])
    assert binding.name is None


def test_detect_columns_missing_roles():
    records = [{"Player": "Sam", "Salary": 100}]

    with pytest.raises(MissingColumnError) as excinfo:
        detect_columns(records)

    assert excinfo.value.missing == ("team", "position")
    assert excinfo.value.available == ("Player", "Salary")


def test_detect_columns_empty_dataset():
    with pytest.raises(MissingColumnError) as excinfo:
        detect_columns([])
    assert excinfo.value.missing == ("team", "position", "salary")


def test_detect_columns_overrides():
    records = [{"Club": "A", "Role": "P", "Pay": 1, "Who": "Sam"}]

    binding = detect_columns(
        records,
        overrides={"team": "Club", "position": "Role", "salary": "Pay", "name": "Who"},
    )

    assert binding.model_dump() == {"team": "Club", "position": "Role", "salary": "Pay", "name": "Who"}


def test_detect_columns_override_must_exist():
    records = [{"Team": "A", "Position": "P", "Salary": 1}]

    with pytest.raises(MissingColumnError) as excinfo:
        detect_columns(records, overrides={"salary": "Pay"})
    assert excinfo.value.missing == ("salary",)


def test_detect_columns_unknown_override_role():
    with pytest.raises(ValueError):
        detect_columns([{"Team": "A"}], overrides={"age": "Age"})
