import pytest

from salarybox.analysis import analyze, filter_group_outliers, select_top_earners
from salarybox.session import load_session


def _session(rows):
    records = [
        {"Player": name, "Team": team, "Position": position, "Salary": salary}
        for name, team, position, salary in rows
    ]
    return load_session(records, source_name="test")


def _outlier_team_session():
    return _session(
        [
            ("p1", "A", "P", 100),
            ("p2", "A", "C", 200),
            ("p3", "A", "P", 300),
            ("p4", "A", "C", 400),
            ("p5", "A", "P", 10000),
        ]
    )


def _twelve_player_session():
    rows = []
    for idx in range(12):
        team = "A" if idx % 2 == 0 else "B"
        position = "P" if idx < 6 else "IF"
        rows.append((f"player{idx}", team, position, (idx + 1) * 100))
    return _session(rows)


def test_no_session_is_not_loaded():
    result = analyze(None)
    assert result.status == "not_loaded"
    assert result.distributions == ()
    assert result.highlights == ()


def test_filter_none_counts_every_valid_row():
    session = _session(
        [
            ("a", "A", "P", "1,000"),
            ("b", "A", "C", None),
            ("c", None, "P", 500),
            ("d", "B", "", "300万円"),
            ("e", "", "P", 200),
            ("f", "B", "P", "N/A"),
            ("g", "C", "P", 50),
        ]
    )

    result = analyze(session, group_by="team", filter_mode="none")

    assert result.status == "ok"
    assert result.value_count == 3
    assert result.dropped_rows == 4
    assert result.highlights == ()
    assert [d.label for d in result.distributions] == ["A", "B", "C"]


def test_group_by_position_uses_position_column():
    session = _session(
        [
            ("a", "A", "P", 100),
            ("b", "B", "P", 300),
            ("c", "A", "C", 900),
        ]
    )

    result = analyze(session, group_by="position")

    assert [(d.label, d.values) for d in result.distributions] == [("C", [900.0]), ("P", [100.0, 300.0])]


def test_group_keys_are_not_trimmed():
    session = _session([("a", "A", "P", 100), ("b", "A ", "P", 200)])

    result = analyze(session)

    assert sorted(d.label for d in result.distributions) == ["A", "A "]


def test_group_outliers_scenario():
    result = analyze(_outlier_team_session(), group_by="team", filter_mode="group-outliers")

    assert result.status == "ok"
    assert len(result.distributions) == 1
    team_a = result.distributions[0]
    assert team_a.label == "A"
    assert team_a.values == [100.0, 200.0, 300.0, 400.0]
    assert len(result.highlights) == 1
    entry = result.highlights[0]
    assert entry.kind == "outlier"
    assert entry.group_label == "A"
    assert entry.team == "A"
    assert entry.position == "P"
    assert entry.name == "p5"
    assert entry.salary == 10000.0


def test_small_groups_are_never_filtered():
    session = _session(
        [
            ("a", "A", "P", 1),
            ("b", "A", "P", 2),
            ("c", "A", "P", 100000),
        ]
    )

    result = analyze(session, filter_mode="group-outliers")

    assert result.distributions[0].values == [1.0, 2.0, 100000.0]
    assert result.highlights == ()


def test_filter_group_outliers_keeps_fence_values():
    # Q1=2, Q3=4, IQR=2 -> fences [-1, 7]; 7 sits on the fence.
    assert filter_group_outliers([1.0, 2.0, 3.0, 4.0, 7.0]) == [1.0, 2.0, 3.0, 4.0, 7.0]
    assert filter_group_outliers([1.0, 2.0, 3.0, 4.0, 7.5]) == [1.0, 2.0, 3.0, 4.0]


def test_top10_scenario():
    session = _twelve_player_session()

    result = analyze(session, group_by="team", filter_mode="top10")

    ranks = [entry.rank for entry in result.highlights]
    salaries = [entry.salary for entry in result.highlights]
    assert ranks == list(range(1, 11))
    assert salaries == [float(s) for s in range(1200, 200, -100)]
    assert all(entry.kind == "top" for entry in result.highlights)
    # Only the two lowest salaries (100 for team A, 200 for team B) remain.
    remaining = {d.label: d.values for d in result.distributions}
    assert remaining == {"B": [200.0], "A": [100.0]}
    assert [d.label for d in result.distributions] == ["B", "A"]


def test_top10_selection_ignores_grouping():
    session = _twelve_player_session()

    by_team = analyze(session, group_by="team", filter_mode="top10")
    by_position = analyze(session, group_by="position", filter_mode="top10")

    assert by_team.highlights == by_position.highlights
    assert sum(d.count for d in by_position.distributions) == 2


def test_top10_with_fewer_records():
    session = _session([("a", "A", "P", 300), ("b", "A", "P", "x"), ("c", "B", "C", 100)])

    result = analyze(session, filter_mode="top10")

    assert [entry.salary for entry in result.highlights] == [300.0, 100.0]
    assert result.status == "empty"
    assert result.distributions == ()


def test_top_earner_ties_keep_record_order():
    session = _session(
        [
            ("first", "A", "P", 500),
            ("second", "B", "P", 900),
            ("third", "A", "C", 500),
        ]
    )

    ranked = select_top_earners(session.records, session.binding, limit=3)

    assert [item.index for item in ranked] == [1, 0, 2]


def test_top10_counts_records_without_group_key():
    session = _session([("a", None, "P", 1000), ("b", "A", "P", 10)])

    result = analyze(session, filter_mode="top10", top_n=1)

    assert result.highlights[0].name == "a"
    assert result.highlights[0].team == ""
    assert [d.values for d in result.distributions] == [[10.0]]


def test_distributions_sorted_by_median_with_label_tiebreak():
    session = _session(
        [
            ("a", "Zeta", "P", 100),
            ("b", "Alpha", "P", 100),
            ("c", "Mid", "P", 500),
        ]
    )

    result = analyze(session)

    assert [d.label for d in result.distributions] == ["Mid", "Alpha", "Zeta"]
    assert [d.median for d in result.distributions] == [500.0, 100.0, 100.0]


def test_name_column_optional_in_highlights():
    records = [{"Team": "A", "Position": "P", "Salary": s} for s in (1, 2, 3)]
    session = load_session(records)

    result = analyze(session, filter_mode="top10")

    assert [entry.name for entry in result.highlights] == ["", "", ""]


def test_invalid_controls_raise():
    with pytest.raises(ValueError):
        analyze(None, group_by="league")
    with pytest.raises(ValueError):
        analyze(None, filter_mode="median")


def test_group_outliers_follow_selected_grouping():
    session = _session(
        [
            ("p1", "A", "P", 100),
            ("p2", "A", "P", 200),
            ("p3", "A", "P", 300),
            ("p4", "A", "P", 400),
            ("p5", "B", "P", 5000),
            ("c1", "A", "C", 90000),
            ("c2", "B", "C", 1),
        ]
    )

    by_team = analyze(session, group_by="team", filter_mode="group-outliers")
    by_position = analyze(session, group_by="position", filter_mode="group-outliers")

    assert [(h.name, h.group_label) for h in by_team.highlights] == [("c1", "A")]
    # Position C holds an extreme value but has fewer than four players.
    assert [(h.name, h.group_label) for h in by_position.highlights] == [("p5", "P")]
    entry = by_position.highlights[0]
    assert (entry.team, entry.position, entry.salary) == ("B", "P", 5000.0)
    remaining = {d.label: d.values for d in by_position.distributions}
    assert remaining == {"P": [100.0, 200.0, 300.0, 400.0], "C": [1.0, 90000.0]}


def test_keys_with_same_label_share_a_group():
    session = _session(
        [
            ("a", 1, "P", 100),
            ("b", "1", "P", 200),
            ("c", 1.0, "P", 300),
            ("d", 2, "P", 50),
        ]
    )

    result = analyze(session)

    assert [(d.label, d.values) for d in result.distributions] == [
        ("1", [100.0, 200.0, 300.0]),
        ("2", [50.0]),
    ]
