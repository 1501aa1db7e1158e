import pytest

from timeshell.history import add_to_history, get_history_item, show_history


def test_lookup_excludes_newest_entry(state) -> None:
    for line in ("ls", "ptime", "^ 2"):
        add_to_history(state, line)

    assert get_history_item(state, 1) == "ls"
    assert get_history_item(state, 2) == "ptime"
    assert get_history_item(state, 3) is None
    assert get_history_item(state, 0) is None


def test_show_history_is_one_indexed(state, capsys: pytest.CaptureFixture[str]) -> None:
    add_to_history(state, 'echo "a  b"')
    add_to_history(state, "history")
    show_history(state)
    assert capsys.readouterr().out.splitlines() == [
        "-- Command History --",
        '1 : echo "a  b"',
        "2 : history",
    ]
