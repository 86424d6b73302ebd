from tubeterm_cli.layout import Length
from tubeterm_cli.pages.global_items import GlobalItem, GlobalKind
from tubeterm_cli.pages.main_menu import MainMenuItem
from tubeterm_cli.structs import (
    MainMenuTab,
    Row,
    RowItem,
    SearchSettings,
    State,
    clamp_hover,
    selectable_index,
)


def message():
    return RowItem(GlobalItem(GlobalKind.MESSAGE_BAR), Length(10))


def tab(t=MainMenuTab.TRENDING):
    return RowItem(MainMenuItem.selector(t), Length(10))


def test_selectable_index_skips_unselectable_and_empty_rows():
    state = State(
        [
            Row([message(), tab(), message(), tab()], Length(3)),
            Row([message()], Length(3)),
            Row([tab(), tab(), tab()], Length(3)),
        ]
    )

    index = selectable_index(state)

    assert index == [[(1, 0), (3, 0)], [(0, 2), (1, 2), (2, 2)]]
    assert all(row for row in index)


def test_selectable_index_of_empty_state():
    assert selectable_index(State([])) == []
    assert selectable_index(State([Row([message()], Length(3))])) == []


def test_clamp_hover():
    index = [[(0, 0), (1, 0)], [(0, 1)]]
    assert clamp_hover((5, 5), index) == (0, 1)
    assert clamp_hover((1, 0), index) == (1, 0)
    assert clamp_hover((0, 0), []) is None
    assert clamp_hover(None, index) is None


def test_search_settings_cycle_wraps_and_builds_params():
    settings = SearchSettings()
    settings.cycle(0, -1)
    assert settings.sort_by == "view_count"
    settings.cycle(1, 1)
    assert settings.date == "hour"

    params = settings.params()
    assert params == {"sort_by": "view_count", "type": "all", "date": "hour"}
    assert "duration" not in params
