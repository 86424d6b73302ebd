import pytest

from tubeterm_cli.config import Config
from tubeterm_cli.layout import Rect
from tubeterm_cli.loader import run_suggestion_job
from tubeterm_cli.pages import item_info
from tubeterm_cli.pages.item_info import player_args
from tubeterm_cli.pages.search import SearchKind
from tubeterm_cli.structs import (
    ChannelPage,
    ChannelTab,
    ItemDisplayPage,
    MainMenuPage,
    PlaylistItem,
    SearchPage,
    SearchSettings,
    VideoItem,
)
from tubeterm_cli.widgets.text_list import TextList


def focus_search_bar(app):
    app.load = False
    app.hover = (0, 0)
    return app.handle_key("Enter")


def test_typing_in_search_bar_fetches_suggestions(make_app, client):
    app = focus_search_bar(make_app())
    assert app.selected == (0, 0) and app.popup_focus is True

    for key in "cat":
        app = app.handle_key(key)
    app = app.handle_key("Backspace")

    # Keystrokes only queue a request; nothing is fetched on the input path.
    assert not any(call[0] == "suggestions" for call in client.calls)
    assert app.suggestion_query == "ca"
    app.suggest_now()

    assert app.search_text == "ca"
    assert app.state.item_at(0, 0).suggestions == ["cats", "cat videos"]
    assert client.calls[-1] == ("suggestions", "ca")
    assert app.page == MainMenuPage()


def test_search_bar_enter_opens_results(make_app):
    app = focus_search_bar(make_app())
    for key in "q dogs":
        app = app.handle_key(key)

    new = app.handle_key("Enter")

    assert new.page == SearchPage()
    assert new.search_text == "q dogs"
    assert len(new.history) == 1


def test_search_bar_enter_uses_highlighted_suggestion(make_app):
    app = focus_search_bar(make_app())
    app = app.handle_key("c")
    app.suggest_now()
    app = app.handle_key("Down")
    app = app.handle_key("Down")

    new = app.handle_key("Enter")

    assert new.search_text == "cat videos"


def test_empty_search_stays_put(make_app):
    app = focus_search_bar(make_app())

    new = app.handle_key("Enter")

    assert new is app
    assert app.message == "Type something to search for"


def test_settings_popup_cycles_values(make_app):
    app = make_app()
    app.load = False
    app.hover = (1, 0)
    app = app.handle_key("Enter")

    app = app.handle_key("Right")
    app = app.handle_key("Down")
    app = app.handle_key("Down")
    app = app.handle_key("Left")

    assert app.search_settings == SearchSettings(sort_by="rating", duration="long")
    assert app.state.item_at(1, 0).field_idx == 2


def test_search_settings_survive_navigation(make_app):
    app = make_app()
    app.search_settings.cycle(3, 1)
    app.hover = (1, 1)

    new = app.handle_key("Enter")

    assert new.search_settings.type == "video"


def test_search_results_and_page_turning(make_app, client):
    app = make_app(SearchPage())
    app.search_text = "cats"
    app.load_now()

    assert app.state.item_at(0, 1).textlist.items == [
        "Search video",
        "[playlist] Search playlist",
        "[channel] Search channel",
    ]

    app.hover = (0, 2)
    app.handle_key("Enter")
    assert app.message == "Already on the first page"

    app.hover = (1, 2)
    app.handle_key("Enter")
    assert app.page_no == 2
    assert app.state.item_at(0, 1).results is None
    app.load_now()
    assert client.calls[-1] == ("search", "cats", 2)


@pytest.mark.parametrize(
    "downs, expected",
    [
        (0, ItemDisplayPage(VideoItem("s1"))),
        (1, ItemDisplayPage(PlaylistItem("PL1"))),
        (2, ChannelPage(ChannelTab.HOME, "UC9")),
    ],
)
def test_search_result_opens_matching_page(make_app, downs, expected):
    app = make_app(SearchPage())
    app.search_text = "cats"
    app.load_now()
    app.hover = (0, 1)
    app = app.handle_key("Enter")
    assert app.state.item_at(0, 1).kind is SearchKind.RESULTS

    for _ in range(downs):
        app = app.handle_key("Down")
    new = app.handle_key("Enter")

    assert new.page == expected


def test_play_launches_player(make_app, monkeypatch):
    launched = []

    def fake_popen(args, **kwargs):
        launched.append((args, kwargs.get("start_new_session")))

    monkeypatch.setattr(item_info.subprocess, "Popen", fake_popen)
    config = Config(player_command=("mpv", "--no-video", "{url}"))
    app = make_app(ItemDisplayPage(VideoItem("abc")), config=config)
    app.load_now()
    app.hover = (0, 2)

    app.handle_key("Enter")

    assert launched == [(["mpv", "--no-video", "https://www.youtube.com/watch?v=abc"], True)]
    assert app.message == "Playing Full abc"
    assert app.selected is None


def test_missing_player_sets_message(make_app, monkeypatch):
    def fake_popen(args, **kwargs):
        raise FileNotFoundError(args[0])

    monkeypatch.setattr(item_info.subprocess, "Popen", fake_popen)
    app = make_app(ItemDisplayPage(VideoItem("abc")))
    app.load_now()
    app.hover = (0, 2)

    app.handle_key("Enter")

    assert app.message == "mpv not found"


def test_play_before_load_is_refused(make_app, monkeypatch):
    monkeypatch.setattr(item_info.subprocess, "Popen", pytest.fail)
    app = make_app(ItemDisplayPage(VideoItem("abc")))
    app.hover = (0, 2)

    app.handle_key("Enter")

    assert app.message == "Details are still loading"


def test_channel_button_opens_channel_home(make_app):
    app = make_app(ItemDisplayPage(VideoItem("abc")))
    app.load_now()
    app.hover = (1, 2)

    new = app.handle_key("Enter")

    assert new.page == ChannelPage(ChannelTab.HOME, "UC1")


def test_playlist_entry_opens_video(make_app):
    app = make_app(ItemDisplayPage(PlaylistItem("PLx")))
    app.load_now()
    app.hover = (0, 1)
    app = app.handle_key("Enter")
    app = app.handle_key("Down")

    new = app.handle_key("Enter")

    assert new.page == ItemDisplayPage(VideoItem("pl1"))


def test_player_args_appends_url_without_placeholder():
    assert player_args(("vlc",), "u") == ["vlc", "u"]
    assert player_args(("mpv", "{url}"), "u") == ["mpv", "u"]


def test_text_list_scrolls_with_selection():
    textlist = TextList(items=[str(i) for i in range(20)], page_size=5)
    for _ in range(7):
        textlist.down()
    textlist.area(Rect(0, 0, 10, 5))

    assert textlist.selected == 7
    assert textlist.scroll == 3
    textlist.last()
    assert textlist.current() == 19
    textlist.up()
    assert textlist.selected == 18
    textlist.first()
    assert textlist.selected == 0


def test_suggestions_for_old_text_are_dropped(make_app):
    app = focus_search_bar(make_app())
    app = app.handle_key("c")
    job = app.begin_suggestions()
    app = app.handle_key("a")

    assert app.apply_suggestions(run_suggestion_job(job)) is False
    assert app.state.item_at(0, 0).suggestions == []

    app.suggest_now()
    assert app.state.item_at(0, 0).suggestions == ["cats", "cat videos"]


def test_clearing_search_text_clears_suggestions(make_app):
    app = focus_search_bar(make_app())
    app = app.handle_key("c")
    app.suggest_now()

    app = app.handle_key("Backspace")

    assert app.suggestion_query is None
    assert app.state.item_at(0, 0).suggestions == []
