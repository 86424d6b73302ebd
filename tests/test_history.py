import copy

from tubeterm_cli.app import HISTORY_START_MESSAGE
from tubeterm_cli.history import SNAPSHOT_FIELDS
from tubeterm_cli.loader import run_load_job
from tubeterm_cli.page_controller import default_state
from tubeterm_cli.structs import (
    ChannelPage,
    ChannelTab,
    ItemDisplayPage,
    MainMenuPage,
    MainMenuTab,
    VideoItem,
)


def snapshot(app):
    return {name: copy.deepcopy(getattr(app, name)) for name in SNAPSHOT_FIELDS}


def test_pop_on_empty_history_only_sets_message(make_app):
    app = make_app()
    app.hover = (1, 1)
    before = snapshot(app)
    before_settings = copy.deepcopy(app.search_settings)

    assert app.pop() is False

    after = snapshot(app)
    assert after.pop("message") == HISTORY_START_MESSAGE
    before.pop("message")
    assert after == before
    assert app.search_settings == before_settings
    assert app.history == []


def test_selecting_trending_tab_pushes_history(make_app):
    app = make_app()
    app.load = False
    app.hover = (0, 1)  # Trending tab

    new = app.handle_key("Enter")

    assert new is not app
    assert new.page == MainMenuPage(MainMenuTab.TRENDING)
    assert len(new.history) == len(app.history) + 1
    assert new.load is True
    assert new.hover is None and new.selected is None


def test_pop_restores_snapshot_but_keeps_session_fields(make_app):
    app = make_app()
    app.load_now()
    app.hover = (1, 1)  # Popular tab
    app.search_text = "typed before"
    expected = snapshot(app)

    new = app.handle_key("Enter")
    assert new.page == MainMenuPage(MainMenuTab.POPULAR)

    # Session-scoped state changed after the push must survive the pop.
    new.search_settings.sort_by = "rating"
    config, watch_history = new.config, new.watch_history

    assert new.pop() is True
    assert snapshot(new) == expected
    assert new.search_settings.sort_by == "rating"
    assert new.config is config and new.watch_history is watch_history
    assert new.history == []


def test_back_key_pops(make_app):
    app = make_app()
    app.hover = (2, 1)
    new = app.handle_key("Enter")
    assert new.page == MainMenuPage(MainMenuTab.HISTORY)

    new.handle_key("Backspace")
    assert new.page == MainMenuPage(MainMenuTab.TRENDING)
    assert new.hover == (2, 1)
    assert new.history == []

    new.handle_key("Backspace")
    assert new.message == HISTORY_START_MESSAGE


def test_home_discards_history(make_app):
    app = make_app()
    app.hover = (1, 1)
    app = app.handle_key("Enter")
    app.hover = (2, 1)
    app = app.handle_key("Enter")
    assert len(app.history) == 2

    app.handle_key("Home")

    assert app.history == []
    assert app.page == MainMenuPage()
    assert app.load is True


def test_channel_video_enter_opens_item_page(make_app, client):
    app = make_app(ChannelPage(ChannelTab.VIDEOS, "UC1"))
    app.load_now()
    app.hover = (0, 2)  # channel info display
    app = app.handle_key("Enter")
    assert app.selected == (0, 2)
    for _ in range(3):
        app = app.handle_key("Down")
    channel_state = copy.deepcopy(app.state)

    new = app.handle_key("Enter")

    assert new.page == ItemDisplayPage(VideoItem("ch3"))
    assert len(new.history) == 1
    assert new.history[0].page == ChannelPage(ChannelTab.VIDEOS, "UC1")
    assert new.history[0].state == channel_state
    assert new.state == default_state(ItemDisplayPage(VideoItem("ch3")))
    assert new.load is True


def test_channel_same_tab_is_refused(make_app):
    app = make_app(ChannelPage(ChannelTab.HOME, "UC1"))
    app.hover = (0, 1)  # Home tab
    assert app.handle_key("Enter") is app
    assert app.history == []
    assert app.selected is None

    app.hover = (2, 1)  # Playlists tab
    new = app.handle_key("Enter")
    assert new.page == ChannelPage(ChannelTab.PLAYLISTS, "UC1")
    assert len(new.history) == 1


def test_back_reloads_page_left_while_loading(make_app):
    app = make_app()
    job = app.begin_load()
    app.hover = (1, 1)  # Popular tab, pressed before Trending finished loading

    new = app.handle_key("Enter")
    new.load_now()
    assert new.apply_load(run_load_job(job)) is False

    new = new.handle_key("Backspace")

    assert new.page == MainMenuPage()
    assert new.load is True
    new.load_now()
    assert new.state.item_at(0, 2).videos[0].video_id == "vid0"


def test_back_keeps_finished_page_loaded(make_app):
    app = make_app()
    app.load_now()
    app.hover = (1, 1)

    new = app.handle_key("Enter").handle_key("Backspace")

    assert new.load is False
    assert new.state.item_at(0, 2).videos is not None
