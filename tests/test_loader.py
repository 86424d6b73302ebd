import threading

from tubeterm_cli.loader import ContentLoader, run_load_job, run_suggestion_job
from tubeterm_cli.pages.item_info import ItemInfoKind
from tubeterm_cli.pages.main_menu import MainMenuKind
from tubeterm_cli.structs import ItemDisplayPage, MainMenuPage, MainMenuTab, PlaylistItem, VideoItem


def test_begin_load_packages_only_loadable_widgets(make_app):
    app = make_app()
    job = app.begin_load()

    assert app.load is False
    assert app.message == "Loading main menu..."
    assert [(x, y) for x, y, _ in job.slots] == [(0, 2)]
    assert job.slots[0][2].kind is MainMenuKind.VIDEO_LIST
    assert job.slots[0][2] is not app.state.item_at(0, 2)


def test_successful_load_fills_widget_and_clears_message(make_app):
    app = make_app()
    app.apply_load(run_load_job(app.begin_load()))

    widget = app.state.item_at(0, 2)
    assert [v.video_id for v in widget.videos] == [f"vid{i}" for i in range(6)]
    assert widget.textlist.items[0] == "Video 0"
    assert app.message is None
    assert app.render is True


def test_failed_load_keeps_previous_widget(make_app, client):
    app = make_app()
    app.load_now()
    before = app.state.item_at(0, 2)

    client.fail = "server exploded"
    app.reload()
    stale = app.state.item_at(0, 2)
    app.load_now()

    assert app.state.item_at(0, 2) == stale
    assert app.state.item_at(0, 2) != before
    assert app.message == "server exploded (HTTP 500)"
    assert app.load is False


def test_stale_results_are_ignored(make_app):
    app = make_app()
    job = app.begin_load()
    app.reload()

    assert app.apply_load(run_load_job(job)) is False
    assert app.state.item_at(0, 2).videos is None


def test_history_tab_lists_watch_history(make_app, watch_history, client):
    watch_history.add(client.videos[4])
    app = make_app(MainMenuPage(MainMenuTab.HISTORY))
    app.load_now()

    assert [v.video_id for v in app.state.item_at(0, 2).videos] == ["vid4"]
    assert ("trending",) not in client.calls


def test_video_page_records_watch_history(make_app, watch_history):
    app = make_app(ItemDisplayPage(VideoItem("abc")))
    app.load_now()

    info = app.state.item_at(0, 1)
    assert info.kind is ItemInfoKind.INFO
    assert info.content.title == "Full abc"
    assert [v.video_id for v in watch_history.videos] == ["abc"]


def test_playlist_page_loads_entries(make_app, watch_history):
    app = make_app(ItemDisplayPage(PlaylistItem("PLx")))
    app.load_now()

    info = app.state.item_at(0, 1)
    assert info.textlist.items == ["Video 0", "Video 1", "Video 2"]
    assert len(watch_history) == 0


def test_cancelled_job_stops_early(make_app):
    app = make_app()
    cancel = threading.Event()
    cancel.set()
    result = run_load_job(app.begin_load(), cancel)

    assert result.cancelled is True
    assert app.apply_load(result) is False


def test_background_loader_delivers_result(make_app):
    app = make_app()
    loader = ContentLoader()
    loader.submit(app.begin_load())

    results = loader.wait(timeout=5)

    assert len(results) == 1
    assert app.apply_load(results[0]) is True
    assert app.state.item_at(0, 2).videos
    assert not loader.busy


def test_suggestion_failure_means_no_suggestions(make_app, client):
    app = make_app()
    app.search_text = "ca"
    app.suggestion_query = "ca"
    client.fail = "down"

    result = run_suggestion_job(app.begin_suggestions())

    assert result.suggestions == []
    assert result.query == "ca"


def test_background_suggestions(make_app):
    app = make_app()
    app.search_text = "ca"
    app.suggestion_query = "ca"
    suggester = ContentLoader(run_suggestion_job)
    suggester.submit(app.begin_suggestions())

    results = suggester.wait(timeout=5)

    assert [r.suggestions for r in results] == [["cats", "cat videos"]]
    assert app.apply_suggestions(results[0]) is True
    assert app.begin_suggestions() is None
