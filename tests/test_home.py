from types import SimpleNamespace

from nanoffmpeg.screens.home import HOME_OPERATIONS, HomeScreen
from nanoffmpeg.screens.messages import KeyMsg, NavigateMsg, ScreenID, WindowSizeMsg
from nanoffmpeg.ui.style import strip_ansi


def new_model(recent=None):
    info = SimpleNamespace(version="6.1")
    caps = SimpleNamespace(
        codecs=[
            SimpleNamespace(name="libx264", encoding=True),
            SimpleNamespace(name="h264", encoding=False),
        ],
        formats=[SimpleNamespace(name="mp4")],
        filters=["scale"],
        hw_accels=["videotoolbox"],
    )
    return HomeScreen(info, caps, recent)


def press(m, key):
    _, cmd = m.update(KeyMsg(key))
    return cmd


def test_initial_cursor_at_zero():
    m = new_model()
    assert m.cursor == 0
    assert "Convert Format" in strip_ansi(m.view())


def test_navigates_down():
    m = new_model()
    for _ in range(3):
        press(m, "down")
    assert m.cursor == 3


def test_navigates_with_vim_keys():
    m = new_model()
    press(m, "j")
    press(m, "j")
    press(m, "k")
    assert m.cursor == 1


def test_cursor_clamped_at_edges():
    m = new_model()
    press(m, "up")
    assert m.cursor == 0
    for _ in range(50):
        press(m, "down")
    assert m.cursor == len(HOME_OPERATIONS) - 1 == 11


def test_enter_emits_navigate_msg():
    m = new_model()
    press(m, "down")
    cmd = press(m, "enter")
    msg = cmd()
    assert isinstance(msg, NavigateMsg)
    assert msg.screen == ScreenID.FILE_PICKER
    assert msg.payload.name == "Extract Audio"


def test_shows_recent_files_when_provided():
    recents = ["/tmp/alpha.mp4", "/tmp/beta.mkv"]
    view = strip_ansi(new_model(recents).view())
    assert "RECENT FILES" in view
    assert "alpha.mp4" in view
    assert "beta.mkv" in view


def test_recent_files_limited_to_five():
    recents = [f"/tmp/file{i}.mp4" for i in range(7)]
    view = strip_ansi(new_model(recents).view())
    assert "file4.mp4" in view
    assert "file5.mp4" not in view


def test_hides_recent_files_when_empty():
    assert "RECENT FILES" not in strip_ansi(new_model().view())


def test_header_shows_version_and_stats():
    view = strip_ansi(new_model().view())
    for want in ["ffmpeg 6.1", "2 codecs", "1 encoders", "1 formats", "1 filters", "videotoolbox"]:
        assert want in view


def test_breadcrumb():
    assert new_model().breadcrumb() == "Home"


def test_key_hints():
    keys = {h.key for h in new_model().key_hints()}
    assert {"↑↓", "Enter", "q", "?"} <= keys


def test_window_size_stored():
    m = new_model()
    m.update(WindowSizeMsg(100, 40))
    assert (m.width, m.height) == (100, 40)


def test_init_returns_no_cmd():
    assert new_model().init() is None