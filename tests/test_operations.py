from nanoffmpeg.screens.messages import BackMsg, KeyMsg, WindowSizeMsg
from nanoffmpeg.screens.operations import (
    ALL_OPERATIONS,
    OperationID,
    OperationSelectedMsg,
    OperationsScreen,
)
from nanoffmpeg.ui.style import strip_ansi


def press(screen, key):
    result, cmd = screen.update(KeyMsg(key))
    assert result is screen
    return cmd


def test_all_operations_complete():
    expected = int(OperationID.FILTERS) + 1
    assert len(ALL_OPERATIONS) == expected
    m = OperationsScreen()
    selected = []
    for _ in range(expected):
        msg = press(m, "enter")()
        selected.append(msg.operation)
        press(m, "down")
    assert len({op.id for op in selected}) == expected
    assert [int(op.id) for op in selected] == list(range(expected))
    assert all(op.name and op.desc for op in selected)
    assert selected == list(ALL_OPERATIONS)


def test_navigation():
    m = OperationsScreen()
    press(m, "down")
    press(m, "down")
    press(m, "up")
    assert m.cursor == 1
    press(m, "j")
    assert m.cursor == 2
    press(m, "k")
    assert m.cursor == 1


def test_cursor_clamped():
    m = OperationsScreen()
    press(m, "up")
    assert m.cursor == 0
    for _ in range(100):
        press(m, "down")
    assert m.cursor == len(ALL_OPERATIONS) - 1


def test_enter_emits_operation_selected():
    m = OperationsScreen()
    press(m, "down")
    cmd = press(m, "enter")
    msg = cmd()
    assert isinstance(msg, OperationSelectedMsg)
    assert msg.operation.id == ALL_OPERATIONS[1].id
    assert msg.operation.name == "Extract Audio"


def test_esc_emits_back():
    m = OperationsScreen()
    cmd = press(m, "esc")
    assert isinstance(cmd(), BackMsg)


def test_unknown_key_returns_no_command():
    m = OperationsScreen()
    assert press(m, "x") is None
    assert m.cursor == 0


def test_view_highlights_selected():
    view = strip_ansi(OperationsScreen().view())
    assert "What would you like to do?" in view
    assert " > " in view
    for op in ALL_OPERATIONS:
        assert op.name in view


def test_breadcrumb():
    assert OperationsScreen().breadcrumb() == "Operations"


def test_key_hints():
    keys = {h.key for h in OperationsScreen().key_hints()}
    assert {"↑↓", "Enter", "Esc"} <= keys


def test_window_size_stored():
    m = OperationsScreen()
    m.update(WindowSizeMsg(90, 30))
    assert (m.width, m.height) == (90, 30)


def test_init_returns_no_cmd():
    assert OperationsScreen().init() is None