import pytest

from nanoffmpeg.ui.responsive import (
    MIN_HEIGHT,
    MIN_WIDTH,
    check_terminal_size,
    content_width,
)


@pytest.mark.parametrize(
    "width, height, want_msg",
    [
        (MIN_WIDTH, MIN_HEIGHT, False),
        (MIN_WIDTH + 40, MIN_HEIGHT + 10, False),
        (MIN_WIDTH - 1, MIN_HEIGHT, True),
        (MIN_WIDTH, MIN_HEIGHT - 1, True),
        (10, 10, True),
    ],
)
def test_check_terminal_size(width, height, want_msg):
    got = check_terminal_size(width, height)
    if want_msg:
        assert "Terminal too small" in got
        assert "80x24" in got
    else:
        assert got == ""


@pytest.mark.parametrize(
    "total, expected",
    [
        (100, 96),
        (84, 80),
        (MIN_WIDTH, MIN_WIDTH - 4),
        (60, MIN_WIDTH - 4),
        (0, MIN_WIDTH - 4),
    ],
)
def test_content_width(total, expected):
    assert content_width(total) == expected