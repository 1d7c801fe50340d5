"""Tests for the pointer/mode state machine driving the canvas."""

import pytest

from bitcanvas.bit_canvas import BitCanvas
from bitcanvas.codec import encode
from bitcanvas.paint_session import DrawMode, PaintSession, parse_draw_mode
from bitcanvas.validation import InvalidEncodingError


class Recorder:
    """Collects outbound notifications from a session."""

    def __init__(self):
        self.cells = []
        self.encoded = []
        self.cleared = 0

    def on_cell_changed(self, x, y, value):
        self.cells.append((x, y, value))

    def on_encoded_changed(self, text):
        self.encoded.append(text)

    def on_cleared(self):
        self.cleared += 1


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def session(recorder):
    return PaintSession(
        BitCanvas(64),
        on_cell_changed=recorder.on_cell_changed,
        on_encoded_changed=recorder.on_encoded_changed,
        on_cleared=recorder.on_cleared,
    )


def test_defaults():
    s = PaintSession()
    assert s.canvas.side == 64
    assert s.mode is DrawMode.MARK
    assert s.engaged is False
    assert s.encoded == encode(bytes(512))


def test_drag_paints_only_while_engaged(session):
    session.select_mode(DrawMode.MARK)
    session.pointer_primary_down()
    session.cell_pointer_over(1, 1)
    session.cell_pointer_over(1, 2)
    session.pointer_primary_up()
    session.cell_pointer_over(1, 3)

    assert session.canvas.get_cell(1, 1)
    assert session.canvas.get_cell(1, 2)
    assert not session.canvas.get_cell(1, 3)
    assert session.canvas.count_marked() == 2


def test_over_without_engagement_is_noop(session, recorder):
    assert session.cell_pointer_over(3, 3) is False
    assert session.canvas.count_marked() == 0
    assert recorder.cells == [] and recorder.encoded == []
    assert session.get_stats()["stats"]["events_ignored"] == 1


def test_cell_down_paints_and_engages(session, recorder):
    assert session.cell_pointer_down(2, 2) is True
    assert session.engaged is True
    assert session.canvas.get_cell(2, 2)

    session.cell_pointer_over(3, 2)
    assert session.canvas.get_cell(3, 2)
    assert recorder.cells == [(2, 2, True), (3, 2, True)]


def test_mode_switch_mid_session(session):
    session.cell_pointer_down(5, 5)
    assert session.canvas.get_cell(5, 5)

    session.select_mode(DrawMode.CLEAR)
    # Changing mode never repaints
    assert session.canvas.get_cell(5, 5)

    session.cell_pointer_down(5, 5)
    assert session.canvas.get_cell(5, 5) is False


def test_notifications_carry_current_encoding(session, recorder):
    session.cell_pointer_down(0, 0)
    assert recorder.cells == [(0, 0, True)]
    assert recorder.encoded[-1] == session.encoded
    assert recorder.encoded[-1].startswith("gAAA")


def test_redundant_paint_still_notifies(session, recorder):
    session.cell_pointer_down(4, 4)
    session.cell_pointer_down(4, 4)
    assert recorder.cells == [(4, 4, True), (4, 4, True)]
    assert recorder.encoded[0] == recorder.encoded[1]


@pytest.mark.parametrize("x,y", [(-1, 0), (64, 0), (0, 64), (99, -5)])
def test_out_of_range_events_are_ignored(session, recorder, x, y):
    session.cell_pointer_down(1, 1)
    session.pointer_primary_up()
    snapshot = session.canvas.raw_buffer()
    recorder.cells.clear()
    recorder.encoded.clear()

    assert session.cell_pointer_down(x, y) is False
    assert session.engaged is False

    session.pointer_primary_down()
    assert session.cell_pointer_over(x, y) is False

    assert session.canvas.raw_buffer() == snapshot
    assert recorder.cells == [] and recorder.encoded == []
    assert session.get_stats()["stats"]["events_rejected"] == 2


@pytest.mark.parametrize("x,y", [(1.0, 1), (1.5, 2), ("3", 3), (3, None), (True, 0)])
def test_non_integer_events_are_ignored(session, recorder, x, y):
    snapshot = session.canvas.raw_buffer()

    assert session.cell_pointer_down(x, y) is False
    assert session.engaged is False

    session.pointer_primary_down()
    assert session.cell_pointer_over(x, y) is False

    assert session.canvas.raw_buffer() == snapshot
    assert recorder.cells == [] and recorder.encoded == []
    assert session.get_stats()["stats"]["events_rejected"] == 2


def test_clear_all(session, recorder):
    session.select_mode("mark")
    for x in range(10):
        session.cell_pointer_down(x, x)
    session.select_mode(DrawMode.CLEAR)
    session.pointer_primary_down()

    session.clear_all()

    assert session.canvas.count_marked() == 0
    assert recorder.cleared == 1
    assert recorder.encoded[-1] == encode(bytes(512))
    assert session.encoded == encode(bytes(512))
    # Mode and pointer state are untouched
    assert session.mode is DrawMode.CLEAR
    assert session.engaged is True


def test_load_from_encoded_reports_changed_cells(session, recorder):
    session.cell_pointer_down(0, 0)
    session.cell_pointer_down(1, 0)
    recorder.cells.clear()

    other = BitCanvas(64)
    other.set_cell(1, 0, True)
    other.set_cell(10, 20, True)
    text = encode(other.raw_buffer())

    session.load_from_encoded(text)

    assert session.canvas == other
    assert sorted(recorder.cells) == [(0, 0, False), (10, 20, True)]
    assert recorder.encoded[-1] == text
    assert session.encoded == text


def test_load_invalid_text_leaves_canvas_unchanged(session, recorder):
    session.cell_pointer_down(7, 7)
    snapshot = session.canvas.raw_buffer()
    encoded_before = session.encoded
    recorder.encoded.clear()

    with pytest.raises(InvalidEncodingError):
        session.load_from_encoded("not-base64!!")
    with pytest.raises(InvalidEncodingError):
        session.load_from_encoded(encode(bytes(100)))

    assert session.canvas.raw_buffer() == snapshot
    assert session.encoded == encoded_before
    assert recorder.encoded == []


def test_encoded_cache_invalidated_on_paint(session):
    first = session.encoded
    session.cell_pointer_down(63, 63)
    assert session.encoded != first
    assert session.encoded == encode(session.canvas.raw_buffer())


@pytest.mark.parametrize(
    "name,expected",
    [
        ("mark", DrawMode.MARK),
        ("Draw", DrawMode.MARK),
        ("clear", DrawMode.CLEAR),
        ("ERASE", DrawMode.CLEAR),
        (DrawMode.CLEAR, DrawMode.CLEAR),
    ],
)
def test_parse_draw_mode(name, expected):
    assert parse_draw_mode(name) is expected


def test_unknown_mode(session):
    with pytest.raises(ValueError):
        session.select_mode("spray")
    assert session.mode is DrawMode.MARK


def test_stats(session):
    session.cell_pointer_down(1, 1)
    session.clear_all()
    stats = session.get_stats()
    assert stats["side"] == 64
    assert stats["mode"] == "mark"
    assert stats["cells_marked"] == 0
    assert stats["stats"]["cells_painted"] == 1
    assert stats["stats"]["clears"] == 1


if __name__ == "__main__":
    pytest.main([__file__])
