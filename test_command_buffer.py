"""Tests for command buffer serialization."""
from execution.actions import Action, ActionKind, paper_feed, pen_down, pen_up
from execution.command_buffer import CommandBuffer
from execution.geometry import Point


def test_empty_buffer_serializes_to_empty_string():
    assert CommandBuffer().serialize() == ""


def test_cleared_buffer_serializes_to_empty_string():
    buffer = CommandBuffer()
    buffer.append(pen_up(Point(1, 1)))
    buffer.clear()
    assert len(buffer) == 0
    assert buffer.serialize() == ""


def test_normalizes_leftmost_x_to_zero():
    buffer = CommandBuffer()
    buffer.append(pen_up(Point(50, 5)))
    buffer.append(pen_down())
    buffer.append(pen_down(Point(10, 6)))
    buffer.append(pen_down(Point(30, 7)))
    buffer.append(pen_up())
    assert buffer.serialize() == "VS50;!ST1,0;PU40,5;PD;PD0,6;PD20,7;PU;PG;"


def test_normalization_does_not_touch_stored_actions():
    buffer = CommandBuffer()
    buffer.append(pen_up(Point(50, 5)))
    buffer.append(pen_down(Point(10, 6)))
    buffer.serialize()
    assert buffer.actions == [
        Action(ActionKind.PEN_UP, 50, 5),
        Action(ActionKind.PEN_DOWN, 10, 6),
    ]


def test_normalization_tracks_current_contents():
    buffer = CommandBuffer()
    buffer.append(pen_up(Point(50, 0)))
    assert buffer.serialize() == "VS50;!ST1,0;PU0,0;PG;"
    buffer.append(pen_down(Point(20, 0)))
    assert buffer.serialize() == "VS50;!ST1,0;PU30,0;PD0,0;PG;"


def test_position_free_buffer_shifts_by_zero():
    buffer = CommandBuffer()
    buffer.append(pen_down())
    buffer.append(paper_feed())
    buffer.append(pen_up())
    assert buffer.min_x() == 0
    assert buffer.serialize() == "VS50;!ST1,0;PD;PG;PU;PG;"


def test_negative_xmin_shifts_right():
    buffer = CommandBuffer()
    buffer.append(pen_up(Point(-25, 3)))
    buffer.append(pen_down(Point(75, 3)))
    assert buffer.serialize() == "VS50;!ST1,0;PU0,3;PD100,3;PG;"


def test_preamble_settings():
    buffer = CommandBuffer(speed=20, pen=2)
    buffer.append(pen_up())
    assert buffer.serialize() == "VS20;!ST2,0;PU;PG;"


def test_order_is_preserved():
    buffer = CommandBuffer()
    actions = [pen_up(Point(3, 0)), pen_down(), paper_feed(), pen_down(Point(1, 0)), pen_up()]
    for action in actions:
        buffer.append(action)
    assert list(buffer) == actions
