"""Tests for the pen session state machine."""
from execution.actions import Action, ActionKind
from execution.coordinate_mapper import CoordinateMapper
from execution.geometry import Point, Rect
from execution.pen_controller import PenSessionController
from state.pen_state import STATE_KEY, PenState, PenStateAccessor


class DictStore:
    def __init__(self):
        self.data = {}

    def get_custom_state(self, key):
        return self.data.get(key)

    def set_custom_state(self, key, value):
        self.data[key] = value


class RecordingLayer:
    def __init__(self):
        self.lines = []
        self.clears = 0

    def pen_line(self, pen_state, start, end):
        self.lines.append((start, end))

    def clear(self):
        self.clears += 1


class RecordingTransport:
    def __init__(self):
        self.sent = []

    def send(self, url, body):
        self.sent.append((url, body))


def make_controller(mapper=None, **kwargs):
    store = DictStore()
    mapper = mapper or CoordinateMapper(Rect(-240, -180, 240, 180), Rect(0, 0, 240, 180), 40)
    return PenSessionController(PenStateAccessor(store), mapper, **kwargs), store


def kinds(controller):
    return [action.kind for action in controller.buffer]


def test_starts_pen_up_and_creates_state_on_first_access():
    controller, store = make_controller()
    assert store.get_custom_state(STATE_KEY) is None
    assert not controller.is_pen_down
    assert isinstance(store.get_custom_state(STATE_KEY), PenState)


def test_pen_down_records_travel_pair():
    controller, _ = make_controller()
    controller.pen_down(Point(0, 0))
    assert controller.is_pen_down
    assert controller.buffer.actions == [
        Action(ActionKind.PEN_UP, 3600, 4800),
        Action(ActionKind.PEN_DOWN),
    ]


def test_pen_down_is_idempotent():
    controller, _ = make_controller()
    controller.pen_down(Point(0, 0))
    controller.pen_down(Point(5, 5))
    assert kinds(controller) == [ActionKind.PEN_UP, ActionKind.PEN_DOWN]


def test_pen_up_records_bare_pen_up_once():
    controller, _ = make_controller()
    controller.pen_up()
    assert len(controller.buffer) == 0

    controller.pen_down(Point(0, 0))
    controller.pen_up()
    controller.pen_up()
    assert kinds(controller) == [ActionKind.PEN_UP, ActionKind.PEN_DOWN, ActionKind.PEN_UP]
    assert not controller.buffer.actions[-1].has_position
    assert not controller.is_pen_down


def test_moves_recorded_only_while_pen_down():
    controller, _ = make_controller()
    controller.on_move(Point(0, 0), Point(10, 0))
    assert len(controller.buffer) == 0

    controller.pen_down(Point(0, 0))
    controller.on_move(Point(0, 0), Point(10, 0))
    assert controller.buffer.actions[-1] == Action(ActionKind.PEN_DOWN, 3600, 5000)

    controller.pen_up()
    controller.on_move(Point(10, 0), Point(20, 0))
    assert len(controller.buffer) == 4


def test_forced_move_appends_nothing():
    layer = RecordingLayer()
    controller, _ = make_controller(visual_layer=layer)
    controller.pen_down(Point(0, 0))
    controller.on_move(Point(0, 0), Point(100, 100), forced=True)
    assert len(controller.buffer) == 2
    assert layer.lines == []


def test_move_mirrors_line_on_visual_layer():
    layer = RecordingLayer()
    controller, _ = make_controller(visual_layer=layer)
    controller.pen_down(Point(0, 0))
    controller.on_move(Point(0, 0), Point(10, 0))
    assert layer.lines == [(Point(0, 0), Point(10, 0))]


def test_paper_feed_in_any_state():
    controller, _ = make_controller()
    controller.paper_feed()
    controller.pen_down(Point(0, 0))
    controller.paper_feed()
    assert kinds(controller) == [
        ActionKind.PAPER_FEED, ActionKind.PEN_UP, ActionKind.PEN_DOWN, ActionKind.PAPER_FEED,
    ]


def test_clear_keeps_pen_state():
    layer = RecordingLayer()
    controller, _ = make_controller(visual_layer=layer)
    controller.pen_down(Point(0, 0))
    controller.clear()
    assert len(controller.buffer) == 0
    assert controller.is_pen_down
    assert layer.clears == 1

    controller.on_move(Point(0, 0), Point(10, 0))
    assert kinds(controller) == [ActionKind.PEN_DOWN]


def test_degenerate_mapping_drops_event():
    mapper = CoordinateMapper(Rect(0, 0, 0, 0), Rect(0, 0, 240, 180), 40)
    controller, _ = make_controller(mapper=mapper)
    controller.paper_feed()
    controller.pen_down(Point(0, 0))
    assert not controller.is_pen_down
    assert kinds(controller) == [ActionKind.PAPER_FEED]


def test_inherit_pen_down_resumes_drawing():
    parent = PenState(pen_down=True, color=12.0)
    controller, store = make_controller()
    controller.inherit(parent, Point(-240, -180))

    inherited = store.get_custom_state(STATE_KEY)
    assert inherited == parent
    assert inherited is not parent
    assert controller.buffer.actions == [
        Action(ActionKind.PEN_UP, 0, 0),
        Action(ActionKind.PEN_DOWN),
    ]

    controller.on_move(Point(-240, -180), Point(-240, -170))
    assert controller.buffer.actions[-1] == Action(ActionKind.PEN_DOWN, 200, 0)


def test_inherit_pen_up_records_nothing():
    controller, _ = make_controller()
    controller.inherit(PenState(), Point(0, 0))
    assert not controller.is_pen_down
    assert len(controller.buffer) == 0


def test_post_empty_buffer_sends_nothing():
    transport = RecordingTransport()
    controller, _ = make_controller(transport=transport)
    assert controller.post("http://plotter/") is False
    assert transport.sent == []


def test_post_sends_serialized_buffer():
    transport = RecordingTransport()
    controller, _ = make_controller(transport=transport)
    controller.pen_down(Point(0, 0))
    controller.on_move(Point(0, 0), Point(10, 0))
    controller.pen_up()
    assert controller.post("http://plotter/") is True
    assert transport.sent == [("http://plotter/", "VS50;!ST1,0;PU0,4800;PD;PD0,5000;PU;PG;")]


def test_move_that_cannot_be_mapped_is_dropped():
    layer = RecordingLayer()
    controller, _ = make_controller(visual_layer=layer)
    controller.pen_down(Point(0, 0))
    controller.on_move(Point(0, 0), Point(float("inf"), 0))
    controller.on_move(Point(0, 0), Point(0, float("nan")))

    assert controller.is_pen_down
    assert kinds(controller) == [ActionKind.PEN_UP, ActionKind.PEN_DOWN]
    assert layer.lines == []

    controller.on_move(Point(0, 0), Point(10, 0))
    assert controller.serialize() == "VS50;!ST1,0;PU0,4800;PD;PD0,5000;PG;"


def test_pen_down_at_non_finite_position_stays_up():
    controller, _ = make_controller()
    controller.pen_down(Point(float("inf"), 0))
    assert not controller.is_pen_down
    assert len(controller.buffer) == 0


def test_inherit_with_unmappable_position_leaves_pen_up():
    mapper = CoordinateMapper(Rect(0, 0, 0, 0), Rect(0, 0, 240, 180), 40)
    parent = PenState(pen_down=True)
    controller, store = make_controller(mapper=mapper)
    controller.inherit(parent, Point(0, 0))

    assert not controller.is_pen_down
    assert parent.pen_down
    assert len(controller.buffer) == 0
    assert controller.serialize() == ""
