"""
Flask web application exposing the plotter engine over HTTP.

The /api/targets routes act as the host: they create and move targets and
run pen commands. /api/plotter is a simulated plotter that accepts the
posted command text and broadcasts it to connected browsers.
"""
from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_socketio import SocketIO, emit
from pydantic import BaseModel, Field, ValidationError
from typing import Optional
import sys
import os

# Add parent directory to path to import the engine
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from execution.coordinate_mapper import CoordinateMapper
from execution.errors import CommandParseError
from execution.geometry import Point
from execution.hpgl_parser import parse_commands, strokes
from host.extension import PlotterExtension
from host.runtime import Runtime
from state.pen_state import PenState
from config import PLOTTER_URL
from utils.logger import get_logger, setup_logger

setup_logger()
logger = get_logger(__name__)

app = Flask(__name__)
CORS(app)
socketio = SocketIO(app, cors_allowed_origins="*")

# Global host instances
runtime = None
extension = None
last_job = None


class CreateTargetRequest(BaseModel):
    id: str = Field(..., min_length=1, description="Target id")
    parent_id: Optional[str] = Field(None, description="Target this one is derived from")
    x: Optional[float] = Field(None, allow_inf_nan=False, description="Initial screen X")
    y: Optional[float] = Field(None, allow_inf_nan=False, description="Initial screen Y")


class MoveRequest(BaseModel):
    x: float = Field(..., allow_inf_nan=False, description="New screen X")
    y: float = Field(..., allow_inf_nan=False, description="New screen Y")
    forced: bool = Field(False, description="Relocation that must not be plotted")


class PostRequest(BaseModel):
    url: Optional[str] = Field(None, description="Plotter endpoint (default from config)")


class SocketIOLayer:
    """Mirrors pen lines and clears to connected browsers."""

    def pen_line(self, pen_state: PenState, start: Point, end: Point) -> None:
        socketio.emit('pen_line', {
            'from': [start.x, start.y],
            'to': [end.x, end.y],
            'attributes': pen_state.pen_attributes
        })

    def clear(self) -> None:
        socketio.emit('pen_clear', {})


def initialize_extension(transport=None) -> bool:
    """Initialize the host runtime and the plotter extension."""
    global runtime, extension, last_job

    try:
        logger.info("Initializing plotter extension...")
        runtime = Runtime()
        extension = PlotterExtension(
            runtime,
            transport=transport,
            mapper=CoordinateMapper(),
            visual_layer=SocketIOLayer()
        )
        last_job = None
        logger.info("Plotter extension initialized successfully")
        return True
    except Exception as e:
        logger.error(f"Failed to initialize plotter extension: {e}")
        return False


def _get_target(target_id: str):
    target = runtime.get_target(target_id) if runtime else None
    if target is None:
        return None, (jsonify({"error": f"Unknown target: {target_id}"}), 404)
    return target, None


def _target_response(target):
    return jsonify({
        "success": True,
        "target": target.id,
        "x": target.x,
        "y": target.y,
        "pen_down": extension.controller_for(target).is_pen_down,
        "commands": extension.commands(target)
    })


@app.route('/api/status', methods=['GET'])
def get_status():
    """Get current extension status and pen state of every target."""
    if extension is None:
        return jsonify({"status": "not_initialized"}), 503

    return jsonify({
        "status": "ready",
        "targets": extension.state_summary(),
        "plotter_url": PLOTTER_URL,
        "info": extension.get_info()
    })


@app.route('/api/targets', methods=['POST'])
def create_target():
    """Create a target, optionally derived from a parent."""
    if extension is None:
        return jsonify({"error": "Extension not initialized"}), 503

    try:
        body = CreateTargetRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": e.errors(include_url=False)}), 400

    parent = None
    if body.parent_id is not None:
        parent, error = _get_target(body.parent_id)
        if error:
            return error

    try:
        target = runtime.create_target(body.id, body.x, body.y, source=parent)
    except ValueError as e:
        return jsonify({"error": str(e)}), 409

    return _target_response(target), 201


@app.route('/api/targets/<target_id>/move', methods=['POST'])
def move_target(target_id):
    """Move a target; drawn while its pen is down unless forced."""
    if extension is None:
        return jsonify({"error": "Extension not initialized"}), 503

    target, error = _get_target(target_id)
    if error:
        return error

    try:
        body = MoveRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": e.errors(include_url=False)}), 400

    target.set_xy(body.x, body.y, force=body.forced)
    return _target_response(target)


@app.route('/api/targets/<target_id>/<command>', methods=['POST'])
def run_command(target_id, command):
    """Run a pen command: pen-down, pen-up, paper-feed or clear."""
    if extension is None:
        return jsonify({"error": "Extension not initialized"}), 503

    handlers = {
        "pen-down": extension.pen_down,
        "pen-up": extension.pen_up,
        "paper-feed": extension.paper_feed,
        "clear": extension.clear,
    }
    handler = handlers.get(command)
    if handler is None:
        return jsonify({"error": f"Unknown command: {command}"}), 404

    target, error = _get_target(target_id)
    if error:
        return error

    handler(target)
    if command == "clear":
        socketio.emit('drawing_reset', {'target': target.id})
    return _target_response(target)


@app.route('/api/targets/<target_id>/post', methods=['POST'])
def post_commands(target_id):
    """Send the target's commands to the plotter."""
    if extension is None:
        return jsonify({"error": "Extension not initialized"}), 503

    target, error = _get_target(target_id)
    if error:
        return error

    try:
        body = PostRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return jsonify({"error": e.errors(include_url=False)}), 400

    sent = extension.post(target, body.url)
    return jsonify({"success": True, "sent": sent, "url": body.url or PLOTTER_URL})


@app.route('/api/targets/<target_id>/commands', methods=['GET'])
def get_commands(target_id):
    """Get the serialized command string of a target."""
    if extension is None:
        return jsonify({"error": "Extension not initialized"}), 503

    target, error = _get_target(target_id)
    if error:
        return error
    return jsonify({"target": target.id, "commands": extension.commands(target)})


@app.route('/api/dispose', methods=['POST'])
def dispose():
    """Dispose the runtime, clearing every command buffer."""
    if runtime is None:
        return jsonify({"error": "Extension not initialized"}), 503

    runtime.dispose()
    socketio.emit('drawing_reset', {})
    return jsonify({"success": True})


@app.route('/api/plotter', methods=['POST'])
def receive_job():
    """Simulated plotter: accept raw command text."""
    global last_job

    text = request.get_data(as_text=True)
    try:
        commands = parse_commands(text)
    except CommandParseError as e:
        logger.warning(f"Rejected plotter job: {e}")
        return jsonify({"error": str(e)}), 400

    polylines = strokes(commands)
    mapper = extension.mapper if extension else CoordinateMapper()
    # Preview in screen space; x stays shifted by the normalization
    screen_strokes = [
        [mapper.to_source(Point(x, y)).as_tuple() for x, y in polyline]
        for polyline in polylines
    ]
    last_job = {
        "commands": text,
        "command_count": len(commands),
        "strokes": polylines,
        "screen_strokes": screen_strokes
    }
    logger.info(f"Plotter received {len(commands)} commands ({len(polylines)} strokes)")
    socketio.emit('plot_received', last_job)
    return jsonify({"success": True, "command_count": len(commands), "stroke_count": len(polylines)})


@app.route('/api/plotter', methods=['GET'])
def get_last_job():
    """Get the last job the simulated plotter received."""
    if last_job is None:
        return jsonify({"status": "idle"}), 404
    return jsonify(last_job)


@socketio.on('connect')
def handle_connect():
    """Handle client connection."""
    logger.info("Client connected")
    emit('connected', {'message': 'Connected to plotter engine'})


@socketio.on('disconnect')
def handle_disconnect():
    """Handle client disconnection."""
    logger.info("Client disconnected")


if __name__ == '__main__':
    if not initialize_extension():
        logger.error("Failed to initialize plotter extension. Exiting.")
        sys.exit(1)

    logger.info("Starting Flask web server on http://localhost:5000")
    socketio.run(app, host='0.0.0.0', port=5000, debug=True)
