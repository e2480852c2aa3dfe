"""
Project: Restaurant Management API
Description:
Socket.IO broadcaster. Every successful write is announced on the ``event``
channel so connected dashboards can refresh.
"""

from flask_socketio import SocketIO

# Create SocketIO once (no app yet), then bind inside the factory
socketio = SocketIO(cors_allowed_origins="*")


def init_socketio(app):
    socketio.init_app(app, async_mode=app.config["SOCKETIO_ASYNC_MODE"])


def emit_event(event_type, **payload):
    socketio.emit("event", {"type": event_type, **payload})
