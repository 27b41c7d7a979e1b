"""
Serverless entry point: exposes the ASGI app at /api/log_data.
"""

from activity_relay.main import app  # noqa: F401
