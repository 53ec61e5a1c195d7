"""
Name: Backend ASGI Entrypoint (divelog.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers (uvicorn divelog.main:app)

Notes:
  - Keep this module thin: no configuration or IO here
"""

from divelog.api.main import app

__all__ = ["app"]
