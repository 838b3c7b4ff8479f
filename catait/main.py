"""
Name: Backend ASGI Entrypoint (catait.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Keep the import path stable: uvicorn catait.main:app

Notes/Constraints:
  - No configuration or IO here
"""

from catait.api.main import app

__all__ = ["app"]
