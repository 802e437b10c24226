"""
goup.api

HTTP API package.

Responsibilities:
- FastAPI app factory and dependency wiring.
- Routers for the public, signed-in and admin surfaces.
"""

# Package marker.
