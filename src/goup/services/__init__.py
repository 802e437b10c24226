"""
goup.services

Service-layer package.

Responsibilities:
- Own transaction boundaries and persistence decisions.
- Coordinate stores, media uploads and outbound notifications per use case.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Services raise `goup.errors` exceptions; routers stay thin and let the app's
# exception handler render them.
