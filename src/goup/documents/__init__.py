"""
goup.documents

Document-oriented persistence (clubs and events).

Responsibilities:
- Store boundary with MongoDB and in-process implementations.
- Thin repositories per collection.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Collection names ("club", "Eventos") match the ones the mobile app reads.
