"""
goup.db

Relational persistence package (users and producers).

Responsibilities:
- SQLAlchemy declarative base, ORM models and async session helpers.
- Repositories for data access.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Clubs and events live in the document store (`goup.documents`), not here.
