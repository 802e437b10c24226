"""
goup.auth.models

Auth domain models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Caller identity as asserted by the identity provider token.
    """

    subject: str
    email: str | None = None
    name: str | None = None


# --- Module Notes -----------------------------------------------------------
# Roles are not taken from the token: they live on the user record and are edited
# from the admin panel.
