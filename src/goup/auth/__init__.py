"""
goup.auth

Authentication and role guards.

Responsibilities:
- Validate identity-provider bearer tokens into an `Identity`.
- Load (or create on first sign-in) the user behind the identity.
- Role checks over the primary and secondary role.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Sign-in itself happens at the identity provider; this package only consumes tokens.
