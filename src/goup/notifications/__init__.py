"""
goup.notifications

Outbound notification clients.

Responsibilities:
- Transactional email (SendGrid for role requests, Resend for new users).
- Chat webhook (Slack-compatible) for generic submissions.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# All clients share the app's `httpx.AsyncClient`; nothing here retries.
