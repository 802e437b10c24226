"""
goup.forms

Form schemas and the multi-step wizard.

Responsibilities:
- Pydantic models for every form and submission payload (Spanish messages).
- Error flattening into dotted field paths.
- Wizard step definitions and step-gated validation.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Messages are the strings the web client shows verbatim (inline or as a toast).
