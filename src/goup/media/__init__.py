"""
goup.media

Uploaded media (avatars, club/event images, producer logos).
"""

# Package marker.
