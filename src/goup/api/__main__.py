"""
goup.api.__main__

`python -m goup.api` (also installed as the `goup-api` script).
"""

from __future__ import annotations

import uvicorn

from goup.api.app import create_app
from goup.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=settings.api_host,
        port=settings.api_port,
        # structlog owns the output; the middleware writes the access line.
        log_config=None,
        access_log=False,
        proxy_headers=True,
        forwarded_allow_ips=settings.forwarded_allow_ips,
    )


if __name__ == "__main__":
    main()
