"""
Status page - Minimal HTTP endpoint reporting the number of photos found.
"""

import logging
from typing import Callable, Optional, Tuple

from bottle import Bottle, response, run

logger = logging.getLogger(__name__)

STATUS_PAGE = "<!doctype html><html><body>Hi, you have {count} photos</body></html>"


def parse_address(address: str) -> Tuple[str, int]:
    """
    Split a listen address like ':8080' or 'localhost:9000' into (host, port).
    
    An empty host means all interfaces.
    """
    host, sep, port = address.rpartition(':')
    if not sep:
        raise ValueError(f"Invalid listen address: {address!r}")
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"Invalid port in listen address: {address!r}")
    return host or '0.0.0.0', port_number


def create_app(photo_count: Callable[[], int]) -> Bottle:
    """Create the status app; photo_count is read on each request."""
    app = Bottle()
    
    @app.route('/')
    @app.route('/<path:path>')
    def status_page(path: str = ''):
        response.content_type = 'text/html; charset=utf-8'
        return STATUS_PAGE.format(count=photo_count())
    
    return app


def serve(app: Bottle, address: str, quiet: bool = True) -> None:
    """Serve the status app until interrupted."""
    host, port = parse_address(address)
    logger.info(f"Listening on {address}")
    run(app=app, host=host, port=port, quiet=quiet)
