"""Factory function for creating HTTP sessions against the handins server."""

import requests

from handins_grader import config
from handins_grader.utils.logger import get_logger

logger = get_logger()


def build_http_session() -> requests.Session:
    """Builds a cookie-keeping HTTP session for the handins server.

    Sessions are never cached between calls: each run logs in afresh and the
    session is closed once the records have been fetched.

    Returns:
        requests.Session: A new session with the default headers applied.
    """
    logger.debug(f"Building new HTTP session for {config.BASE_URL}...")
    session = requests.Session()
    session.headers.update({
        "User-Agent": config.USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    })
    return session


def url_for(path: str, **params) -> str:
    """Joins a configured path template onto the server base URL."""
    return f"{config.BASE_URL}{path.format(**params)}"
