"""Handles logging in to the handins server."""

from typing import Optional

import requests
from bs4 import BeautifulSoup

from handins_grader import config
from handins_grader.api_clients import build_http_session, url_for
from handins_grader.utils.error_handler import AuthenticationError
from handins_grader.utils.logger import get_logger

logger = get_logger()


class HandinsSession:
    """An authenticated connection to the handins server.

    Holds only the cookie-carrying HTTP session; the username and password
    used to create it are not kept. Use it as a context manager so the
    connection is closed once the records are fetched.
    """

    def __init__(self, http: requests.Session):
        self.http = http
        self.closed = False

    def close(self):
        if not self.closed:
            self.http.cookies.clear()
            self.http.close()
            self.closed = True
            logger.debug("Handins session closed.")

    def __enter__(self) -> "HandinsSession":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def _extract_csrf_token(html: str) -> Optional[str]:
    soup = BeautifulSoup(html, "html.parser")
    meta = soup.find("meta", attrs={"name": "csrf-token"})
    if meta is None:
        return None
    return meta.get("content") or None


def shows_login_form(html: str) -> bool:
    """True if the page still asks for a password, i.e. the login did not take."""
    soup = BeautifulSoup(html, "html.parser")
    return soup.find("input", attrs={"name": "user[password]"}) is not None


def authenticate(username: str, password: str, http: Optional[requests.Session] = None) -> HandinsSession:
    """Logs in to the handins server and returns the authenticated session.

    The credentials go straight into the login form and are not logged or
    stored anywhere else.

    Args:
        username: Handins username.
        password: Handins password.
        http: HTTP session to log in with. A new one is built when omitted.

    Returns:
        HandinsSession: The logged-in session.

    Raises:
        AuthenticationError: If the server is unreachable, the login page has
            an unexpected shape, or the credentials are rejected.
    """
    if not username or not password:
        raise AuthenticationError("A username and password are required.")

    http = http or build_http_session()
    login_url = url_for(config.LOGIN_PATH)

    try:
        logger.info(f"Loading login page {login_url}...")
        try:
            login_page = http.get(login_url, timeout=config.REQUEST_TIMEOUT)
            login_page.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Could not load login page: {e}", exc_info=config.DEBUG)
            raise AuthenticationError(f"Could not reach the handins login page: {e}") from e

        token = _extract_csrf_token(login_page.text)
        if not token:
            logger.error("Login page did not contain a CSRF token.")
            raise AuthenticationError("Unexpected login page from the handins server (no CSRF token).")

        form = {
            "utf8": "✓",
            "authenticity_token": token,
            "user[username]": username,
            "user[password]": password,
            "commit": "Log in",
        }
        logger.info("Submitting login form...")
        try:
            response = http.post(
                login_url,
                data=form,
                headers={"Referer": login_url},
                timeout=config.REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error(f"Login request failed: {e}", exc_info=config.DEBUG)
            raise AuthenticationError(f"Could not reach the handins server: {e}") from e

        if response.status_code >= 400:
            logger.error(f"Login rejected with HTTP status {response.status_code}.")
            raise AuthenticationError(f"Login failed with HTTP status {response.status_code}.")
        if shows_login_form(response.text):
            logger.warning("Login form shown again after submitting credentials.")
            raise AuthenticationError("Login failed: invalid username or password.")
    except AuthenticationError:
        http.close()
        raise

    logger.info("Authentication successful.")
    return HandinsSession(http)
