import logging

import pytest
import requests

from conftest import HOME_PAGE, LOGIN_PAGE, LOGIN_URL, FakeHttp, FakeResponse
from handins_grader.auth import HandinsSession, authenticate
from handins_grader.utils.error_handler import AuthenticationError


def test_login_posts_csrf_token_and_credentials(handins_http):
    session = authenticate("student", "hunter2", http=handins_http)

    assert isinstance(session, HandinsSession)
    method, url, kwargs = handins_http.calls[-1]
    assert (method, url) == ("POST", LOGIN_URL)
    form = kwargs["data"]
    assert form["authenticity_token"] == "token-abc123"
    assert form["user[username]"] == "student"
    assert form["user[password]"] == "hunter2"
    assert form["commit"] == "Log in"


def test_session_does_not_keep_credentials(handins_http):
    session = authenticate("student", "hunter2", http=handins_http)
    assert "hunter2" not in repr(vars(session))
    assert "student" not in repr(vars(session))


def test_password_is_never_logged(handins_http, caplog):
    caplog.set_level(logging.DEBUG, logger="HandinsGrader")
    authenticate("student", "hunter2", http=handins_http)
    assert "hunter2" not in caplog.text


def test_rejected_credentials():
    http = FakeHttp(
        get={LOGIN_URL: FakeResponse(LOGIN_PAGE)},
        post={LOGIN_URL: FakeResponse(LOGIN_PAGE)},
    )
    with pytest.raises(AuthenticationError, match="invalid username or password"):
        authenticate("student", "wrong", http=http)
    assert http.closed


def test_login_http_error_status():
    http = FakeHttp(
        get={LOGIN_URL: FakeResponse(LOGIN_PAGE)},
        post={LOGIN_URL: FakeResponse("denied", status_code=422)},
    )
    with pytest.raises(AuthenticationError, match="422"):
        authenticate("student", "hunter2", http=http)


def test_missing_csrf_token():
    http = FakeHttp(get={LOGIN_URL: FakeResponse("<html><body>maintenance</body></html>")})
    with pytest.raises(AuthenticationError, match="CSRF"):
        authenticate("student", "hunter2", http=http)
    assert not any(method == "POST" for method, _, _ in http.calls)


def test_unreachable_server():
    http = FakeHttp(get={LOGIN_URL: requests.ConnectionError("connection refused")})
    with pytest.raises(AuthenticationError, match="Could not reach"):
        authenticate("student", "hunter2", http=http)
    assert http.closed


def test_login_page_error_status():
    http = FakeHttp(get={LOGIN_URL: FakeResponse("oops", status_code=503)})
    with pytest.raises(AuthenticationError):
        authenticate("student", "hunter2", http=http)


@pytest.mark.parametrize("username, password", [("", "hunter2"), ("student", "")])
def test_empty_credentials(username, password):
    http = FakeHttp()
    with pytest.raises(AuthenticationError):
        authenticate(username, password, http=http)
    assert http.calls == []


def test_session_closes_on_exit():
    http = FakeHttp(
        get={LOGIN_URL: FakeResponse(LOGIN_PAGE)},
        post={LOGIN_URL: FakeResponse(HOME_PAGE)},
    )
    with authenticate("student", "hunter2", http=http) as session:
        assert not session.closed
    assert session.closed
    assert http.closed
