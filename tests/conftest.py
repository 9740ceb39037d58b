import pytest
import requests
from requests.cookies import RequestsCookieJar

from handins_grader import config

LOGIN_URL = f"{config.BASE_URL}{config.LOGIN_PATH}"

LOGIN_PAGE = """
<html>
  <head><meta name="csrf-token" content="token-abc123"></head>
  <body>
    <form action="/login/" method="post">
      <input name="user[username]" type="text">
      <input name="user[password]" type="password">
    </form>
  </body>
</html>
"""

HOME_PAGE = """
<html><body><h1>Your courses</h1><a href="/logout">Log out</a></body></html>
"""

ASSIGNMENTS_PAGE = """
<html><body>
<table class="table">
  <thead><tr><th>Name</th><th>Weight</th><th>Grade</th></tr></thead>
  <tbody>
    <tr>
      <td><a href="/courses/129/assignments/901">Homework 1</a></td>
      <td class="text-right">10.0</td>
      <td class="text-right">90.0</td>
    </tr>
    <tr>
      <td><a href="/courses/129/assignments/902">Homework 2</a></td>
      <td class="text-right">20.0</td>
      <td class="text-right">80.0</td>
    </tr>
    <tr>
      <td><a href="/courses/129/assignments/903">Homework 3</a></td>
      <td class="text-right">30.0</td>
      <td class="text-right"></td>
    </tr>
  </tbody>
</table>
</body></html>
"""


class FakeResponse:
    def __init__(self, text="", status_code=200, url=""):
        self.text = text
        self.status_code = status_code
        self.url = url

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}")


class FakeHttp:
    """Stands in for requests.Session, answering from canned responses."""

    def __init__(self, get=None, post=None):
        self.get_responses = dict(get or {})
        self.post_responses = dict(post or {})
        self.calls = []
        self.cookies = RequestsCookieJar()
        self.closed = False

    def _answer(self, responses, method, url, kwargs):
        self.calls.append((method, url, kwargs))
        answer = responses.get(url)
        if isinstance(answer, Exception):
            raise answer
        if answer is None:
            return FakeResponse("not found", status_code=404, url=url)
        if answer.url == "":
            answer.url = url
        return answer

    def get(self, url, **kwargs):
        return self._answer(self.get_responses, "GET", url, kwargs)

    def post(self, url, **kwargs):
        return self._answer(self.post_responses, "POST", url, kwargs)

    def close(self):
        self.closed = True


def assignments_url(course_id=config.DEFAULT_COURSE_ID):
    return f"{config.BASE_URL}{config.ASSIGNMENTS_PATH.format(course_id=course_id)}"


@pytest.fixture()
def handins_http():
    """A fake server that accepts any login and lists three assignments."""
    return FakeHttp(
        get={
            LOGIN_URL: FakeResponse(LOGIN_PAGE),
            assignments_url(): FakeResponse(ASSIGNMENTS_PAGE),
        },
        post={
            LOGIN_URL: FakeResponse(HOME_PAGE, url=f"{config.BASE_URL}/"),
        },
    )
