"""Wrapper for reading the assignment listing from the handins server."""

import math
import re
from typing import List, Optional

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from handins_grader import config
from handins_grader.api_clients import url_for
from handins_grader.auth import HandinsSession, shows_login_form
from handins_grader.core.models import AssignmentRecord
from handins_grader.utils.error_handler import FetchError
from handins_grader.utils.logger import get_logger

logger = get_logger()

_ASSIGNMENT_ID_RE = re.compile(r"/assignments/(\d+)")


def _parse_number(text: str, row_name: str) -> float:
    token = text.split()[0].rstrip("%")
    try:
        value = float(token)
    except ValueError as e:
        raise FetchError(f"Could not read '{token}' as a number for assignment '{row_name}'.") from e
    if not math.isfinite(value):
        raise FetchError(f"Value '{token}' is not a finite number for assignment '{row_name}'.")
    return value


def _row_numbers(row: Tag, row_name: str) -> List[float]:
    """Bare numbers from the right-aligned cells: weight first, then score."""
    values = []
    for cell in row.find_all("td", class_="text-right"):
        for text in cell.find_all(string=True, recursive=False):
            if text.strip():
                values.append(_parse_number(text, row_name))
    return values


def _parse_row(row: Tag) -> AssignmentRecord:
    cells = row.find_all("td")
    if not cells:
        raise FetchError("Assignment row has no cells.")

    name = cells[0].get_text(strip=True)
    if not name:
        raise FetchError("Assignment row has no name.")

    assignment_id: Optional[int] = None
    link = cells[0].find("a", href=True)
    if link is not None:
        match = _ASSIGNMENT_ID_RE.search(link["href"])
        if match:
            assignment_id = int(match.group(1))

    values = _row_numbers(row, name)
    if not values:
        raise FetchError(f"Assignment '{name}' has no weight.")

    # One value: weight only, not graded yet. More: weight then score.
    score = values[1] if len(values) > 1 else None
    try:
        return AssignmentRecord(
            name=name,
            score=score,
            max_score=config.HANDINS_MAX_SCORE,
            weight=values[0],
            assignment_id=assignment_id,
        )
    except ValueError as e:
        raise FetchError(f"Invalid values for assignment '{name}': {e}") from e


def parse_assignments(html: str) -> List[AssignmentRecord]:
    """Parses the assignment table of a course page into records.

    Args:
        html: The course assignments page.

    Returns:
        The records in the order the server lists them.

    Raises:
        FetchError: If the table is missing or a row is malformed.
    """
    soup = BeautifulSoup(html, "html.parser")
    body = soup.find("tbody")
    if body is None:
        raise FetchError("Assignment table not found on the course page.")
    return [_parse_row(row) for row in body.find_all("tr")]


class HandinsService:
    """Reads assignment records through an authenticated handins session."""

    SERVICE_NAME = 'handins'

    def __init__(self, session: HandinsSession):
        self.session = session

    def fetch_records(self, course_id: int = config.DEFAULT_COURSE_ID) -> List[AssignmentRecord]:
        """Fetches the current assignment records for a course.

        Args:
            course_id: The handins id of the course.

        Returns:
            A list of AssignmentRecord in server order.

        Raises:
            FetchError: If the session is closed or expired, the request
                fails, or the page cannot be parsed.
        """
        if self.session.closed:
            raise FetchError("The handins session has already been closed.")

        url = url_for(config.ASSIGNMENTS_PATH, course_id=course_id)
        logger.info(f"Fetching assignments for course ID: {course_id}...")
        try:
            response = self.session.http.get(
                url,
                headers={"Referer": f"{config.BASE_URL}/"},
                timeout=config.REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            logger.error(f"Failed to fetch assignments for course {course_id}: {e}", exc_info=config.DEBUG)
            raise FetchError(f"Failed to fetch assignments: {e}", url=url) from e

        if response.status_code >= 400:
            logger.error(f"Failed to fetch assignments for course {course_id}: HTTP {response.status_code}")
            raise FetchError("Failed to fetch assignments", status_code=response.status_code, url=url)

        if config.LOGIN_PATH.rstrip("/") in response.url or shows_login_form(response.text):
            logger.error("Redirected to the login page while fetching assignments.")
            raise FetchError("The handins session is not logged in or has expired.", url=url)

        try:
            records = parse_assignments(response.text)
        except FetchError as e:
            logger.error(f"Could not parse assignments page for course {course_id}: {e}", exc_info=config.DEBUG)
            e.url = e.url or url
            raise

        graded = sum(1 for r in records if r.graded)
        logger.info(f"Successfully fetched {len(records)} assignments ({graded} graded) for course {course_id}.")
        return records


def fetch_records(session: HandinsSession, course_id: int = config.DEFAULT_COURSE_ID) -> List[AssignmentRecord]:
    """Returns the current assignment records visible to the logged-in user."""
    return HandinsService(session).fetch_records(course_id)
