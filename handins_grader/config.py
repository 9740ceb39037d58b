"""Configuration settings for the Handins Grade Checker."""

import os
import logging
from typing import Dict, Final, Optional

# Debug flag: 1 = debug mode (verbose logging), 0 = production mode
DEBUG: Final[int] = int(os.environ.get("HANDINS_DEBUG", "0"))

# --- Handins Server Settings ---

BASE_URL: Final[str] = os.environ.get("HANDINS_BASE_URL", "https://handins.ccs.neu.edu").rstrip("/")
LOGIN_PATH: Final[str] = "/login/"
ASSIGNMENTS_PATH: Final[str] = "/courses/{course_id}/assignments/"
SUBMISSION_PATH: Final[str] = "/courses/{course_id}/assignments/{assignment_id}/submissions/new"

# Seconds before a single request to the server is abandoned
REQUEST_TIMEOUT: Final[float] = 30.0

USER_AGENT: Final[str] = "handins-grader/0.1 (+python-requests)"

# --- Courses ---

# Course used when none is given on the command line
DEFAULT_COURSE_ID: Final[int] = 129

COURSE_ALIASES: Final[Dict[str, int]] = {
    "fundies2": 129,
    "f2": 129,
    "cs2510": 129,
    "fundies2accel": 126,
    "f2accel": 126,
    "f2a": 126,
    "cs2510a": 126,
}

# Handins reports every score as a percentage
HANDINS_MAX_SCORE: Final[float] = 100.0

# --- Display Settings ---

# Decimal places shown for scores, weights and percentages
DISPLAY_PRECISION: Final[int] = 2

# --- Logging Configuration ---
# Console logging stays at WARNING unless DEBUG is on; file logging is opt-in
LOG_LEVEL = logging.DEBUG if DEBUG else logging.WARNING
LOG_FILE: Final[Optional[str]] = os.environ.get("HANDINS_LOG_FILE") or None
# Structured log format: timestamp, level, logger, module.function:line, message
LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(module)s.%(funcName)s:%(lineno)d | %(message)s'
