"""Main execution script for the Handins Grade Checker."""

import argparse
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Load .env before config reads the environment
load_dotenv()

from handins_grader import config  # noqa: E402
from handins_grader.auth import authenticate  # noqa: E402
from handins_grader.core.grader import aggregate  # noqa: E402
from handins_grader.services.handins_api import HandinsService  # noqa: E402
from handins_grader.ui import cli  # noqa: E402
from handins_grader.utils.error_handler import (  # noqa: E402
    AuthenticationError, ConfigError, EmptyGradeSetError, FetchError, UserCancelledError,
)
from handins_grader.utils.logger import setup_logger  # noqa: E402

logger = setup_logger()

EXIT_OK = 0
EXIT_AUTH_FAILED = 1
EXIT_FETCH_FAILED = 2
EXIT_NO_GRADES = 3
EXIT_CONFIG_ERROR = 4
EXIT_UNEXPECTED = 5
EXIT_CANCELLED = 130


def lookup_course(course: Optional[str]) -> int:
    """Resolves a course alias or numeric id to a handins course id.

    Raises:
        ConfigError: If the name is neither a known alias nor a number.
    """
    if not course:
        return config.DEFAULT_COURSE_ID
    key = course.strip().lower()
    if key in config.COURSE_ALIASES:
        return config.COURSE_ALIASES[key]
    if key.isdigit():
        return int(key)
    known = ", ".join(sorted(config.COURSE_ALIASES))
    raise ConfigError(f"Course '{course}' not found. Supported courses: {known}")


class _ArgumentParser(argparse.ArgumentParser):
    """Reports usage errors as ConfigError instead of exiting with status 2."""

    def error(self, message):
        raise ConfigError(f"{message}\n{self.format_usage().strip()}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = _ArgumentParser(
        prog="handins-grader",
        description="Log in to handins and show your current weighted grade.",
    )
    parser.add_argument(
        "course",
        nargs="?",
        help=f"course alias (e.g. cs2510, cs2510a) or numeric id; default {config.DEFAULT_COURSE_ID}",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Runs the login, fetch, aggregate and report workflow.

    Returns:
        The process exit code.
    """
    logger.info("Starting Handins Grade Checker.")

    try:
        args = parse_args(argv)
        course_id = lookup_course(args.course)
        cli.display_welcome(course_id)

        cli.display_step(1, "Logging in to handins...")
        session = authenticate(*cli.prompt_for_credentials())
        cli.display_success("Logged in.")

        cli.display_step(2, "Fetching assignments...")
        with session:
            records = HandinsService(session).fetch_records(course_id)

        cli.display_step(3, "Calculating grade...")
        summary = aggregate(records)
        cli.display_summary(summary)
        return EXIT_OK

    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        cli.display_error(str(e))
        return EXIT_CONFIG_ERROR
    except AuthenticationError as e:
        logger.error(f"Authentication failed: {e}", exc_info=config.DEBUG)
        cli.display_error(str(e))
        return EXIT_AUTH_FAILED
    except FetchError as e:
        logger.error(f"Fetching assignments failed: {e}", exc_info=config.DEBUG)
        cli.display_error(f"Could not fetch assignments: {e}")
        return EXIT_FETCH_FAILED
    except EmptyGradeSetError as e:
        logger.info(f"Aggregate undefined: {e}")
        cli.display_no_grades(e.records)
        return EXIT_NO_GRADES
    except UserCancelledError as e:
        logger.info(f"Operation cancelled by user: {e}")
        cli.display_warning(f"Operation cancelled: {e}")
        return EXIT_CANCELLED
    except KeyboardInterrupt:
        logger.info("Operation interrupted by user (Ctrl+C).")
        cli.display_warning("Operation interrupted.")
        return EXIT_CANCELLED
    except Exception as e:
        logger.critical(f"An unexpected error occurred: {e}", exc_info=True)
        cli.display_error(f"An unexpected error occurred: {e}. Run with HANDINS_DEBUG=1 for details.")
        return EXIT_UNEXPECTED


if __name__ == "__main__":
    sys.exit(main())
