# -----------------------------------------------------------------------------
# linestage - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of linestage.
#
# linestage is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


"""
Custom exception hierarchy for linestage.

The patch synthesizer itself never raises: it is total over well-formed
inputs. These exceptions belong to the layer around it, which reads diffs,
selections and configuration from disk and reports failures to the user.
"""

import functools

import typer
from loguru import logger


class linestageError(Exception):
    """
    Base exception for all linestage-related errors.

    All linestage-specific exceptions should inherit from this class
    to enable consistent error handling throughout the application.
    """

    def __init__(self, message: str, details: str = None):
        """
        Initialize a linestageError.

        Args:
            message: Main error message for the user
            details: Additional technical details for logging
        """
        self.message = message
        self.details = details
        super().__init__(message)


class DiffParseError(linestageError):
    """
    Raised when diff text cannot be read into sections,
    such as an unparsable hunk header or an unknown line marker.
    """

    pass


class SelectionError(linestageError):
    """Raised when a selection file or index list is invalid."""

    pass


class ConfigurationError(linestageError):
    """
    Configuration-related errors.

    Raised when configuration files are invalid, missing,
    or contain incompatible settings.
    """

    pass


class FileSystemError(linestageError):
    """
    File system operation errors.

    Raised when file or directory operations fail,
    such as permission issues or missing files.
    """

    pass


# Convenience functions for creating common errors
def path_not_found(path: str) -> FileSystemError:
    """Create a FileSystemError for non-existent paths."""
    return FileSystemError(
        f"Path not found: {path}",
        "Please check that the path exists and is accessible",
    )


def invalid_hunk_header(header: str, line_number: int) -> DiffParseError:
    """Create a DiffParseError for a hunk header without a readable range."""
    return DiffParseError(
        f"Invalid hunk header on line {line_number}: {header}",
        "Hunk headers must look like '@@ -start,count +start,count @@'",
    )


def invalid_selection(source: str, reason: str) -> SelectionError:
    """Create a SelectionError for a selection that cannot be read."""
    return SelectionError(
        f"Invalid selection in {source}: {reason}",
        'Selections map line indices to booleans, e.g. {"3": true, "4": false}',
    )


def handle_linestage_exception(func):
    """Log linestage errors and exit with status 1 instead of a traceback."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except linestageError as e:
            logger.error(e.message)
            if e.details:
                logger.debug(e.details)
            raise typer.Exit(1) from e

    return wrapper
