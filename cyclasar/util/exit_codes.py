"""Documented exit codes for the cyclasar CLI.

Exit codes follow UNIX conventions:
- 0: Success
- 1: General/unspecified error
- 2: Invalid command-line arguments or usage
- 3-5: Application-specific errors

Shell scripts chaining the converters and cyclasar can tell a bad
invocation from bad input without parsing stderr.

Usage:
    from cyclasar.util.exit_codes import ExitCode
    sys.exit(ExitCode.INVALID_POINT_COUNT)
"""

from __future__ import annotations


class ExitCode:
    """Exit code constants for cyclasar runs.

    Attributes:
        SUCCESS: Normal termination, no errors.
        GENERAL_ERROR: Unspecified runtime error.
        INVALID_ARGS: Command-line argument validation failed.
        IO_ERROR: Input or output file could not be opened.
        INVALID_POINT_COUNT: Declared point count is 2 or less.
        FORMAT_ERROR: Input ended before the declared number of points.
    """

    SUCCESS: int = 0
    GENERAL_ERROR: int = 1
    INVALID_ARGS: int = 2
    IO_ERROR: int = 3
    INVALID_POINT_COUNT: int = 4
    FORMAT_ERROR: int = 5

    @classmethod
    def message(cls, code: int) -> str:
        """Return a human-readable message for an exit code."""
        messages = {
            cls.SUCCESS: "Success",
            cls.GENERAL_ERROR: "General error",
            cls.INVALID_ARGS: "Invalid arguments",
            cls.IO_ERROR: "Cannot open input or output",
            cls.INVALID_POINT_COUNT: "Invalid number of Points",
            cls.FORMAT_ERROR: "Truncated input",
        }
        return messages.get(code, f"Unknown exit code {code}")
