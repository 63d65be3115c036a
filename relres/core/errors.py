"""Process exit codes for the relres CLI.

Values are part of the command-line contract and should remain stable:
- 0: Success
- 1: User error (bad arguments, unknown strategy)
- 2: Environment error (invalid config file)
- 3: Not found (no release satisfied a request)
- 4: Feed error (document missing, unpublished or marked as error)
- 5: I/O error (feed document exists but cannot be read)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NOT_FOUND = 3
    FEED_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
