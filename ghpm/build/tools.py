"""Tool availability checks against the command search path."""

import shutil
from collections.abc import Callable

ToolPredicate = Callable[[str], bool]


class ToolAvailability:
    """Answers whether an external tool can be executed.

    Every call re-checks the search path; nothing is cached.
    """

    def __init__(self, search_path: str | None = None) -> None:
        """Initialize the checker.

        Args:
            search_path: PATH-style string to search. Uses the process PATH
                when not provided.
        """
        self.search_path = search_path

    def exists(self, tool_name: str) -> bool:
        """Check if a binary is available.

        Args:
            tool_name: Name of the binary to check.

        Returns:
            True if the binary is available.
        """
        return shutil.which(tool_name, path=self.search_path) is not None

    def __call__(self, tool_name: str) -> bool:
        return self.exists(tool_name)


def tool_exists(tool_name: str) -> bool:
    """Check ``tool_name`` against the process PATH."""
    return ToolAvailability().exists(tool_name)
