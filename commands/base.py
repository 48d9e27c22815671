from abc import ABC, abstractmethod
from typing import Any, List


class Command(ABC):
    """Abstract base class for all kernel entry points."""

    #: Short usage string shown by ``help``.
    usage: str = ""

    @abstractmethod
    def execute(self, context, args: List[Any]) -> Any:
        """
        Run the entry point and return its primitive result.

        Args:
            context: The CommandContext object holding shared configuration.
            args: Positional arguments supplied by the caller. Values coming
                from instruction files are already decoded from text.
        """
        pass

    def _arity(self, args: List[Any], maximum: int) -> None:
        if len(args) > maximum:
            raise TypeError(
                f"{type(self).__name__} takes at most {maximum} argument(s), got {len(args)}"
            )
