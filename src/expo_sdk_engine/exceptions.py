"""Exceptions raised by the SDK metadata engine.

Unknown modules, plugins and versions are never errors: they resolve to
default data. Validation problems are returned as data on the result
objects. Only the failures below are raised.
"""

from typing import Iterable, Optional


class EngineError(Exception):
    """Base class for all engine errors."""


class InvalidArgumentError(EngineError, ValueError):
    """Raised when a caller passes a value outside an allowed set.

    Attributes:
        argument: Name of the offending argument.
        value: The rejected value.
        allowed: The values that would have been accepted.
    """

    def __init__(self, argument: str, value: object, allowed: Iterable[str]) -> None:
        self.argument = argument
        self.value = value
        self.allowed = tuple(allowed)
        super().__init__(
            f"Invalid {argument}: {value}. "
            f"Valid {argument}s are: {', '.join(self.allowed)}"
        )


class UpstreamFetchError(EngineError):
    """Raised when a metadata provider lookup fails.

    Attributes:
        module_name: Module whose resolution failed.
        provider: Name of the failing provider, if known.
    """

    def __init__(
        self, module_name: str, message: str, provider: Optional[str] = None
    ) -> None:
        self.module_name = module_name
        self.provider = provider
        prefix = f"Failed to fetch SDK module info for '{module_name}'"
        if provider:
            prefix += f" from {provider}"
        super().__init__(f"{prefix}: {message}")
