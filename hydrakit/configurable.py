"""Objects configured from a mapping of parameter names to string values."""

from __future__ import annotations

import abc
from typing import Mapping, TypeVar

T = TypeVar("T")

_TRUE = {"1", "true"}
_FALSE = {"0", "false"}


def _convert(text: str, default: T) -> T:
    words = text.split()
    if not words:
        raise ValueError("empty configuration value")
    word = words[0]
    if isinstance(default, bool):
        lowered = word.lower()
        if lowered in _TRUE:
            return True  # type: ignore[return-value]
        if lowered in _FALSE:
            return False  # type: ignore[return-value]
        raise ValueError(f"not a boolean: {word!r}")
    if isinstance(default, str):
        return word  # type: ignore[return-value]
    return type(default)(word)  # type: ignore[call-arg]


def parse_option(configuration: Mapping[str, str], identifier: str, default: T) -> T:
    """Read ``identifier`` converted to the type of ``default``.

    The first whitespace-separated word of the value is used; a missing
    identifier yields ``default``.
    """
    if identifier in configuration:
        return _convert(configuration[identifier], default)
    return default


def parse_string(
    configuration: Mapping[str, str], identifier: str, default: str
) -> str:
    """Read ``identifier`` as a whole string, or ``default`` if absent."""
    return configuration.get(identifier, default)


class Configurable(abc.ABC):
    """Something that can be set up from a configuration mapping."""

    @abc.abstractmethod
    def configure(self, configuration: Mapping[str, str]) -> None:
        """Apply the given configuration."""