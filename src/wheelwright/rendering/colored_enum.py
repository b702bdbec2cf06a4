# topmark:header:start
#
#   project      : Wheelwright
#   file         : colored_enum.py
#   file_relpath : src/wheelwright/rendering/colored_enum.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Color-aware string enums for human-facing status output.

`ColoredStrEnum` members are plain strings (their ``.value`` is the label shown to the
user) that also carry a colorizer, typically a `yachalk` style. The color is kept out
of ``.value`` so equality, hashing and ``repr`` behave like any ``str`` enum.

Example:
    ```python
    from yachalk import chalk

    class Light(ColoredStrEnum):
        GO = ("go", chalk.green)
        STOP = ("stop", chalk.red)

    Light.GO.value          # 'go'
    Light.GO.color("go")    # green 'go'
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class Colorizer(Protocol):
    """Callable that decorates a string for display (compatible with ``ChalkBuilder``)."""

    def __call__(self, *args: object, sep: str = " ") -> str:
        """Return the decorated, ``sep``-joined rendering of ``args``."""
        ...


class ColoredStrEnum(str, Enum):
    """Enum whose value is a string label and that carries a colorizer."""

    _value_: str
    _color: Colorizer

    def __new__(cls, text: str, color: Colorizer) -> ColoredStrEnum:
        obj: ColoredStrEnum = str.__new__(cls, text)
        obj._value_ = text
        obj._color = color
        return obj

    @property
    def value(self) -> str:
        """The textual label of the member."""
        return self._value_

    @property
    def color(self) -> Colorizer:
        """The colorizer associated with the member."""
        return self._color

    def render(self, *, enabled: bool = True) -> str:
        """Return the label, colorized when ``enabled``.

        Args:
            enabled (bool): Whether ANSI colors may be emitted.

        Returns:
            str: The (possibly colorized) label.
        """
        return self._color(self._value_) if enabled else self._value_
