"""Enum types for slash-activity.

Activity types and levels are closed enumerations with a total mapping to
and from their wire strings. Decoding an unknown string raises
InvalidActivityValueError rather than silently degrading to an unset value.
"""

from enum import Enum
from typing import TypeVar

from slash_activity.exceptions import InvalidActivityValueError

_E = TypeVar("_E", bound="_WireEnum")


class _WireEnum(str, Enum):
    """String-backed enum whose value is the stored wire form."""

    @classmethod
    def values(cls) -> list[str]:
        """Return list of all wire values."""
        return [member.value for member in cls]

    @classmethod
    def parse(cls: type[_E], value: "_E | str") -> _E:
        """Decode a wire string (or pass through a member).

        Raises:
            InvalidActivityValueError: If the value is not a known wire string.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidActivityValueError(cls._field_name(), value, cls.values()) from e

    @classmethod
    def _field_name(cls) -> str:
        return cls.__name__.lower()


class ActivityType(_WireEnum):
    """Category of a logged action."""

    SHORTCUT_CREATE = "shortcut.create"
    SHORTCUT_VIEW = "shortcut.view"

    @classmethod
    def _field_name(cls) -> str:
        return "type"


class ActivityLevel(_WireEnum):
    """Severity of a logged action."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @classmethod
    def _field_name(cls) -> str:
        return "level"
