"""
Minimal Unix time value type for geocoding responses, dood!

UnixTime wraps a signed count of seconds since 1970-01-01T00:00:00Z and
nothing more: no timezone handling and no calendar arithmetic. Providers send
timestamps either as plain integers or as HTTP-date strings, and both forms
can be converted into a UnixTime without losing information.
"""

import email.utils
from dataclasses import dataclass
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


@dataclass(frozen=True, order=True)
class UnixTime:
    """Immutable point in time as integer seconds since the Unix epoch, dood!

    Equality, ordering and hashing are those of the wrapped integer.
    Can be used directly as a pydantic field type: validates from an integer
    and serializes back to the same integer.

    Example:
        >>> created = UnixTime.fromSeconds(1652712767)
        >>> created.asSeconds()
        1652712767
        >>> created.toHttpDate()
        'Mon, 16 May 2022 14:52:47 GMT'
    """

    seconds: int

    def __post_init__(self) -> None:
        # bool is an int subclass, but True is not a point in time
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise TypeError(f"UnixTime expects integer seconds, got {type(self.seconds).__name__}")

    @classmethod
    def fromSeconds(cls, seconds: int) -> "UnixTime":
        """Create UnixTime from integer seconds since the epoch.

        Never fails for integer input, any offset (negative included) is valid.

        Raises:
            TypeError: If seconds is not an integer
        """
        return cls(seconds)

    @classmethod
    def fromHttpDate(cls, value: str) -> "UnixTime":
        """Parse an HTTP-date string such as "Mon, 16 May 2022 14:52:47 GMT".

        Raises:
            ValueError: If the string is not a valid RFC 2822 / RFC 7231 date
        """
        try:
            parsed = email.utils.parsedate_tz(value)
        except (TypeError, IndexError) as e:
            raise ValueError(f"Invalid HTTP date: {value!r}") from e
        if parsed is None:
            raise ValueError(f"Invalid HTTP date: {value!r}")
        # A missing zone means UTC for HTTP dates
        if parsed[9] is None:
            parsed = parsed[:9] + (0,)
        return cls(email.utils.mktime_tz(parsed))

    def asSeconds(self) -> int:
        """Return the stored number of seconds exactly."""
        return self.seconds

    def toHttpDate(self) -> str:
        """Format as an IMF-fixdate string (always GMT).

        Raises:
            ValueError: If the value is outside the range the platform can format
        """
        try:
            return email.utils.formatdate(self.seconds, usegmt=True)
        except (OverflowError, OSError) as e:
            raise ValueError(f"UnixTime {self.seconds} can not be formatted as HTTP date") from e

    def __int__(self) -> int:
        return self.seconds

    def __repr__(self) -> str:
        return f"UnixTime({self.seconds})"

    @classmethod
    def __get_pydantic_core_schema__(cls, sourceType: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        fromInt = core_schema.no_info_after_validator_function(cls.fromSeconds, core_schema.int_schema(strict=True))
        return core_schema.json_or_python_schema(
            json_schema=fromInt,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), fromInt]),
            serialization=core_schema.plain_serializer_function_ser_schema(lambda value: value.asSeconds()),
        )
