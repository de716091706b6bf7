"""
The MIT License (MIT)

Copyright (c) 2024-present MCausc78

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
DEALINGS IN THE SOFTWARE.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
import typing


class _Sentinel(Enum):
    """The library sentinels."""

    undefined = 'UNDEFINED'

    def __bool__(self) -> typing.Literal[False]:
        return False

    def __repr__(self) -> typing.Literal['UNDEFINED']:
        return self.value

    def __eq__(self, other: object, /) -> bool:
        return self is other

    def __hash__(self) -> int:
        return hash(self.value)


Undefined: typing.TypeAlias = typing.Literal[_Sentinel.undefined]
UNDEFINED: Undefined = _Sentinel.undefined


T = typing.TypeVar('T')
UndefinedOr = Undefined | T

Snowflake: typing.TypeAlias = str

# 2015-01-01T00:00:00Z in milliseconds
DISCORD_EPOCH: typing.Final[int] = 1420070400000


def snowflake_timestamp(val: Snowflake | int, /) -> float:
    """:class:`float`: Returns the UNIX timestamp (in seconds) the snowflake was generated at."""
    return ((int(val) >> 22) + DISCORD_EPOCH) / 1000.0


def snowflake_time(val: Snowflake | int, /) -> datetime:
    return datetime.fromtimestamp(snowflake_timestamp(val), timezone.utc)


def time_snowflake(dt: datetime, /, *, high: bool = False) -> Snowflake:
    """Returns a snowflake that would be generated at the given time.

    Useful for pagination, where the remote API accepts ``before``/``after`` IDs.

    Parameters
    ----------
    dt: :class:`datetime.datetime`
        The datetime. Naive datetimes are treated as local time.
    high: :class:`bool`
        Whether to set the lower 22 bits to high or low.

    Returns
    -------
    :class:`str`
        The snowflake.
    """
    ms = int(dt.timestamp() * 1000 - DISCORD_EPOCH)
    return str((ms << 22) + (2**22 - 1 if high else 0))


class HasID(typing.Protocol):
    id: Snowflake


U = typing.TypeVar('U', bound='HasID')
SnowflakeOr = Snowflake | U


def resolve_id(resolvable: SnowflakeOr[U] | int, /) -> Snowflake:
    if isinstance(resolvable, str):
        return resolvable
    if isinstance(resolvable, int):
        return str(resolvable)
    return resolvable.id


__version__: str = '0.3.0'

__all__ = (
    'Undefined',
    'UNDEFINED',
    'T',
    'UndefinedOr',
    'Snowflake',
    'DISCORD_EPOCH',
    'snowflake_timestamp',
    'snowflake_time',
    'time_snowflake',
    'HasID',
    'SnowflakeOr',
    'resolve_id',
    '__version__',
)
