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

import typing

from . import utils

if typing.TYPE_CHECKING:
    from collections.abc import Callable

K = typing.TypeVar('K')
V = typing.TypeVar('V')


class Collection(dict, typing.Generic[K, V]):
    """An insertion-ordered mapping of IDs to entities, used as the cache container by every manager.

    Updating an existing key keeps its original position.

    .. note::
        This is a :class:`dict` subclass, so all :class:`dict` operations work as well.
        Prefer :meth:`set`/:meth:`add` though, as they validate that entities are stored under their own ID.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} size={len(self)}>'

    def set(self, key: K, value: V, /) -> None:
        """Inserts or replaces the value stored under ``key``.

        Raises
        ------
        ValueError
            The value has an ``id`` that differs from ``key``.
        """
        value_id = getattr(value, 'id', key)
        if value_id != key:
            raise ValueError(f'Cannot store entity {value_id!r} under key {key!r}')
        self[key] = value

    def add(self, value: V, /) -> V:
        """Stores an entity under its own ID and returns it."""
        self[value.id] = value  # type: ignore
        return value

    def has(self, key: K, /) -> bool:
        return key in self

    def delete(self, key: K, /) -> bool:
        """:class:`bool`: Removes ``key``. Returns whether it was present."""
        try:
            del self[key]
        except KeyError:
            return False
        return True

    def first(self) -> typing.Optional[V]:
        for value in self.values():
            return value
        return None

    def find(self, predicate: Callable[[V], bool], /) -> typing.Optional[V]:
        for value in self.values():
            if predicate(value):
                return value
        return None

    def filter(self, predicate: Callable[[V], bool], /) -> Collection[K, V]:
        return Collection((k, v) for k, v in self.items() if predicate(v))

    def to_dict(self) -> dict[K, typing.Any]:
        """Dict[K, Any]: Returns an ordered mapping of keys to serialized values."""
        return {k: v.to_dict() if hasattr(v, 'to_dict') else v for k, v in self.items()}  # type: ignore

    def to_json(self, indent: typing.Optional[int] = None) -> str:
        return utils.to_json(self.to_dict(), indent=indent)


__all__ = ('Collection',)
