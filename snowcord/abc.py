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

from abc import ABC, abstractmethod
import typing

from .core import UNDEFINED, UndefinedOr

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from . import raw
    from .core import SnowflakeOr
    from .managers import MessageManager
    from .message import Message
    from .state import State


class Mergeable(ABC):
    """An entity that can be updated in place with a fresh payload.

    Most entities are snapshots that get replaced wholesale, but callers holding a reference
    to a mergeable entity observe updates made through the library.
    """

    __slots__ = ()

    @abstractmethod
    def update_data(self, payload: typing.Any, /) -> Self:
        """Merges fields from ``payload`` into this entity.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The raw payload. Missing keys leave the current values untouched.

        Returns
        -------
        Self
            The same entity.
        """
        ...


class Messageable:
    __slots__ = ()

    state: State
    messages: MessageManager

    async def send(
        self,
        content: UndefinedOr[str] = UNDEFINED,
        *,
        embeds: UndefinedOr[list[raw.Embed]] = UNDEFINED,
        tts: UndefinedOr[bool] = UNDEFINED,
        reply_to: UndefinedOr[SnowflakeOr[Message]] = UNDEFINED,
    ) -> Message:
        """|coro|

        Sends a message to this channel.

        Parameters
        ----------
        content: UndefinedOr[:class:`str`]
            The message content.
        embeds: UndefinedOr[List[Dict[:class:`str`, Any]]]
            The embeds to send with the message.
        tts: UndefinedOr[:class:`bool`]
            Whether this is a text-to-speech message.
        reply_to: UndefinedOr[Union[:class:`str`, :class:`.Message`]]
            The message to reply to.

        Raises
        ------
        :class:`HTTPException`
            Sending the message failed.

        Returns
        -------
        :class:`.Message`
            The message that was sent.
        """
        return await self.messages.create(content, embeds=embeds, tts=tts, reply_to=reply_to)

    async def fetch_message(self, message: SnowflakeOr[Message], /) -> Message:
        """|coro|

        Retrieves a message from this channel, using cache if possible.
        """
        return await self.messages.fetch(message)

    async def history(
        self,
        *,
        limit: int = 50,
        before: typing.Optional[SnowflakeOr[Message]] = None,
        after: typing.Optional[SnowflakeOr[Message]] = None,
    ) -> list[Message]:
        """|coro|

        Retrieves recent messages in this channel. See :meth:`.MessageManager.history`.
        """
        return await self.messages.history(limit=limit, before=before, after=after)


__all__ = (
    'Mergeable',
    'Messageable',
)
