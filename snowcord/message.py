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

from attrs import define, field
from datetime import datetime
import typing

from .base import Base
from .core import UNDEFINED, UndefinedOr, Snowflake
from .enums import MessageType
from .errors import NoData

if typing.TYPE_CHECKING:
    from . import raw
    from .channel import BaseChannel
    from .user import User


@define(slots=True, eq=False)
class Message(Base):
    """Represents a message in a channel on Discord."""

    channel_id: Snowflake = field(repr=True, kw_only=True)
    """:class:`str`: The channel's ID the message was sent in."""

    guild_id: typing.Optional[Snowflake] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The guild's ID the message was sent in, if any."""

    author: User = field(repr=True, kw_only=True)
    """:class:`.User`: The user who sent the message."""

    content: str = field(repr=True, kw_only=True)
    """:class:`str`: The message's content."""

    timestamp: datetime = field(repr=False, kw_only=True)
    """:class:`~datetime.datetime`: When the message was sent, as reported by the API."""

    edited_at: typing.Optional[datetime] = field(repr=False, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the message was last edited."""

    tts: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the message was sent with text-to-speech."""

    mention_everyone: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the message mentions everyone."""

    embeds: list[raw.Embed] = field(repr=False, kw_only=True)
    """List[Dict[:class:`str`, Any]]: The raw embeds attached to the message."""

    pinned: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the message is pinned."""

    raw_type: int = field(repr=False, kw_only=True)
    """:class:`int`: The message's type raw value."""

    reference: typing.Optional[raw.MessageReference] = field(repr=False, kw_only=True)
    """Optional[Dict[:class:`str`, Any]]: The message this one replies to or crossposts."""

    @property
    def type(self) -> MessageType:
        """:class:`.MessageType`: The message's type. May be a raw :class:`int` if unknown."""
        return MessageType.try_value(self.raw_type)

    @property
    def channel(self) -> BaseChannel:
        """:class:`.BaseChannel`: The channel the message was sent in.

        Raises
        ------
        :class:`NoData`
            The channel is not in cache.
        """
        channel = self.state.channels.get(self.channel_id)
        if channel is None:
            raise NoData(self.channel_id, 'channel')
        return channel

    async def edit(
        self,
        *,
        content: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        embeds: UndefinedOr[list[raw.Embed]] = UNDEFINED,
    ) -> Message:
        """|coro|

        Edits the message. See :meth:`.MessageManager.edit`.
        """
        return await self.channel.messages.edit(self, content=content, embeds=embeds)  # type: ignore

    async def delete(self, *, reason: typing.Optional[str] = None) -> bool:
        """|coro|

        Deletes the message. See :meth:`.MessageManager.delete`.
        """
        return await self.channel.messages.delete(self, reason=reason)  # type: ignore

    def to_dict(self) -> dict[str, typing.Any]:
        payload: dict[str, typing.Any] = {
            'id': self.id,
            'channel_id': self.channel_id,
            'author': self.author.to_dict(),
            'content': self.content,
            'timestamp': self.timestamp.isoformat(),
            'edited_timestamp': self.edited_at.isoformat() if self.edited_at else None,
            'tts': self.tts,
            'mention_everyone': self.mention_everyone,
            'embeds': list(self.embeds),
            'pinned': self.pinned,
            'type': self.raw_type,
        }
        if self.guild_id is not None:
            payload['guild_id'] = self.guild_id
        if self.reference is not None:
            payload['message_reference'] = self.reference
        return payload


__all__ = ('Message',)
