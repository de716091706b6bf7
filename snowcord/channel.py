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

from attrs import define, field, Factory
import typing

from .abc import Messageable
from .base import Base
from .core import UNDEFINED, UndefinedOr, Snowflake
from .enums import ChannelType
from .errors import NoData
from .managers import MessageManager

if typing.TYPE_CHECKING:
    from .guild import Guild
    from .user import User


@define(slots=True, eq=False)
class BaseChannel(Base):
    """Represents a channel on Discord.

    Channels with a type the library does not know about are represented by this class directly.
    """

    raw_type: int = field(repr=True, kw_only=True)
    """:class:`int`: The channel's type raw value."""

    name: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The channel's name, if it has one."""

    guild_id: typing.Optional[Snowflake] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The guild's ID the channel belongs to, if any."""

    @property
    def type(self) -> ChannelType:
        """:class:`.ChannelType`: The channel's type. May be a raw :class:`int` if unknown."""
        return ChannelType.try_value(self.raw_type)

    @property
    def mention(self) -> str:
        return f'<#{self.id}>'

    def to_dict(self) -> dict[str, typing.Any]:
        payload: dict[str, typing.Any] = {
            'id': self.id,
            'type': self.raw_type,
            'name': self.name,
        }
        if self.guild_id is not None:
            payload['guild_id'] = self.guild_id
        return payload


@define(slots=True, eq=False)
class GuildChannel(BaseChannel):
    """Represents a channel inside a guild."""

    position: int = field(repr=False, kw_only=True)
    """:class:`int`: The sorting position of the channel."""

    parent_id: typing.Optional[Snowflake] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The parent category's ID."""

    @property
    def guild(self) -> Guild:
        """:class:`.Guild`: The guild the channel belongs to.

        Raises
        ------
        :class:`NoData`
            The guild is not in cache.
        """
        guild = self.state.guilds.get(self.guild_id or '')
        if guild is None:
            raise NoData(self.guild_id or '', 'guild')
        return guild

    async def edit(
        self,
        *,
        name: UndefinedOr[str] = UNDEFINED,
        position: UndefinedOr[int] = UNDEFINED,
        parent: UndefinedOr[typing.Optional[Snowflake]] = UNDEFINED,
        reason: typing.Optional[str] = None,
        **options: typing.Any,
    ) -> BaseChannel:
        """|coro|

        Edits the channel. See :meth:`.ChannelManager.edit`.
        """
        return await self.guild.channels.edit(
            self, name=name, position=position, parent=parent, reason=reason, **options
        )

    async def delete(self, *, reason: typing.Optional[str] = None) -> bool:
        """|coro|

        Deletes the channel. See :meth:`.ChannelManager.delete`.
        """
        return await self.guild.channels.delete(self, reason=reason)

    def to_dict(self) -> dict[str, typing.Any]:
        payload = super().to_dict()
        payload['position'] = self.position
        payload['parent_id'] = self.parent_id
        return payload


@define(slots=True, eq=False)
class TextChannel(GuildChannel, Messageable):
    """Represents a text channel inside a guild."""

    topic: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The channel's topic."""

    nsfw: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the channel is marked as not safe for work."""

    last_message_id: typing.Optional[Snowflake] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The last message's ID sent in the channel."""

    slowmode: int = field(repr=False, kw_only=True)
    """:class:`int`: The number of seconds a member has to wait between sending messages."""

    messages: MessageManager = field(
        default=Factory(lambda self: MessageManager(self.state, self), takes_self=True),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """:class:`.MessageManager`: The manager of this channel's messages."""

    def to_dict(self) -> dict[str, typing.Any]:
        payload = super().to_dict()
        payload['topic'] = self.topic
        payload['nsfw'] = self.nsfw
        payload['last_message_id'] = self.last_message_id
        payload['rate_limit_per_user'] = self.slowmode
        return payload


@define(slots=True, eq=False)
class VoiceChannel(GuildChannel):
    """Represents a voice channel inside a guild."""

    bitrate: int = field(repr=False, kw_only=True)
    """:class:`int`: The channel's bitrate in bits."""

    user_limit: int = field(repr=False, kw_only=True)
    """:class:`int`: The maximum count of users in this channel. ``0`` means no limit."""

    rtc_region: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The voice region override, ``None`` means automatic."""

    def to_dict(self) -> dict[str, typing.Any]:
        payload = super().to_dict()
        payload['bitrate'] = self.bitrate
        payload['user_limit'] = self.user_limit
        payload['rtc_region'] = self.rtc_region
        return payload


@define(slots=True, eq=False)
class CategoryChannel(GuildChannel):
    """Represents a category grouping guild channels."""

    @property
    def channels(self) -> list[GuildChannel]:
        """List[:class:`.GuildChannel`]: The cached channels under this category, sorted by position."""
        guild = self.state.guilds.get(self.guild_id or '')
        if guild is None:
            return []
        children = [c for c in guild.channels.cache.values() if isinstance(c, GuildChannel) and c.parent_id == self.id]
        children.sort(key=lambda c: c.position)
        return children


@define(slots=True, eq=False)
class PrivateChannel(BaseChannel, Messageable):
    """Represents a direct message channel."""

    recipients: list[User] = field(repr=True, kw_only=True)
    """List[:class:`.User`]: The users the DM is with."""

    last_message_id: typing.Optional[Snowflake] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The last message's ID sent in the channel."""

    messages: MessageManager = field(
        default=Factory(lambda self: MessageManager(self.state, self), takes_self=True),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """:class:`.MessageManager`: The manager of this channel's messages."""

    @property
    def recipient(self) -> typing.Optional[User]:
        """Optional[:class:`.User`]: The other user in the DM."""
        return self.recipients[0] if self.recipients else None

    def to_dict(self) -> dict[str, typing.Any]:
        payload = super().to_dict()
        payload['recipients'] = [u.to_dict() for u in self.recipients]
        payload['last_message_id'] = self.last_message_id
        return payload


Channel = typing.Union[TextChannel, VoiceChannel, CategoryChannel, PrivateChannel, BaseChannel]

__all__ = (
    'BaseChannel',
    'GuildChannel',
    'TextChannel',
    'VoiceChannel',
    'CategoryChannel',
    'PrivateChannel',
    'Channel',
)
