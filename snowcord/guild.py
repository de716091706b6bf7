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
from datetime import datetime
import typing

from .base import Base
from .core import UNDEFINED, UndefinedOr, Snowflake, SnowflakeOr
from .errors import NoData
from .managers import ApplicationCommandManager, ChannelManager, MemberManager, RoleManager

if typing.TYPE_CHECKING:
    from .channel import GuildChannel, VoiceChannel
    from .collection import Collection
    from .command import ApplicationCommand
    from .user import User


@define(slots=True, eq=False)
class Role(Base):
    """Represents a role in a Discord guild."""

    guild_id: Snowflake = field(repr=True, kw_only=True)
    """:class:`str`: The guild's ID the role belongs to."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The role's name."""

    color: int = field(repr=True, kw_only=True)
    """:class:`int`: The role's color as integer. ``0`` means no color."""

    hoist: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether this role should be shown separately on the member sidebar."""

    icon: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The role's icon hash."""

    position: int = field(repr=True, kw_only=True)
    """:class:`int`: The role's position."""

    raw_permissions: int = field(repr=False, kw_only=True)
    """:class:`int`: The role's permissions raw value."""

    managed: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether this role is managed by an integration."""

    mentionable: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether this role is mentionable."""

    @property
    def mention(self) -> str:
        return f'<@&{self.id}>'

    @property
    def guild(self) -> Guild:
        """:class:`.Guild`: The guild the role belongs to.

        Raises
        ------
        :class:`NoData`
            The guild is not in cache.
        """
        guild = self.state.guilds.get(self.guild_id)
        if guild is None:
            raise NoData(self.guild_id, 'guild')
        return guild

    async def edit(
        self,
        *,
        name: UndefinedOr[str] = UNDEFINED,
        permissions: UndefinedOr[int] = UNDEFINED,
        color: UndefinedOr[int] = UNDEFINED,
        hoist: UndefinedOr[bool] = UNDEFINED,
        mentionable: UndefinedOr[bool] = UNDEFINED,
        position: UndefinedOr[int] = UNDEFINED,
        reason: typing.Optional[str] = None,
    ) -> Role:
        """|coro|

        Edits the role. See :meth:`.RoleManager.edit`.
        """
        return await self.guild.roles.edit(
            self,
            name=name,
            permissions=permissions,
            color=color,
            hoist=hoist,
            mentionable=mentionable,
            position=position,
            reason=reason,
        )

    async def delete(self, *, reason: typing.Optional[str] = None) -> bool:
        """|coro|

        Deletes the role. See :meth:`.RoleManager.delete`.
        """
        return await self.guild.roles.delete(self, reason=reason)

    def to_dict(self) -> dict[str, typing.Any]:
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'hoist': self.hoist,
            'icon': self.icon,
            'position': self.position,
            'permissions': str(self.raw_permissions),
            'managed': self.managed,
            'mentionable': self.mentionable,
        }


@define(slots=True, eq=False)
class Guild(Base):
    """Represents a guild on Discord.

    Constructing a guild through :meth:`.Parser.parse_guild` seeds the role, channel, member
    and application command caches from the payload.
    """

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The guild's name."""

    owner_id: Snowflake = field(repr=True, kw_only=True)
    """:class:`str`: The user's ID who owns this guild."""

    icon: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The guild's icon hash."""

    description: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The guild's description."""

    member_count: typing.Optional[int] = field(repr=False, kw_only=True)
    """Optional[:class:`int`]: The approximate member count, if provided by the API."""

    roles: RoleManager = field(
        default=Factory(lambda self: RoleManager(self.state, self), takes_self=True),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """:class:`.RoleManager`: The manager of this guild's roles."""

    channels: ChannelManager = field(
        default=Factory(lambda self: ChannelManager(self.state, self), takes_self=True),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """:class:`.ChannelManager`: The manager of this guild's channels."""

    members: MemberManager = field(
        default=Factory(lambda self: MemberManager(self.state, self), takes_self=True),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """:class:`.MemberManager`: The manager of this guild's members."""

    application_commands: ApplicationCommandManager = field(
        default=Factory(lambda self: ApplicationCommandManager(self.state, self), takes_self=True),
        repr=False,
        hash=False,
        init=False,
        eq=False,
    )
    """:class:`.ApplicationCommandManager`: The manager of this guild's application commands."""

    @property
    def slash_commands(self) -> Collection[Snowflake, ApplicationCommand]:
        """:class:`.Collection`: The cached guild-scoped application commands."""
        return self.application_commands.cache

    @property
    def owner(self) -> typing.Optional[Member]:
        """Optional[:class:`.Member`]: The guild owner, if cached."""
        return self.members.cache.get(self.owner_id)

    def get_role(self, role_id: Snowflake, /) -> typing.Optional[Role]:
        return self.roles.cache.get(role_id)

    def get_channel(self, channel_id: Snowflake, /) -> typing.Optional[GuildChannel]:
        return self.channels.cache.get(channel_id)

    def get_member(self, user_id: Snowflake, /) -> typing.Optional[Member]:
        return self.members.cache.get(user_id)

    async def fetch_members(self, *, limit: int = 100, after: SnowflakeOr[User] | int = 0) -> list[Member]:
        """|coro|

        Retrieves a page of guild members. See :meth:`.MemberManager.list`.
        """
        return await self.members.list(limit=limit, after=after)

    def to_dict(self) -> dict[str, typing.Any]:
        return {
            'id': self.id,
            'name': self.name,
            'owner_id': self.owner_id,
            'icon': self.icon,
            'description': self.description,
            'member_count': self.member_count,
            'roles': [role.to_dict() for role in self.roles.cache.values()],
            'channels': [channel.to_dict() for channel in self.channels.cache.values()],
        }


@define(slots=True, eq=False)
class Member(Base):
    """Represents a member of a Discord guild. The member's ID is the user's ID."""

    guild_id: Snowflake = field(repr=True, kw_only=True)
    """:class:`str`: The guild's ID the member is in."""

    user: User = field(repr=True, kw_only=True)
    """:class:`.User`: The user this member represents."""

    nick: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The member's guild nickname."""

    role_ids: list[Snowflake] = field(repr=False, kw_only=True)
    """List[:class:`str`]: The IDs of roles the member has."""

    joined_at: typing.Optional[datetime] = field(repr=False, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the member joined the guild."""

    deaf: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the member is deafened in voice channels."""

    mute: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the member is muted in voice channels."""

    pending: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the member has not yet passed membership screening."""

    timed_out_until: typing.Optional[datetime] = field(repr=False, kw_only=True)
    """Optional[:class:`~datetime.datetime`]: When the member's timeout expires."""

    @property
    def display_name(self) -> str:
        """:class:`str`: The member's nickname, falling back to the user's display name."""
        return self.nick or self.user.display_name

    @property
    def mention(self) -> str:
        return f'<@{self.id}>'

    @property
    def guild(self) -> Guild:
        """:class:`.Guild`: The guild the member is in.

        Raises
        ------
        :class:`NoData`
            The guild is not in cache.
        """
        guild = self.state.guilds.get(self.guild_id)
        if guild is None:
            raise NoData(self.guild_id, 'guild')
        return guild

    @property
    def roles(self) -> list[Role]:
        """List[:class:`.Role`]: The member's roles that are in cache."""
        guild = self.state.guilds.get(self.guild_id)
        if guild is None:
            return []
        return [role for role in map(guild.roles.cache.get, self.role_ids) if role is not None]

    async def edit(
        self,
        *,
        nick: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        roles: UndefinedOr[list[SnowflakeOr[Role]]] = UNDEFINED,
        mute: UndefinedOr[bool] = UNDEFINED,
        deaf: UndefinedOr[bool] = UNDEFINED,
        voice_channel: UndefinedOr[typing.Optional[SnowflakeOr[VoiceChannel]]] = UNDEFINED,
        timed_out_until: UndefinedOr[typing.Optional[datetime]] = UNDEFINED,
        reason: typing.Optional[str] = None,
    ) -> Member:
        """|coro|

        Edits the member. See :meth:`.MemberManager.edit`.
        """
        return await self.guild.members.edit(
            self,
            nick=nick,
            roles=roles,
            mute=mute,
            deaf=deaf,
            voice_channel=voice_channel,
            timed_out_until=timed_out_until,
            reason=reason,
        )

    async def kick(self, *, reason: typing.Optional[str] = None) -> bool:
        """|coro|

        Kicks the member from the guild. See :meth:`.MemberManager.delete`.
        """
        return await self.guild.members.delete(self, reason=reason)

    def to_dict(self) -> dict[str, typing.Any]:
        return {
            'user': self.user.to_dict(),
            'nick': self.nick,
            'roles': list(self.role_ids),
            'joined_at': self.joined_at.isoformat() if self.joined_at else None,
            'deaf': self.deaf,
            'mute': self.mute,
            'pending': self.pending,
            'communication_disabled_until': self.timed_out_until.isoformat() if self.timed_out_until else None,
        }


__all__ = (
    'Role',
    'Guild',
    'Member',
)
