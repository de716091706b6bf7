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

from datetime import datetime
import logging
import typing

from . import routes
from .abc import Mergeable
from .collection import Collection
from .command import CommandDefinition, resolve_command_definition
from .core import UNDEFINED, UndefinedOr, Snowflake, SnowflakeOr, resolve_id
from .enums import ChannelType
from .errors import InvalidEdit, NotConnected

if typing.TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from . import raw
    from .base import Base
    from .channel import Channel, VoiceChannel
    from .command import ApplicationCommand, CommandOption, ResolvableCommandDefinition
    from .guild import Guild, Member, Role
    from .message import Message
    from .state import State
    from .user import User

_L = logging.getLogger(__name__)

E = typing.TypeVar('E', bound='Base')


class Manager:
    """Base class for objects that act on entities on behalf of a :class:`.State`.

    Attributes
    ----------
    state: :class:`.State`
        The state the manager belongs to.
    """

    __slots__ = ('state',)

    def __init__(self, state: State, /) -> None:
        self.state: State = state


class CachedManager(Manager, typing.Generic[E]):
    """A manager that owns a cache of one entity family.

    Lookups through :meth:`fetch`-like methods return cached entities without issuing a request.
    Deleting an entity evicts it from the cache before the request is sent, and the eviction
    is not undone if the request fails.

    .. note::
        The caches are not locked. Two overlapping fetches of an uncached entity will both
        request it, and whichever completes last ends up in cache.

    Attributes
    ----------
    cache: :class:`.Collection`
        The cached entities, keyed by their IDs.
    """

    __slots__ = ('cache',)

    def __init__(self, state: State, /) -> None:
        super().__init__(state)
        self.cache: Collection[Snowflake, E] = Collection()

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} size={len(self.cache)}>'

    def __len__(self) -> int:
        return len(self.cache)

    def __iter__(self) -> Iterator[E]:
        return iter(self.cache.values())

    def __contains__(self, entity: object, /) -> bool:
        return resolve_id(entity) in self.cache  # type: ignore

    def get(self, entity: SnowflakeOr[E], /) -> typing.Optional[E]:
        """Retrieves an entity from cache.

        Parameters
        ----------
        entity: Union[:class:`str`, :class:`.Base`]
            The entity or its ID.

        Returns
        -------
        Optional[:class:`.Base`]
            The entity or ``None`` if not found.
        """
        return self.cache.get(resolve_id(entity))

    def _parse(self, payload: typing.Any, /) -> E:
        raise NotImplementedError

    def _store(self, entity: E, /) -> E:
        return self.cache.add(entity)

    def _evict(self, entity_id: Snowflake, /) -> None:
        self.cache.delete(entity_id)

    def _init_cache(self, payloads: Iterable[typing.Any], /) -> None:
        # Seeds this cache only, never the state-wide ones
        for payload in payloads:
            self.cache.add(self._parse(payload))

    async def _fetch(
        self,
        entity_id: Snowflake,
        route: routes.CompiledRoute,
        /,
        *,
        check_cache: bool,
        cache: bool,
    ) -> E:
        if check_cache:
            entity = self.cache.get(entity_id)
            if entity is not None:
                _L.debug('%r: cache hit for %s', self, entity_id)
                return entity
            _L.debug('%r: cache miss for %s', self, entity_id)

        payload = await self.state.http.request(route)
        entity = self._parse(payload)
        if cache:
            self._store(entity)
        return entity

    async def _delete(self, entity_id: Snowflake, route: routes.CompiledRoute, /, *, reason: typing.Optional[str]) -> bool:
        self._evict(entity_id)
        await self.state.http.request(route, reason=reason)
        return True


class ChannelManager(CachedManager['Channel']):
    """Manages the channels of a guild.

    Channels created, edited or retrieved through the manager are also stored in
    :attr:`.State.channels`. Deleting a channel only evicts it from this manager's cache.

    Attributes
    ----------
    guild: :class:`.Guild`
        The guild the channels belong to.
    """

    __slots__ = ('guild',)

    def __init__(self, state: State, guild: Guild, /) -> None:
        super().__init__(state)
        self.guild: Guild = guild

    def _parse(self, payload: raw.Channel, /) -> Channel:
        return self.state.parser.parse_channel(payload, guild_id=self.guild.id)

    def _store(self, entity: Channel, /) -> Channel:
        self.cache.add(entity)
        self.state.channels.add(entity)
        return entity

    async def fetch(self, channel: SnowflakeOr[Channel], /, *, check_cache: bool = True, cache: bool = True) -> Channel:
        """|coro|

        Retrieves a channel, from cache if possible.

        Parameters
        ----------
        channel: Union[:class:`str`, :class:`.BaseChannel`]
            The channel to retrieve.
        check_cache: :class:`bool`
            Whether to look up the cache before requesting. Defaults to ``True``.
        cache: :class:`bool`
            Whether to store the retrieved channel. Defaults to ``True``.

        Raises
        ------
        :class:`HTTPException`
            Retrieving the channel failed.

        Returns
        -------
        :class:`.BaseChannel`
            The retrieved channel.
        """
        channel_id = resolve_id(channel)
        return await self._fetch(
            channel_id,
            routes.CHANNELS_CHANNEL_FETCH.compile(channel_id=channel_id),
            check_cache=check_cache,
            cache=cache,
        )

    async def create(
        self,
        name: str,
        *,
        type: ChannelType = ChannelType.text,
        topic: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        position: UndefinedOr[int] = UNDEFINED,
        parent: UndefinedOr[typing.Optional[SnowflakeOr[Channel]]] = UNDEFINED,
        nsfw: UndefinedOr[bool] = UNDEFINED,
        bitrate: UndefinedOr[int] = UNDEFINED,
        user_limit: UndefinedOr[int] = UNDEFINED,
        slowmode: UndefinedOr[int] = UNDEFINED,
        reason: typing.Optional[str] = None,
        cache: bool = True,
    ) -> Channel:
        """|coro|

        Creates a channel in the guild.

        Parameters
        ----------
        name: :class:`str`
            The channel name. Must be between 1 and 100 characters long.
        type: :class:`.ChannelType`
            The channel type. Defaults to :attr:`~ChannelType.text`.
        topic: UndefinedOr[Optional[:class:`str`]]
            The channel topic.
        position: UndefinedOr[:class:`int`]
            The sorting position of the channel.
        parent: UndefinedOr[Optional[Union[:class:`str`, :class:`.CategoryChannel`]]]
            The category to put the channel under.
        nsfw: UndefinedOr[:class:`bool`]
            Whether the channel is marked as not safe for work.
        bitrate: UndefinedOr[:class:`int`]
            The bitrate of a voice channel, in bits.
        user_limit: UndefinedOr[:class:`int`]
            The user limit of a voice channel.
        slowmode: UndefinedOr[:class:`int`]
            The slowmode of a text channel, in seconds.
        reason: Optional[:class:`str`]
            The audit log reason.
        cache: :class:`bool`
            Whether to store the created channel. Defaults to ``True``.

        Raises
        ------
        :class:`HTTPException`
            Creating the channel failed.

        Returns
        -------
        :class:`.BaseChannel`
            The created channel.
        """
        payload: raw.DataCreateChannel = {'name': name, 'type': type.value}
        _apply_channel_options(
            payload,
            topic=topic,
            position=position,
            parent=parent,
            nsfw=nsfw,
            bitrate=bitrate,
            user_limit=user_limit,
            slowmode=slowmode,
        )
        resp: raw.Channel = await self.state.http.request(
            routes.GUILDS_CHANNEL_CREATE.compile(guild_id=self.guild.id), json=payload, reason=reason
        )
        channel = self._parse(resp)
        if cache:
            self._store(channel)
        return channel

    async def edit(
        self,
        channel: SnowflakeOr[Channel],
        *,
        name: UndefinedOr[str] = UNDEFINED,
        topic: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        position: UndefinedOr[int] = UNDEFINED,
        parent: UndefinedOr[typing.Optional[SnowflakeOr[Channel]]] = UNDEFINED,
        nsfw: UndefinedOr[bool] = UNDEFINED,
        bitrate: UndefinedOr[int] = UNDEFINED,
        user_limit: UndefinedOr[int] = UNDEFINED,
        slowmode: UndefinedOr[int] = UNDEFINED,
        reason: typing.Optional[str] = None,
        cache: bool = True,
    ) -> Channel:
        """|coro|

        Edits a channel.

        The API always wants a name, so when ``name`` is not given, the channel is
        retrieved (from cache if possible) and its current name is sent along.

        Parameters are the same as in :meth:`create`, except ``type``.

        Raises
        ------
        :class:`HTTPException`
            Retrieving or editing the channel failed.

        Returns
        -------
        :class:`.BaseChannel`
            The updated channel.
        """
        channel_id = resolve_id(channel)

        if not name:
            current = await self.fetch(channel_id, cache=cache)
            name = current.name or ''

        payload: raw.DataEditChannel = {'name': name}
        _apply_channel_options(
            payload,
            topic=topic,
            position=position,
            parent=parent,
            nsfw=nsfw,
            bitrate=bitrate,
            user_limit=user_limit,
            slowmode=slowmode,
        )
        resp: raw.Channel = await self.state.http.request(
            routes.CHANNELS_CHANNEL_EDIT.compile(channel_id=channel_id), json=payload, reason=reason
        )
        result = self._parse(resp)
        if cache:
            self._store(result)
        return result

    async def delete(self, channel: SnowflakeOr[Channel], /, *, reason: typing.Optional[str] = None) -> bool:
        """|coro|

        Deletes a channel. The channel is evicted from cache first.

        Raises
        ------
        :class:`HTTPException`
            Deleting the channel failed.

        Returns
        -------
        :class:`bool`
            ``True``.
        """
        channel_id = resolve_id(channel)
        return await self._delete(channel_id, routes.CHANNELS_CHANNEL_DELETE.compile(channel_id=channel_id), reason=reason)


def _apply_channel_options(
    payload: typing.Any,
    *,
    topic: UndefinedOr[typing.Optional[str]],
    position: UndefinedOr[int],
    parent: UndefinedOr[typing.Optional[SnowflakeOr[Channel]]],
    nsfw: UndefinedOr[bool],
    bitrate: UndefinedOr[int],
    user_limit: UndefinedOr[int],
    slowmode: UndefinedOr[int],
) -> None:
    if topic is not UNDEFINED:
        payload['topic'] = topic
    if position is not UNDEFINED:
        payload['position'] = position
    if parent is not UNDEFINED:
        payload['parent_id'] = None if parent is None else resolve_id(parent)
    if nsfw is not UNDEFINED:
        payload['nsfw'] = nsfw
    if bitrate is not UNDEFINED:
        payload['bitrate'] = bitrate
    if user_limit is not UNDEFINED:
        payload['user_limit'] = user_limit
    if slowmode is not UNDEFINED:
        payload['rate_limit_per_user'] = slowmode


class RoleManager(CachedManager['Role']):
    """Manages the roles of a guild.

    Attributes
    ----------
    guild: :class:`.Guild`
        The guild the roles belong to.
    """

    __slots__ = ('guild',)

    def __init__(self, state: State, guild: Guild, /) -> None:
        super().__init__(state)
        self.guild: Guild = guild

    def _parse(self, payload: raw.Role, /) -> Role:
        return self.state.parser.parse_role(payload, self.guild.id)

    async def fetch(self, role: SnowflakeOr[Role], /, *, check_cache: bool = True, cache: bool = True) -> Role:
        """|coro|

        Retrieves a role, from cache if possible.

        Raises
        ------
        :class:`HTTPException`
            Retrieving the role failed.

        Returns
        -------
        :class:`.Role`
            The retrieved role.
        """
        role_id = resolve_id(role)
        return await self._fetch(
            role_id,
            routes.GUILDS_ROLE_FETCH.compile(guild_id=self.guild.id, role_id=role_id),
            check_cache=check_cache,
            cache=cache,
        )

    async def create(
        self,
        *,
        name: UndefinedOr[str] = UNDEFINED,
        permissions: UndefinedOr[int] = UNDEFINED,
        color: UndefinedOr[int] = UNDEFINED,
        hoist: UndefinedOr[bool] = UNDEFINED,
        mentionable: UndefinedOr[bool] = UNDEFINED,
        reason: typing.Optional[str] = None,
        cache: bool = True,
    ) -> Role:
        """|coro|

        Creates a role in the guild.

        Parameters
        ----------
        name: UndefinedOr[:class:`str`]
            The role name. Defaults to ``'new role'`` on the API side.
        permissions: UndefinedOr[:class:`int`]
            The role permissions raw value.
        color: UndefinedOr[:class:`int`]
            The role color.
        hoist: UndefinedOr[:class:`bool`]
            Whether the role should be displayed separately in the sidebar.
        mentionable: UndefinedOr[:class:`bool`]
            Whether the role should be mentionable.
        reason: Optional[:class:`str`]
            The audit log reason.
        cache: :class:`bool`
            Whether to store the created role. Defaults to ``True``.

        Raises
        ------
        :class:`HTTPException`
            Creating the role failed.

        Returns
        -------
        :class:`.Role`
            The created role.
        """
        payload: raw.DataCreateRole = {}
        _apply_role_options(payload, name=name, permissions=permissions, color=color, hoist=hoist, mentionable=mentionable)
        resp: raw.Role = await self.state.http.request(
            routes.GUILDS_ROLE_CREATE.compile(guild_id=self.guild.id), json=payload, reason=reason
        )
        role = self._parse(resp)
        if cache:
            self._store(role)
        return role

    async def edit(
        self,
        role: SnowflakeOr[Role],
        *,
        name: UndefinedOr[str] = UNDEFINED,
        permissions: UndefinedOr[int] = UNDEFINED,
        color: UndefinedOr[int] = UNDEFINED,
        hoist: UndefinedOr[bool] = UNDEFINED,
        mentionable: UndefinedOr[bool] = UNDEFINED,
        position: UndefinedOr[int] = UNDEFINED,
        reason: typing.Optional[str] = None,
        cache: bool = True,
    ) -> Role:
        """|coro|

        Edits a role.

        Moving a role is a separate request against the guild roles, which is sent first when
        ``position`` is given. If editing the fields fails afterwards, the move is not reverted.

        When ``name`` is not given, the role is retrieved (from cache if possible)
        and its current name is sent along.

        Parameters are the same as in :meth:`create`, plus:

        position: UndefinedOr[:class:`int`]
            The new role position.

        Raises
        ------
        :class:`HTTPException`
            Moving, retrieving or editing the role failed.

        Returns
        -------
        :class:`.Role`
            The updated role.
        """
        role_id = resolve_id(role)

        if position is not UNDEFINED:
            positions: list[raw.DataEditRolePosition] = [{'id': role_id, 'position': position}]
            resp: list[raw.Role] = await self.state.http.request(
                routes.GUILDS_ROLE_EDIT_POSITIONS.compile(guild_id=self.guild.id),
                json=positions,
                reason=reason,
            )
            if cache:
                self._init_cache(resp)

        if not name:
            current = await self.fetch(role_id, cache=cache)
            name = current.name

        payload: raw.DataEditRole = {'name': name}
        _apply_role_options(payload, permissions=permissions, color=color, hoist=hoist, mentionable=mentionable)
        data: raw.Role = await self.state.http.request(
            routes.GUILDS_ROLE_EDIT.compile(guild_id=self.guild.id, role_id=role_id),
            json=payload,
            reason=reason,
        )
        result = self._parse(data)
        if cache:
            self._store(result)
        return result

    async def delete(self, role: SnowflakeOr[Role], /, *, reason: typing.Optional[str] = None) -> bool:
        """|coro|

        Deletes a role. The role is evicted from cache first.

        Raises
        ------
        :class:`HTTPException`
            Deleting the role failed.

        Returns
        -------
        :class:`bool`
            ``True``.
        """
        role_id = resolve_id(role)
        return await self._delete(
            role_id, routes.GUILDS_ROLE_DELETE.compile(guild_id=self.guild.id, role_id=role_id), reason=reason
        )


def _apply_role_options(
    payload: typing.Any,
    *,
    name: UndefinedOr[str] = UNDEFINED,
    permissions: UndefinedOr[int],
    color: UndefinedOr[int],
    hoist: UndefinedOr[bool],
    mentionable: UndefinedOr[bool],
) -> None:
    if name is not UNDEFINED:
        payload['name'] = name
    if permissions is not UNDEFINED:
        payload['permissions'] = str(permissions)
    if color is not UNDEFINED:
        payload['color'] = color
    if hoist is not UNDEFINED:
        payload['hoist'] = hoist
    if mentionable is not UNDEFINED:
        payload['mentionable'] = mentionable


class MemberManager(CachedManager['Member']):
    """Manages the members of a guild. Members are keyed by their user's ID.

    Members created, edited, retrieved or listed through the manager also store their
    :class:`.User` in :attr:`.State.users`.

    Attributes
    ----------
    guild: :class:`.Guild`
        The guild the members are in.
    """

    __slots__ = ('guild',)

    def __init__(self, state: State, guild: Guild, /) -> None:
        super().__init__(state)
        self.guild: Guild = guild

    def _parse(self, payload: raw.Member, /) -> Member:
        return self.state.parser.parse_member(payload, self.guild.id)

    def _store(self, entity: Member, /) -> Member:
        self.state.users.add(entity.user)
        return self.cache.add(entity)

    async def fetch(self, user: SnowflakeOr[User], /, *, check_cache: bool = True, cache: bool = True) -> Member:
        """|coro|

        Retrieves a member, from cache if possible.

        Raises
        ------
        :class:`HTTPException`
            Retrieving the member failed.

        Returns
        -------
        :class:`.Member`
            The retrieved member.
        """
        user_id = resolve_id(user)
        return await self._fetch(
            user_id,
            routes.GUILDS_MEMBER_FETCH.compile(guild_id=self.guild.id, user_id=user_id),
            check_cache=check_cache,
            cache=cache,
        )

    async def create(
        self,
        user: SnowflakeOr[User],
        /,
        *,
        access_token: str,
        nick: UndefinedOr[str] = UNDEFINED,
        roles: UndefinedOr[list[SnowflakeOr[Role]]] = UNDEFINED,
        mute: UndefinedOr[bool] = UNDEFINED,
        deaf: UndefinedOr[bool] = UNDEFINED,
        cache: bool = True,
    ) -> Member:
        """|coro|

        Adds a user to the guild, using an OAuth2 access token granted with ``guilds.join`` scope.

        If the user is already a member, the API returns nothing and the member is retrieved instead.

        Raises
        ------
        :class:`HTTPException`
            Adding the member failed.

        Returns
        -------
        :class:`.Member`
            The added member.
        """
        user_id = resolve_id(user)
        payload: raw.DataAddMember = {'access_token': access_token}
        if nick is not UNDEFINED:
            payload['nick'] = nick
        if roles is not UNDEFINED:
            payload['roles'] = [resolve_id(role) for role in roles]
        if mute is not UNDEFINED:
            payload['mute'] = mute
        if deaf is not UNDEFINED:
            payload['deaf'] = deaf

        resp: typing.Optional[raw.Member] = await self.state.http.request(
            routes.GUILDS_MEMBER_ADD.compile(guild_id=self.guild.id, user_id=user_id), json=payload
        )
        if resp is None:
            return await self.fetch(user_id, cache=cache)

        member = self._parse(resp)
        if cache:
            self._store(member)
        return member

    async def edit(
        self,
        member: SnowflakeOr[Member],
        *,
        nick: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        roles: UndefinedOr[list[SnowflakeOr[Role]]] = UNDEFINED,
        mute: UndefinedOr[bool] = UNDEFINED,
        deaf: UndefinedOr[bool] = UNDEFINED,
        voice_channel: UndefinedOr[typing.Optional[SnowflakeOr[VoiceChannel]]] = UNDEFINED,
        timed_out_until: UndefinedOr[typing.Optional[datetime]] = UNDEFINED,
        reason: typing.Optional[str] = None,
        cache: bool = True,
    ) -> Member:
        """|coro|

        Edits a member.

        Parameters
        ----------
        member: Union[:class:`str`, :class:`.Member`]
            The member to edit.
        nick: UndefinedOr[Optional[:class:`str`]]
            The new nickname. ``None`` removes it.
        roles: UndefinedOr[List[Union[:class:`str`, :class:`.Role`]]]
            The roles the member should have.
        mute: UndefinedOr[:class:`bool`]
            Whether the member is muted in voice channels.
        deaf: UndefinedOr[:class:`bool`]
            Whether the member is deafened in voice channels.
        voice_channel: UndefinedOr[Optional[Union[:class:`str`, :class:`.VoiceChannel`]]]
            The voice channel to move the member to. ``None`` disconnects them.
        timed_out_until: UndefinedOr[Optional[:class:`~datetime.datetime`]]
            When the member's timeout should expire. ``None`` removes it.
        reason: Optional[:class:`str`]
            The audit log reason.
        cache: :class:`bool`
            Whether to store the updated member. Defaults to ``True``.

        Raises
        ------
        :class:`HTTPException`
            Editing the member failed.

        Returns
        -------
        :class:`.Member`
            The updated member.
        """
        user_id = resolve_id(member)
        payload: raw.DataEditMember = {}
        if nick is not UNDEFINED:
            payload['nick'] = nick
        if roles is not UNDEFINED:
            payload['roles'] = [resolve_id(role) for role in roles]
        if mute is not UNDEFINED:
            payload['mute'] = mute
        if deaf is not UNDEFINED:
            payload['deaf'] = deaf
        if voice_channel is not UNDEFINED:
            payload['channel_id'] = None if voice_channel is None else resolve_id(voice_channel)
        if timed_out_until is not UNDEFINED:
            payload['communication_disabled_until'] = None if timed_out_until is None else timed_out_until.isoformat()

        resp: raw.Member = await self.state.http.request(
            routes.GUILDS_MEMBER_EDIT.compile(guild_id=self.guild.id, user_id=user_id), json=payload, reason=reason
        )
        result = self._parse(resp)
        if cache:
            self._store(result)
        return result

    async def delete(self, member: SnowflakeOr[Member], /, *, reason: typing.Optional[str] = None) -> bool:
        """|coro|

        Kicks a member from the guild. The member is evicted from cache first; the user stays cached.

        Raises
        ------
        :class:`HTTPException`
            Kicking the member failed.

        Returns
        -------
        :class:`bool`
            ``True``.
        """
        user_id = resolve_id(member)
        return await self._delete(
            user_id, routes.GUILDS_MEMBER_REMOVE.compile(guild_id=self.guild.id, user_id=user_id), reason=reason
        )

    async def list(
        self,
        *,
        limit: int = 100,
        after: typing.Union[SnowflakeOr[User], int] = 0,
        cache: bool = True,
    ) -> list[Member]:
        """|coro|

        Retrieves a page of guild members, sorted by user ID.

        Parameters
        ----------
        limit: :class:`int`
            How many members to retrieve. Must be between 1 and 1000. Defaults to ``100``.
        after: Union[:class:`str`, :class:`int`, :class:`.User`]
            Only members with a greater user ID are returned. Defaults to ``0``.
        cache: :class:`bool`
            Whether to store the members, and their users in :attr:`.State.users`. Defaults to ``True``.

        Raises
        ------
        :class:`HTTPException`
            Retrieving the members failed.

        Returns
        -------
        List[:class:`.Member`]
            The retrieved members.
        """
        resp: list[raw.Member] = await self.state.http.request(
            routes.GUILDS_MEMBER_FETCH_ALL.compile(guild_id=self.guild.id),
            log=False,
            params={'limit': limit, 'after': resolve_id(after)},
        )
        members = [self._parse(payload) for payload in resp]
        if cache:
            for member in members:
                self._store(member)
        return members


def _build_command_edit(
    *,
    name: UndefinedOr[str],
    description: UndefinedOr[str],
    options: UndefinedOr[list[CommandOption]],
    default_member_permissions: UndefinedOr[typing.Optional[int]],
    dm_permission: UndefinedOr[bool],
    nsfw: UndefinedOr[bool],
) -> raw.DataEditApplicationCommand:
    payload: raw.DataEditApplicationCommand = {}
    if name is not UNDEFINED:
        payload['name'] = name
    if description is not UNDEFINED:
        payload['description'] = description
    if options is not UNDEFINED:
        payload['options'] = [option.build() for option in options]
    if default_member_permissions is not UNDEFINED:
        payload['default_member_permissions'] = (
            None if default_member_permissions is None else str(default_member_permissions)
        )
    if dm_permission is not UNDEFINED:
        payload['dm_permission'] = dm_permission
    if nsfw is not UNDEFINED:
        payload['nsfw'] = nsfw
    if not payload:
        raise InvalidEdit()
    return payload


class ApplicationCommandManager(CachedManager['ApplicationCommand']):
    """Manages application commands of the authenticated application.

    The manager is global when :attr:`guild` is ``None``, and scoped to the guild otherwise.
    Global and guild-scoped caches are independent of each other.

    Every method raises :class:`NotConnected` before sending any request if :attr:`.State.me`
    is not available yet.

    Attributes
    ----------
    guild: Optional[:class:`.Guild`]
        The guild the commands are registered in.
    """

    __slots__ = ('guild',)

    def __init__(self, state: State, guild: typing.Optional[Guild] = None, /) -> None:
        super().__init__(state)
        self.guild: typing.Optional[Guild] = guild

    def _parse(self, payload: raw.ApplicationCommand, /) -> ApplicationCommand:
        return self.state.parser.parse_application_command(payload)

    def _application_id(self) -> Snowflake:
        me = self.state.me
        if me is None:
            raise NotConnected()
        return me.id

    def _compile(self, global_route: routes.Route, guild_route: routes.Route, /, **args: typing.Any) -> routes.CompiledRoute:
        if self.guild is None:
            return global_route.compile(**args)
        return guild_route.compile(guild_id=self.guild.id, **args)

    async def fetch_all(self, *, cache: bool = True) -> list[ApplicationCommand]:
        """|coro|

        Retrieves all application commands registered in this scope.

        Raises
        ------
        :class:`NotConnected`
            The client is not logged in.
        :class:`HTTPException`
            Retrieving the commands failed.

        Returns
        -------
        List[:class:`.ApplicationCommand`]
            The registered commands.
        """
        application_id = self._application_id()
        resp: list[raw.ApplicationCommand] = await self.state.http.request(
            self._compile(
                routes.APPLICATION_GLOBAL_COMMANDS_FETCH,
                routes.APPLICATION_GUILD_COMMANDS_FETCH,
                application_id=application_id,
            )
        )
        commands = [self._parse(payload) for payload in resp]
        if cache:
            for command in commands:
                self._store(command)
        return commands

    async def fetch(
        self, command: SnowflakeOr[ApplicationCommand], /, *, check_cache: bool = True, cache: bool = True
    ) -> ApplicationCommand:
        """|coro|

        Retrieves an application command, from cache if possible.

        Raises
        ------
        :class:`NotConnected`
            The client is not logged in.
        :class:`HTTPException`
            Retrieving the command failed.

        Returns
        -------
        :class:`.ApplicationCommand`
            The retrieved command.
        """
        application_id = self._application_id()
        command_id = resolve_id(command)
        return await self._fetch(
            command_id,
            self._compile(
                routes.APPLICATION_GLOBAL_COMMAND_FETCH,
                routes.APPLICATION_GUILD_COMMAND_FETCH,
                application_id=application_id,
                command_id=command_id,
            ),
            check_cache=check_cache,
            cache=cache,
        )

    async def _create(
        self, application_id: Snowflake, definition: ResolvableCommandDefinition, /, *, cache: bool
    ) -> ApplicationCommand:
        resp: raw.ApplicationCommand = await self.state.http.request(
            self._compile(
                routes.APPLICATION_GLOBAL_COMMANDS_CREATE,
                routes.APPLICATION_GUILD_COMMANDS_CREATE,
                application_id=application_id,
            ),
            json=resolve_command_definition(definition),
        )
        command = self._parse(resp)
        if cache:
            self._store(command)
        return command

    @typing.overload
    async def create(
        self, definitions: ResolvableCommandDefinition, /, *, cache: bool = ...
    ) -> ApplicationCommand: ...

    @typing.overload
    async def create(
        self, definitions: Sequence[ResolvableCommandDefinition], /, *, cache: bool = ...
    ) -> list[ApplicationCommand]: ...

    async def create(
        self,
        definitions: typing.Union[ResolvableCommandDefinition, Sequence[ResolvableCommandDefinition]],
        /,
        *,
        cache: bool = True,
    ) -> typing.Union[ApplicationCommand, list[ApplicationCommand]]:
        """|coro|

        Creates one or more application commands.

        A sequence of definitions is created one request at a time, in order. Each command is stored
        as soon as it is created, and the first failure stops the remaining ones from being sent.
        Use :meth:`bulk_overwrite` to register many commands in a single request.

        Creating a command with a name that already exists in this scope overwrites it.

        Parameters
        ----------
        definitions: Union[:class:`.CommandDefinition`, Dict[:class:`str`, Any], Sequence[...]]
            The command or the commands to create.
        cache: :class:`bool`
            Whether to store the created commands. Defaults to ``True``.

        Raises
        ------
        :class:`NotConnected`
            The client is not logged in.
        :class:`HTTPException`
            Creating a command failed.

        Returns
        -------
        Union[:class:`.ApplicationCommand`, List[:class:`.ApplicationCommand`]]
            The created command, or the created commands if a sequence was passed.
        """
        application_id = self._application_id()

        if isinstance(definitions, (CommandDefinition, dict)):
            return await self._create(application_id, definitions, cache=cache)

        commands = []
        for definition in definitions:
            commands.append(await self._create(application_id, definition, cache=cache))
        return commands

    async def edit(
        self,
        command: SnowflakeOr[ApplicationCommand],
        /,
        *,
        name: UndefinedOr[str] = UNDEFINED,
        description: UndefinedOr[str] = UNDEFINED,
        options: UndefinedOr[list[CommandOption]] = UNDEFINED,
        default_member_permissions: UndefinedOr[typing.Optional[int]] = UNDEFINED,
        dm_permission: UndefinedOr[bool] = UNDEFINED,
        nsfw: UndefinedOr[bool] = UNDEFINED,
        cache: bool = True,
    ) -> ApplicationCommand:
        """|coro|

        Edits an application command.

        If the command is cached, the cached instance is updated in place and returned.

        Raises
        ------
        :class:`NotConnected`
            The client is not logged in.
        :class:`InvalidEdit`
            No field to change was given.
        :class:`HTTPException`
            Editing the command failed.

        Returns
        -------
        :class:`.ApplicationCommand`
            The updated command.
        """
        application_id = self._application_id()
        payload = _build_command_edit(
            name=name,
            description=description,
            options=options,
            default_member_permissions=default_member_permissions,
            dm_permission=dm_permission,
            nsfw=nsfw,
        )

        command_id = resolve_id(command)
        resp: raw.ApplicationCommand = await self.state.http.request(
            self._compile(
                routes.APPLICATION_GLOBAL_COMMAND_EDIT,
                routes.APPLICATION_GUILD_COMMAND_EDIT,
                application_id=application_id,
                command_id=command_id,
            ),
            json=payload,
        )

        existing = self.cache.get(command_id)
        if isinstance(existing, Mergeable):
            result = existing.update_data(resp)
        else:
            result = self._parse(resp)

        if cache:
            self._store(result)
        return result

    async def delete(self, command: SnowflakeOr[ApplicationCommand], /) -> bool:
        """|coro|

        Deletes an application command. The command is evicted from cache first.

        Raises
        ------
        :class:`NotConnected`
            The client is not logged in.
        :class:`HTTPException`
            Deleting the command failed.

        Returns
        -------
        :class:`bool`
            ``True``.
        """
        application_id = self._application_id()
        command_id = resolve_id(command)
        return await self._delete(
            command_id,
            self._compile(
                routes.APPLICATION_GLOBAL_COMMAND_DELETE,
                routes.APPLICATION_GUILD_COMMAND_DELETE,
                application_id=application_id,
                command_id=command_id,
            ),
            reason=None,
        )

    async def bulk_overwrite(
        self, definitions: Sequence[ResolvableCommandDefinition], /, *, cache: bool = True
    ) -> list[ApplicationCommand]:
        """|coro|

        Replaces all application commands registered in this scope, in a single request.

        When ``cache`` is ``True``, the cache is reset to the returned commands.

        Raises
        ------
        :class:`NotConnected`
            The client is not logged in.
        :class:`HTTPException`
            Overwriting the commands failed.

        Returns
        -------
        List[:class:`.ApplicationCommand`]
            The registered commands.
        """
        application_id = self._application_id()
        resp: list[raw.ApplicationCommand] = await self.state.http.request(
            self._compile(
                routes.APPLICATION_GLOBAL_COMMANDS_OVERWRITE,
                routes.APPLICATION_GUILD_COMMANDS_OVERWRITE,
                application_id=application_id,
            ),
            json=[resolve_command_definition(definition) for definition in definitions],
        )
        commands = [self._parse(payload) for payload in resp]
        if cache:
            self.cache.clear()
            for command in commands:
                self._store(command)
        return commands


class MessageManager(CachedManager['Message']):
    """Manages the messages of a textable channel.

    Attributes
    ----------
    channel: Union[:class:`.TextChannel`, :class:`.PrivateChannel`]
        The channel the messages are in.
    """

    __slots__ = ('channel',)

    def __init__(self, state: State, channel: Channel, /) -> None:
        super().__init__(state)
        self.channel: Channel = channel

    def _parse(self, payload: raw.Message, /) -> Message:
        return self.state.parser.parse_message(payload)

    async def fetch(self, message: SnowflakeOr[Message], /, *, check_cache: bool = True, cache: bool = True) -> Message:
        """|coro|

        Retrieves a message, from cache if possible.

        Raises
        ------
        :class:`HTTPException`
            Retrieving the message failed.

        Returns
        -------
        :class:`.Message`
            The retrieved message.
        """
        message_id = resolve_id(message)
        return await self._fetch(
            message_id,
            routes.CHANNELS_MESSAGE_FETCH.compile(channel_id=self.channel.id, message_id=message_id),
            check_cache=check_cache,
            cache=cache,
        )

    async def create(
        self,
        content: UndefinedOr[str] = UNDEFINED,
        *,
        embeds: UndefinedOr[list[raw.Embed]] = UNDEFINED,
        tts: UndefinedOr[bool] = UNDEFINED,
        reply_to: UndefinedOr[SnowflakeOr[Message]] = UNDEFINED,
        nonce: UndefinedOr[str] = UNDEFINED,
        cache: bool = True,
    ) -> Message:
        """|coro|

        Sends a message to the channel.

        Parameters
        ----------
        content: UndefinedOr[:class:`str`]
            The message content. Up to 2000 characters.
        embeds: UndefinedOr[List[Dict[:class:`str`, Any]]]
            The embeds to send.
        tts: UndefinedOr[:class:`bool`]
            Whether this is a text-to-speech message.
        reply_to: UndefinedOr[Union[:class:`str`, :class:`.Message`]]
            The message to reply to.
        nonce: UndefinedOr[:class:`str`]
            The nonce used to verify the message was sent.
        cache: :class:`bool`
            Whether to store the sent message. Defaults to ``True``.

        Raises
        ------
        :class:`HTTPException`
            Sending the message failed.

        Returns
        -------
        :class:`.Message`
            The message that was sent.
        """
        payload: raw.DataMessageSend = {}
        if content is not UNDEFINED:
            payload['content'] = content
        if embeds is not UNDEFINED:
            payload['embeds'] = embeds
        if tts is not UNDEFINED:
            payload['tts'] = tts
        if reply_to is not UNDEFINED:
            payload['message_reference'] = {'message_id': resolve_id(reply_to)}
        if nonce is not UNDEFINED:
            payload['nonce'] = nonce

        resp: raw.Message = await self.state.http.request(
            routes.CHANNELS_MESSAGE_SEND.compile(channel_id=self.channel.id), json=payload
        )
        message = self._parse(resp)
        if cache:
            self._store(message)
        return message

    async def edit(
        self,
        message: SnowflakeOr[Message],
        /,
        *,
        content: UndefinedOr[typing.Optional[str]] = UNDEFINED,
        embeds: UndefinedOr[list[raw.Embed]] = UNDEFINED,
        cache: bool = True,
    ) -> Message:
        """|coro|

        Edits a message that was sent by the authenticated user.

        Raises
        ------
        :class:`HTTPException`
            Editing the message failed.

        Returns
        -------
        :class:`.Message`
            The updated message.
        """
        message_id = resolve_id(message)
        payload: raw.DataEditMessage = {}
        if content is not UNDEFINED:
            payload['content'] = content
        if embeds is not UNDEFINED:
            payload['embeds'] = embeds

        resp: raw.Message = await self.state.http.request(
            routes.CHANNELS_MESSAGE_EDIT.compile(channel_id=self.channel.id, message_id=message_id), json=payload
        )
        result = self._parse(resp)
        if cache:
            self._store(result)
        return result

    async def delete(self, message: SnowflakeOr[Message], /, *, reason: typing.Optional[str] = None) -> bool:
        """|coro|

        Deletes a message. The message is evicted from cache first.

        Raises
        ------
        :class:`HTTPException`
            Deleting the message failed.

        Returns
        -------
        :class:`bool`
            ``True``.
        """
        message_id = resolve_id(message)
        return await self._delete(
            message_id,
            routes.CHANNELS_MESSAGE_DELETE.compile(channel_id=self.channel.id, message_id=message_id),
            reason=reason,
        )

    async def history(
        self,
        *,
        limit: int = 50,
        before: typing.Optional[SnowflakeOr[Message]] = None,
        after: typing.Optional[SnowflakeOr[Message]] = None,
        cache: bool = True,
    ) -> list[Message]:
        """|coro|

        Retrieves messages from the channel, newest first.

        Parameters
        ----------
        limit: :class:`int`
            How many messages to retrieve. Must be between 1 and 100. Defaults to ``50``.
        before: Optional[Union[:class:`str`, :class:`.Message`]]
            Only messages before this one are returned.
        after: Optional[Union[:class:`str`, :class:`.Message`]]
            Only messages after this one are returned.
        cache: :class:`bool`
            Whether to store the messages. Defaults to ``True``.

        Raises
        ------
        :class:`HTTPException`
            Retrieving the messages failed.

        Returns
        -------
        List[:class:`.Message`]
            The retrieved messages.
        """
        params: dict[str, typing.Any] = {'limit': limit}
        if before is not None:
            params['before'] = resolve_id(before)
        if after is not None:
            params['after'] = resolve_id(after)

        resp: list[raw.Message] = await self.state.http.request(
            routes.CHANNELS_MESSAGE_QUERY.compile(channel_id=self.channel.id), log=False, params=params
        )
        messages = [self._parse(payload) for payload in resp]
        if cache:
            for message in messages:
                self._store(message)
        return messages


__all__ = (
    'Manager',
    'CachedManager',
    'ChannelManager',
    'RoleManager',
    'MemberManager',
    'ApplicationCommandManager',
    'MessageManager',
)
