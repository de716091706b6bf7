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

import logging
import typing

import aiohttp

from . import routes, utils
from .core import UNDEFINED, UndefinedOr, Snowflake, SnowflakeOr, resolve_id
from .errors import HTTPException, InvalidData, NotConnected, UnresolvableError
from .http import HTTPClient
from .managers import _build_command_edit
from .parser import Parser
from .state import State

if typing.TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from types import TracebackType
    from typing_extensions import Self

    from . import raw
    from .channel import Channel, PrivateChannel
    from .collection import Collection
    from .command import ApplicationCommand, CommandOption, ResolvableCommandDefinition
    from .guild import Guild, Member
    from .http import RateLimiter
    from .managers import ApplicationCommandManager
    from .user import ClientUser, User


_L = logging.getLogger(__name__)


def _session_factory(_) -> aiohttp.ClientSession:
    return aiohttp.ClientSession()


class ClientEventHandler:
    """Applies push events received from the gateway to the caches."""

    __slots__ = ('_client', '_state', '_handlers')

    def __init__(self, client: Client) -> None:
        self._client = client
        self._state = client._state

        self._handlers = {
            'READY': self.handle_ready,
            'USER_UPDATE': self.handle_user_update,
            'GUILD_CREATE': self.handle_guild_create,
            'GUILD_UPDATE': self.handle_guild_update,
            'GUILD_DELETE': self.handle_guild_delete,
            'CHANNEL_CREATE': self.handle_channel_create,
            'CHANNEL_UPDATE': self.handle_channel_update,
            'CHANNEL_DELETE': self.handle_channel_delete,
            'GUILD_ROLE_CREATE': self.handle_guild_role_create,
            'GUILD_ROLE_UPDATE': self.handle_guild_role_update,
            'GUILD_ROLE_DELETE': self.handle_guild_role_delete,
            'GUILD_MEMBER_ADD': self.handle_guild_member_add,
            'GUILD_MEMBER_UPDATE': self.handle_guild_member_update,
            'GUILD_MEMBER_REMOVE': self.handle_guild_member_remove,
            'MESSAGE_CREATE': self.handle_message_create,
            'MESSAGE_UPDATE': self.handle_message_update,
            'MESSAGE_DELETE': self.handle_message_delete,
        }

    def _get_guild(self, guild_id: typing.Optional[Snowflake], event: str, /) -> typing.Optional[Guild]:
        guild = self._state.guilds.get(guild_id) if guild_id else None
        if guild is None:
            _L.debug('%s refers to uncached guild %s. Discarding.', event, guild_id)
        return guild

    def handle_ready(self, payload: dict[str, typing.Any], /) -> None:
        me = self._state.parser.parse_client_user(payload['user'])
        self._state.me = me
        self._state.users.add(me)

    def handle_user_update(self, payload: raw.ClientUser, /) -> None:
        me = self._state.parser.parse_client_user(payload)
        self._state.me = me
        self._state.users.add(me)

    def handle_guild_create(self, payload: raw.Guild, /) -> None:
        if payload.get('unavailable'):
            return
        guild = self._state.parser.parse_guild(payload)
        self._state.store_guild(guild)

    def handle_guild_update(self, payload: raw.Guild, /) -> None:
        state = self._state
        before = state.guilds.get(payload['id'])
        guild = state.parser.parse_guild(payload)
        if before is not None:
            # Updates do not carry channels, members and commands
            guild.channels.cache.update(before.channels.cache)
            guild.members.cache.update(before.members.cache)
            guild.application_commands.cache.update(before.application_commands.cache)
        state.store_guild(guild)

    def handle_guild_delete(self, payload: raw.UnavailableGuild, /) -> None:
        self._state.guilds.delete(payload['id'])

    def _handle_channel(self, payload: raw.Channel, event: str, /) -> None:
        state = self._state
        channel = state.parser.parse_channel(payload)

        before = state.channels.get(channel.id)
        before_messages = getattr(before, 'messages', None)
        messages = getattr(channel, 'messages', None)
        if before_messages is not None and messages is not None:
            messages.cache.update(before_messages.cache)

        guild = self._get_guild(channel.guild_id, event) if channel.guild_id else None
        if guild is None:
            state.channels.add(channel)
        else:
            guild.channels._store(channel)

    def handle_channel_create(self, payload: raw.Channel, /) -> None:
        self._handle_channel(payload, 'CHANNEL_CREATE')

    def handle_channel_update(self, payload: raw.Channel, /) -> None:
        self._handle_channel(payload, 'CHANNEL_UPDATE')

    def handle_channel_delete(self, payload: raw.Channel, /) -> None:
        state = self._state
        guild_id = payload.get('guild_id')
        guild = state.guilds.get(guild_id) if guild_id else None
        if guild is not None:
            guild.channels._evict(payload['id'])
        state.channels.delete(payload['id'])

    def _handle_role(self, payload: dict[str, typing.Any], event: str, /) -> None:
        guild = self._get_guild(payload.get('guild_id'), event)
        if guild is not None:
            guild.roles._store(guild.roles._parse(payload['role']))

    def handle_guild_role_create(self, payload: dict[str, typing.Any], /) -> None:
        self._handle_role(payload, 'GUILD_ROLE_CREATE')

    def handle_guild_role_update(self, payload: dict[str, typing.Any], /) -> None:
        self._handle_role(payload, 'GUILD_ROLE_UPDATE')

    def handle_guild_role_delete(self, payload: dict[str, typing.Any], /) -> None:
        guild = self._get_guild(payload.get('guild_id'), 'GUILD_ROLE_DELETE')
        if guild is not None:
            guild.roles._evict(payload['role_id'])

    def _handle_member(self, payload: dict[str, typing.Any], event: str, /) -> None:
        guild = self._get_guild(payload.get('guild_id'), event)
        if guild is not None:
            guild.members._store(guild.members._parse(payload))  # type: ignore

    def handle_guild_member_add(self, payload: dict[str, typing.Any], /) -> None:
        self._handle_member(payload, 'GUILD_MEMBER_ADD')

    def handle_guild_member_update(self, payload: dict[str, typing.Any], /) -> None:
        self._handle_member(payload, 'GUILD_MEMBER_UPDATE')

    def handle_guild_member_remove(self, payload: dict[str, typing.Any], /) -> None:
        guild = self._get_guild(payload.get('guild_id'), 'GUILD_MEMBER_REMOVE')
        if guild is not None:
            guild.members._evict(payload['user']['id'])

    def _handle_message(self, payload: raw.Message, event: str, /) -> None:
        channel = self._state.channels.get(payload['channel_id'])
        messages = getattr(channel, 'messages', None)
        if messages is None:
            _L.debug('%s refers to uncached channel %s. Discarding.', event, payload['channel_id'])
            return
        messages._store(messages._parse(payload))

    def handle_message_create(self, payload: raw.Message, /) -> None:
        self._handle_message(payload, 'MESSAGE_CREATE')

    def handle_message_update(self, payload: raw.Message, /) -> None:
        self._handle_message(payload, 'MESSAGE_UPDATE')

    def handle_message_delete(self, payload: raw.MessageDeleteEvent, /) -> None:
        channel = self._state.channels.get(payload['channel_id'])
        messages = getattr(channel, 'messages', None)
        if messages is not None:
            messages._evict(payload['id'])

    def handle_raw(self, event: str, payload: typing.Any, /) -> None:
        try:
            handler = self._handlers[event]
        except KeyError:
            _L.debug('Received unknown event: %s. Discarding.', event)
        else:
            _L.debug('Handling %s', event)
            try:
                handler(payload)
            except Exception:
                _L.exception('%s handler raised an exception', event)


class Client:
    """A Discord client.

    The client mirrors entities it receives into caches, and most ``fetch_*`` methods return
    cached entities without sending requests.

    Parameters
    ----------
    token: :class:`str`
        The token to authenticate with. Can be also passed to :meth:`login`.
    bot: :class:`bool`
        Whether the token belongs to a bot account. Defaults to ``True``.
    http_base: Optional[:class:`str`]
        The base URL of the API.
    user_agent: Optional[:class:`str`]
        The HTTP user agent.
    max_retries: Optional[:class:`int`]
        How many times to retry requests that received 429 or 502 HTTP status code.
    rate_limiter: UndefinedOr[Optional[:class:`RateLimiter`]]
        The rate limiter to use. ``None`` disables rate limiting.
    http: Optional[Callable[[:class:`Client`, :class:`State`], :class:`HTTPClient`]]
        The HTTP client factory.
    parser: Optional[Callable[[:class:`Client`, :class:`State`], :class:`Parser`]]
        The parser factory.
    state: Optional[Union[Callable[[:class:`Client`], :class:`State`], :class:`State`]]
        The state to use. If given, ``http`` and ``parser`` are ignored.
    fetch_commands_on_login: :class:`bool`
        Whether to retrieve global application commands in :meth:`login`. Defaults to ``True``.
    """

    __slots__ = (
        '_handler',
        '_state',
        'bot',
        'closed',
        'fetch_commands_on_login',
    )

    def __init__(
        self,
        *,
        token: str = '',
        bot: bool = True,
        http_base: str | None = None,
        user_agent: str | None = None,
        max_retries: int | None = None,
        rate_limiter: UndefinedOr[RateLimiter | None] = UNDEFINED,
        http: Callable[[Client, State], HTTPClient] | None = None,
        parser: Callable[[Client, State], Parser] | None = None,
        state: Callable[[Client], State] | State | None = None,
        fetch_commands_on_login: bool = True,
    ) -> None:
        self.closed: bool = True
        if state:
            if callable(state):
                self._state: State = state(self)
            else:
                self._state = state
        else:
            state = State()
            if parser:
                state.setup(parser=parser(self, state))
            state.setup(
                http=(
                    http(self, state)
                    if http
                    else HTTPClient(
                        token,
                        base=http_base,
                        bot=bot,
                        max_retries=max_retries,
                        rate_limiter=rate_limiter,
                        session=_session_factory,
                        state=state,
                        user_agent=user_agent,
                    )
                ),
            )
            self._state = state
        self._handler: ClientEventHandler = ClientEventHandler(self)
        self.bot: bool = bot
        self.fetch_commands_on_login: bool = fetch_commands_on_login

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException],
        exc_value: BaseException | None,
        traceback: TracebackType | None,
        /,
    ) -> None:
        await self.close()

    @property
    def state(self) -> State:
        """:class:`State`: The controller for all entities and components."""
        return self._state

    @property
    def http(self) -> HTTPClient:
        """:class:`HTTPClient`: The HTTP client."""
        return self._state.http

    @property
    def me(self) -> ClientUser | None:
        """Optional[:class:`ClientUser`]: The authenticated user."""
        return self._state.me

    user = me

    @property
    def users(self) -> Collection[Snowflake, User]:
        """:class:`Collection`: The cached users."""
        return self._state.users

    @property
    def guilds(self) -> Collection[Snowflake, Guild]:
        """:class:`Collection`: The cached guilds."""
        return self._state.guilds

    @property
    def channels(self) -> Collection[Snowflake, Channel]:
        """:class:`Collection`: The cached channels."""
        return self._state.channels

    @property
    def application_commands(self) -> ApplicationCommandManager:
        """:class:`ApplicationCommandManager`: The manager of global application commands."""
        return self._state.application_commands

    @property
    def slash_commands(self) -> Collection[Snowflake, ApplicationCommand]:
        """:class:`Collection`: The cached global application commands."""
        return self._state.slash_commands

    def get_guild(self, guild_id: Snowflake, /) -> Guild | None:
        return self._state.guilds.get(guild_id)

    def get_channel(self, channel_id: Snowflake, /) -> Channel | None:
        return self._state.channels.get(channel_id)

    def get_user(self, user_id: Snowflake, /) -> User | None:
        return self._state.users.get(user_id)

    def handle_raw(self, event: str, payload: typing.Any, /) -> None:
        """Applies a push event to the caches.

        Unknown events are ignored. Exceptions raised while handling an event are logged
        and not propagated.

        Parameters
        ----------
        event: :class:`str`
            The event name, such as ``GUILD_CREATE``.
        payload: Dict[:class:`str`, Any]
            The event data.
        """
        self._handler.handle_raw(event, payload)

    async def login(self, token: str | None = None, *, bot: UndefinedOr[bool] = UNDEFINED) -> ClientUser:
        """|coro|

        Retrieves the authenticated user and stores it in :attr:`State.me`.

        If :attr:`fetch_commands_on_login` is ``True``, global application commands are retrieved too.

        Parameters
        ----------
        token: Optional[:class:`str`]
            The token to use instead of the one passed in constructor.
        bot: UndefinedOr[:class:`bool`]
            Whether the token belongs to a bot account.

        Raises
        ------
        :class:`Unauthorized`
            The token is invalid.

        Returns
        -------
        :class:`ClientUser`
            The authenticated user.
        """
        if bot is not UNDEFINED:
            self.bot = bot
        if token:
            self.http.with_credentials(token, bot=self.bot)

        payload: raw.ClientUser = await self.http.request(routes.USERS_FETCH_SELF.compile())
        me = self._state.parser.parse_client_user(payload)
        self._state.me = me
        self._state.users.add(me)
        self.closed = False
        _L.info('Logged in as %s (%s)', me, me.id)

        if self.fetch_commands_on_login:
            await self.fetch_application_commands()
        return me

    async def close(self) -> None:
        """|coro|

        Closes the HTTP session.
        """
        self.closed = True
        await self.http.cleanup()

    async def fetch_guild(self, guild: SnowflakeOr[Guild], /, *, check_cache: bool = True, cache: bool = True) -> Guild:
        """|coro|

        Retrieves a guild, from cache if possible.

        The roles, channels, members and application commands embedded in the guild payload
        are stored in the guild's managers. Its channels and its members' users are also
        stored in :attr:`channels` and :attr:`users` when the guild is cached.

        Parameters
        ----------
        guild: Union[:class:`str`, :class:`Guild`]
            The guild to retrieve.
        check_cache: :class:`bool`
            Whether to look up the cache before requesting. Defaults to ``True``.
        cache: :class:`bool`
            Whether to store the retrieved guild. When ``False``, nothing is written into
            :attr:`guilds`, :attr:`channels` or :attr:`users`. Defaults to ``True``.

        Raises
        ------
        :class:`HTTPException`
            Retrieving the guild failed.

        Returns
        -------
        :class:`Guild`
            The retrieved guild.
        """
        guild_id = resolve_id(guild)
        state = self._state
        if check_cache:
            cached = state.guilds.get(guild_id)
            if cached is not None:
                return cached

        payload: raw.Guild = await self.http.request(routes.GUILDS_GUILD_FETCH.compile(guild_id=guild_id))
        result = state.parser.parse_guild(payload)
        if cache:
            state.store_guild(result)
        return result

    async def fetch_channel(
        self, channel: SnowflakeOr[Channel], /, *, check_cache: bool = True, cache: bool = True
    ) -> Channel:
        """|coro|

        Retrieves a channel, from cache if possible.

        Channels of unknown types are returned as :class:`BaseChannel`.

        Raises
        ------
        :class:`HTTPException`
            Retrieving the channel failed.

        Returns
        -------
        :class:`BaseChannel`
            The retrieved channel.
        """
        channel_id = resolve_id(channel)
        state = self._state
        if check_cache:
            cached = state.channels.get(channel_id)
            if cached is not None:
                return cached

        payload: raw.Channel = await self.http.request(routes.CHANNELS_CHANNEL_FETCH.compile(channel_id=channel_id))
        result = state.parser.parse_channel(payload)
        if cache:
            guild = state.guilds.get(result.guild_id) if result.guild_id else None
            if guild is None:
                state.channels.add(result)
            else:
                guild.channels._store(result)
        return result

    async def fetch_user(self, user: SnowflakeOr[User], /, *, check_cache: bool = True, cache: bool = True) -> User:
        """|coro|

        Retrieves a user, from cache if possible.

        Raises
        ------
        :class:`HTTPException`
            Retrieving the user failed.

        Returns
        -------
        :class:`User`
            The retrieved user.
        """
        user_id = resolve_id(user)
        state = self._state
        if check_cache:
            cached = state.users.get(user_id)
            if cached is not None:
                return cached

        payload: raw.User = await self.http.request(routes.USERS_USER_FETCH.compile(user_id=user_id))
        result = state.parser.parse_user(payload)
        if cache:
            state.users.add(result)
        return result

    async def fetch_members(
        self,
        guild: SnowflakeOr[Guild],
        /,
        *,
        limit: int = 100,
        cache: bool = True,
        after: SnowflakeOr[User] | int = 0,
    ) -> list[Member]:
        """|coro|

        Retrieves a page of guild members. The guild is retrieved first if it is not cached.

        When ``cache`` is ``True``, every member is stored in the guild's member cache and
        its user in :attr:`users`.

        Parameters
        ----------
        guild: Union[:class:`str`, :class:`Guild`]
            The guild to retrieve members from.
        limit: :class:`int`
            How many members to retrieve. Defaults to ``100``.
        cache: :class:`bool`
            Whether to store the members. Defaults to ``True``.
        after: Union[:class:`str`, :class:`int`, :class:`User`]
            Only members with a greater user ID are returned. Defaults to ``0``.

        Raises
        ------
        :class:`UnresolvableError`
            Retrieving the guild failed. The original exception is in ``__cause__``.
        :class:`HTTPException`
            Retrieving the members failed.

        Returns
        -------
        List[:class:`Member`]
            The retrieved members.
        """
        guild_id = resolve_id(guild)
        try:
            resolved = await self.fetch_guild(guild_id)
        except (HTTPException, InvalidData) as exc:
            raise UnresolvableError('members', guild_id) from exc
        return await resolved.members.list(limit=limit, after=after, cache=cache)

    async def create_dm(self, user: SnowflakeOr[User], /) -> PrivateChannel:
        """|coro|

        Opens a DM channel with a user. The channel is cached if it was not cached yet.

        Raises
        ------
        :class:`HTTPException`
            Opening the DM failed.

        Returns
        -------
        :class:`PrivateChannel`
            The DM channel.
        """
        payload: raw.DataCreateDM = {'recipient_id': resolve_id(user)}
        resp: raw.PrivateChannel = await self.http.request(routes.USERS_DM_CREATE.compile(), json=payload)
        channel = self._state.parser.parse_private_channel(resp)
        if channel.id not in self._state.channels:
            self._state.channels.add(channel)
        return channel

    def _ensure_connected(self) -> None:
        if self._state.me is None:
            raise NotConnected()

    async def _guild_commands(self, guild: SnowflakeOr[Guild], /) -> ApplicationCommandManager:
        self._ensure_connected()
        resolved = await self.fetch_guild(guild)
        return resolved.application_commands

    # Global application commands

    async def fetch_application_commands(self, *, cache: bool = True) -> list[ApplicationCommand]:
        """|coro|

        Retrieves all global application commands. See :meth:`ApplicationCommandManager.fetch_all`.
        """
        return await self._state.application_commands.fetch_all(cache=cache)

    async def fetch_application_command(
        self, command: SnowflakeOr[ApplicationCommand], /, *, check_cache: bool = True, cache: bool = True
    ) -> ApplicationCommand:
        """|coro|

        Retrieves a global application command. See :meth:`ApplicationCommandManager.fetch`.
        """
        return await self._state.application_commands.fetch(command, check_cache=check_cache, cache=cache)

    @typing.overload
    async def create_application_command(
        self, definitions: ResolvableCommandDefinition, /, *, cache: bool = ...
    ) -> ApplicationCommand: ...

    @typing.overload
    async def create_application_command(
        self, definitions: Sequence[ResolvableCommandDefinition], /, *, cache: bool = ...
    ) -> list[ApplicationCommand]: ...

    async def create_application_command(
        self,
        definitions: ResolvableCommandDefinition | Sequence[ResolvableCommandDefinition],
        /,
        *,
        cache: bool = True,
    ) -> ApplicationCommand | list[ApplicationCommand]:
        """|coro|

        Creates one or more global application commands. See :meth:`ApplicationCommandManager.create`.
        """
        return await self._state.application_commands.create(definitions, cache=cache)

    async def edit_application_command(
        self,
        command: SnowflakeOr[ApplicationCommand],
        /,
        *,
        name: UndefinedOr[str] = UNDEFINED,
        description: UndefinedOr[str] = UNDEFINED,
        options: UndefinedOr[list[CommandOption]] = UNDEFINED,
        default_member_permissions: UndefinedOr[int | None] = UNDEFINED,
        dm_permission: UndefinedOr[bool] = UNDEFINED,
        nsfw: UndefinedOr[bool] = UNDEFINED,
        cache: bool = True,
    ) -> ApplicationCommand:
        """|coro|

        Edits a global application command. See :meth:`ApplicationCommandManager.edit`.
        """
        return await self._state.application_commands.edit(
            command,
            name=name,
            description=description,
            options=options,
            default_member_permissions=default_member_permissions,
            dm_permission=dm_permission,
            nsfw=nsfw,
            cache=cache,
        )

    async def delete_application_command(self, command: SnowflakeOr[ApplicationCommand], /) -> bool:
        """|coro|

        Deletes a global application command. See :meth:`ApplicationCommandManager.delete`.
        """
        return await self._state.application_commands.delete(command)

    async def bulk_overwrite_application_commands(
        self, definitions: Sequence[ResolvableCommandDefinition], /, *, cache: bool = True
    ) -> list[ApplicationCommand]:
        """|coro|

        Replaces all global application commands. See :meth:`ApplicationCommandManager.bulk_overwrite`.
        """
        return await self._state.application_commands.bulk_overwrite(definitions, cache=cache)

    # Guild application commands

    async def fetch_guild_application_commands(
        self, guild: SnowflakeOr[Guild], /, *, cache: bool = True
    ) -> list[ApplicationCommand]:
        """|coro|

        Retrieves all application commands registered in a guild.
        The guild is retrieved first if it is not cached.
        """
        manager = await self._guild_commands(guild)
        return await manager.fetch_all(cache=cache)

    async def fetch_guild_application_command(
        self,
        guild: SnowflakeOr[Guild],
        command: SnowflakeOr[ApplicationCommand],
        /,
        *,
        check_cache: bool = True,
        cache: bool = True,
    ) -> ApplicationCommand:
        """|coro|

        Retrieves an application command registered in a guild.
        The guild is retrieved first if it is not cached.
        """
        manager = await self._guild_commands(guild)
        return await manager.fetch(command, check_cache=check_cache, cache=cache)

    @typing.overload
    async def create_guild_application_command(
        self, guild: SnowflakeOr[Guild], definitions: ResolvableCommandDefinition, /, *, cache: bool = ...
    ) -> ApplicationCommand: ...

    @typing.overload
    async def create_guild_application_command(
        self, guild: SnowflakeOr[Guild], definitions: Sequence[ResolvableCommandDefinition], /, *, cache: bool = ...
    ) -> list[ApplicationCommand]: ...

    async def create_guild_application_command(
        self,
        guild: SnowflakeOr[Guild],
        definitions: ResolvableCommandDefinition | Sequence[ResolvableCommandDefinition],
        /,
        *,
        cache: bool = True,
    ) -> ApplicationCommand | list[ApplicationCommand]:
        """|coro|

        Creates one or more application commands in a guild.
        The guild is retrieved first if it is not cached.
        """
        manager = await self._guild_commands(guild)
        return await manager.create(definitions, cache=cache)

    async def edit_guild_application_command(
        self,
        guild: SnowflakeOr[Guild],
        command: SnowflakeOr[ApplicationCommand],
        /,
        *,
        name: UndefinedOr[str] = UNDEFINED,
        description: UndefinedOr[str] = UNDEFINED,
        options: UndefinedOr[list[CommandOption]] = UNDEFINED,
        default_member_permissions: UndefinedOr[int | None] = UNDEFINED,
        dm_permission: UndefinedOr[bool] = UNDEFINED,
        nsfw: UndefinedOr[bool] = UNDEFINED,
        cache: bool = True,
    ) -> ApplicationCommand:
        """|coro|

        Edits an application command registered in a guild.
        The guild is retrieved first if it is not cached.
        """
        self._ensure_connected()
        # Reject empty edits before the guild is retrieved
        _build_command_edit(
            name=name,
            description=description,
            options=options,
            default_member_permissions=default_member_permissions,
            dm_permission=dm_permission,
            nsfw=nsfw,
        )
        manager = await self._guild_commands(guild)
        return await manager.edit(
            command,
            name=name,
            description=description,
            options=options,
            default_member_permissions=default_member_permissions,
            dm_permission=dm_permission,
            nsfw=nsfw,
            cache=cache,
        )

    async def delete_guild_application_command(
        self, guild: SnowflakeOr[Guild], command: SnowflakeOr[ApplicationCommand], /
    ) -> bool:
        """|coro|

        Deletes an application command registered in a guild.
        The guild is retrieved first if it is not cached.
        """
        manager = await self._guild_commands(guild)
        return await manager.delete(command)

    async def bulk_overwrite_guild_application_commands(
        self, guild: SnowflakeOr[Guild], definitions: Sequence[ResolvableCommandDefinition], /, *, cache: bool = True
    ) -> list[ApplicationCommand]:
        """|coro|

        Replaces all application commands registered in a guild.
        The guild is retrieved first if it is not cached.
        """
        manager = await self._guild_commands(guild)
        return await manager.bulk_overwrite(definitions, cache=cache)

    def to_dict(self) -> dict[str, typing.Any]:
        me = self._state.me
        return {
            'user': None if me is None else me.to_dict(),
            'application_global_commands': self.slash_commands.to_dict(),
        }

    def to_json(self, indent: int | None = 1) -> str:
        """:class:`str`: Serializes the authenticated user and the cached global application commands."""
        return utils.to_json(self.to_dict(), indent=indent)


__all__ = (
    'ClientEventHandler',
    'Client',
)
