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

from .collection import Collection
from .managers import ApplicationCommandManager
from .parser import Parser

if typing.TYPE_CHECKING:
    from .channel import Channel
    from .command import ApplicationCommand
    from .core import Snowflake
    from .guild import Guild
    from .http import HTTPClient
    from .user import ClientUser, User


class State:
    """Represents a manager for all snowcord objects.

    Attributes
    ----------
    parser: :class:`Parser`
        The parser.
    me: Optional[:class:`ClientUser`]
        The authenticated user. ``None`` until the client logs in or receives ``READY``.
    users: :class:`Collection`
        The cached users.
    guilds: :class:`Collection`
        The cached guilds.
    channels: :class:`Collection`
        The cached channels. This includes private channels and the channels of cached guilds.
    application_commands: :class:`ApplicationCommandManager`
        The manager of global application commands.
    """

    __slots__ = (
        '_http',
        'parser',
        'me',
        'users',
        'guilds',
        'channels',
        'application_commands',
    )

    def __init__(
        self,
        *,
        http: HTTPClient | None = None,
        parser: Parser | None = None,
    ) -> None:
        self._http = http
        self.parser = parser if parser else Parser(state=self)
        self.me: ClientUser | None = None
        self.users: Collection[Snowflake, User] = Collection()
        self.guilds: Collection[Snowflake, Guild] = Collection()
        self.channels: Collection[Snowflake, Channel] = Collection()
        self.application_commands: ApplicationCommandManager = ApplicationCommandManager(self)

    def setup(
        self,
        *,
        http: HTTPClient | None = None,
        parser: Parser | None = None,
    ) -> State:
        if http:
            self._http = http
        if parser:
            self.parser = parser
        return self

    @property
    def http(self) -> HTTPClient:
        assert self._http, 'State has no HTTP client attached'
        return self._http

    def store_guild(self, guild: Guild, /) -> Guild:
        """Stores a guild, and mirrors its cached channels and its members' users
        into :attr:`channels` and :attr:`users`.

        Parsing a guild only seeds the guild's own managers, so an uncached guild leaves
        the state-wide caches untouched.
        """
        self.guilds.add(guild)
        for channel in guild.channels.cache.values():
            self.channels.add(channel)
        for member in guild.members.cache.values():
            self.users.add(member.user)
        return guild

    @property
    def slash_commands(self) -> Collection[Snowflake, ApplicationCommand]:
        """:class:`Collection`: The cached global application commands."""
        return self.application_commands.cache


__all__ = ('State',)
