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
from urllib.parse import quote

from .core import UndefinedOr, UNDEFINED

HTTPMethod = typing.Literal['GET', 'POST', 'PATCH', 'DELETE', 'PUT']

# Parameters that make a separate rate limit bucket on their own.
_MAJOR_PARAMETERS: typing.Final[tuple[str, ...]] = ('channel_id', 'guild_id', 'webhook_id')


class CompiledRoute:
    """Represents compiled API route."""

    __slots__ = ('route', 'args')

    def __init__(self, route: Route, /, **args: typing.Any) -> None:
        self.route: Route = route
        self.args: dict[str, typing.Any] = args

    def __repr__(self) -> str:
        return f'<CompiledRoute route={self.route!r} args={self.args!r}>'

    def __str__(self) -> str:
        return f'CompiledRoute({self.route}, **{self.args!r})'

    def build(self) -> str:
        return self.route.path.format_map({k: quote(str(v)) for k, v in self.args.items()})

    def build_ratelimit_key(self) -> str:
        return self.route.ratelimit_key_template.format_map({k: quote(str(v)) for k, v in self.args.items()})


class Route:
    """Represents API route."""

    __slots__ = (
        'method',
        'path',
        'ratelimit_key_template',
    )

    def __init__(
        self, method: HTTPMethod, path: str, /, *, ratelimit_key_template: UndefinedOr[typing.Optional[str]] = UNDEFINED
    ) -> None:
        self.method: HTTPMethod = method
        self.path: str = path

        if ratelimit_key_template is UNDEFINED:
            # The bucket is the method and the path with only major parameters substituted in
            template = path
            for segment in path.split('/'):
                if segment.startswith('{') and segment.endswith('}') and segment[1:-1] not in _MAJOR_PARAMETERS:
                    template = template.replace(segment, '_', 1)
            ratelimit_key_template = f'{method} {template}'
        elif ratelimit_key_template is None:
            ratelimit_key_template = path
        self.ratelimit_key_template: str = ratelimit_key_template

    def __repr__(self) -> str:
        return f'<Route method={self.method!r} path={self.path!r}>'

    def __str__(self) -> str:
        return f'{self.method} {self.path}'

    def compile(self, **args: typing.Any) -> CompiledRoute:
        """Compiles route."""
        return CompiledRoute(self, **args)


GET: typing.Final[HTTPMethod] = 'GET'
POST: typing.Final[HTTPMethod] = 'POST'
PUT: typing.Final[HTTPMethod] = 'PUT'
DELETE: typing.Final[HTTPMethod] = 'DELETE'
PATCH: typing.Final[HTTPMethod] = 'PATCH'


# Application commands
APPLICATION_GLOBAL_COMMANDS_FETCH: typing.Final[Route] = Route(GET, '/applications/{application_id}/commands')
APPLICATION_GLOBAL_COMMANDS_CREATE: typing.Final[Route] = Route(POST, '/applications/{application_id}/commands')
APPLICATION_GLOBAL_COMMANDS_OVERWRITE: typing.Final[Route] = Route(PUT, '/applications/{application_id}/commands')
APPLICATION_GLOBAL_COMMAND_FETCH: typing.Final[Route] = Route(
    GET, '/applications/{application_id}/commands/{command_id}'
)
APPLICATION_GLOBAL_COMMAND_EDIT: typing.Final[Route] = Route(
    PATCH, '/applications/{application_id}/commands/{command_id}'
)
APPLICATION_GLOBAL_COMMAND_DELETE: typing.Final[Route] = Route(
    DELETE, '/applications/{application_id}/commands/{command_id}'
)
APPLICATION_GUILD_COMMANDS_FETCH: typing.Final[Route] = Route(
    GET, '/applications/{application_id}/guilds/{guild_id}/commands'
)
APPLICATION_GUILD_COMMANDS_CREATE: typing.Final[Route] = Route(
    POST, '/applications/{application_id}/guilds/{guild_id}/commands'
)
APPLICATION_GUILD_COMMANDS_OVERWRITE: typing.Final[Route] = Route(
    PUT, '/applications/{application_id}/guilds/{guild_id}/commands'
)
APPLICATION_GUILD_COMMAND_FETCH: typing.Final[Route] = Route(
    GET, '/applications/{application_id}/guilds/{guild_id}/commands/{command_id}'
)
APPLICATION_GUILD_COMMAND_EDIT: typing.Final[Route] = Route(
    PATCH, '/applications/{application_id}/guilds/{guild_id}/commands/{command_id}'
)
APPLICATION_GUILD_COMMAND_DELETE: typing.Final[Route] = Route(
    DELETE, '/applications/{application_id}/guilds/{guild_id}/commands/{command_id}'
)

# Channels control
CHANNELS_CHANNEL_FETCH: typing.Final[Route] = Route(GET, '/channels/{channel_id}')
CHANNELS_CHANNEL_EDIT: typing.Final[Route] = Route(PATCH, '/channels/{channel_id}')
CHANNELS_CHANNEL_DELETE: typing.Final[Route] = Route(DELETE, '/channels/{channel_id}')
CHANNELS_MESSAGE_QUERY: typing.Final[Route] = Route(GET, '/channels/{channel_id}/messages')
CHANNELS_MESSAGE_SEND: typing.Final[Route] = Route(POST, '/channels/{channel_id}/messages')
CHANNELS_MESSAGE_FETCH: typing.Final[Route] = Route(GET, '/channels/{channel_id}/messages/{message_id}')
CHANNELS_MESSAGE_EDIT: typing.Final[Route] = Route(PATCH, '/channels/{channel_id}/messages/{message_id}')
CHANNELS_MESSAGE_DELETE: typing.Final[Route] = Route(DELETE, '/channels/{channel_id}/messages/{message_id}')

# Guilds control
GUILDS_GUILD_FETCH: typing.Final[Route] = Route(GET, '/guilds/{guild_id}')
GUILDS_CHANNEL_CREATE: typing.Final[Route] = Route(POST, '/guilds/{guild_id}/channels')
GUILDS_MEMBER_ADD: typing.Final[Route] = Route(PUT, '/guilds/{guild_id}/members/{user_id}')
GUILDS_MEMBER_EDIT: typing.Final[Route] = Route(PATCH, '/guilds/{guild_id}/members/{user_id}')
GUILDS_MEMBER_FETCH: typing.Final[Route] = Route(GET, '/guilds/{guild_id}/members/{user_id}')
GUILDS_MEMBER_FETCH_ALL: typing.Final[Route] = Route(GET, '/guilds/{guild_id}/members')
GUILDS_MEMBER_REMOVE: typing.Final[Route] = Route(DELETE, '/guilds/{guild_id}/members/{user_id}')
GUILDS_ROLE_CREATE: typing.Final[Route] = Route(POST, '/guilds/{guild_id}/roles')
GUILDS_ROLE_DELETE: typing.Final[Route] = Route(DELETE, '/guilds/{guild_id}/roles/{role_id}')
GUILDS_ROLE_EDIT: typing.Final[Route] = Route(PATCH, '/guilds/{guild_id}/roles/{role_id}')
GUILDS_ROLE_EDIT_POSITIONS: typing.Final[Route] = Route(PATCH, '/guilds/{guild_id}/roles')
GUILDS_ROLE_FETCH: typing.Final[Route] = Route(GET, '/guilds/{guild_id}/roles/{role_id}')

# Users control
USERS_DM_CREATE: typing.Final[Route] = Route(POST, '/users/@me/channels')
USERS_FETCH_SELF: typing.Final[Route] = Route(GET, '/users/@me')
USERS_USER_FETCH: typing.Final[Route] = Route(GET, '/users/{user_id}')

__all__ = (
    'HTTPMethod',
    'CompiledRoute',
    'Route',
    'GET',
    'POST',
    'PUT',
    'DELETE',
    'PATCH',
    'APPLICATION_GLOBAL_COMMANDS_FETCH',
    'APPLICATION_GLOBAL_COMMANDS_CREATE',
    'APPLICATION_GLOBAL_COMMANDS_OVERWRITE',
    'APPLICATION_GLOBAL_COMMAND_FETCH',
    'APPLICATION_GLOBAL_COMMAND_EDIT',
    'APPLICATION_GLOBAL_COMMAND_DELETE',
    'APPLICATION_GUILD_COMMANDS_FETCH',
    'APPLICATION_GUILD_COMMANDS_CREATE',
    'APPLICATION_GUILD_COMMANDS_OVERWRITE',
    'APPLICATION_GUILD_COMMAND_FETCH',
    'APPLICATION_GUILD_COMMAND_EDIT',
    'APPLICATION_GUILD_COMMAND_DELETE',
    'CHANNELS_CHANNEL_FETCH',
    'CHANNELS_CHANNEL_EDIT',
    'CHANNELS_CHANNEL_DELETE',
    'CHANNELS_MESSAGE_QUERY',
    'CHANNELS_MESSAGE_SEND',
    'CHANNELS_MESSAGE_FETCH',
    'CHANNELS_MESSAGE_EDIT',
    'CHANNELS_MESSAGE_DELETE',
    'GUILDS_GUILD_FETCH',
    'GUILDS_CHANNEL_CREATE',
    'GUILDS_MEMBER_ADD',
    'GUILDS_MEMBER_EDIT',
    'GUILDS_MEMBER_FETCH',
    'GUILDS_MEMBER_FETCH_ALL',
    'GUILDS_MEMBER_REMOVE',
    'GUILDS_ROLE_CREATE',
    'GUILDS_ROLE_DELETE',
    'GUILDS_ROLE_EDIT',
    'GUILDS_ROLE_EDIT_POSITIONS',
    'GUILDS_ROLE_FETCH',
    'USERS_DM_CREATE',
    'USERS_FETCH_SELF',
    'USERS_USER_FETCH',
)
