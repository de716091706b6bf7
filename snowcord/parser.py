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

from .channel import (
    BaseChannel,
    CategoryChannel,
    PrivateChannel,
    TextChannel,
    VoiceChannel,
)
from .command import ApplicationCommand, CommandOption
from .enums import ApplicationCommandOptionType, ChannelType
from .errors import InvalidData
from .guild import Guild, Member, Role
from .message import Message
from .user import ClientUser, User
from .utils import parse_time

if typing.TYPE_CHECKING:
    from collections.abc import Callable

    from . import raw
    from .channel import Channel
    from .core import Snowflake
    from .state import State

_L = logging.getLogger(__name__)


class Parser:
    """An factory that produces wrapper objects from raw data.

    Attributes
    ----------
    state: :class:`.State`
        The state the parser is attached to.
    """

    __slots__ = (
        'state',
        '_channel_parsers',
    )

    def __init__(self, *, state: State) -> None:
        self.state: State = state
        self._channel_parsers: dict[int, Callable[[typing.Any, typing.Optional[Snowflake]], Channel]] = {
            ChannelType.text.value: self.parse_text_channel,
            ChannelType.private.value: self.parse_private_channel,
            ChannelType.voice.value: self.parse_voice_channel,
            ChannelType.category.value: self.parse_category_channel,
        }

    def parse_application_command(self, payload: raw.ApplicationCommand, /) -> ApplicationCommand:
        """Parses an application command object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The application command payload to parse.

        Returns
        -------
        :class:`ApplicationCommand`
            The parsed application command object.
        """
        default_member_permissions = payload.get('default_member_permissions')

        return ApplicationCommand(
            state=self.state,
            id=_require_id(payload, 'application command'),
            raw_type=payload.get('type', 1),
            application_id=payload['application_id'],
            guild_id=payload.get('guild_id'),
            name=payload['name'],
            description=payload.get('description', ''),
            options=[self.parse_application_command_option(o) for o in payload.get('options', ())],
            default_member_permissions=None if default_member_permissions is None else int(default_member_permissions),
            dm_permission=payload.get('dm_permission', True),
            nsfw=payload.get('nsfw', False),
            version=payload.get('version', ''),
        )

    def parse_application_command_option(self, payload: raw.ApplicationCommandOption, /) -> CommandOption:
        return CommandOption(
            ApplicationCommandOptionType(payload['type']),
            payload['name'],
            payload.get('description', ''),
            required=payload.get('required', False),
            choices=[(c['name'], c['value']) for c in payload.get('choices', ())],
            options=[self.parse_application_command_option(o) for o in payload.get('options', ())],
            channel_types=[ChannelType(t) for t in payload.get('channel_types', ())],
            min_value=payload.get('min_value'),
            max_value=payload.get('max_value'),
            autocomplete=payload.get('autocomplete', False),
        )

    def parse_base_channel(
        self, payload: raw.BaseChannel, guild_id: typing.Optional[Snowflake] = None, /
    ) -> BaseChannel:
        return BaseChannel(
            state=self.state,
            id=_require_id(payload, 'channel'),
            raw_type=payload['type'],
            name=payload.get('name'),
            guild_id=payload.get('guild_id', guild_id),
        )

    def parse_category_channel(
        self, payload: raw.CategoryChannel, guild_id: typing.Optional[Snowflake] = None, /
    ) -> CategoryChannel:
        return CategoryChannel(
            state=self.state,
            id=_require_id(payload, 'channel'),
            raw_type=payload['type'],
            name=payload.get('name'),
            guild_id=payload.get('guild_id', guild_id),
            position=payload.get('position', 0),
            parent_id=payload.get('parent_id'),
        )

    def parse_channel(self, payload: raw.Channel, /, *, guild_id: typing.Optional[Snowflake] = None) -> Channel:
        """Parses a channel object.

        Channel types the library does not know about are parsed as :class:`BaseChannel`.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The channel payload to parse.
        guild_id: Optional[:class:`str`]
            The guild's ID to use if the payload does not have one.

        Returns
        -------
        :class:`BaseChannel`
            The parsed channel object.
        """
        channel_type = payload.get('type')
        if channel_type is None:
            raise InvalidData(f'Expected channel payload with a type, got {payload!r}')

        try:
            parser = self._channel_parsers[channel_type]
        except KeyError:
            _L.debug('Unknown channel type %r for channel %s, parsing as base channel', channel_type, payload.get('id'))
            parser = self.parse_base_channel
        return parser(payload, guild_id)

    def parse_client_user(self, payload: raw.ClientUser, /) -> ClientUser:
        return ClientUser(
            state=self.state,
            id=_require_id(payload, 'user'),
            name=payload['username'],
            discriminator=payload.get('discriminator', '0'),
            global_name=payload.get('global_name'),
            avatar=payload.get('avatar'),
            bot=payload.get('bot', False),
            system=payload.get('system', False),
            raw_public_flags=payload.get('public_flags', 0),
            mfa_enabled=payload.get('mfa_enabled', False),
            verified=payload.get('verified', False),
            email=payload.get('email'),
            locale=payload.get('locale'),
            raw_flags=payload.get('flags', 0),
        )

    def parse_guild(self, payload: raw.Guild, /) -> Guild:
        """Parses a guild object.

        The guild's roles, channels, members and application commands embedded in the payload
        are stored in the guild's managers, without sending any requests.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The guild payload to parse.

        Returns
        -------
        :class:`Guild`
            The parsed guild object.
        """
        guild = Guild(
            state=self.state,
            id=_require_id(payload, 'guild'),
            name=payload['name'],
            owner_id=payload['owner_id'],
            icon=payload.get('icon'),
            description=payload.get('description'),
            member_count=payload.get('member_count', payload.get('approximate_member_count')),
        )
        guild.roles._init_cache(payload.get('roles', ()))
        guild.channels._init_cache(payload.get('channels', ()))
        guild.members._init_cache(payload.get('members', ()))
        guild.application_commands._init_cache(payload.get('application_commands', ()))
        return guild

    def parse_member(self, payload: raw.Member, guild_id: Snowflake, /) -> Member:
        """Parses a member object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The member payload to parse.
        guild_id: :class:`str`
            The guild's ID the member is in.

        Returns
        -------
        :class:`Member`
            The parsed member object.
        """
        try:
            user_payload = payload['user']
        except KeyError:
            raise InvalidData('Member payload is missing the user') from None

        user = self.parse_user(user_payload)
        return Member(
            state=self.state,
            id=user.id,
            guild_id=guild_id,
            user=user,
            nick=payload.get('nick'),
            role_ids=payload.get('roles', []),
            joined_at=parse_time(payload.get('joined_at')),
            deaf=payload.get('deaf', False),
            mute=payload.get('mute', False),
            pending=payload.get('pending', False),
            timed_out_until=parse_time(payload.get('communication_disabled_until')),
        )

    def parse_message(self, payload: raw.Message, /) -> Message:
        return Message(
            state=self.state,
            id=_require_id(payload, 'message'),
            channel_id=payload['channel_id'],
            guild_id=payload.get('guild_id'),
            author=self.parse_user(payload['author']),
            content=payload.get('content', ''),
            timestamp=parse_time(payload['timestamp']),
            edited_at=parse_time(payload.get('edited_timestamp')),
            tts=payload.get('tts', False),
            mention_everyone=payload.get('mention_everyone', False),
            embeds=payload.get('embeds', []),
            pinned=payload.get('pinned', False),
            raw_type=payload.get('type', 0),
            reference=payload.get('message_reference'),
        )

    def parse_private_channel(
        self, payload: raw.PrivateChannel, guild_id: typing.Optional[Snowflake] = None, /
    ) -> PrivateChannel:
        return PrivateChannel(
            state=self.state,
            id=_require_id(payload, 'channel'),
            raw_type=payload['type'],
            name=payload.get('name'),
            guild_id=None,
            recipients=[self.parse_user(u) for u in payload.get('recipients', ())],
            last_message_id=payload.get('last_message_id'),
        )

    def parse_role(self, payload: raw.Role, guild_id: Snowflake, /) -> Role:
        """Parses a role object.

        Parameters
        ----------
        payload: Dict[:class:`str`, Any]
            The role payload to parse.
        guild_id: :class:`str`
            The guild's ID the role belongs to.

        Returns
        -------
        :class:`Role`
            The parsed role object.
        """
        return Role(
            state=self.state,
            id=_require_id(payload, 'role'),
            guild_id=guild_id,
            name=payload['name'],
            color=payload.get('color', 0),
            hoist=payload.get('hoist', False),
            icon=payload.get('icon'),
            position=payload.get('position', 0),
            raw_permissions=int(payload.get('permissions', 0)),
            managed=payload.get('managed', False),
            mentionable=payload.get('mentionable', False),
        )

    def parse_text_channel(
        self, payload: raw.TextChannel, guild_id: typing.Optional[Snowflake] = None, /
    ) -> TextChannel:
        return TextChannel(
            state=self.state,
            id=_require_id(payload, 'channel'),
            raw_type=payload['type'],
            name=payload.get('name'),
            guild_id=payload.get('guild_id', guild_id),
            position=payload.get('position', 0),
            parent_id=payload.get('parent_id'),
            topic=payload.get('topic'),
            nsfw=payload.get('nsfw', False),
            last_message_id=payload.get('last_message_id'),
            slowmode=payload.get('rate_limit_per_user', 0),
        )

    def parse_user(self, payload: raw.User, /) -> User:
        return User(
            state=self.state,
            id=_require_id(payload, 'user'),
            name=payload['username'],
            discriminator=payload.get('discriminator', '0'),
            global_name=payload.get('global_name'),
            avatar=payload.get('avatar'),
            bot=payload.get('bot', False),
            system=payload.get('system', False),
            raw_public_flags=payload.get('public_flags', 0),
        )

    def parse_voice_channel(
        self, payload: raw.VoiceChannel, guild_id: typing.Optional[Snowflake] = None, /
    ) -> VoiceChannel:
        return VoiceChannel(
            state=self.state,
            id=_require_id(payload, 'channel'),
            raw_type=payload['type'],
            name=payload.get('name'),
            guild_id=payload.get('guild_id', guild_id),
            position=payload.get('position', 0),
            parent_id=payload.get('parent_id'),
            bitrate=payload.get('bitrate', 64000),
            user_limit=payload.get('user_limit', 0),
            rtc_region=payload.get('rtc_region'),
        )


def _require_id(payload: typing.Any, what: str, /) -> Snowflake:
    try:
        return payload['id']
    except (KeyError, TypeError):
        raise InvalidData(f'Expected {what} payload with an ID, got {payload!r}') from None


__all__ = ('Parser',)
