from __future__ import annotations

import typing
import typing_extensions

from .users import User


class PermissionOverwrite(typing.TypedDict):
    id: str
    type: typing.Literal[0, 1]
    allow: str
    deny: str


class BaseChannel(typing.TypedDict):
    id: str
    type: int
    name: typing_extensions.NotRequired[typing.Optional[str]]
    guild_id: typing_extensions.NotRequired[str]


class GuildChannel(BaseChannel):
    position: int
    parent_id: typing_extensions.NotRequired[typing.Optional[str]]
    permission_overwrites: typing_extensions.NotRequired[list[PermissionOverwrite]]


class TextChannel(GuildChannel):
    topic: typing_extensions.NotRequired[typing.Optional[str]]
    nsfw: typing_extensions.NotRequired[bool]
    last_message_id: typing_extensions.NotRequired[typing.Optional[str]]
    rate_limit_per_user: typing_extensions.NotRequired[int]


class VoiceChannel(GuildChannel):
    bitrate: int
    user_limit: int
    rtc_region: typing_extensions.NotRequired[typing.Optional[str]]


class CategoryChannel(GuildChannel):
    pass


class PrivateChannel(BaseChannel):
    recipients: list[User]
    last_message_id: typing_extensions.NotRequired[typing.Optional[str]]


Channel = typing.Union[TextChannel, VoiceChannel, CategoryChannel, PrivateChannel, BaseChannel]


class DataCreateChannel(typing.TypedDict):
    name: str
    type: typing_extensions.NotRequired[int]
    topic: typing_extensions.NotRequired[typing.Optional[str]]
    bitrate: typing_extensions.NotRequired[int]
    user_limit: typing_extensions.NotRequired[int]
    rate_limit_per_user: typing_extensions.NotRequired[int]
    position: typing_extensions.NotRequired[int]
    parent_id: typing_extensions.NotRequired[typing.Optional[str]]
    nsfw: typing_extensions.NotRequired[bool]


class DataEditChannel(typing.TypedDict):
    name: str
    topic: typing_extensions.NotRequired[typing.Optional[str]]
    bitrate: typing_extensions.NotRequired[int]
    user_limit: typing_extensions.NotRequired[int]
    rate_limit_per_user: typing_extensions.NotRequired[int]
    position: typing_extensions.NotRequired[int]
    parent_id: typing_extensions.NotRequired[typing.Optional[str]]
    nsfw: typing_extensions.NotRequired[bool]


__all__ = (
    'PermissionOverwrite',
    'BaseChannel',
    'GuildChannel',
    'TextChannel',
    'VoiceChannel',
    'CategoryChannel',
    'PrivateChannel',
    'Channel',
    'DataCreateChannel',
    'DataEditChannel',
)
