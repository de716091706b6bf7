from __future__ import annotations

import typing
import typing_extensions

from .channels import Channel
from .commands import ApplicationCommand
from .users import User


class Role(typing.TypedDict):
    id: str
    name: str
    color: int
    hoist: bool
    icon: typing_extensions.NotRequired[typing.Optional[str]]
    position: int
    permissions: str
    managed: bool
    mentionable: bool


class Member(typing.TypedDict):
    user: User
    nick: typing_extensions.NotRequired[typing.Optional[str]]
    roles: list[str]
    joined_at: typing.Optional[str]
    deaf: bool
    mute: bool
    pending: typing_extensions.NotRequired[bool]
    communication_disabled_until: typing_extensions.NotRequired[typing.Optional[str]]


class Guild(typing.TypedDict):
    id: str
    name: str
    icon: typing.Optional[str]
    description: typing.Optional[str]
    owner_id: str
    roles: list[Role]
    channels: typing_extensions.NotRequired[list[Channel]]
    members: typing_extensions.NotRequired[list[Member]]
    application_commands: typing_extensions.NotRequired[list[ApplicationCommand]]
    member_count: typing_extensions.NotRequired[int]
    unavailable: typing_extensions.NotRequired[bool]


class UnavailableGuild(typing.TypedDict):
    id: str
    unavailable: bool


class DataCreateRole(typing.TypedDict):
    name: typing_extensions.NotRequired[str]
    permissions: typing_extensions.NotRequired[str]
    color: typing_extensions.NotRequired[int]
    hoist: typing_extensions.NotRequired[bool]
    mentionable: typing_extensions.NotRequired[bool]


class DataEditRole(DataCreateRole):
    pass


class DataEditRolePosition(typing.TypedDict):
    id: str
    position: int


class DataAddMember(typing.TypedDict):
    access_token: str
    nick: typing_extensions.NotRequired[str]
    roles: typing_extensions.NotRequired[list[str]]
    mute: typing_extensions.NotRequired[bool]
    deaf: typing_extensions.NotRequired[bool]


class DataEditMember(typing.TypedDict):
    nick: typing_extensions.NotRequired[typing.Optional[str]]
    roles: typing_extensions.NotRequired[list[str]]
    mute: typing_extensions.NotRequired[bool]
    deaf: typing_extensions.NotRequired[bool]
    channel_id: typing_extensions.NotRequired[typing.Optional[str]]
    communication_disabled_until: typing_extensions.NotRequired[typing.Optional[str]]


__all__ = (
    'Role',
    'Member',
    'Guild',
    'UnavailableGuild',
    'DataCreateRole',
    'DataEditRole',
    'DataEditRolePosition',
    'DataAddMember',
    'DataEditMember',
)
