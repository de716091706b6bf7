from __future__ import annotations

import typing
import typing_extensions


class User(typing.TypedDict):
    id: str
    username: str
    discriminator: str
    global_name: typing.Optional[str]
    avatar: typing.Optional[str]
    bot: typing_extensions.NotRequired[bool]
    system: typing_extensions.NotRequired[bool]
    public_flags: typing_extensions.NotRequired[int]


class ClientUser(User):
    mfa_enabled: bool
    verified: typing_extensions.NotRequired[bool]
    email: typing_extensions.NotRequired[typing.Optional[str]]
    locale: typing_extensions.NotRequired[str]
    flags: typing_extensions.NotRequired[int]


class PartialUser(typing.TypedDict):
    id: str
    username: typing_extensions.NotRequired[str]
    discriminator: typing_extensions.NotRequired[str]
    global_name: typing_extensions.NotRequired[typing.Optional[str]]
    avatar: typing_extensions.NotRequired[typing.Optional[str]]


class DataCreateDM(typing.TypedDict):
    recipient_id: str


__all__ = (
    'User',
    'ClientUser',
    'PartialUser',
    'DataCreateDM',
)
