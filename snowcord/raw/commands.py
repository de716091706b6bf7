from __future__ import annotations

import typing
import typing_extensions


class ApplicationCommandOptionChoice(typing.TypedDict):
    name: str
    value: typing.Union[str, int, float]


class ApplicationCommandOption(typing.TypedDict):
    type: int
    name: str
    description: str
    required: typing_extensions.NotRequired[bool]
    choices: typing_extensions.NotRequired[list[ApplicationCommandOptionChoice]]
    options: typing_extensions.NotRequired[list[ApplicationCommandOption]]
    channel_types: typing_extensions.NotRequired[list[int]]
    min_value: typing_extensions.NotRequired[typing.Union[int, float]]
    max_value: typing_extensions.NotRequired[typing.Union[int, float]]
    autocomplete: typing_extensions.NotRequired[bool]


class ApplicationCommand(typing.TypedDict):
    id: str
    type: typing_extensions.NotRequired[int]
    application_id: str
    guild_id: typing_extensions.NotRequired[str]
    name: str
    description: str
    options: typing_extensions.NotRequired[list[ApplicationCommandOption]]
    default_member_permissions: typing.Optional[str]
    dm_permission: typing_extensions.NotRequired[bool]
    nsfw: typing_extensions.NotRequired[bool]
    version: str


class DataCreateApplicationCommand(typing.TypedDict):
    name: str
    description: typing_extensions.NotRequired[str]
    type: typing_extensions.NotRequired[int]
    options: typing_extensions.NotRequired[list[ApplicationCommandOption]]
    default_member_permissions: typing_extensions.NotRequired[typing.Optional[str]]
    dm_permission: typing_extensions.NotRequired[bool]
    nsfw: typing_extensions.NotRequired[bool]


class DataEditApplicationCommand(typing.TypedDict, total=False):
    name: str
    description: str
    options: list[ApplicationCommandOption]
    default_member_permissions: typing.Optional[str]
    dm_permission: bool
    nsfw: bool


__all__ = (
    'ApplicationCommandOptionChoice',
    'ApplicationCommandOption',
    'ApplicationCommand',
    'DataCreateApplicationCommand',
    'DataEditApplicationCommand',
)
