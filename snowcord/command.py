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

from attrs import define, field
import typing

from .abc import Mergeable
from .base import Base
from .core import Snowflake
from .enums import ApplicationCommandType, ApplicationCommandOptionType, ChannelType

if typing.TYPE_CHECKING:
    from typing_extensions import Self

    from . import raw


class CommandOption:
    """Represents an application command option.

    Attributes
    ----------
    type: :class:`.ApplicationCommandOptionType`
        The option's type.
    name: :class:`str`
        The option's name. Must be between 1 and 32 characters long.
    description: :class:`str`
        The option's description. Must be between 1 and 100 characters long.
    required: :class:`bool`
        Whether the option is required. Defaults to ``False``.
    choices: List[Tuple[:class:`str`, Union[:class:`str`, :class:`int`, :class:`float`]]]
        The ``(name, value)`` choices the user can pick from.
    options: List[:class:`CommandOption`]
        The nested options, for subcommands and subcommand groups.
    channel_types: List[:class:`.ChannelType`]
        The channel types shown, for channel options.
    min_value: Optional[Union[:class:`int`, :class:`float`]]
        The minimum value permitted, for numeric options.
    max_value: Optional[Union[:class:`int`, :class:`float`]]
        The maximum value permitted, for numeric options.
    autocomplete: :class:`bool`
        Whether autocomplete interactions are enabled for this option.
    """

    __slots__ = (
        'type',
        'name',
        'description',
        'required',
        'choices',
        'options',
        'channel_types',
        'min_value',
        'max_value',
        'autocomplete',
    )

    def __init__(
        self,
        type: ApplicationCommandOptionType,
        name: str,
        description: str,
        *,
        required: bool = False,
        choices: typing.Optional[list[tuple[str, typing.Union[str, int, float]]]] = None,
        options: typing.Optional[list[CommandOption]] = None,
        channel_types: typing.Optional[list[ChannelType]] = None,
        min_value: typing.Optional[typing.Union[int, float]] = None,
        max_value: typing.Optional[typing.Union[int, float]] = None,
        autocomplete: bool = False,
    ) -> None:
        self.type: ApplicationCommandOptionType = type
        self.name: str = name
        self.description: str = description
        self.required: bool = required
        self.choices: list[tuple[str, typing.Union[str, int, float]]] = choices or []
        self.options: list[CommandOption] = options or []
        self.channel_types: list[ChannelType] = channel_types or []
        self.min_value: typing.Optional[typing.Union[int, float]] = min_value
        self.max_value: typing.Optional[typing.Union[int, float]] = max_value
        self.autocomplete: bool = autocomplete

    def __repr__(self) -> str:
        return f'<CommandOption type={self.type!r} name={self.name!r}>'

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, CommandOption) and self.build() == other.build()

    def build(self) -> raw.ApplicationCommandOption:
        payload: raw.ApplicationCommandOption = {
            'type': self.type.value,
            'name': self.name,
            'description': self.description,
        }
        if self.required:
            payload['required'] = True
        if self.choices:
            payload['choices'] = [{'name': name, 'value': value} for name, value in self.choices]
        if self.options:
            payload['options'] = [option.build() for option in self.options]
        if self.channel_types:
            payload['channel_types'] = [t.value for t in self.channel_types]
        if self.min_value is not None:
            payload['min_value'] = self.min_value
        if self.max_value is not None:
            payload['max_value'] = self.max_value
        if self.autocomplete:
            payload['autocomplete'] = True
        return payload


class CommandDefinition:
    """Represents an application command to register.

    Attributes
    ----------
    name: :class:`str`
        The command's name.
    description: :class:`str`
        The command's description. Must be empty for user and message commands.
    type: :class:`.ApplicationCommandType`
        The command's type. Defaults to :attr:`~ApplicationCommandType.chat_input`.
    options: List[:class:`CommandOption`]
        The command's parameters.
    default_member_permissions: Optional[:class:`int`]
        The permissions required to use the command by default.
    dm_permission: Optional[:class:`bool`]
        Whether the global command is available in DMs.
    nsfw: :class:`bool`
        Whether the command is age-restricted.
    """

    __slots__ = (
        'name',
        'description',
        'type',
        'options',
        'default_member_permissions',
        'dm_permission',
        'nsfw',
    )

    def __init__(
        self,
        name: str,
        description: str = '',
        *,
        type: ApplicationCommandType = ApplicationCommandType.chat_input,
        options: typing.Optional[list[CommandOption]] = None,
        default_member_permissions: typing.Optional[int] = None,
        dm_permission: typing.Optional[bool] = None,
        nsfw: bool = False,
    ) -> None:
        self.name: str = name
        self.description: str = description
        self.type: ApplicationCommandType = type
        self.options: list[CommandOption] = options or []
        self.default_member_permissions: typing.Optional[int] = default_member_permissions
        self.dm_permission: typing.Optional[bool] = dm_permission
        self.nsfw: bool = nsfw

    def __repr__(self) -> str:
        return f'<CommandDefinition name={self.name!r} type={self.type!r}>'

    def build(self) -> raw.DataCreateApplicationCommand:
        payload: raw.DataCreateApplicationCommand = {
            'name': self.name,
            'type': self.type.value,
        }
        if self.type is ApplicationCommandType.chat_input or self.description:
            payload['description'] = self.description
        if self.options:
            payload['options'] = [option.build() for option in self.options]
        if self.default_member_permissions is not None:
            payload['default_member_permissions'] = str(self.default_member_permissions)
        if self.dm_permission is not None:
            payload['dm_permission'] = self.dm_permission
        if self.nsfw:
            payload['nsfw'] = True
        return payload


ResolvableCommandDefinition = typing.Union[CommandDefinition, 'raw.DataCreateApplicationCommand']


def resolve_command_definition(definition: ResolvableCommandDefinition, /) -> raw.DataCreateApplicationCommand:
    """Converts a command definition into a payload suitable for the API."""
    if isinstance(definition, CommandDefinition):
        return definition.build()
    return dict(definition)  # type: ignore


@define(slots=True, eq=False)
class ApplicationCommand(Base, Mergeable):
    """Represents a registered application command.

    Unlike other entities, application commands are updated in place when edited,
    so references to a cached command stay current.
    """

    raw_type: int = field(repr=False, kw_only=True)
    """:class:`int`: The command's type raw value."""

    application_id: Snowflake = field(repr=False, kw_only=True)
    """:class:`str`: The application's ID the command belongs to."""

    guild_id: typing.Optional[Snowflake] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The guild's ID for guild-scoped commands, ``None`` for global ones."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The command's name."""

    description: str = field(repr=True, kw_only=True)
    """:class:`str`: The command's description."""

    options: list[CommandOption] = field(repr=False, kw_only=True)
    """List[:class:`.CommandOption`]: The command's parameters."""

    default_member_permissions: typing.Optional[int] = field(repr=False, kw_only=True)
    """Optional[:class:`int`]: The permissions required to use the command by default."""

    dm_permission: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the global command is available in DMs."""

    nsfw: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the command is age-restricted."""

    version: Snowflake = field(repr=False, kw_only=True)
    """:class:`str`: The autoincrementing version identifier updated on substantial changes."""

    @property
    def type(self) -> ApplicationCommandType:
        """:class:`.ApplicationCommandType`: The command's type. May be a raw :class:`int` if unknown."""
        return ApplicationCommandType.try_value(self.raw_type)

    @property
    def is_global(self) -> bool:
        """:class:`bool`: Whether the command is registered globally."""
        return self.guild_id is None

    def update_data(self, payload: raw.ApplicationCommand, /) -> Self:
        if 'type' in payload:
            self.raw_type = payload['type']
        if 'name' in payload:
            self.name = payload['name']
        if 'description' in payload:
            self.description = payload['description']
        if 'options' in payload:
            parser = self.state.parser
            self.options = [parser.parse_application_command_option(o) for o in payload['options']]
        if 'default_member_permissions' in payload:
            permissions = payload['default_member_permissions']
            self.default_member_permissions = None if permissions is None else int(permissions)
        if 'dm_permission' in payload:
            self.dm_permission = payload['dm_permission']
        if 'nsfw' in payload:
            self.nsfw = payload['nsfw']
        if 'version' in payload:
            self.version = payload['version']
        return self

    def to_definition(self) -> CommandDefinition:
        """:class:`.CommandDefinition`: Returns a definition that would register this command again."""
        return CommandDefinition(
            self.name,
            self.description,
            type=ApplicationCommandType(self.raw_type),
            options=list(self.options),
            default_member_permissions=self.default_member_permissions,
            dm_permission=self.dm_permission,
            nsfw=self.nsfw,
        )

    def to_dict(self) -> dict[str, typing.Any]:
        payload: dict[str, typing.Any] = {
            'id': self.id,
            'type': self.raw_type,
            'application_id': self.application_id,
            'name': self.name,
            'description': self.description,
            'options': [option.build() for option in self.options],
            'default_member_permissions': (
                None if self.default_member_permissions is None else str(self.default_member_permissions)
            ),
            'dm_permission': self.dm_permission,
            'nsfw': self.nsfw,
            'version': self.version,
        }
        if self.guild_id is not None:
            payload['guild_id'] = self.guild_id
        return payload


__all__ = (
    'CommandOption',
    'CommandDefinition',
    'ResolvableCommandDefinition',
    'resolve_command_definition',
    'ApplicationCommand',
)
