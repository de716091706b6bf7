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

from .base import Base


@define(slots=True, eq=False)
class User(Base):
    """Represents a user on Discord."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's username."""

    discriminator: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's discriminator. ``'0'`` for users that migrated to unique usernames."""

    global_name: typing.Optional[str] = field(repr=True, kw_only=True)
    """Optional[:class:`str`]: The user's display name, if set."""

    avatar: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The user's avatar hash."""

    bot: bool = field(repr=True, kw_only=True)
    """:class:`bool`: Whether the user is a bot."""

    system: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the user is an official system user."""

    raw_public_flags: int = field(repr=False, kw_only=True)
    """:class:`int`: The user's public flags raw value."""

    @property
    def display_name(self) -> str:
        """:class:`str`: The user's display name, falling back to username."""
        return self.global_name or self.name

    @property
    def mention(self) -> str:
        """:class:`str`: The user mention."""
        return f'<@{self.id}>'

    def __str__(self) -> str:
        if self.discriminator in ('', '0'):
            return self.name
        return f'{self.name}#{self.discriminator}'

    def to_dict(self) -> dict[str, typing.Any]:
        return {
            'id': self.id,
            'username': self.name,
            'discriminator': self.discriminator,
            'global_name': self.global_name,
            'avatar': self.avatar,
            'bot': self.bot,
            'system': self.system,
            'public_flags': self.raw_public_flags,
        }


@define(slots=True, eq=False)
class ClientUser(User):
    """Represents the authenticated user. Its ID is also the application ID."""

    mfa_enabled: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the user has two factor authentication enabled."""

    verified: bool = field(repr=False, kw_only=True)
    """:class:`bool`: Whether the email on this account has been verified."""

    email: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The user's email."""

    locale: typing.Optional[str] = field(repr=False, kw_only=True)
    """Optional[:class:`str`]: The user's chosen language option."""

    raw_flags: int = field(repr=False, kw_only=True)
    """:class:`int`: The user's flags raw value."""

    def to_dict(self) -> dict[str, typing.Any]:
        payload = super().to_dict()
        payload['mfa_enabled'] = self.mfa_enabled
        payload['verified'] = self.verified
        payload['email'] = self.email
        payload['locale'] = self.locale
        payload['flags'] = self.raw_flags
        return payload


__all__ = (
    'User',
    'ClientUser',
)
