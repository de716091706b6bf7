from __future__ import annotations

import typing

APPLICATION_ID = '100'
GUILD_ID = '1'


def user(id: str, username: str = 'user', **extra: typing.Any) -> dict[str, typing.Any]:
    return {'id': id, 'username': username, 'discriminator': '0', 'global_name': None, 'avatar': None, **extra}


def client_user(id: str = APPLICATION_ID, username: str = 'snowbot') -> dict[str, typing.Any]:
    return user(id, username, bot=True, mfa_enabled=True, verified=True, flags=0)


def role(id: str, name: str = 'role', position: int = 0, **extra: typing.Any) -> dict[str, typing.Any]:
    return {
        'id': id,
        'name': name,
        'color': 0,
        'hoist': False,
        'position': position,
        'permissions': '0',
        'managed': False,
        'mentionable': False,
        **extra,
    }


def channel(id: str, name: str = 'general', type: int = 0, **extra: typing.Any) -> dict[str, typing.Any]:
    return {'id': id, 'name': name, 'type': type, 'guild_id': GUILD_ID, 'position': 0, **extra}


def member(user_id: str, username: str = 'user', roles: list[str] | None = None) -> dict[str, typing.Any]:
    return {
        'user': user(user_id, username),
        'nick': None,
        'roles': roles or [],
        'joined_at': '2024-01-01T00:00:00.000000+00:00',
        'deaf': False,
        'mute': False,
    }


def command(
    id: str, name: str = 'ping', description: str = 'Pong!', guild_id: str | None = None, **extra: typing.Any
) -> dict[str, typing.Any]:
    payload = {
        'id': id,
        'type': 1,
        'application_id': APPLICATION_ID,
        'name': name,
        'description': description,
        'version': '1',
        **extra,
    }
    if guild_id is not None:
        payload['guild_id'] = guild_id
    return payload


def message(id: str, channel_id: str, content: str = 'hello', author_id: str = '5') -> dict[str, typing.Any]:
    return {
        'id': id,
        'channel_id': channel_id,
        'author': user(author_id),
        'content': content,
        'timestamp': '2024-01-01T12:00:00.000000+00:00',
        'edited_timestamp': None,
        'tts': False,
        'mention_everyone': False,
        'embeds': [],
        'pinned': False,
        'type': 0,
    }


def guild(
    id: str = GUILD_ID,
    *,
    roles: list[dict[str, typing.Any]] | None = None,
    channels: list[dict[str, typing.Any]] | None = None,
    members: list[dict[str, typing.Any]] | None = None,
    application_commands: list[dict[str, typing.Any]] | None = None,
) -> dict[str, typing.Any]:
    payload: dict[str, typing.Any] = {
        'id': id,
        'name': 'Snowy',
        'owner_id': '5',
        'icon': None,
        'description': None,
        'roles': roles if roles is not None else [role(id, '@everyone')],
    }
    if channels is not None:
        payload['channels'] = channels
    if members is not None:
        payload['members'] = members
    if application_commands is not None:
        payload['application_commands'] = application_commands
    return payload
