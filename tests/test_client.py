from __future__ import annotations

import json
import logging

import pytest
import snowcord

from conftest import FakeHTTPClient, not_found
import payloads


@pytest.mark.asyncio
async def test_login(client):
    http = client.http
    http.queue(payloads.client_user(), [payloads.command('30', 'ping')])

    me = await client.login()

    assert client.me is me
    assert client.user is me
    assert me.bot is True
    assert client.users['100'] is me
    assert http.paths == ['GET /users/@me', 'GET /applications/100/commands']
    assert list(client.slash_commands) == ['30']


@pytest.mark.asyncio
async def test_login_without_commands():
    client = snowcord.Client(
        http=lambda client, state: FakeHTTPClient(state),
        fetch_commands_on_login=False,
    )
    client.http.queue(payloads.client_user())

    await client.login('other-token')

    assert client.http.token == 'other-token'
    assert client.http.paths == ['GET /users/@me']


@pytest.mark.asyncio
async def test_fetch_guild_is_cached(client):
    http = client.http
    roles = [payloads.role('1', '@everyone'), payloads.role('2', 'mod'), payloads.role('3', 'x')]
    http.queue(payloads.guild(roles=roles))

    guild = await client.fetch_guild('1')
    assert await client.fetch_guild('1') is guild
    assert client.get_guild('1') is guild
    assert len(guild.roles) == 3
    assert http.paths == ['GET /guilds/1']


@pytest.mark.asyncio
async def test_fetch_guild_without_cache(client):
    client.http.queue(payloads.guild(channels=[payloads.channel('20')], members=[payloads.member('5', 'alice')]))

    guild = await client.fetch_guild('1', cache=False)

    assert guild.get_channel('20') is not None
    assert guild.get_member('5') is not None
    assert len(client.guilds) == 0
    assert len(client.channels) == 0
    assert len(client.users) == 0


@pytest.mark.asyncio
async def test_fetch_guild_mirrors_channels_and_users(client):
    client.http.queue(payloads.guild(channels=[payloads.channel('20')], members=[payloads.member('5', 'alice')]))

    guild = await client.fetch_guild('1')

    assert client.get_channel('20') is guild.get_channel('20')
    assert client.get_user('5') is guild.get_member('5').user


@pytest.mark.asyncio
async def test_fetch_members(client):
    http = client.http
    http.queue(payloads.guild(), [payloads.member('5', 'alice'), payloads.member('6', 'bob')])

    members = await client.fetch_members('1', limit=2)

    assert [m.user.name for m in members] == ['alice', 'bob']
    assert http.paths == ['GET /guilds/1', 'GET /guilds/1/members']
    assert client.users.has('5')
    assert client.get_guild('1').get_member('6') is members[1]


@pytest.mark.asyncio
async def test_fetch_members_unresolvable(client):
    cause = not_found('Unknown Guild', 10004)
    client.http.queue(cause)

    with pytest.raises(snowcord.UnresolvableError) as info:
        await client.fetch_members('404')

    assert info.value.what == 'members'
    assert info.value.source == '404'
    assert info.value.__cause__ is cause
    assert str(info.value) == 'Unknown error fetching members from 404'


@pytest.mark.asyncio
async def test_fetch_members_malformed_guild(client):
    client.http.queue({'name': 'No ID', 'owner_id': '100'})

    with pytest.raises(snowcord.UnresolvableError) as info:
        await client.fetch_members('1')

    assert isinstance(info.value.__cause__, snowcord.InvalidData)
    assert client.http.paths == ['GET /guilds/1']


@pytest.mark.asyncio
async def test_fetch_channel(client):
    client.http.queue(payloads.guild(), payloads.channel('20', 'general'))
    guild = await client.fetch_guild('1')

    channel = await client.fetch_channel('20')

    assert isinstance(channel, snowcord.TextChannel)
    assert guild.get_channel('20') is channel
    assert client.get_channel('20') is channel


@pytest.mark.asyncio
async def test_create_dm(client):
    client.http.queue({'id': '60', 'type': 1, 'recipients': [payloads.user('7', 'friend')]})

    channel = await client.create_dm('7')

    assert isinstance(channel, snowcord.PrivateChannel)
    assert client.http.calls[0][2]['json'] == {'recipient_id': '7'}
    assert client.get_channel('60') is channel


@pytest.mark.asyncio
async def test_guild_commands_require_login(client):
    with pytest.raises(snowcord.NotConnected):
        await client.fetch_guild_application_commands('1')
    with pytest.raises(snowcord.NotConnected):
        await client.edit_guild_application_command('1', '30', name='x')

    assert client.http.calls == []


@pytest.mark.asyncio
async def test_guild_command_edit_validates_first(client):
    client.http.queue(payloads.client_user(), [])
    await client.login()

    with pytest.raises(snowcord.InvalidEdit):
        await client.edit_guild_application_command('1', '30')

    assert len(client.http.calls) == 2


@pytest.mark.asyncio
async def test_guild_commands(client):
    http = client.http
    http.queue(
        payloads.client_user(),
        [],
        payloads.guild(application_commands=[payloads.command('33', 'local', guild_id='1')]),
        payloads.command('33', 'local', 'Renamed', guild_id='1'),
    )
    await client.login()

    command = await client.fetch_guild_application_command('1', '33')
    edited = await client.edit_guild_application_command('1', '33', description='Renamed')

    assert edited is command
    assert command.description == 'Renamed'
    assert http.paths[2:] == ['GET /guilds/1', 'PATCH /applications/100/guilds/1/commands/33']


def test_handle_raw_guild_lifecycle(client):
    client.handle_raw('READY', {'user': payloads.client_user()})
    assert client.me is not None

    client.handle_raw('GUILD_CREATE', payloads.guild(channels=[payloads.channel('20')]))
    client.handle_raw('GUILD_CREATE', {'id': '2', 'unavailable': True})
    guild = client.get_guild('1')
    assert guild is not None
    assert client.get_guild('2') is None

    client.handle_raw('GUILD_ROLE_CREATE', {'guild_id': '1', 'role': payloads.role('11', 'mod')})
    assert guild.get_role('11').name == 'mod'
    client.handle_raw('GUILD_ROLE_UPDATE', {'guild_id': '1', 'role': payloads.role('11', 'moderator')})
    assert guild.get_role('11').name == 'moderator'
    client.handle_raw('GUILD_ROLE_DELETE', {'guild_id': '1', 'role_id': '11'})
    assert guild.get_role('11') is None

    client.handle_raw('GUILD_MEMBER_ADD', {'guild_id': '1', **payloads.member('5', 'alice')})
    assert guild.get_member('5').user.name == 'alice'
    client.handle_raw('GUILD_MEMBER_REMOVE', {'guild_id': '1', 'user': payloads.user('5', 'alice')})
    assert guild.get_member('5') is None
    assert client.users.has('5')

    client.handle_raw('CHANNEL_CREATE', payloads.channel('21', 'random'))
    assert guild.get_channel('21') is not None
    client.handle_raw('CHANNEL_DELETE', payloads.channel('21', 'random'))
    assert guild.get_channel('21') is None
    assert client.get_channel('21') is None

    client.handle_raw('GUILD_UPDATE', {**payloads.guild(), 'name': 'Renamed'})
    updated = client.get_guild('1')
    assert updated.name == 'Renamed'
    assert updated.get_channel('20') is not None

    client.handle_raw('GUILD_DELETE', {'id': '1'})
    assert client.get_guild('1') is None
    assert client.get_channel('20') is not None


def test_handle_raw_messages(client):
    client.handle_raw('CHANNEL_CREATE', {'id': '60', 'type': 1, 'recipients': [payloads.user('7')]})
    channel = client.get_channel('60')

    client.handle_raw('MESSAGE_CREATE', payloads.message('50', '60', 'hi'))
    assert channel.messages.get('50').content == 'hi'

    client.handle_raw('CHANNEL_UPDATE', {'id': '60', 'type': 1, 'recipients': [payloads.user('7')]})
    channel = client.get_channel('60')
    assert channel.messages.get('50') is not None

    client.handle_raw('MESSAGE_UPDATE', payloads.message('50', '60', 'edited'))
    assert channel.messages.get('50').content == 'edited'

    client.handle_raw('MESSAGE_DELETE', {'id': '50', 'channel_id': '60'})
    assert channel.messages.get('50') is None

    client.handle_raw('MESSAGE_CREATE', payloads.message('51', '404', 'lost'))


def test_handle_raw_errors_are_logged(client, caplog):
    with caplog.at_level(logging.DEBUG, logger='snowcord.client'):
        client.handle_raw('TYPING_START', {'channel_id': '60'})
        client.handle_raw('GUILD_CREATE', {'id': '3'})

    assert client.get_guild('3') is None
    assert any('unknown event' in r.getMessage() for r in caplog.records)
    assert any(r.levelno == logging.ERROR and 'GUILD_CREATE' in r.getMessage() for r in caplog.records)


def test_to_json(client):
    assert json.loads(client.to_json()) == {'user': None, 'application_global_commands': {}}

    client.handle_raw('READY', {'user': payloads.client_user()})
    data = json.loads(client.to_json(indent=None))
    assert data['user']['id'] == '100'
    assert data['user']['username'] == 'snowbot'
