import pytest
import snowcord

from conftest import not_found
import payloads


@pytest.fixture
def guild(state):
    guild = state.parser.parse_guild(
        payloads.guild(
            roles=[payloads.role('1', '@everyone'), payloads.role('11', 'mod', 1), payloads.role('12', 'admin', 2)],
            channels=[payloads.channel('20', 'general', topic='Hi'), payloads.channel('22', 'Stuff', type=4)],
        )
    )
    state.store_guild(guild)
    return guild


@pytest.mark.asyncio
async def test_fetch_is_cached(guild, http):
    http.queue(payloads.role('13', 'new'))

    first = await guild.roles.fetch('13')
    second = await guild.roles.fetch('13')

    assert first is second
    assert http.paths == ['GET /guilds/1/roles/13']


@pytest.mark.asyncio
async def test_fetch_bypasses_cache(guild, http):
    http.queue(payloads.role('11', 'moderator', 1))

    role = await guild.roles.fetch('11', check_cache=False)
    assert role.name == 'moderator'
    assert guild.get_role('11') is role

    http.queue(payloads.role('11', 'mods', 1))
    role = await guild.roles.fetch('11', check_cache=False, cache=False)
    assert role.name == 'mods'
    assert guild.get_role('11').name == 'moderator'


@pytest.mark.asyncio
async def test_delete_then_fetch(guild, http):
    http.queue(None, payloads.role('11', 'mod', 1))

    assert await guild.roles.delete('11', reason='cleanup') is True
    assert guild.get_role('11') is None

    await guild.roles.fetch('11')
    assert http.paths == ['DELETE /guilds/1/roles/11', 'GET /guilds/1/roles/11']
    assert http.calls[0][2]['reason'] == 'cleanup'


@pytest.mark.asyncio
async def test_delete_failure_keeps_eviction(guild, http):
    http.queue(not_found('Unknown Role', 10011))

    with pytest.raises(snowcord.NotFound):
        await guild.roles.delete('12')

    assert guild.get_role('12') is None


@pytest.mark.asyncio
async def test_role_edit_moves_first(guild, http):
    http.queue(
        [payloads.role('1', '@everyone'), payloads.role('12', 'admin', 1), payloads.role('11', 'mod', 2)],
        payloads.role('11', 'mod', 2, color=0xFF0000),
    )

    role = await guild.roles.edit('11', color=0xFF0000, position=2)

    assert http.paths == ['PATCH /guilds/1/roles', 'PATCH /guilds/1/roles/11']
    assert http.calls[0][2]['json'] == [{'id': '11', 'position': 2}]
    assert http.calls[1][2]['json'] == {'name': 'mod', 'color': 0xFF0000}
    assert role.color == 0xFF0000
    assert guild.get_role('12').position == 1
    assert guild.get_role('11') is role


@pytest.mark.asyncio
async def test_role_edit_backfills_name(guild, http):
    del guild.roles.cache['12']
    http.queue(payloads.role('12', 'admin', 2), payloads.role('12', 'admin', 2, hoist=True))

    role = await guild.roles.edit('12', hoist=True)

    assert http.paths == ['GET /guilds/1/roles/12', 'PATCH /guilds/1/roles/12']
    assert http.calls[1][2]['json'] == {'name': 'admin', 'hoist': True}
    assert role.hoist is True


@pytest.mark.asyncio
async def test_role_edit_uncached_backfill(guild, http):
    del guild.roles.cache['12']
    http.queue(payloads.role('12', 'admin', 2), payloads.role('12', 'admin', 2, hoist=True))

    role = await guild.roles.edit('12', hoist=True, cache=False)

    assert http.paths == ['GET /guilds/1/roles/12', 'PATCH /guilds/1/roles/12']
    assert role.hoist is True
    assert guild.get_role('12') is None


@pytest.mark.asyncio
async def test_role_create(guild, http):
    http.queue(payloads.role('13', 'helper', permissions='8'))

    role = await guild.roles.create(name='helper', permissions=8, reason='staff')

    assert http.calls[0][2]['json'] == {'name': 'helper', 'permissions': '8'}
    assert role.raw_permissions == 8
    assert guild.get_role('13') is role


@pytest.mark.asyncio
async def test_channel_create_and_delete(state, guild, http):
    http.queue(payloads.channel('23', 'Lobby', type=2, bitrate=64000, user_limit=5), None)

    channel = await guild.channels.create('Lobby', type=snowcord.ChannelType.voice, user_limit=5, parent='22')

    assert isinstance(channel, snowcord.VoiceChannel)
    assert http.calls[0][2]['json'] == {'name': 'Lobby', 'type': 2, 'parent_id': '22', 'user_limit': 5}
    assert guild.get_channel('23') is channel
    assert state.channels['23'] is channel

    await channel.delete()
    assert guild.get_channel('23') is None
    assert state.channels['23'] is channel


@pytest.mark.asyncio
async def test_channel_delete_keeps_state_cache(state, guild, http):
    assert state.channels.has('20')
    http.queue(None)

    await guild.channels.delete('20')

    assert http.paths == ['DELETE /channels/20']
    assert guild.get_channel('20') is None
    assert state.channels.has('20')


@pytest.mark.asyncio
async def test_channel_edit_backfills_name(guild, http):
    http.queue(payloads.channel('20', 'general', topic='New topic'))

    channel = await guild.channels.edit('20', topic='New topic')

    assert http.paths == ['PATCH /channels/20']
    assert http.calls[0][2]['json'] == {'name': 'general', 'topic': 'New topic'}
    assert channel.topic == 'New topic'
    assert guild.get_channel('20') is channel


@pytest.mark.asyncio
async def test_channel_edit_uncached_backfill(state, guild, http):
    http.queue(payloads.channel('26', 'lobby'), payloads.channel('26', 'lobby', nsfw=True))

    channel = await guild.channels.edit('26', nsfw=True, cache=False)

    assert http.paths == ['GET /channels/26', 'PATCH /channels/26']
    assert http.calls[1][2]['json'] == {'name': 'lobby', 'nsfw': True}
    assert channel.nsfw is True
    assert guild.get_channel('26') is None
    assert not state.channels.has('26')


def test_category_children(state, guild):
    guild.channels._store(state.parser.parse_channel(payloads.channel('24', 'b', position=2, parent_id='22')))
    guild.channels._store(state.parser.parse_channel(payloads.channel('25', 'a', position=1, parent_id='22')))

    category = guild.get_channel('22')
    assert [c.id for c in category.channels] == ['25', '24']


@pytest.mark.asyncio
async def test_member_list_fans_out(state, guild, http):
    http.queue([payloads.member('5', 'alice'), payloads.member('6', 'bob')])

    members = await guild.members.list(limit=2, after='4')

    assert [m.id for m in members] == ['5', '6']
    assert http.calls[0][2]['params'] == {'limit': 2, 'after': '4'}
    assert http.calls[0][2]['log'] is False
    assert len(guild.members) == 2
    assert state.users['5'].name == 'alice'
    assert state.users['6'].name == 'bob'


@pytest.mark.asyncio
async def test_member_list_without_cache(state, guild, http):
    http.queue([payloads.member('5', 'alice')])

    await guild.members.list(cache=False)

    assert len(guild.members) == 0
    assert not state.users.has('5')


@pytest.mark.asyncio
async def test_member_add_existing(guild, http):
    http.queue(None, payloads.member('7', 'carol'))

    member = await guild.members.create('7', access_token='oauth', nick='C')

    assert http.paths == ['PUT /guilds/1/members/7', 'GET /guilds/1/members/7']
    assert http.calls[0][2]['json'] == {'access_token': 'oauth', 'nick': 'C'}
    assert guild.get_member('7') is member


@pytest.mark.asyncio
async def test_member_kick(guild, http):
    guild.members._init_cache([payloads.member('8', 'dave', roles=['11'])])
    member = guild.get_member('8')
    assert [r.name for r in member.roles] == ['mod']

    http.queue(None)
    await member.kick(reason='spam')

    assert http.paths == ['DELETE /guilds/1/members/8']
    assert guild.get_member('8') is None


@pytest.mark.asyncio
async def test_messages(state, guild, http):
    channel = guild.get_channel('20')
    http.queue(payloads.message('50', '20', 'hello'), [payloads.message('49', '20', 'older')])

    message = await channel.send('hello', reply_to='48')
    assert http.calls[0][2]['json'] == {'content': 'hello', 'message_reference': {'message_id': '48'}}
    assert message.channel is channel
    assert await channel.fetch_message('50') is message

    history = await channel.history(limit=10, before='50')
    assert [m.id for m in history] == ['49']
    assert http.calls[1][2]['params'] == {'limit': 10, 'before': '50'}
    assert list(channel.messages.cache) == ['50', '49']
