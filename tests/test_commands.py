import pytest
import snowcord

from conftest import FakeResponse
import payloads


@pytest.fixture
def ready(state):
    state.me = state.parser.parse_client_user(payloads.client_user())
    return state


def test_definition_build():
    definition = snowcord.CommandDefinition(
        'echo',
        'Repeats text',
        options=[
            snowcord.CommandOption(
                snowcord.ApplicationCommandOptionType.string,
                'text',
                'What to say',
                required=True,
                choices=[('Hi', 'hi')],
            ),
        ],
        default_member_permissions=32,
        dm_permission=False,
    )

    assert definition.build() == {
        'name': 'echo',
        'type': 1,
        'description': 'Repeats text',
        'options': [
            {
                'type': 3,
                'name': 'text',
                'description': 'What to say',
                'required': True,
                'choices': [{'name': 'Hi', 'value': 'hi'}],
            }
        ],
        'default_member_permissions': '32',
        'dm_permission': False,
    }


def test_context_menu_definition():
    definition = snowcord.CommandDefinition('Report', type=snowcord.ApplicationCommandType.message)
    assert definition.build() == {'name': 'Report', 'type': 3}
    assert snowcord.resolve_command_definition({'name': 'raw', 'description': 'x'}) == {
        'name': 'raw',
        'description': 'x',
    }


@pytest.mark.asyncio
async def test_not_connected(state, http):
    manager = state.application_commands

    with pytest.raises(snowcord.NotConnected):
        await manager.fetch_all()
    with pytest.raises(snowcord.NotConnected):
        await manager.create(snowcord.CommandDefinition('ping', 'Pong!'))
    with pytest.raises(snowcord.NotConnected):
        await manager.edit('30', name='pong')
    with pytest.raises(snowcord.NotConnected):
        await manager.delete('30')
    with pytest.raises(snowcord.NotConnected):
        await manager.bulk_overwrite([])

    assert http.calls == []


@pytest.mark.asyncio
async def test_empty_edit(ready, http):
    with pytest.raises(snowcord.InvalidEdit):
        await ready.application_commands.edit('30')

    assert http.calls == []


@pytest.mark.asyncio
async def test_edit_merges_cached(ready, http):
    manager = ready.application_commands
    http.queue([payloads.command('30', 'ping', 'Pong!')])
    (original,) = await manager.fetch_all()

    http.queue(payloads.command('30', 'ping', 'Pong again!', version='2'))
    edited = await manager.edit('30', description='Pong again!')

    assert edited is original
    assert original.description == 'Pong again!'
    assert original.version == '2'
    assert http.paths == ['GET /applications/100/commands', 'PATCH /applications/100/commands/30']
    assert http.calls[1][2]['json'] == {'description': 'Pong again!'}


@pytest.mark.asyncio
async def test_edit_uncached(ready, http):
    manager = ready.application_commands
    http.queue(payloads.command('31', 'info', 'Shows info', nsfw=True))

    edited = await manager.edit('31', nsfw=True, cache=False)

    assert edited.nsfw is True
    assert manager.get('31') is None


@pytest.mark.asyncio
async def test_sequential_create_stops_on_failure(ready, http):
    manager = ready.application_commands
    http.queue(
        payloads.command('30', 'ping'),
        snowcord.HTTPException(FakeResponse(400, 'Bad Request'), {'message': 'Invalid Form Body', 'code': 50035}),  # type: ignore
    )

    with pytest.raises(snowcord.HTTPException):
        await manager.create(
            [
                snowcord.CommandDefinition('ping', 'Pong!'),
                snowcord.CommandDefinition('Bad Name', 'Nope'),
                snowcord.CommandDefinition('never', 'Not sent'),
            ]
        )

    assert len(http.calls) == 2
    assert list(manager.cache) == ['30']


@pytest.mark.asyncio
async def test_create_single(ready, http):
    http.queue(payloads.command('30', 'ping'))

    command = await ready.application_commands.create({'name': 'ping', 'description': 'Pong!'})

    assert isinstance(command, snowcord.ApplicationCommand)
    assert http.calls[0][2]['json'] == {'name': 'ping', 'description': 'Pong!'}
    assert ready.slash_commands['30'] is command


@pytest.mark.asyncio
async def test_bulk_overwrite_resets_cache(ready, http):
    manager = ready.application_commands
    http.queue([payloads.command('30', 'old')], [payloads.command('32', 'new')])
    await manager.fetch_all()

    commands = await manager.bulk_overwrite([snowcord.CommandDefinition('new', 'Fresh')])

    assert [c.name for c in commands] == ['new']
    assert list(manager.cache) == ['32']
    assert http.paths[1] == 'PUT /applications/100/commands'
    assert http.calls[1][2]['json'] == [{'name': 'new', 'type': 1, 'description': 'Fresh'}]


@pytest.mark.asyncio
async def test_delete(ready, http):
    manager = ready.application_commands
    http.queue(payloads.command('30'), None)
    await manager.fetch('30')

    assert await manager.delete('30') is True
    assert manager.get('30') is None
    assert http.paths == ['GET /applications/100/commands/30', 'DELETE /applications/100/commands/30']


@pytest.mark.asyncio
async def test_guild_scope(ready, http):
    guild = ready.parser.parse_guild(payloads.guild())
    http.queue([payloads.command('33', 'local', guild_id='1')])

    (command,) = await guild.application_commands.fetch_all()

    assert http.paths == ['GET /applications/100/guilds/1/commands']
    assert guild.slash_commands['33'] is command
    assert len(ready.slash_commands) == 0


def test_to_definition(ready):
    command = ready.parser.parse_application_command(
        payloads.command('30', 'echo', 'Repeats', options=[{'type': 3, 'name': 'text', 'description': 'x'}])
    )
    definition = command.to_definition()

    assert definition.name == 'echo'
    assert definition.build()['options'] == [{'type': 3, 'name': 'text', 'description': 'x'}]
