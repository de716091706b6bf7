import pytest
import snowcord

import payloads


def test_guild_seeds_caches(state, http):
    guild = state.parser.parse_guild(
        payloads.guild(
            roles=[payloads.role('1', '@everyone'), payloads.role('11', 'mod', 2), payloads.role('12', 'admin', 3)],
            channels=[
                payloads.channel('20', 'general'),
                payloads.channel('21', 'Voice', type=2, bitrate=96000),
                payloads.channel('22', 'Stuff', type=4),
            ],
            members=[payloads.member('5', 'owner', roles=['11']), payloads.member('6', 'guest')],
            application_commands=[payloads.command('30', guild_id='1')],
        )
    )

    assert http.calls == []

    assert list(guild.roles.cache) == ['1', '11', '12']
    assert guild.get_role('12').name == 'admin'
    assert guild.get_role('12').guild_id == '1'

    assert isinstance(guild.get_channel('20'), snowcord.TextChannel)
    assert isinstance(guild.get_channel('21'), snowcord.VoiceChannel)
    assert guild.get_channel('21').bitrate == 96000
    assert isinstance(guild.get_channel('22'), snowcord.CategoryChannel)

    assert guild.owner is not None
    assert guild.owner.user.name == 'owner'
    assert guild.owner.role_ids == ['11']

    assert list(guild.slash_commands) == ['30']
    assert not guild.slash_commands['30'].is_global


def test_guild_seeding_leaves_state_caches(state):
    guild = state.parser.parse_guild(
        payloads.guild(channels=[payloads.channel('20')], members=[payloads.member('5', 'alice')])
    )

    assert guild.get_channel('20') is not None
    assert guild.get_member('5') is not None
    assert len(state.channels) == 0
    assert len(state.users) == 0

    state.store_guild(guild)

    assert state.guilds['1'] is guild
    assert state.channels['20'] is guild.get_channel('20')
    assert state.users['5'] is guild.get_member('5').user


def test_guild_without_members(state):
    guild = state.parser.parse_guild(payloads.guild(roles=[payloads.role('1', '@everyone')]))

    assert len(guild.roles) == 1
    assert len(guild.members) == 0
    assert len(guild.channels) == 0


def test_unknown_channel_type(state):
    channel = state.parser.parse_channel({'id': '40', 'type': 99, 'name': 'future'})

    assert type(channel) is snowcord.BaseChannel
    assert channel.raw_type == 99
    assert channel.type == 99
    assert channel.name == 'future'


def test_known_channel_types(state):
    text = state.parser.parse_channel(payloads.channel('1', topic='Talk', rate_limit_per_user=5))
    assert isinstance(text, snowcord.TextChannel)
    assert text.type is snowcord.ChannelType.text
    assert text.topic == 'Talk'
    assert text.slowmode == 5

    dm = state.parser.parse_channel({'id': '2', 'type': 1, 'recipients': [payloads.user('7', 'friend')]})
    assert isinstance(dm, snowcord.PrivateChannel)
    assert dm.guild_id is None
    assert dm.recipient is not None
    assert dm.recipient.name == 'friend'


def test_channel_guild_id_fallback(state):
    payload = payloads.channel('1')
    del payload['guild_id']

    channel = state.parser.parse_channel(payload, guild_id='77')
    assert channel.guild_id == '77'


def test_invalid_payloads(state):
    with pytest.raises(snowcord.InvalidData):
        state.parser.parse_channel({'id': '1', 'name': 'typeless'})

    with pytest.raises(snowcord.InvalidData):
        state.parser.parse_user({'username': 'ghost'})

    with pytest.raises(snowcord.InvalidData):
        state.parser.parse_member({'nick': 'nobody'}, '1')


def test_application_command(state):
    command = state.parser.parse_application_command(
        payloads.command(
            '30',
            'echo',
            'Repeats text',
            options=[{'type': 3, 'name': 'text', 'description': 'What to say', 'required': True}],
            default_member_permissions='8',
        )
    )

    assert command.is_global
    assert command.type is snowcord.ApplicationCommandType.chat_input
    assert command.default_member_permissions == 8
    assert command.dm_permission is True

    (option,) = command.options
    assert option.type is snowcord.ApplicationCommandOptionType.string
    assert option.required is True
    assert option.build() == {'type': 3, 'name': 'text', 'description': 'What to say', 'required': True}


def test_message(state):
    message = state.parser.parse_message(payloads.message('50', '20', 'hi there'))

    assert message.content == 'hi there'
    assert message.author.id == '5'
    assert message.type is snowcord.MessageType.default
    assert message.timestamp.year == 2024
    assert message.edited_at is None
