import asyncio

import snowcord

GUILD_ID = '123456789012345678'

client = snowcord.Client(token='token')


async def main() -> None:
    snowcord.utils.setup_logging()

    async with client:
        me = await client.login()
        print('Logged on as', me)

        await client.bulk_overwrite_application_commands(
            [
                snowcord.CommandDefinition('ping', 'Checks whether the bot is alive'),
                snowcord.CommandDefinition(
                    'echo',
                    'Repeats text back',
                    options=[
                        snowcord.CommandOption(
                            snowcord.ApplicationCommandOptionType.string,
                            'text',
                            'What to say',
                            required=True,
                        ),
                    ],
                ),
            ]
        )

        guild = await client.fetch_guild(GUILD_ID)
        print(f'{guild.name} has {len(guild.roles)} roles and {len(guild.channels)} channels')

        await client.create_guild_application_command(
            guild, snowcord.CommandDefinition('Report', type=snowcord.ApplicationCommandType.message)
        )

        for command in guild.slash_commands.values():
            print('Guild command', command.name)

        for command in client.slash_commands.values():
            print('Global command', command.name)


asyncio.run(main())
