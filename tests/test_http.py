import logging

from aiohttp import web
import pytest
import snowcord

import payloads

routes = web.RouteTableDef()


def _authorized(request: web.Request) -> bool:
    return request.headers.get('Authorization') == 'Bot token'


@routes.get('/users/@me')
async def fetch_self(request: web.Request) -> web.Response:
    if not _authorized(request):
        return web.json_response({'message': '401: Unauthorized', 'code': 0}, status=401)
    return web.json_response(payloads.client_user())


@routes.get('/applications/100/commands')
async def fetch_commands(_request: web.Request) -> web.Response:
    return web.json_response([payloads.command('30', 'ping')])


@routes.get('/guilds/1')
async def fetch_guild(_request: web.Request) -> web.Response:
    return web.json_response(payloads.guild(channels=[payloads.channel('20')]))


@routes.get('/guilds/404')
async def fetch_unknown_guild(_request: web.Request) -> web.Response:
    return web.json_response({'message': 'Unknown Guild', 'code': 10004}, status=404)


@routes.post('/guilds/1/roles')
async def create_role(_request: web.Request) -> web.Response:
    return web.json_response(
        {
            'message': 'Invalid Form Body',
            'code': 50035,
            'errors': {'name': {'_errors': [{'code': 'BASE_TYPE_MAX_LENGTH', 'message': 'Too long.'}]}},
        },
        status=400,
    )


@routes.patch('/guilds/1/roles/1')
async def edit_role(request: web.Request) -> web.Response:
    body = await request.json()
    return web.json_response(payloads.role('1', body['name'], icon=request.headers.get('X-Audit-Log-Reason')))


@routes.delete('/channels/20')
async def delete_channel(_request: web.Request) -> web.Response:
    return web.Response(status=204)


_attempts: dict[str, int] = {}


@routes.get('/users/7')
async def fetch_user(_request: web.Request) -> web.Response:
    _attempts['users'] = _attempts.get('users', 0) + 1
    if _attempts['users'] == 1:
        return web.json_response(
            {'message': 'You are being rate limited.', 'retry_after': 0.05, 'global': False},
            status=429,
            headers={
                'X-RateLimit-Bucket': 'abcd',
                'X-RateLimit-Remaining': '0',
                'X-RateLimit-Reset-After': '0.05',
                'X-RateLimit-Scope': 'user',
            },
        )
    return web.json_response(payloads.user('7', 'friend'))


async def run_api_site(port: int) -> web.TCPSite:
    app = web.Application()
    app.add_routes(routes)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host='127.0.0.1', port=port)

    await site.start()
    return site


@pytest.mark.asyncio
async def test_login():
    site = await run_api_site(5201)

    client = snowcord.Client(token='token', http_base='http://127.0.0.1:5201/')
    try:
        me = await client.login()
        assert me.id == '100'
        assert list(client.slash_commands) == ['30']
    finally:
        await client.close()
        await site.stop()


@pytest.mark.asyncio
async def test_unauthorized():
    site = await run_api_site(5202)

    client = snowcord.Client(token='wrong', http_base='http://127.0.0.1:5202')
    try:
        with pytest.raises(snowcord.Unauthorized) as info:
            await client.login()
        assert info.value.status == 401
        assert client.me is None
    finally:
        await client.close()
        await site.stop()


@pytest.mark.asyncio
async def test_errors():
    site = await run_api_site(5203)

    client = snowcord.Client(token='token', http_base='http://127.0.0.1:5203')
    try:
        with pytest.raises(snowcord.UnresolvableError) as info:
            await client.fetch_members('404')
        cause = info.value.__cause__
        assert isinstance(cause, snowcord.NotFound)
        assert cause.code == 10004
        assert cause.text == 'Unknown Guild'

        guild = await client.fetch_guild('1')
        with pytest.raises(snowcord.HTTPException) as exc:
            await guild.roles.create(name='x' * 200)
        assert exc.value.status == 400
        assert exc.value.code == 50035
        assert exc.value.errors == {'name': 'Too long.'}
        assert len(guild.roles) == 1
    finally:
        await client.close()
        await site.stop()


@pytest.mark.asyncio
async def test_requests():
    site = await run_api_site(5204)

    client = snowcord.Client(token='token', http_base='http://127.0.0.1:5204')
    try:
        guild = await client.fetch_guild('1')
        channel = guild.get_channel('20')
        assert channel is not None

        assert await channel.delete() is True
        assert guild.get_channel('20') is None

        role = await guild.roles.edit('1', name='everyone', reason='Rename')
        assert role.name == 'everyone'
        assert role.icon == 'Rename'
    finally:
        await client.close()
        await site.stop()


@pytest.mark.asyncio
async def test_ratelimit_retry(caplog):
    site = await run_api_site(5205)

    client = snowcord.Client(token='token', http_base='http://127.0.0.1:5205')
    try:
        with caplog.at_level(logging.WARNING, logger='snowcord.http'):
            user = await client.fetch_user('7')

        assert user.name == 'friend'
        assert _attempts['users'] == 2
        assert any('abcd' in r.getMessage() for r in caplog.records)
    finally:
        await client.close()
        await site.stop()
