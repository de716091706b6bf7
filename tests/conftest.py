from __future__ import annotations

import typing

import pytest
import snowcord


class FakeResponse:
    def __init__(self, status: int, reason: str) -> None:
        self.status = status
        self.reason = reason


def not_found(message: str = 'Unknown', code: int = 10000) -> snowcord.NotFound:
    return snowcord.NotFound(FakeResponse(404, 'Not Found'), {'message': message, 'code': code})  # type: ignore


def _no_session(_) -> typing.Any:
    raise RuntimeError('FakeHTTPClient does not open sessions')


class FakeHTTPClient(snowcord.HTTPClient):
    """Records requests and replies with queued responses, in order."""

    __slots__ = ('calls', 'responses')

    def __init__(self, state: snowcord.State) -> None:
        super().__init__('token', rate_limiter=None, session=_no_session, state=state)
        self.calls: list[tuple[str, str, dict[str, typing.Any]]] = []
        self.responses: list[typing.Any] = []

    def queue(self, *responses: typing.Any) -> None:
        self.responses.extend(responses)

    @property
    def paths(self) -> list[str]:
        return [f'{method} {path}' for method, path, _ in self.calls]

    async def request(self, route: snowcord.routes.CompiledRoute, **kwargs: typing.Any) -> typing.Any:
        self.calls.append((route.route.method, route.build(), kwargs))
        if not self.responses:
            raise AssertionError(f'Unexpected request: {route.route}')
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


@pytest.fixture
def state() -> snowcord.State:
    state = snowcord.State()
    state.setup(http=FakeHTTPClient(state))
    return state


@pytest.fixture
def http(state: snowcord.State) -> FakeHTTPClient:
    return state.http  # type: ignore


@pytest.fixture
def client() -> snowcord.Client:
    return snowcord.Client(token='token', http=lambda client, state: FakeHTTPClient(state))
