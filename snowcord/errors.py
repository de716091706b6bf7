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

import typing

if typing.TYPE_CHECKING:
    from aiohttp import ClientResponse as Response


# Thanks Rapptz/discord.py for docs


class SnowcordError(Exception):
    """Base exception class for snowcord

    Ideally speaking, this could be caught to handle any exceptions raised from this library.
    """

    __slots__ = ()


def _flatten_error_dict(d: dict[str, typing.Any], key: str = '', /) -> dict[str, str]:
    items: list[tuple[str, str]] = []
    for k, v in d.items():
        new_key = key + '.' + k if key else k

        if isinstance(v, dict):
            try:
                _errors: list[dict[str, typing.Any]] = v['_errors']
            except KeyError:
                items.extend(_flatten_error_dict(v, new_key).items())
            else:
                items.append((new_key, ' '.join(x.get('message', '') for x in _errors)))
        else:
            items.append((new_key, v))

    return dict(items)


class HTTPException(SnowcordError):
    """Exception that's raised when an HTTP request operation fails.

    Attributes
    ------------
    response: :class:`aiohttp.ClientResponse`
        The response of the failed HTTP request. This is an
        instance of :class:`aiohttp.ClientResponse`.
    data: Union[Dict[:class:`str`, Any], :class:`str`]
        The data of the error. Could be an empty string.
    status: :class:`int`
        The status code of the HTTP request.
    code: :class:`int`
        The platform specific error code for the failure. ``0`` if unavailable.
    text: :class:`str`
        The text of the error. Could be an empty string.
    errors: Dict[:class:`str`, :class:`str`]
        The flattened form validation errors, keyed by the dotted path of the invalid field.
    retry_after: Optional[:class:`float`]
        The duration in seconds to wait until ratelimit expires.
        Only applicable to :class:`Ratelimited`.
    """

    __slots__ = (
        'response',
        'data',
        'status',
        'code',
        'text',
        'errors',
        'retry_after',
    )

    def __init__(
        self,
        response: Response,
        data: dict[str, typing.Any] | str,
        /,
    ) -> None:
        self.response: Response = response
        self.data: dict[str, typing.Any] | str = data
        self.status: int = response.status
        self.errors: dict[str, str] = {}
        self.retry_after: float | None = None

        if isinstance(data, dict):
            self.code: int = data.get('code', 0)
            base = data.get('message', '')
            errors = data.get('errors')
            if errors:
                self.errors = _flatten_error_dict(errors)
                helpful = '\n'.join('In %s: %s' % t for t in self.errors.items())
                self.text: str = base + '\n' + helpful
            else:
                self.text = base
            retry_after = data.get('retry_after')
            if retry_after is not None:
                self.retry_after = float(retry_after)
        else:
            self.text = data or ''
            self.code = 0

        fmt = '{0.status} {0.reason} (error code: {1})'
        if len(self.text):
            fmt += ': {2}'

        super().__init__(fmt.format(response, self.code, self.text))


class Unauthorized(HTTPException):
    __slots__ = ()


class Forbidden(HTTPException):
    __slots__ = ()


class NotFound(HTTPException):
    __slots__ = ()


class Ratelimited(HTTPException):
    __slots__ = ()


class InternalServerError(HTTPException):
    __slots__ = ()


class BadGateway(HTTPException):
    __slots__ = ()


class NotConnected(SnowcordError):
    """Exception that's raised when an operation requires the authenticated user
    but the client did not log in (or did not receive ``READY``) yet.
    """

    __slots__ = ()

    def __init__(self, message: str = "client isn't connected", /) -> None:
        super().__init__(message)


class InvalidEdit(SnowcordError):
    """Exception that's raised when an edit request does not change anything."""

    __slots__ = ()

    def __init__(self, message: str = 'you need to change one option or more', /) -> None:
        super().__init__(message)


class UnresolvableError(SnowcordError):
    """Exception that's raised when a dependent entity could not be retrieved.

    The original exception, if any, is available in ``__cause__``.

    Attributes
    ----------
    what: :class:`str`
        What was being fetched.
    source: :class:`str`
        The ID of the entity the fetch depended on.
    """

    __slots__ = ('what', 'source')

    def __init__(self, what: str, source: str, /) -> None:
        self.what: str = what
        self.source: str = source
        super().__init__(f'Unknown error fetching {what} from {source}')


class InvalidData(SnowcordError):
    """Exception that's raised when the library encounters unknown
    or invalid data from the API.
    """

    __slots__ = ('reason',)

    def __init__(self, reason: str, /) -> None:
        self.reason: str = reason
        super().__init__(reason)


class NoData(SnowcordError):
    __slots__ = ('what', 'type')

    def __init__(self, what: str, type: str) -> None:
        self.what = what
        self.type = type
        super().__init__(f'Unable to find {type} {what} in cache')


__all__ = (
    'SnowcordError',
    'HTTPException',
    'Unauthorized',
    'Forbidden',
    'NotFound',
    'Ratelimited',
    'InternalServerError',
    'BadGateway',
    'NotConnected',
    'InvalidEdit',
    'UnresolvableError',
    'InvalidData',
    'NoData',
)
