from __future__ import annotations

import typing
import typing_extensions

from .users import User


class Embed(typing.TypedDict, total=False):
    title: str
    type: str
    description: str
    url: str
    timestamp: str
    color: int


class MessageReference(typing.TypedDict):
    message_id: typing_extensions.NotRequired[str]
    channel_id: typing_extensions.NotRequired[str]
    guild_id: typing_extensions.NotRequired[str]


class Message(typing.TypedDict):
    id: str
    channel_id: str
    guild_id: typing_extensions.NotRequired[str]
    author: User
    content: str
    timestamp: str
    edited_timestamp: typing.Optional[str]
    tts: bool
    mention_everyone: bool
    embeds: list[Embed]
    pinned: bool
    type: int
    message_reference: typing_extensions.NotRequired[MessageReference]


class DataMessageSend(typing.TypedDict):
    content: typing_extensions.NotRequired[str]
    embeds: typing_extensions.NotRequired[list[Embed]]
    tts: typing_extensions.NotRequired[bool]
    nonce: typing_extensions.NotRequired[str]
    message_reference: typing_extensions.NotRequired[MessageReference]


class DataEditMessage(typing.TypedDict):
    content: typing_extensions.NotRequired[typing.Optional[str]]
    embeds: typing_extensions.NotRequired[list[Embed]]


class MessageDeleteEvent(typing.TypedDict):
    id: str
    channel_id: str
    guild_id: typing_extensions.NotRequired[str]


__all__ = (
    'Embed',
    'MessageReference',
    'Message',
    'DataMessageSend',
    'DataEditMessage',
    'MessageDeleteEvent',
)
