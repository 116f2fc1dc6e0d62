"""
Decoding of the long-poll event stream.

A poll response is a JSON array of events, each event being an array
with a string tag first and the tag-specific payload after it::

    [["connected"], ["commonLikes", ["books"]], ["gotMessage", "hi"]]

Decoding is strict: unknown tags, missing or mistyped payloads and
trailing elements are all errors.
"""
import dataclasses
import json
from enum import StrEnum
from typing import Any, ClassVar

from pydantic import ValidationError

from omegle import errors
from omegle.models import OmegleStatus


class EventTag(StrEnum):
    WAITING = "waiting"
    CONNECTED = "connected"
    STATUS_INFO = "statusInfo"
    COUNT = "count"
    COMMON_LIKES = "commonLikes"
    SERVER_MESSAGE = "serverMessage"
    IDENT_DIGESTS = "identDigests"
    ERROR = "error"
    CONNECTION_DIED = "connectionDied"
    BANNED = "antinudeBanned"
    STARTED_TYPING = "typing"
    STOPPED_TYPING = "stoppedTyping"
    MESSAGE = "gotMessage"
    DISCONNECTED = "strangerDisconnected"


@dataclasses.dataclass(frozen=True)
class ChatEvent:
    tag: ClassVar[EventTag]
    terminal: ClassVar[bool] = False


@dataclasses.dataclass(frozen=True)
class Waiting(ChatEvent):
    tag = EventTag.WAITING


@dataclasses.dataclass(frozen=True)
class Connected(ChatEvent):
    tag = EventTag.CONNECTED


@dataclasses.dataclass(frozen=True)
class StatusInfo(ChatEvent):
    tag = EventTag.STATUS_INFO
    status: OmegleStatus


@dataclasses.dataclass(frozen=True)
class Count(ChatEvent):
    tag = EventTag.COUNT
    count: int


@dataclasses.dataclass(frozen=True)
class CommonLikes(ChatEvent):
    tag = EventTag.COMMON_LIKES
    likes: tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class ServerMessage(ChatEvent):
    tag = EventTag.SERVER_MESSAGE
    text: str


@dataclasses.dataclass(frozen=True)
class IdentDigests(ChatEvent):
    tag = EventTag.IDENT_DIGESTS
    digests: str


@dataclasses.dataclass(frozen=True)
class Error(ChatEvent):
    tag = EventTag.ERROR
    message: str


@dataclasses.dataclass(frozen=True)
class ConnectionDied(ChatEvent):
    tag = EventTag.CONNECTION_DIED
    terminal = True


@dataclasses.dataclass(frozen=True)
class Banned(ChatEvent):
    tag = EventTag.BANNED
    terminal = True


@dataclasses.dataclass(frozen=True)
class StartedTyping(ChatEvent):
    tag = EventTag.STARTED_TYPING


@dataclasses.dataclass(frozen=True)
class StoppedTyping(ChatEvent):
    tag = EventTag.STOPPED_TYPING


@dataclasses.dataclass(frozen=True)
class Message(ChatEvent):
    tag = EventTag.MESSAGE
    text: str


@dataclasses.dataclass(frozen=True)
class Disconnected(ChatEvent):
    tag = EventTag.DISCONNECTED
    terminal = True


def _payload(item: list[Any], tag: str, description: str) -> Any:
    if len(item) < 2:
        raise errors.DecodeError(
            f"expected {tag} to be followed by {description}", raw=item, expected=description
        )

    return item[1]


def _string(item: list[Any], tag: str) -> str:
    value = _payload(item, tag, "a string")

    if not isinstance(value, str):
        raise errors.DecodeError(
            f"expected {tag} to be followed by a string", raw=item, expected="a string"
        )

    return value


def _unsigned(item: list[Any], tag: str) -> int:
    value = _payload(item, tag, "a number")

    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise errors.DecodeError(
            f"expected {tag} to be followed by a non-negative integer",
            raw=item,
            expected="a non-negative integer",
        )

    return value


def _likes(item: list[Any], tag: str) -> tuple[str, ...]:
    description = "a non-empty list of strings"
    value = _payload(item, tag, description)

    if not (
        isinstance(value, list) and value and all(isinstance(like, str) for like in value)
    ):
        raise errors.DecodeError(
            f"expected {tag} to be followed by {description}", raw=item, expected=description
        )

    return tuple(value)


def _status(item: list[Any], tag: str) -> OmegleStatus:
    value = _payload(item, tag, "a status object")

    try:
        return OmegleStatus.from_dict(value)
    except ValidationError as exc:
        raise errors.DecodeError(
            f"expected {tag} to be followed by a valid status object: {exc}",
            raw=item,
            expected="a status object",
        ) from exc


def decode_event(item: Any) -> ChatEvent:
    if not isinstance(item, list):
        raise errors.DecodeError("expected event to be a list", raw=item, expected="a list")

    if not item:
        raise errors.DecodeError("Empty event array", raw=item, expected="a tagged list")

    tag = item[0]

    if not isinstance(tag, str):
        raise errors.DecodeError(
            "expected event to start with a string tag", raw=item, expected="a string tag"
        )

    event: ChatEvent

    match tag:
        case EventTag.WAITING:
            event = Waiting()
        case EventTag.CONNECTED:
            event = Connected()
        case EventTag.STATUS_INFO:
            event = StatusInfo(_status(item, tag))
        case EventTag.COUNT:
            event = Count(_unsigned(item, tag))
        case EventTag.COMMON_LIKES:
            event = CommonLikes(_likes(item, tag))
        case EventTag.SERVER_MESSAGE:
            event = ServerMessage(_string(item, tag))
        case EventTag.IDENT_DIGESTS:
            event = IdentDigests(_string(item, tag))
        case EventTag.ERROR:
            event = Error(_string(item, tag))
        case EventTag.CONNECTION_DIED:
            event = ConnectionDied()
        case EventTag.BANNED:
            event = Banned()
        case EventTag.STARTED_TYPING:
            event = StartedTyping()
        case EventTag.STOPPED_TYPING:
            event = StoppedTyping()
        case EventTag.MESSAGE:
            event = Message(_string(item, tag))
        case EventTag.DISCONNECTED:
            event = Disconnected()
        case _:
            raise errors.UnknownEvent(tag, list(EventTag))

    expected_length = 1 + len(dataclasses.fields(event))

    if len(item) > expected_length:
        raise errors.DecodeError(
            f"unexpected trailing elements after {tag}",
            raw=item,
            expected=f"{expected_length} elements",
        )

    return event


def decode_events(payload: Any) -> list[ChatEvent]:
    """
    Decode a parsed poll response into a non-empty list of events,
    preserving the order they were sent in.
    """
    if not isinstance(payload, list):
        raise errors.DecodeError(
            "expected a list of events", raw=payload, expected="a non-empty list of events"
        )

    if not payload:
        raise errors.DecodeError(
            "expected at least one event", raw=payload, expected="a non-empty list of events"
        )

    return [decode_event(item) for item in payload]


def parse_events(data: str | bytes) -> list[ChatEvent]:
    try:
        payload = json.loads(data)
    except ValueError as exc:
        raise errors.DecodeError(
            f"poll response is not valid JSON: {exc}", raw=data, expected="JSON"
        ) from exc

    return decode_events(payload)
