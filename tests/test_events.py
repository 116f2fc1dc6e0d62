import json

import pytest

from omegle import errors
from omegle.events import (
    Banned,
    ChatEvent,
    CommonLikes,
    Connected,
    ConnectionDied,
    Count,
    Disconnected,
    Error,
    EventTag,
    IdentDigests,
    Message,
    ServerMessage,
    StartedTyping,
    StatusInfo,
    StoppedTyping,
    Waiting,
    decode_event,
    decode_events,
    parse_events,
)
from omegle.ids import ChatServer, CheckServer

DIGESTS = (
    "33eddfe1387518a2233a77cbbfce6a58,f816c928bf6598357d20977bfffe2052,"
    "9e533b0b6f3397b194c193e717703ed3,d5526b7d44ed36f62d05a939132ce755"
)


def test_single_event():
    assert parse_events('[["typing"]]') == [StartedTyping()]


def test_multiple_events_keep_order():
    events = parse_events(
        json.dumps([["connected"], ["commonLikes", ["books"]], ["identDigests", DIGESTS]])
    )

    assert events == [Connected(), CommonLikes(("books",)), IdentDigests(DIGESTS)]


@pytest.mark.parametrize(
    ("item", "expected"),
    [
        (["waiting"], Waiting()),
        (["connected"], Connected()),
        (["count", 45148], Count(45148)),
        (["commonLikes", ["books", "music"]], CommonLikes(("books", "music"))),
        (["serverMessage", "You're now chatting"], ServerMessage("You're now chatting")),
        (["identDigests", DIGESTS], IdentDigests(DIGESTS)),
        (["error", "oops"], Error("oops")),
        (["connectionDied"], ConnectionDied()),
        (["antinudeBanned"], Banned()),
        (["typing"], StartedTyping()),
        (["stoppedTyping"], StoppedTyping()),
        (["gotMessage", "hi"], Message("hi")),
        (["strangerDisconnected"], Disconnected()),
    ],
)
def test_decode_every_tag(item, expected):
    event = decode_event(item)

    assert event == expected
    assert event.tag == item[0]


def test_status_info_event(status_payload):
    status_payload["servers"] = ["front26", "front20", "front2"]
    event = decode_event(["statusInfo", status_payload])

    assert isinstance(event, StatusInfo)
    assert event.status.count == 34658
    assert event.status.servers == [ChatServer(26), ChatServer(20), ChatServer(2)]
    assert event.status.antinudeservers[0] == CheckServer(2)


def test_status_info_event_with_invalid_status(status_payload):
    status_payload["servers"] = []

    with pytest.raises(errors.DecodeError, match="statusInfo"):
        decode_event(["statusInfo", status_payload])


@pytest.mark.parametrize("count", [True, "34658", 12.0])
def test_status_info_event_count_is_not_coerced(status_payload, count):
    status_payload["count"] = count

    with pytest.raises(errors.DecodeError, match="statusInfo"):
        parse_events(json.dumps([["statusInfo", status_payload]]))


def test_only_disconnects_are_terminal():
    terminal = {Disconnected, ConnectionDied, Banned}

    for event_type in ChatEvent.__subclasses__():
        assert event_type.terminal is (event_type in terminal)


def test_common_likes_must_not_be_empty():
    with pytest.raises(errors.DecodeError, match="non-empty list of strings"):
        parse_events('[["commonLikes", []]]')


def test_common_likes_must_be_strings():
    with pytest.raises(errors.DecodeError, match="non-empty list of strings"):
        parse_events('[["commonLikes", ["books", 1]]]')


def test_missing_payload_in_the_middle_fails_whole_response():
    raw = json.dumps([["connected"], ["commonLikes"], ["identDigests", DIGESTS]])

    with pytest.raises(errors.DecodeError, match="expected commonLikes to be followed by"):
        parse_events(raw)


@pytest.mark.parametrize(
    "item",
    [["gotMessage"], ["gotMessage", 5], ["serverMessage", None], ["error", ["x"]]],
)
def test_string_payload_required(item):
    with pytest.raises(errors.DecodeError, match="a string"):
        decode_event(item)


@pytest.mark.parametrize("item", [["count"], ["count", -1], ["count", 1.5], ["count", True]])
def test_count_payload_must_be_unsigned(item):
    with pytest.raises(errors.DecodeError):
        decode_event(item)


def test_trailing_payload_is_rejected():
    with pytest.raises(errors.DecodeError, match="trailing"):
        decode_event(["typing", "extra"])


def test_empty_event_array():
    with pytest.raises(errors.DecodeError, match="Empty event array"):
        parse_events("[[]]")


def test_non_string_tag():
    with pytest.raises(errors.DecodeError, match="string tag"):
        parse_events("[[1]]")


def test_unknown_event():
    with pytest.raises(errors.UnknownEvent) as exc_info:
        parse_events('[["bogus"]]')

    exc = exc_info.value
    assert exc.tag == "bogus"
    assert exc.accepted == tuple(EventTag)
    assert str(exc) == (
        "unknown variant `bogus`, expected one of `waiting`, `connected`, `statusInfo`, "
        "`count`, `commonLikes`, `serverMessage`, `identDigests`, `error`, `connectionDied`, "
        "`antinudeBanned`, `typing`, `stoppedTyping`, `gotMessage`, `strangerDisconnected`"
    )


@pytest.mark.parametrize("payload", [[], None, {}, "waiting", [["waiting"], "connected"]])
def test_invalid_event_lists(payload):
    with pytest.raises(errors.DecodeError):
        decode_events(payload)


def test_invalid_json():
    with pytest.raises(errors.DecodeError, match="not valid JSON"):
        parse_events(b"<html>nope</html>")
