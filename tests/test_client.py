import json
import random

import pytest
from fakes import CLIENT_ID, STATUS_PAYLOAD, fail, text

from omegle import errors
from omegle.client import Omegle, decode_client_id
from omegle.ids import ChatServer, ClientID, RandID
from omegle.models import Language
from omegle.session import SessionState


@pytest.fixture
def omegle(http) -> Omegle:
    return Omegle(http, rng=random.Random(7))


def serve_handshake(fake_omegle, start_body: str = CLIENT_ID) -> None:
    fake_omegle.on("waw2.omegle.com", "/check", text("check-code-123"))
    fake_omegle.on("front20.omegle.com", "/start", text(start_body))


async def test_start_chat(fake_omegle, omegle, status):
    serve_handshake(fake_omegle)

    session = await omegle.start_chat(status)

    assert session.client_id == ClientID.decode(CLIENT_ID)
    assert session.server == ChatServer(20)
    assert session.state == SessionState.IDLE

    check, start = fake_omegle.requests
    assert check.method == "POST"
    assert str(check.url) == "http://waw2.omegle.com/check"
    assert start.method == "POST"
    assert start.url.host == "front20.omegle.com"
    assert start.url.path == "/start"

    params = dict(start.url.params)
    assert params == {
        "caps": "recaptcha2,t3",
        "spid": "",
        "randid": RandID.generate(random.Random(7)).encode(),
        "cc": "check-code-123",
        "lang": "en",
    }


async def test_start_chat_with_topics(fake_omegle, http, status):
    serve_handshake(fake_omegle)
    omegle = Omegle(http, language=Language.FRENCH, topics=["books", "music"])

    await omegle.start_chat(status)

    params = fake_omegle.requests[-1].url.params
    assert params["topics"] == "books,music"
    assert params["lang"] == "fr"
    assert list(params.keys()) == ["caps", "spid", "randid", "cc", "topics", "lang"]


async def test_start_chat_generates_fresh_rand_id(fake_omegle, http, status):
    serve_handshake(fake_omegle)
    serve_handshake(fake_omegle)
    omegle = Omegle(http)

    await omegle.start_chat(status)
    await omegle.start_chat(status)

    first, second = (request.url.params["randid"] for request in fake_omegle.requests[1::2])
    assert RandID.decode(first) != RandID.decode(second)


async def test_start_chat_accepts_json_string(fake_omegle, omegle, status):
    serve_handshake(fake_omegle, json.dumps(CLIENT_ID))

    session = await omegle.start_chat(status)

    assert str(session.client_id) == CLIENT_ID


async def test_start_chat_rejects_invalid_client_id(fake_omegle, omegle, status):
    serve_handshake(fake_omegle, "fail")

    with pytest.raises(errors.InvalidClientID):
        await omegle.start_chat(status)


async def test_start_chat_check_failure(fake_omegle, omegle, status):
    fake_omegle.on("waw2.omegle.com", "/check", fail())

    with pytest.raises(errors.RequestFailed):
        await omegle.start_chat(status)

    assert len(fake_omegle.requests) == 1


async def test_new_chat_fetches_status_first(fake_omegle, omegle):
    fake_omegle.on("omegle.com", "/status", text(json.dumps(STATUS_PAYLOAD)))
    serve_handshake(fake_omegle)

    session = await omegle.new_chat()

    assert [request.url.path for request in fake_omegle.requests] == [
        "/status",
        "/check",
        "/start",
    ]
    assert session.server == ChatServer(20)


async def test_sessions_share_http_client(fake_omegle, omegle, status):
    serve_handshake(fake_omegle)
    fake_omegle.on("front20.omegle.com", "/events", text('[["waiting"]]'))

    session = await omegle.start_chat(status)
    await session.poll()

    assert len(fake_omegle.requests) == 3


async def test_borrowed_client_is_not_closed(http):
    async with Omegle(http):
        pass

    assert not http.is_closed


async def test_owned_client_is_closed():
    omegle = Omegle()

    async with omegle:
        pass

    assert omegle._http.is_closed


@pytest.mark.parametrize(
    "body", [CLIENT_ID, json.dumps(CLIENT_ID), f" {json.dumps(CLIENT_ID)}\n"]
)
def test_decode_client_id(body):
    assert decode_client_id(body).encode() == CLIENT_ID


def test_decode_client_id_keeps_token_whitespace():
    body = "central2:" + " " * 2 + "a" * 26 + " " * 2

    client_id = decode_client_id(body)

    assert client_id.token == body.removeprefix("central2:")
    assert client_id.encode() == body


def test_decode_client_id_bare_body_is_not_trimmed():
    with pytest.raises(errors.InvalidClientID):
        decode_client_id(f"{CLIENT_ID}\n")


def test_decode_client_id_rejects_broken_json():
    with pytest.raises(errors.InvalidClientID, match="JSON"):
        decode_client_id('"central2:abc')
