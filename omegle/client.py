import json
import random
from types import TracebackType
from typing import Iterable

from httpx import AsyncClient
from loguru import logger

from omegle.errors import InvalidClientID
from omegle.ids import ClientID, RandID
from omegle.models import Language, OmegleStatus, Preferences
from omegle.session import ChatSession
from omegle.status import STATUS_URL, fetch_status
from omegle.transport import DEFAULT_TIMEOUT, make_http_client, request

DEFAULT_CAPS = "recaptcha2,t3"


def decode_client_id(body: str) -> ClientID:
    """
    The start endpoint answers with the client ID, either as bare text or
    as a JSON string literal. The bare form is decoded as received, its token
    may legitimately start or end with whitespace.
    """
    text = body

    if body.strip().startswith('"'):
        try:
            text = json.loads(body)
        except ValueError as exc:
            raise InvalidClientID(
                "start response is not a valid JSON string", raw=body, expected=ClientID.FORMAT
            ) from exc

    return ClientID.decode(text)


class Omegle:
    """
    Entry point of the library. Resolves the service status and starts new
    chat sessions. Owns the HTTP client unless one is passed in, and shares
    it with every session it creates.

    Usage:
        async with Omegle(topics=["books"]) as omegle:
            session = await omegle.new_chat()

            while not session.ended:
                for event in await session.poll():
                    ...
    """

    def __init__(
        self,
        http: AsyncClient | None = None,
        language: Language = Language.ENGLISH,
        topics: Iterable[str] = (),
        caps: str = DEFAULT_CAPS,
        status_url: str = STATUS_URL,
        timeout: float = DEFAULT_TIMEOUT,
        rng: random.Random | None = None,
    ) -> None:
        self._owns_http = http is None
        self._http = http if http is not None else make_http_client(timeout)
        self.preferences = Preferences(language=language, topics=list(topics))
        self.caps = caps
        self.status_url = status_url
        self._rng = rng

    async def __aenter__(self) -> "Omegle":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def fetch_status(self) -> OmegleStatus:
        return await fetch_status(self._http, self.status_url)

    async def new_chat(self) -> ChatSession:
        status = await self.fetch_status()
        return await self.start_chat(status)

    async def start_chat(self, status: OmegleStatus) -> ChatSession:
        server = status.chat_server
        check_server = status.check_server
        rand_id = RandID.generate(self._rng)
        logger.debug(
            "Start chat on {server}, check via {check_server}, random id {rand_id}.",
            server=server,
            check_server=check_server,
            rand_id=rand_id,
        )

        check_response = await request(self._http, "POST", check_server.url("check"))
        check_code = check_response.text

        response = await request(
            self._http,
            "POST",
            server.url("start"),
            params=self._start_params(rand_id, check_code),
        )
        client_id = decode_client_id(response.text)
        logger.info("Chat started on {server} as {client_id}.", server=server, client_id=client_id)
        return ChatSession(self._http, server, client_id)

    def _start_params(self, rand_id: RandID, check_code: str) -> dict[str, str]:
        params = dict(caps=self.caps, spid="", randid=str(rand_id), cc=check_code)
        topics = self.preferences.topics_param

        if topics is not None:
            params.update(topics=topics)

        params.update(lang=str(self.preferences.language))
        return params
