from enum import StrEnum, auto
from typing import Iterable

from httpx import AsyncClient
from loguru import logger

from omegle.errors import ActionFailed, SessionEnded
from omegle.events import ChatEvent, Connected, Waiting, parse_events
from omegle.ids import ChatServer, ClientID
from omegle.transport import request

SUCCESS_RESPONSE = "win"


class SessionState(StrEnum):
    IDLE = auto()
    WAITING = auto()
    CONNECTED = auto()
    ENDED = auto()


class ChatSession:
    """
    A single chat with a stranger. Every request is keyed by the client ID
    handed out on chat start and goes to the front server the chat was
    started on.

    The coarse state only moves forward on events returned by `poll` (and
    on a successful `disconnect`). Once the session has ended, any further
    call raises `SessionEnded`.
    """

    def __init__(self, http: AsyncClient, server: ChatServer, client_id: ClientID) -> None:
        self._http = http
        self.server = server
        self.client_id = client_id
        self._state = SessionState.IDLE

    def __repr__(self) -> str:
        return f"<ChatSession {self.client_id} on {self.server} ({self._state})>"

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def connected(self) -> bool:
        return self._state == SessionState.CONNECTED

    @property
    def ended(self) -> bool:
        return self._state == SessionState.ENDED

    async def poll(self) -> list[ChatEvent]:
        """
        Wait for the next batch of events. The service holds the request
        until something happens or its own timeout elapses.
        """
        self._ensure_not_ended("poll")
        response = await request(
            self._http, "POST", self.server.url("events"), data=self._form()
        )
        events = parse_events(response.content)
        logger.debug("Received events: {events}.", events=events)
        self._apply(events)
        return events

    async def send_message(self, text: str) -> None:
        await self._action("send", msg=text)

    async def start_typing(self) -> None:
        await self._action("typing")

    async def stop_typing(self) -> None:
        await self._action("stoppedtyping")

    async def disconnect(self) -> None:
        await self._action("disconnect")
        self._state = SessionState.ENDED

    def _apply(self, events: Iterable[ChatEvent]) -> None:
        for event in events:
            if self._state == SessionState.ENDED:
                return

            match event:
                case Waiting():
                    self._state = SessionState.WAITING
                case Connected():
                    self._state = SessionState.CONNECTED
                case _ if event.terminal:
                    logger.debug("Session ended on {tag}.", tag=event.tag)
                    self._state = SessionState.ENDED

    async def _action(self, action: str, **fields: str) -> None:
        self._ensure_not_ended(action)
        response = await request(
            self._http, "POST", self.server.url(action), data=self._form(**fields)
        )

        if response.text != SUCCESS_RESPONSE:
            raise ActionFailed(action, response.text)

        logger.debug("Action {action} accepted.", action=action)

    def _form(self, **fields: str) -> dict[str, str]:
        return {"id": str(self.client_id), **fields}

    def _ensure_not_ended(self, operation: str) -> None:
        if self.ended:
            raise SessionEnded(f"Cannot {operation}, the chat session has already ended.")
