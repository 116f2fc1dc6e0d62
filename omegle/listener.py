from typing import Any, Callable

from loguru import logger
from pyee.asyncio import AsyncIOEventEmitter

from omegle.events import ChatEvent, EventTag
from omegle.handler import EventHandler
from omegle.session import ChatSession

ANY_EVENT = "*"


def _event_name(tag: EventTag | str) -> str:
    # Namespaced, pyee treats a bare "error" event specially.
    return f"chat.{tag}"


class ChatListener:
    """
    Polls a chat session until it ends and publishes every received event
    via an async event emitter, in the order the service sent them.
    Listeners subscribe to an event tag, or to `ANY_EVENT`.

    Errors raised by `poll` are not handled here, they propagate out of
    `run` and it is up to the caller to decide whether to run again.
    """

    def __init__(self, session: ChatSession) -> None:
        self.session = session
        self._emitter = AsyncIOEventEmitter()
        self._emitter.add_listener("error", self._on_handler_error)

    def add_listener(
        self, tag: EventTag | str, handler: Callable[..., Any], once: bool = False
    ) -> None:
        event = _event_name(tag)

        if once:
            self._emitter.once(event, handler)
            return

        self._emitter.add_listener(event, handler)

    def remove_listener(self, tag: EventTag | str, handler: Callable[..., Any]) -> None:
        self._emitter.remove_listener(_event_name(tag), handler)

    def attach(self, handler: EventHandler) -> None:
        self.add_listener(ANY_EVENT, handler.handle_event)

    def detach(self, handler: EventHandler) -> None:
        self.remove_listener(ANY_EVENT, handler.handle_event)

    async def run(self) -> None:
        logger.debug("Start listening to {session}.", session=self.session)

        while not self.session.ended:
            for event in await self.session.poll():
                self.publish(event)

        logger.debug("Stop listening, {session} has ended.", session=self.session)

    def publish(self, event: ChatEvent) -> None:
        self._emitter.emit(_event_name(event.tag), event)
        self._emitter.emit(_event_name(ANY_EVENT), event)

    def _on_handler_error(self, exc: Exception) -> None:
        logger.opt(exception=exc).error("Event listener failed.")
