from omegle import events
from omegle.models import OmegleStatus


class EventHandler:
    """
    Base class for consumers that want a callback per event kind.
    Override the methods you care about, the rest do nothing.
    """

    def handle_event(self, event: events.ChatEvent) -> None:
        match event:
            case events.Waiting():
                self.handle_waiting()
            case events.Connected():
                self.handle_connected()
            case events.StatusInfo(status=status):
                self.handle_status_info(status)
            case events.Count(count=count):
                self.handle_count(count)
            case events.CommonLikes(likes=likes):
                self.handle_common_likes(likes)
            case events.ServerMessage(text=text):
                self.handle_server_message(text)
            case events.IdentDigests(digests=digests):
                self.handle_ident_digests(digests)
            case events.Error(message=message):
                self.handle_error(message)
            case events.ConnectionDied():
                self.handle_connection_died()
            case events.Banned():
                self.handle_banned()
            case events.StartedTyping():
                self.handle_started_typing()
            case events.StoppedTyping():
                self.handle_stopped_typing()
            case events.Message(text=text):
                self.handle_message(text)
            case events.Disconnected():
                self.handle_disconnected()
            case _:
                raise TypeError(f"Unsupported event {event!r}.")

    def handle_waiting(self) -> None:
        pass

    def handle_connected(self) -> None:
        pass

    def handle_status_info(self, status: OmegleStatus) -> None:
        pass

    def handle_count(self, count: int) -> None:
        pass

    def handle_common_likes(self, likes: tuple[str, ...]) -> None:
        pass

    def handle_server_message(self, text: str) -> None:
        pass

    def handle_ident_digests(self, digests: str) -> None:
        pass

    def handle_error(self, message: str) -> None:
        pass

    def handle_connection_died(self) -> None:
        pass

    def handle_banned(self) -> None:
        pass

    def handle_started_typing(self) -> None:
        pass

    def handle_stopped_typing(self) -> None:
        pass

    def handle_message(self, text: str) -> None:
        pass

    def handle_disconnected(self) -> None:
        pass
