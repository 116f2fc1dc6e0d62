from typing import Iterable


class OmegleError(Exception):
    pass


class RequestFailed(OmegleError):
    pass


class ResponseError(OmegleError):
    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class ServerUnavailable(ResponseError):
    pass


class DecodeError(OmegleError, ValueError):
    """
    Raised when a value received from the service does not match the
    expected wire format. Keeps the offending value and a description of
    what was expected, so the error can be logged as is.
    """

    def __init__(self, message: str, raw: object = None, expected: str = "") -> None:
        super().__init__(message)
        self.raw = raw
        self.expected = expected

    def __str__(self) -> str:
        message = super().__str__()

        if self.raw is None:
            return message
        return f"{message} (got {self.raw!r})"


class InvalidRandID(DecodeError):
    pass


class InvalidChatServer(DecodeError):
    pass


class InvalidCheckServer(DecodeError):
    pass


class InvalidClientID(DecodeError):
    pass


class StatusDecodeError(DecodeError):
    pass


class UnknownEvent(DecodeError):
    def __init__(self, tag: str, accepted: Iterable[str]) -> None:
        self.tag = tag
        self.accepted = tuple(accepted)
        expected = ", ".join(f"`{name}`" for name in self.accepted)
        super().__init__(
            f"unknown variant `{tag}`, expected one of {expected}",
            expected=expected,
        )


class ActionFailed(OmegleError):
    def __init__(self, action: str, response: str) -> None:
        super().__init__(f"Action {action} failed, server responded with {response!r}.")
        self.action = action
        self.response = response


class SessionEnded(OmegleError):
    pass
