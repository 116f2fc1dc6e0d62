import os
from functools import cache
from importlib import metadata

from loguru import logger
from xdg_base_dirs import xdg_data_home

PACKAGE_NAME = __name__


@cache
def get_client_version() -> str:
    return os.getenv("OMEGLE_CLIENT_VERSION", metadata.version("omegle-client"))


APP_LABEL = "omegle"
data_home = xdg_data_home() / APP_LABEL

logger.disable(PACKAGE_NAME)

try:
    __version__ = get_client_version()
except metadata.PackageNotFoundError:
    # Running from a source checkout.
    __version__ = "0.0.0"

from omegle.client import Omegle  # noqa: E402
from omegle.errors import (  # noqa: E402
    ActionFailed,
    DecodeError,
    OmegleError,
    RequestFailed,
    SessionEnded,
)
from omegle.events import ChatEvent, EventTag  # noqa: E402
from omegle.ids import ChatServer, CheckServer, ClientID, RandID  # noqa: E402
from omegle.models import Language, OmegleStatus, Preferences  # noqa: E402
from omegle.session import ChatSession, SessionState  # noqa: E402

__all__ = [
    "ActionFailed",
    "ChatEvent",
    "ChatServer",
    "ChatSession",
    "CheckServer",
    "ClientID",
    "DecodeError",
    "EventTag",
    "Language",
    "Omegle",
    "OmegleError",
    "OmegleStatus",
    "Preferences",
    "RandID",
    "RequestFailed",
    "SessionEnded",
    "SessionState",
    "get_client_version",
]
