from httpx import AsyncClient
from loguru import logger
from pydantic import ValidationError

from omegle.errors import StatusDecodeError
from omegle.models import OmegleStatus
from omegle.transport import request

STATUS_URL = "https://omegle.com/status"
STATUS_FORMAT = (
    "JSON object with 'count', a non-empty 'servers' list of 'front' + u8 "
    "and a non-empty 'antinudeservers' list of 'waw' + digit + '.omegle.com'"
)


def decode_status(data: str | bytes) -> OmegleStatus:
    """
    Decode a status payload. The whole payload is rejected if any server
    entry is malformed or either server list is empty.
    """
    try:
        return OmegleStatus.from_raw(data)
    except ValidationError as exc:
        raise StatusDecodeError(
            f"Cannot decode service status: {exc}", raw=data, expected=STATUS_FORMAT
        ) from exc


async def fetch_status(http: AsyncClient, url: str = STATUS_URL) -> OmegleStatus:
    """
    Fetch the current service status: how many users are online and which
    front and check servers to use. Needed before starting a chat.
    """
    response = await request(http, "GET", url)
    status = decode_status(response.content)
    logger.debug(
        "Fetched status: {count} users, servers {servers}.",
        count=status.count,
        servers=[str(server) for server in status.servers],
    )
    return status
