import json
from typing import Any

import pytest
from fakes import STATUS_PAYLOAD, FakeOmegle

from omegle.models import OmegleStatus


@pytest.fixture
def fake_omegle() -> FakeOmegle:
    return FakeOmegle()


@pytest.fixture
async def http(fake_omegle):
    async with fake_omegle.client() as client:
        yield client


@pytest.fixture
def status_payload() -> dict[str, Any]:
    return json.loads(json.dumps(STATUS_PAYLOAD))


@pytest.fixture
def status(status_payload) -> OmegleStatus:
    return OmegleStatus.from_dict(status_payload)
