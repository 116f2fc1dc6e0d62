from functools import cache

from pydantic import HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

from omegle.models import Language
from omegle.status import STATUS_URL
from omegle.transport import DEFAULT_TIMEOUT


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="OMEGLE_")

    status_url: HttpUrl = HttpUrl(STATUS_URL)
    http_timeout: float = DEFAULT_TIMEOUT
    language: Language = Language.ENGLISH
    topics: list[str] = []
    debug: bool = False
    sentry_dsn: str | None = None


@cache
def get_config() -> Config:
    return Config()
