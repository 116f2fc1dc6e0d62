from datetime import datetime, timezone
from pathlib import Path

import loguru
import sentry_sdk

from omegle import PACKAGE_NAME, __version__, data_home


def make_log_sink(debug: bool) -> str:
    now = datetime.now(tz=timezone.utc)

    if debug:
        log_home = Path()
    else:
        log_home = data_home
    return str(log_home / f"client_{now:%Y-%m-%d_%H-%M-%S}.log")


def configure_logger(sink: str, debug: bool = False) -> None:
    level = "DEBUG" if debug else "INFO"
    log_size = "10 MB" if debug else "5 MB"

    loguru.logger.enable(PACKAGE_NAME)
    loguru.logger.remove()
    loguru.logger.add(sink, rotation=log_size, level=level)


def configure_sentry(dsn: str | None) -> None:
    if not dsn:
        return

    sentry_sdk.init(dsn, release=__version__)
