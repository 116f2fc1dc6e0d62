import inject

from omegle.config import Config


def configure_injection(config: Config) -> None:
    def configure_(binder: inject.Binder) -> None:
        binder.bind(Config, config)

    inject.configure(configure_, clear=True)
