import asyncio
from typing import Annotated, Optional

import inject
import typer
from rich.table import Table

from omegle import __version__
from omegle.cli import logging
from omegle.cli.console import Console, get_console
from omegle.cli.di import configure_injection
from omegle.client import Omegle
from omegle.config import Config, get_config
from omegle.errors import OmegleError
from omegle.events import EventTag
from omegle.handler import EventHandler
from omegle.listener import ChatListener
from omegle.models import Language, OmegleStatus
from omegle.session import ChatSession

app = typer.Typer(name="omegle", help="Talk to strangers from your terminal.")
console = get_console()


class TerminalHandler(EventHandler):
    def __init__(self, console: Console) -> None:
        self.console = console

    def handle_waiting(self) -> None:
        self.console.print("Looking for someone you can chat with...")

    def handle_connected(self) -> None:
        self.console.success("You're now chatting with a random stranger. Say hi!")

    def handle_common_likes(self, likes: tuple[str, ...]) -> None:
        self.console.print(f"You both like [accent]{', '.join(likes)}[/].")

    def handle_server_message(self, text: str) -> None:
        self.console.warning(text)

    def handle_error(self, message: str) -> None:
        self.console.error(f"Server error: {message}")

    def handle_connection_died(self) -> None:
        self.console.error("Connection died.")

    def handle_banned(self) -> None:
        self.console.error("You have been banned.")

    def handle_started_typing(self) -> None:
        self.console.print("[accent]Stranger is typing...[/]")

    def handle_message(self, text: str) -> None:
        self.console.stranger(text)

    def handle_disconnected(self) -> None:
        self.console.warning("Stranger has disconnected.")


def make_omegle(config: Config, language: Language, topics: list[str]) -> Omegle:
    return Omegle(
        language=language,
        topics=topics,
        status_url=str(config.status_url),
        timeout=config.http_timeout,
    )


def make_status_table(status: OmegleStatus) -> Table:
    table = Table(title=f"{status.count} users online")

    table.add_column("Front servers")
    table.add_column("Check servers")

    servers = [str(server) for server in status.servers]
    check_servers = [str(server) for server in status.antinudeservers]

    for index in range(max(len(servers), len(check_servers))):
        front = servers[index] if index < len(servers) else ""
        check = check_servers[index] if index < len(check_servers) else ""
        table.add_row(front, check)

    return table


async def show_status() -> None:
    config: Config = inject.instance(Config)

    async with make_omegle(config, config.language, []) as omegle:
        status = await omegle.fetch_status()

    console.print(make_status_table(status))


async def chat(language: Language, topics: list[str], greeting: str) -> None:
    config: Config = inject.instance(Config)

    async with make_omegle(config, language, topics) as omegle:
        with console.status("Connecting..."):
            session = await omegle.new_chat()

        listener = ChatListener(session)
        listener.attach(TerminalHandler(console))

        if greeting:

            async def on_connected(_: object) -> None:
                await greet(session, greeting, console)

            listener.add_listener(EventTag.CONNECTED, on_connected, once=True)

        try:
            await listener.run()
        finally:
            await disconnect(session)


async def greet(session: ChatSession, greeting: str, console: Console) -> None:
    try:
        await session.send_message(greeting)
    except OmegleError as exc:
        console.error(f"Could not send your message: {exc}")
    else:
        console.print(f"[accent]You:[/] {greeting}")


async def disconnect(session: ChatSession) -> None:
    if session.ended:
        return

    try:
        await session.disconnect()
    except OmegleError as exc:
        console.warning(f"Could not disconnect cleanly: {exc}")
    else:
        console.print("You have disconnected.")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[bool, typer.Option("--version", help="Show version and exit.")] = False,
    debug: Annotated[
        Optional[bool],
        typer.Option(envvar="OMEGLE_DEBUG", show_envvar=False, help="Enable debug mode."),
    ] = None,
) -> None:
    """
    A terminal client for the Omegle text chat. Pairs you with a random
    stranger, optionally one who shares your interests.
    """
    if version:
        typer.echo(__version__)
        raise typer.Exit

    config = get_config()

    if debug is not None:
        config = config.model_copy(update=dict(debug=debug))

    logging.configure_logger(logging.make_log_sink(config.debug), config.debug)
    logging.configure_sentry(config.sentry_dsn)
    configure_injection(config)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command(name="status", help="Show how many users are online and which servers are up.")
def status_command() -> None:
    asyncio.run(show_status())


@app.command(name="chat", help="Start a chat with a random stranger.")
def chat_command(
    language: Annotated[
        Optional[Language], typer.Option("--lang", help="Chat language.")
    ] = None,
    topics: Annotated[
        Optional[list[str]],
        typer.Option("--topic", help="Interest to match strangers on, can be repeated."),
    ] = None,
    greeting: Annotated[
        str, typer.Option("--say", help="Message to send once connected.")
    ] = "",
) -> None:
    config: Config = inject.instance(Config)

    try:
        asyncio.run(chat(language or config.language, topics or config.topics, greeting))
    except KeyboardInterrupt:
        raise typer.Exit


def run() -> None:
    try:
        app()
    except OmegleError as exc:
        raise SystemExit(str(exc))
