"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ..chat import (
    ChatSessionController,
    ConversationMessage,
    IntroductionCatalog,
    Role,
    TerminalClipboard,
)
from ..inference import InferenceEndpoint
from .providers import get_endpoint, get_registry, require_profile

# Load environment variables
load_dotenv()

app = typer.Typer(
    name="modelmart",
    help="Browse AI personas and chat with them through an inference endpoint",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()

LOG_LEVELS = ("debug", "info", "warning", "error")
NOISY_DEPS = ("httpx", "httpcore", "openai", "google_genai")

CONFIG_ALIASES = {
    "temperature": "temperature",
    "temp": "temperature",
    "top_p": "top_p",
    "topp": "top_p",
    "max_tokens": "max_tokens",
    "maxtokens": "max_tokens",
}

HELP_TEXT = """[bold]Commands[/bold]
  /reset                      start the conversation over
  /config                     show the generation config
  /config key=value ...       set temperature, top_p or max_tokens
  /copy ID                    copy message #ID to the clipboard
  /history                    print the whole conversation
  /help                       show this help
  exit | quit | q             leave"""


def configure_logging(level: str) -> None:
    """Route library logging through Rich."""
    if level.lower() not in LOG_LEVELS:
        raise typer.BadParameter(f"log level must be one of: {', '.join(LOG_LEVELS)}")
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # SDK and transport loggers stay at WARNING unless debugging
    deps_level = logging.DEBUG if level.lower() == "debug" else logging.WARNING
    for name in NOISY_DEPS:
        logging.getLogger(name).setLevel(deps_level)


def render_message(message: ConversationMessage) -> None:
    """Print one settled message."""
    if message.role == Role.USER:
        console.print(f"[bold yellow]You[/bold yellow] [dim]#{message.id}[/dim]: {message.content}")
        return
    console.print(f"[bold green]Assistant[/bold green] [dim]#{message.id}[/dim]")
    console.print(Markdown(message.content))
    console.print()


class TranscriptPrinter:
    """Prints assistant messages as they settle in the controller's log."""

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def __call__(self, controller: ChatSessionController) -> None:
        live_ids = {m.id for m in controller.messages}
        self._seen &= live_ids
        for message in controller.messages:
            if message.is_pending or message.id in self._seen:
                continue
            self._seen.add(message.id)
            if message.role == Role.ASSISTANT:
                render_message(message)


def parse_config_args(args: list[str]) -> dict[str, float]:
    """Parse ``key=value`` pairs for /config."""
    updates: dict[str, float] = {}
    for arg in args:
        key, sep, raw = arg.partition("=")
        field = CONFIG_ALIASES.get(key.strip().lower().replace("-", "_"))
        if not sep or field is None:
            raise ValueError(f"Expected temperature=, top_p= or max_tokens=, got '{arg}'")
        try:
            updates[field] = float(raw)
        except ValueError as e:
            raise ValueError(f"'{raw}' is not a number") from e
    return updates


def print_config(controller: ChatSessionController) -> None:
    config = controller.config
    console.print(
        f"[dim]temperature={config.temperature} top_p={config.top_p} "
        f"max_tokens={config.max_tokens}[/dim]"
    )


def _start_session(
    model_id: str,
    overrides: dict[str, float | None],
) -> tuple[ChatSessionController, InferenceEndpoint]:
    registry = get_registry(console)
    profile = require_profile(registry, model_id, console)
    endpoint = get_endpoint(profile, console)
    controller = ChatSessionController(
        endpoint=endpoint,
        introductions=IntroductionCatalog.from_registry(registry),
        clipboard=TerminalClipboard(console),
    )
    controller.initialize(profile)
    try:
        controller.update_config(**overrides)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    return controller, endpoint


@app.command()
def models(
    category: str | None = typer.Option(
        None,
        "--category",
        "-c",
        help="Only show models in this category"
    ),
    query: str | None = typer.Option(
        None,
        "--query",
        "-q",
        help="Match text in title or description"
    ),
    tag: list[str] | None = typer.Option(
        None,
        "--tag",
        "-t",
        help="Match any of these tags (repeatable)"
    ),
):
    """List the models in the marketplace catalogue."""
    registry = get_registry(console)
    results = registry.search(query=query, category=category, tags=tag, limit=len(registry.list_models()))

    if not results:
        console.print("[yellow]No models found[/yellow]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Category", style="yellow")
    table.add_column("Temp", justify="right", width=5)
    table.add_column("Top P", justify="right", width=5)
    table.add_column("Max Tokens", justify="right")

    for profile in results:
        table.add_row(
            profile.id,
            profile.title,
            profile.category,
            f"{profile.default_temperature:.2f}",
            f"{profile.default_top_p:.2f}",
            str(profile.default_max_tokens),
        )

    console.print(table)


@app.command()
def show(model_id: str = typer.Argument(..., help="Model id, e.g. code-assistant")):
    """Show the details of one model."""
    registry = get_registry(console)
    profile = require_profile(registry, model_id, console)
    intro = IntroductionCatalog.from_registry(registry).introduction_for(profile)

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold cyan", width=14)
    table.add_column("Value")
    table.add_row("Category", profile.category)
    table.add_row("Tags", ", ".join(profile.tags) or "None")
    table.add_row("Description", profile.description or "-")
    table.add_row(
        "Defaults",
        f"temperature={profile.default_temperature} top_p={profile.default_top_p} "
        f"max_tokens={profile.default_max_tokens}"
    )
    table.add_row("Greeting", intro)

    console.print(Panel(table, title=f"{profile.title} ({profile.id})", border_style="cyan"))
    console.print(Panel(profile.system_prompt, title="System prompt", border_style="dim"))


@app.command()
def ask(
    model_id: str = typer.Argument(..., help="Model id"),
    message: str = typer.Argument(..., help="Message to send"),
    temperature: float | None = typer.Option(None, "--temperature", help="Sampling temperature (0-1)"),
    top_p: float | None = typer.Option(None, "--top-p", help="Nucleus sampling (0-1)"),
    max_tokens: int | None = typer.Option(None, "--max-tokens", help="Response length limit (1-4096)"),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Diagnostics level: debug, info, warning or error"
    ),
):
    """Send a single message and print the reply."""
    configure_logging(log_level)

    async def _ask():
        controller, endpoint = _start_session(
            model_id, {"temperature": temperature, "top_p": top_p, "max_tokens": max_tokens}
        )
        try:
            if controller.submit(message) is None:
                console.print("[red]Error: message is empty[/red]")
                raise typer.Exit(code=1)
            with console.status("[dim]Thinking...[/dim]"):
                await controller.wait_for_response()
            reply = controller.messages[-1]
            console.print(Markdown(reply.content))
        finally:
            await endpoint.close()

    asyncio.run(_ask())


@app.command()
def chat(
    model_id: str = typer.Argument(..., help="Model id"),
    temperature: float | None = typer.Option(None, "--temperature", help="Sampling temperature (0-1)"),
    top_p: float | None = typer.Option(None, "--top-p", help="Nucleus sampling (0-1)"),
    max_tokens: int | None = typer.Option(None, "--max-tokens", help="Response length limit (1-4096)"),
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Diagnostics level: debug, info, warning or error"
    ),
):
    """Interactive chat with a model."""
    configure_logging(log_level)

    async def _handle_command(controller: ChatSessionController, line: str) -> None:
        command, *args = line.split()
        command = command.lower()

        if command == "/reset":
            controller.reset()
        elif command == "/config":
            if args:
                try:
                    controller.update_config(**parse_config_args(args))
                except ValueError as e:
                    console.print(f"[red]{e}[/red]")
                    return
            print_config(controller)
        elif command == "/copy":
            if len(args) != 1:
                console.print("[red]Usage: /copy ID[/red]")
            elif controller.copy_message(args[0].lstrip("#")):
                console.print("[dim]Copied.[/dim]")
            else:
                console.print("[yellow]Could not copy that message[/yellow]")
        elif command == "/history":
            for message in controller.messages:
                render_message(message)
        elif command == "/help":
            console.print(HELP_TEXT)
        else:
            console.print(f"[red]Unknown command {command}. Type /help.[/red]")

    async def _chat():
        controller, endpoint = _start_session(
            model_id, {"temperature": temperature, "top_p": top_p, "max_tokens": max_tokens}
        )
        profile = controller.profile

        console.print(f"[bold cyan]{profile.title}[/bold cyan]")
        console.print("[dim]Type /help for commands, 'exit', 'quit', or 'q' to leave[/dim]\n")

        printer = TranscriptPrinter()
        printer(controller)
        controller.subscribe(printer)

        try:
            while True:
                try:
                    user_input = await asyncio.to_thread(console.input, "[bold yellow]You:[/bold yellow] ")
                except (KeyboardInterrupt, EOFError):
                    console.print("\n[dim]Goodbye![/dim]")
                    break

                text = user_input.strip()
                if not text:
                    continue
                if text.lower() in ("exit", "quit", "q"):
                    console.print("[dim]Goodbye![/dim]")
                    break
                if text.startswith("/"):
                    await _handle_command(controller, text)
                    continue

                if controller.submit(text) is not None:
                    with console.status("[dim]Thinking...[/dim]"):
                        await controller.wait_for_response()
        finally:
            await endpoint.close()

    asyncio.run(_chat())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
