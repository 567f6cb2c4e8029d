"""bot-manager CLI.

Usage:
    bot-manager menu            Interactive bot management menu
    bot-manager ask "PROMPT"    One-shot chat completion
    bot-manager serve           Run the REST API
"""

import asyncio

import typer
from rich.console import Console

from bot_manager import __version__
from bot_manager.config import BotManagerConfig
from bot_manager.errors import CompletionError, InvalidInputError
from bot_manager.logging import configure_from_settings, get_logger
from bot_manager.orchestrator import BotManager

logger = get_logger(__name__)

app = typer.Typer(
    name="bot-manager",
    help="Manage bots and request chat completions",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None, "--log-level", help="Override BOT_MANAGER_LOG_LEVEL"
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit JSON log lines"),
) -> None:
    """Bot Management System."""
    settings = BotManagerConfig().logging
    overrides: dict[str, object] = {}
    if log_level:
        overrides["level"] = log_level
    if json_logs:
        overrides["json_output"] = True
    configure_from_settings(settings.model_copy(update=overrides))


@app.command()
def version() -> None:
    """Show bot-manager version."""
    console.print(f"[bold]bot-manager[/bold] v{__version__}")


@app.command()
def menu() -> None:
    """Open the interactive bot management menu."""
    from bot_manager.cli.menu import BotMenu

    async def _run() -> None:
        async with BotManager.from_config() as manager:
            await BotMenu(manager.bots, console=console).run()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("\nCancelled.")


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Prompt to send to the model"),
    timeout: float | None = typer.Option(None, "--timeout", help="Per-attempt timeout in seconds"),
) -> None:
    """Send a single prompt and print the reply."""

    async def _run() -> str:
        async with BotManager.from_config() as manager:
            if not manager.has_completions:
                console.print("[red]No completion provider configured.[/red]")
                console.print("Set BOT_MANAGER_LLM_API_KEY (and BOT_MANAGER_LLM_PROVIDER).")
                raise typer.Exit(1)
            return await manager.completions.complete_from_prompt(prompt, timeout=timeout)

    try:
        answer = asyncio.run(_run())
    except InvalidInputError as e:
        console.print(f"[red]Invalid prompt:[/red] {e}")
        raise typer.Exit(2) from e
    except CompletionError as e:
        console.print(f"[red]Completion failed:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(answer)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
) -> None:
    """Run the REST API with uvicorn."""
    import uvicorn

    from bot_manager.api.app import create_app

    logger.info("api_serving", host=host, port=port)
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    app()
