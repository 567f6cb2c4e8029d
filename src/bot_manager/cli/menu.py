"""Interactive console menu over the bot service.

Choices are numbered and read with Rich prompts; every prompt accepts
an optional input ``stream`` so the menu can be driven without a TTY.
"""

from typing import TextIO

from rich.console import Console
from rich.prompt import Confirm, Prompt

from bot_manager.cli.output import format_bot_detail, format_bot_table, format_statistics
from bot_manager.errors import ValidationFailedError
from bot_manager.models.bot import BotDTO
from bot_manager.services.bot_service import BotService

__all__ = ["BotMenu", "BOT_TYPES"]

BOT_TYPES = ("Chat", "Automation", "Analytics", "Other")

MAIN_MENU = ("Manage Bots", "View Statistics", "Exit")
BOT_MENU = (
    "List All Bots",
    "View Bot Details",
    "Create New Bot",
    "Update Bot",
    "Delete Bot",
    "Toggle Bot Status",
    "Back to Main Menu",
)


class BotMenu:
    """Menu-driven console front end.

    Example:
        async with BotManager.from_config() as manager:
            await BotMenu(manager.bots).run()
    """

    def __init__(
        self,
        service: BotService,
        console: Console | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._service = service
        self._console = console or Console()
        self._stream = stream

    # Prompt helpers

    def _choose(self, title: str, options: tuple[str, ...] | list[str]) -> int:
        """Show numbered options and return the 0-based index picked."""
        self._console.print(f"\n[bold]{title}[/bold]")
        for number, option in enumerate(options, start=1):
            self._console.print(f"  {number}. {option}")
        answer = Prompt.ask(
            "Choose",
            choices=[str(n) for n in range(1, len(options) + 1)],
            show_choices=False,
            console=self._console,
            stream=self._stream,
        )
        return int(answer) - 1

    def _ask(self, label: str, default: str | None = None) -> str:
        if default is None:
            return Prompt.ask(label, console=self._console, stream=self._stream)
        return Prompt.ask(label, default=default, console=self._console, stream=self._stream)

    def _confirm(self, label: str, default: bool = True) -> bool:
        return Confirm.ask(label, default=default, console=self._console, stream=self._stream)

    async def _select_bot(
        self, title: str, label=lambda b: f"{b.name} ({b.type})"
    ) -> BotDTO | None:
        bots = await self._service.get_all()
        if not bots:
            self._console.print("[red]No bots found.[/red]")
            return None
        index = self._choose(title, [label(bot) for bot in bots] + ["Back"])
        return bots[index] if index < len(bots) else None

    # Menus

    async def run(self) -> None:
        """Run the main menu until the user exits."""
        self._console.rule("[blue]Bot Management System[/blue]")
        while True:
            choice = MAIN_MENU[self._choose("Main Menu", MAIN_MENU)]
            if choice == "Manage Bots":
                await self.manage_bots()
            elif choice == "View Statistics":
                await self.show_statistics()
            else:
                self._console.print("Goodbye!")
                return

    async def manage_bots(self) -> None:
        actions = {
            "List All Bots": self.list_bots,
            "View Bot Details": self.view_bot_details,
            "Create New Bot": self.create_bot,
            "Update Bot": self.update_bot,
            "Delete Bot": self.delete_bot,
            "Toggle Bot Status": self.toggle_bot_status,
        }
        while True:
            choice = BOT_MENU[self._choose("Bot Management", BOT_MENU)]
            if choice == "Back to Main Menu":
                return
            await actions[choice]()

    # Actions

    async def list_bots(self) -> None:
        self._console.print(format_bot_table(await self._service.get_all()))

    async def view_bot_details(self) -> None:
        while True:
            bot = await self._select_bot("Select a bot to view details:")
            if bot is None:
                return
            self._console.print(format_bot_detail(bot))
            if not self._confirm("View another bot?"):
                return

    async def create_bot(self) -> None:
        self._console.print("[bold]Create New Bot[/bold]")
        name = self._ask("Bot Name")
        bot_type = BOT_TYPES[self._choose("Bot Type:", BOT_TYPES)]
        description = self._ask("Description (optional)", default="")
        is_active = self._confirm("Activate this bot?")

        bot = BotDTO(
            name=name,
            type=bot_type,
            description=description.strip() or None,
            is_active=is_active,
        )
        try:
            created = await self._service.create(bot)
        except ValidationFailedError as e:
            self._report_validation("Error creating bot", e)
            return
        self._console.print(f"[green]✓ Bot '{created.name}' created successfully![/green]")

    async def update_bot(self) -> None:
        bot = await self._select_bot("Select a bot to update:")
        if bot is None:
            return

        self._console.print(f"[bold]Updating bot: {bot.name}[/bold]")
        name = self._ask("Bot Name", default=bot.name)
        bot_type = BOT_TYPES[self._choose("Bot Type:", BOT_TYPES)]
        description = self._ask("Description (optional)", default=bot.description or "")

        changes = bot.model_copy(
            update={"name": name, "type": bot_type, "description": description.strip() or None}
        )
        try:
            updated = await self._service.update(changes)
        except ValidationFailedError as e:
            self._report_validation("Error updating bot", e)
            return
        if updated:
            self._console.print(f"[green]✓ Bot '{name}' updated successfully![/green]")
        else:
            self._console.print("[red]Bot no longer exists.[/red]")

    async def delete_bot(self) -> None:
        bot = await self._select_bot("Select a bot to delete:")
        if bot is None:
            return
        if not self._confirm(f"Are you sure you want to delete the bot '{bot.name}'?", False):
            return
        if await self._service.delete(bot.id):
            self._console.print(f"[green]✓ Bot '{bot.name}' deleted successfully![/green]")
        else:
            self._console.print("[red]Failed to delete the bot.[/red]")

    async def toggle_bot_status(self) -> None:
        bot = await self._select_bot(
            "Select a bot to toggle status:",
            label=lambda b: f"{b.name} ({'Active' if b.is_active else 'Inactive'})",
        )
        if bot is None:
            return
        new_status = not bot.is_active
        if await self._service.toggle_status(bot.id, new_status):
            state = "active" if new_status else "inactive"
            self._console.print(f"[green]✓ Bot '{bot.name}' is now {state}![/green]")
        else:
            self._console.print("[red]Failed to update bot status.[/red]")

    async def show_statistics(self) -> None:
        self._console.print(format_statistics(await self._service.get_statistics()))

    def _report_validation(self, title: str, error: ValidationFailedError) -> None:
        self._console.print(f"[red]{title}:[/red]")
        for message in error.errors:
            self._console.print(f"  [red]- {message}[/red]")
