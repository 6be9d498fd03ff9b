"""Built-in loago subcommands."""

from typing import TYPE_CHECKING

from rich.table import Table

from loago.cli.commands import Command, UsageError
from loago.logging import Loggers
from loago.tasks import output

if TYPE_CHECKING:
    from loago.cli.app import LoagoApp

logger = Loggers.cli()


class DoCommand(Command):
    """Mark tasks as done right now."""

    def __init__(self) -> None:
        super().__init__(
            name="do",
            description="Mark tasks as done right now, creating them if needed",
            aliases=["add", "new", "update", "reset"],
            usage="loago do <task>...",
            examples=["loago do dust vacuum", "loago add exercise"],
        )

    def execute(self, args: list[str], app: "LoagoApp") -> None:
        names = self.parse_names(args)
        if not names:
            raise UsageError(f"'{self.name}' needs at least one task name")
        try:
            app.store.update(names)
        except ValueError as e:
            raise UsageError(str(e)) from e
        app.mark_changed()
        logger.info("tasks_done", tasks=names)


class ViewCommand(Command):
    """Show how long ago tasks were done."""

    def __init__(self) -> None:
        super().__init__(
            name="view",
            description="Show how long ago tasks were done (all tasks if none given)",
            aliases=["list", "look", "see"],
            usage="loago view [task]...",
            examples=["loago view", "loago view floor bed keyboard"],
        )

    def execute(self, args: list[str], app: "LoagoApp") -> None:
        names = self.parse_names(args)
        store = app.store
        if names:
            records = store.get(names)
            skipped = store.missing(names)
            if skipped:
                logger.debug("view_skipped_unknown_tasks", tasks=sorted(skipped))
        else:
            records = store.get_all()

        report = output(records, app.formatter, now=app.clock())
        if report:
            # to_string() ends every line with a newline; out() adds the last one
            app.console.out(report.to_string()[:-1], highlight=False)


class RemoveCommand(Command):
    """Stop tracking tasks."""

    def __init__(self) -> None:
        super().__init__(
            name="remove",
            description="Stop tracking tasks; unknown tasks are ignored",
            aliases=["delete"],
            usage="loago remove <task>...",
            examples=["loago remove dust", "loago delete vacuum exercise"],
        )

    def execute(self, args: list[str], app: "LoagoApp") -> None:
        names = self.parse_names(args)
        if not names:
            raise UsageError(f"'{self.name}' needs at least one task name")
        removed = app.store.remove(names)
        if removed:
            app.mark_changed()
        logger.info("tasks_removed", tasks=removed, ignored=sorted(set(names) - set(removed)))


class HelpCommand(Command):
    """Display help information about available commands."""

    def __init__(self) -> None:
        super().__init__(
            name="help",
            description="Show available commands and usage information",
            usage="loago help [command]",
            examples=["loago help", "loago help view"],
        )

    def execute(self, args: list[str], app: "LoagoApp") -> None:
        if args:
            cmd = app.command_registry.get(args[0])
            if cmd is None:
                raise UsageError(f"Unknown command '{args[0]}'")
            app.console.print(cmd.get_help(), markup=False, highlight=False)
            return

        app.console.print(
            f"{app.settings.app_name} {app.version}: last time you did it was how long ago?",
            markup=False,
            highlight=False,
        )
        app.console.print()

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 0))
        table.add_column("Command", style="bold cyan", no_wrap=True)
        table.add_column("Aliases", style="dim", no_wrap=True)
        table.add_column("Description")

        for cmd in app.command_registry.all_commands():
            table.add_row(cmd.name, ", ".join(cmd.aliases), cmd.description)

        app.console.print(table)
        app.console.print()
        app.console.print(
            "Options: -h, --help  show this help; -V, --version  show the version",
            markup=False,
            highlight=False,
        )
