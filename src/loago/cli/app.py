"""The loago command-line application.

Loads the record file, runs one command, and writes the record file
back if the command changed anything.
"""

import sys
from collections.abc import Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from loago import __version__
from loago.cli.builtin_commands import DoCommand, HelpCommand, RemoveCommand, ViewCommand
from loago.cli.commands import CommandRegistry, UsageError
from loago.config import LoagoSettings, get_settings
from loago.logging import Loggers, bind_context, clear_context, configure_logging
from loago.persistence import RecordFile, RecordFileError
from loago.tasks import TaskStore, get_formatter
from loago.tasks.store import Clock, now

logger = Loggers.cli()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


class LoagoApp:
    """One invocation of the loago CLI."""

    version = __version__

    def __init__(
        self,
        settings: LoagoSettings | None = None,
        console: Console | None = None,
        error_console: Console | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)
        self.clock = clock or now
        self.formatter = get_formatter(self.settings.elapsed_format)
        self.record_file = RecordFile.from_settings(self.settings)

        self.command_registry = CommandRegistry()
        for command in (DoCommand(), ViewCommand(), RemoveCommand(), HelpCommand()):
            self.command_registry.register(command)

        self._store: TaskStore | None = None
        self._changed = False

    @property
    def store(self) -> TaskStore:
        """The task store, loaded from the record file on first access."""
        if self._store is None:
            self._store = self.record_file.load(clock=self.clock)
        return self._store

    def mark_changed(self) -> None:
        """Flag the store to be written back once the command is done."""
        self._changed = True

    def error(self, message: str) -> None:
        self.error_console.print(f"[bold red]Error:[/bold red] {escape(message)}", soft_wrap=True)

    def run(self, argv: Sequence[str]) -> int:
        """Run one command line.

        Args:
            argv: Arguments without the program name.

        Returns:
            Process exit code.
        """
        argv = list(argv)
        if not argv:
            self.run_command("help", [])
            return EXIT_USAGE

        first, args = argv[0], argv[1:]
        if first in ("-h", "--help"):
            return self.run_command("help", args)
        if first in ("-V", "--version"):
            self.console.out(f"{self.settings.app_name} {self.version}", highlight=False)
            return EXIT_OK
        return self.run_command(first, args)

    def run_command(self, name: str, args: list[str]) -> int:
        command = self.command_registry.get(name)
        if command is None:
            self.error(f"Unknown command '{name}'. Run 'loago help' to list commands.")
            return EXIT_USAGE

        options = args[: args.index("--")] if "--" in args else args
        if "-h" in options or "--help" in options:
            self.console.print(command.get_help(), markup=False, highlight=False)
            return EXIT_OK

        bind_context(command=command.name)
        try:
            command.execute(args, self)
            if self._changed:
                self.record_file.save(self.store)
        except UsageError as e:
            self.error(str(e))
            return EXIT_USAGE
        except RecordFileError as e:
            logger.error("record_file_error", path=str(e.path), reason=e.reason)
            self.error(f"Record file {e}")
            return EXIT_ERROR
        finally:
            clear_context()
        return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``loago`` script."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        settings = get_settings()
    except ValidationError as e:
        Console(stderr=True).print(
            f"[bold red]Error:[/bold red] invalid settings\n{escape(str(e))}",
            soft_wrap=True,
        )
        return EXIT_ERROR

    configure_logging(settings)
    return LoagoApp(settings).run(argv)
