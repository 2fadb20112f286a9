"""Application context with dependency injection."""

from dataclasses import dataclass

from procexec.core.command import CommandInvoker, DryRunCommandInvoker, RealCommandInvoker
from procexec.core.config_store import ConfigStore, ProcexecConfig, RealConfigStore
from procexec.core.shell import DryRunShellInvoker, RealShellInvoker, ShellInvoker


@dataclass(frozen=True)
class ProcexecContext:
    """Immutable context holding all dependencies for CLI commands.

    Created at the CLI entry point and passed to commands via click's ctx.obj.
    Tests build one from fakes with ProcexecContext.for_test().
    """

    command_invoker: CommandInvoker
    shell_invoker: ShellInvoker
    config_store: ConfigStore
    config: ProcexecConfig
    dry_run: bool

    @staticmethod
    def for_test(
        command_invoker: CommandInvoker | None = None,
        shell_invoker: ShellInvoker | None = None,
        config_store: ConfigStore | None = None,
        config: ProcexecConfig | None = None,
        dry_run: bool = False,
    ) -> "ProcexecContext":
        """Create a context with in-memory defaults for anything not supplied.

        Example:
            >>> from tests.fakes.command_invoker import FakeCommandInvoker
            >>> invoker = FakeCommandInvoker(installed={"echo": "/bin/echo"})
            >>> ctx = ProcexecContext.for_test(command_invoker=invoker)
        """
        from procexec.core.config_store import InMemoryConfigStore

        store = config_store or InMemoryConfigStore(config)
        return ProcexecContext(
            command_invoker=command_invoker or RealCommandInvoker(),
            shell_invoker=shell_invoker or RealShellInvoker(),
            config_store=store,
            config=config or store.load(),
            dry_run=dry_run,
        )


def create_context(*, dry_run: bool, config_store: ConfigStore | None = None) -> ProcexecContext:
    """Create production context with real implementations.

    Args:
        dry_run: Wrap invokers so nothing is spawned
        config_store: Override the config location (defaults to ~/.procexec)

    Raises:
        ValueError: If the config file is malformed
    """
    store = config_store or RealConfigStore()
    config = store.load()

    command_invoker: CommandInvoker = RealCommandInvoker()
    shell_invoker: ShellInvoker = RealShellInvoker()
    if dry_run:
        command_invoker = DryRunCommandInvoker(command_invoker)
        shell_invoker = DryRunShellInvoker(shell_invoker)

    return ProcexecContext(
        command_invoker=command_invoker,
        shell_invoker=shell_invoker,
        config_store=store,
        config=config,
        dry_run=dry_run,
    )
