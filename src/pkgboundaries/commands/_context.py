"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Loads the policy and plugins lazily and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

from pkgboundaries.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from pkgboundaries.config.settings import BoundarySettings
    from pkgboundaries.domain.policy import Policy
    from pkgboundaries.plugins.manager import PluginManager
    from pkgboundaries.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The policy file is read on first access so ``--help`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: BoundarySettings) -> None:
        self.settings = settings
        self._policy: Policy | None = None
        self._plugins: PluginManager | None = None

        from pkgboundaries.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def load_policy(self, op: str) -> Policy:
        """Return the policy, or emit a CONFIG_PARSE_ERROR result and exit."""
        if self._policy is None:
            from pkgboundaries.domain.errors import ConfigParseError
            from pkgboundaries.infrastructure.policy_file import load_policy
            from pkgboundaries.services.policy import config_error_result

            try:
                self._policy = load_policy(self.settings.policy_path)
            except ConfigParseError as exc:
                self.fail(config_error_result(op, exc))
        return self._policy

    @property
    def plugins(self) -> PluginManager:
        """Entry-point plugins plus the built-in skip-tests plugin."""
        if self._plugins is None:
            from pkgboundaries.plugins.builtins.skip_tests import SkipTestsPlugin
            from pkgboundaries.plugins.manager import PluginManager

            pm = PluginManager()
            pm.register_plugin(
                SkipTestsPlugin(enabled=self.settings.skip_tests),
                name="skip-tests-builtin",
            )
            pm.discover_and_load()
            self._plugins = pm
        return self._plugins

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        if not result.ok:
            self.fail(result)
        output = format_result(result, settings=self._output_settings())
        if output:
            click.echo(output)
        if not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)

    def fail(self, result: ServiceResult) -> NoReturn:
        output = format_result(result, settings=self._output_settings())
        click.echo(output, err=True)
        if not self.settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {warning}", err=True)
        raise SystemExit(1)

    def _output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
