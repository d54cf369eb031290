"""StyleGuard CLI — Click-based command-line interface.

Commands:
  check     Check a settings file against the house style
  fix       Apply the house style to a settings file
  fix-file  Fix settings, then reorder a Java file's imports
  init      Write a settings file already matching the house style
  rules     List the house-style rules
  serve     Run the REST API
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from styleguard import __version__
from styleguard.errors import StyleGuardError


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _checker(ctx: click.Context):
    from styleguard.check.checker import ComplianceChecker

    try:
        return ComplianceChecker(profile_path=ctx.obj.get("profile"))
    except StyleGuardError as e:
        raise click.ClickException(str(e)) from e


def _open_store(path: str):
    from styleguard.settings.store import YamlSettingsStore

    try:
        return YamlSettingsStore(path)
    except StyleGuardError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="StyleGuard")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("-p", "--profile", type=click.Path(exists=True, dir_okay=False),
              help="House-style profile (YAML)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, profile: str | None) -> None:
    """StyleGuard — house-style checks and fixes for IDE code-style settings.

    Checks auto-import, wildcard-import, import-layout and indent-detection
    settings, and rewrites them to the house baseline.
    """
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile


@cli.command()
@click.argument("settings_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(["text", "json"]),
              default="text", help="Report format")
@click.option("-o", "--output", type=click.Path(), help="Output report file")
@click.option("-i", "--interactive", is_flag=True, help="Offer to fix violations")
@click.pass_context
def check(ctx: click.Context, settings_file: str, fmt: str, output: str | None,
          interactive: bool) -> None:
    """Check a settings file. Exits with status 1 when not compliant."""
    from styleguard.report.generator import ReportGenerator

    checker = _checker(ctx)
    store = _open_store(settings_file)
    reporter = ReportGenerator()

    if interactive:
        from styleguard.actions import StyleGuardActions
        from styleguard.notify.notifier import ConsoleNotifier

        actions = StyleGuardActions(checker, ConsoleNotifier(interactive=True))
        actions.on_project_open(settings_file, store)

    report = checker.check(store, source=settings_file)

    if fmt == "json":
        click.echo(reporter.generate_json(report, output))
    else:
        _display_score(report.compliance_score)
        if report.compliant:
            click.echo(click.style("\nNo house-style violations found!", fg="green"))
        else:
            click.echo(f"\n{len(report.violations)} violations:")
            for name in report.violations:
                click.echo(click.style("  [VIOLATION] ", fg="yellow")
                           + f"{report.titles.get(name, name)} ({name})")
        if output:
            reporter.generate_text(report, output)
            click.echo(f"\nReport saved: {output}")

    if not report.compliant:
        ctx.exit(1)


@cli.command()
@click.argument("settings_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(["text", "json"]), default="text")
@click.pass_context
def fix(ctx: click.Context, settings_file: str, fmt: str) -> None:
    """Apply the house style to a settings file."""
    from styleguard.report.generator import ReportGenerator

    checker = _checker(ctx)
    store = _open_store(settings_file)
    reporter = ReportGenerator()

    result = checker.fix(store)
    if fmt == "json":
        click.echo(reporter.generate_json(result))
    else:
        color = "green" if result.closed else "yellow"
        click.echo(click.style(reporter.generate_fix_text(result), fg=color))

    if not result.closed:
        ctx.exit(1)


@cli.command("fix-file")
@click.argument("settings_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("source_file", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def fix_file(ctx: click.Context, settings_file: str, source_file: str) -> None:
    """Silently apply the house style, then reorder SOURCE_FILE's imports."""
    from styleguard.actions import StyleGuardActions

    actions = StyleGuardActions(_checker(ctx))
    store = _open_store(settings_file)
    result = actions.fix_file_imports(store, source_file)
    click.echo(f"Imports optimized: {source_file}")
    if not result.closed:
        click.echo(click.style(
            f"Settings still non-compliant: {', '.join(result.remaining)}", fg="yellow"))


@cli.command()
@click.argument("settings_file", type=click.Path(dir_okay=False))
@click.option("--no-module-imports", is_flag=True,
              help="Model a host without a module-import group")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(settings_file: str, no_module_imports: bool, force: bool) -> None:
    """Write a settings file that already matches the house style."""
    from styleguard.settings.store import YamlSettingsStore, default_host_settings

    if Path(settings_file).exists() and not force:
        raise click.ClickException(f"{settings_file} exists (use --force to overwrite)")
    YamlSettingsStore.create(settings_file, default_host_settings(not no_module_imports))
    click.echo(f"Settings written: {settings_file}")


@cli.command()
@click.pass_context
def rules(ctx: click.Context) -> None:
    """List the house-style rules."""
    checker = _checker(ctx)
    rule_list = checker.engine.rules

    click.echo(f"Profile: {checker.profile.name}")
    click.echo(f"Loaded rules: {len(rule_list)}")
    click.echo()
    for rule in rule_list:
        click.echo(f"  {rule.name:34s} " + click.style(rule.title, fg="blue"))
    if checker.profile.disabled_rules:
        click.echo(f"\nDisabled: {', '.join(checker.profile.disabled_rules)}")


@cli.command()
@click.option("--port", default=5000, help="API port")
@click.option("--host", default="127.0.0.1", help="API host")
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def serve(ctx: click.Context, port: int, host: str, debug: bool) -> None:
    """Run the StyleGuard REST API."""
    from styleguard.api.app import create_app

    app = create_app(_checker(ctx))
    click.echo(f"StyleGuard API: http://{host}:{port}/api/v1/status")
    app.run(host=host, port=port, debug=debug)


def _display_score(score: float) -> None:
    """Display compliance score with color."""
    if score >= 100:
        color = "green"
    elif score >= 80:
        color = "yellow"
    else:
        color = "red"
    click.echo(click.style(f"\nCompliance Score: {score}%", fg=color, bold=True))


if __name__ == "__main__":
    cli()
