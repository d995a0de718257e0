from __future__ import annotations

import json
import pathlib
from typing import Optional

import click
import typer
import structlog
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import FormConfig, load_config, load_ruleset
from .engine.adapters import MessageCatalog
from .engine.form import FormValidator, load_records
from .errors import RecordFormatError, UnknownRuleError
from .rules.validators import RULES, run_rule
from .utils.data import plain_number

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="formguard — form-field validator")


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"formguard {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to a form rule set (.yaml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(processors=[structlog.processors.JSONRenderer()])
    try:
        cfg = load_config(config) if config else FormConfig()
    except (ValidationError, yaml.YAMLError, OSError) as e:
        raise typer.BadParameter(f"cannot load config: {e}", param_hint="--config")
    ctx.obj = {"config": cfg, "verbose": verbose}
    if verbose:
        log.info("verbose_enabled")


@app.command()
def check(
    rule: str = typer.Argument(..., help="Rule name (see `formguard rules`)"),
    value: str = typer.Argument(..., help="Value to validate"),
    allow_empty: bool = typer.Option(False, "--allow-empty", help="Treat an empty value as valid"),
    minimum: float = typer.Option(1, "--min", help="Lower bound for number_min"),
    maximum: float = typer.Option(100, "--max", help="Upper bound for number_max"),
    tip: str = typer.Option("", "--tip", help="Message used when number_max is exceeded"),
):
    """Validate a single value."""
    cfg: FormConfig = click.get_current_context().obj["config"]
    try:
        outcome = run_rule(rule, value, allow_empty=allow_empty, minimum=minimum, maximum=maximum, tip=tip)
    except UnknownRuleError as e:
        raise typer.BadParameter(str(e), param_hint="RULE")
    if outcome.ok:
        console.print("[green]valid[/green]")
        return
    message = MessageCatalog(cfg.messages).resolve(rule, outcome, min=plain_number(minimum), max=plain_number(maximum))
    console.print(f"[red]invalid[/red]: {outcome.reason.value} ({message})")
    raise typer.Exit(code=1)


@app.command()
def form(
    records: pathlib.Path = typer.Argument(..., help="JSON, JSON Lines or YAML file of records"),
    ruleset: Optional[str] = typer.Option(None, "--ruleset", help="Built-in rule set (e.g. registration)"),
    report: Optional[pathlib.Path] = typer.Option(None, "--report", help="Write a JSON report to this path"),
):
    """Validate every record in a file against a rule set."""
    ctx = click.get_current_context()
    cfg: FormConfig = ctx.obj["config"]
    if ruleset:
        try:
            cfg = load_ruleset(ruleset)
        except FileNotFoundError:
            raise typer.BadParameter(f"no built-in rule set named {ruleset!r}", param_hint="--ruleset")
    if not cfg.fields:
        raise typer.BadParameter("no fields to check; pass --config or --ruleset")
    try:
        rows = load_records(records)
    except (RecordFormatError, OSError) as e:
        raise typer.BadParameter(str(e), param_hint="RECORDS")

    validator = FormValidator(cfg)
    if ctx.obj["verbose"]:
        log.info("form_loaded", fields=list(cfg.fields), records=len(rows))

    table = Table(title="Failures")
    table.add_column("record", justify="right")
    table.add_column("field")
    table.add_column("reason")
    table.add_column("message")

    failed = 0
    entries = []
    for i, result in enumerate(validator.validate_many(rows)):
        entries.append({"index": i, "ok": result.ok, "errors": result.errors})
        if result.ok:
            continue
        failed += 1
        if ctx.obj["verbose"]:
            log.info("record_failed", index=i, fields=sorted(result.errors))
        for fr in result.fields:
            if not fr.outcome.ok:
                table.add_row(str(i), fr.name, fr.outcome.reason.value, fr.message or "")

    if failed:
        console.print(table)
    console.print(f"Checked {len(rows)} records, {failed} failed")
    if report:
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(json.dumps({"records": len(rows), "failed": failed, "results": entries},
                                     ensure_ascii=False, indent=2), encoding="utf-8")
        console.print(f"[green]Report written:[/green] {report}")
    if failed:
        raise typer.Exit(code=1)


@app.command()
def rules():
    """List the available rule names."""
    for name in RULES:
        console.print(name)
