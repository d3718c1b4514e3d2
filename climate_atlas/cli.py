# FILE: climate_atlas/cli.py
# =============================================================================
# Climate Atlas: Typer CLI
#
# Commands
# --------
#   version            Package version + interpreter
#   effective-config   Emit fully resolved config (after overrides) to JSON or YAML
#   classify           Climate type + travel category of a category label
#   normalize          Tokens, normalized keys and alias-resolved keys of a country field
#   variant            Climate variant for (month, country)
#   month              Table of highlighted countries for a month
#   report             Write overview JSON + label GeoJSON for every month
#
# Data commands accept --log-level and bootstrap logging from the config's
# `logging` section (console always; file / JSONL when enabled).
#
# Usage examples
# --------------
#   python -m climate_atlas classify "Ski & snow"
#   python -m climate_atlas variant -c configs/atlas.yaml --month January --country USA
#   python -m climate_atlas month -c configs/atlas.yaml July
#   python -m climate_atlas report -c configs/atlas.yaml -o '{"run":{"output_dir":"out"}}'
# =============================================================================

from __future__ import annotations

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import typer
import yaml
from rich.console import Console
from rich.table import Table

from . import __version__
from .aggregate import canonical_country_keys
from .atlas import AtlasTables, ClimateAtlas
from .classify import classify_category, classify_climate
from .ingest import run_ingest
from .models import MONTH_LABELS_HE, canonical_month
from .normalize import normalize_country_key, split_country_field
from .report import run_report
from .utils.config_loader import resolve_config
from .utils.logging_utils import get_logger, init_logging


app = typer.Typer(add_completion=False, help="Climate Atlas: travel climate by month & country")
console = Console()

# =============================================================================
# Helpers: config, logging
# =============================================================================


def _run_id() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _bootstrap_logging(cfg: Dict[str, Any], level: Optional[str]) -> Tuple[Dict[str, Any], str]:
    """
    Apply the CLI level override, initialize logging, return (cfg, run_id).
    """
    c = dict(cfg or {})
    lc = dict(c.get("logging", {}) or {})
    if level:
        lc["level"] = level
    lc.setdefault("dir", "logs")
    c["logging"] = lc
    rid = _run_id()
    init_logging(c, run_id=rid)
    get_logger("atlas.cli").debug("run_id=%s", rid)
    return c, rid


def _fail(e: Exception) -> typer.Exit:
    typer.secho(str(e), fg=typer.colors.RED, err=True)
    return typer.Exit(code=2)


def _resolve_or_exit(config: Optional[str], overrides: Optional[str] = None) -> Dict[str, Any]:
    try:
        return resolve_config(config, overrides_json=overrides)
    except (FileNotFoundError, ValueError) as e:
        raise _fail(e)


def _tables_or_exit(cfg: Dict[str, Any]) -> AtlasTables:
    try:
        return AtlasTables.from_config(cfg)
    except ValueError as e:
        raise _fail(e)


def _load_atlas(config: Optional[str], overrides: Optional[str], log_level: Optional[str]) -> ClimateAtlas:
    cfg, _ = _bootstrap_logging(_resolve_or_exit(config, overrides), log_level)
    tables = _tables_or_exit(cfg)
    try:
        art = run_ingest(cfg)
    except (FileNotFoundError, ValueError) as e:
        raise _fail(e)
    return ClimateAtlas(
        records=art["records"],
        feature_collection=art["feature_collection"],
        tables=tables,
    )


def _month_or_fail(month: str) -> str:
    m = canonical_month(month)
    if m is None:
        raise typer.BadParameter(f"Unknown month {month!r}; use an English month name, e.g. January")
    return m


# =============================================================================
# Commands
# =============================================================================


@app.command("version")
def cli_version() -> None:
    payload = {"climate_atlas_version": __version__, "python": sys.version.split()[0]}
    typer.echo(json.dumps(payload, indent=2))


@app.command("effective-config")
def cli_effective_config(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to YAML config."),
    overrides: Optional[str] = typer.Option(None, "--override", "-o", help="JSON string of overrides."),
    out: Optional[str] = typer.Option(None, "--out", help="Write resolved config to this path (json|yaml)."),
):
    cfg = _resolve_or_exit(config, overrides)
    if out:
        outp = Path(out)
        outp.parent.mkdir(parents=True, exist_ok=True)
        if outp.suffix.lower() in (".yaml", ".yml"):
            outp.write_text(yaml.safe_dump(cfg, sort_keys=False, allow_unicode=True), encoding="utf-8")
        else:
            outp.write_text(json.dumps(cfg, indent=2, ensure_ascii=False), encoding="utf-8")
        typer.echo(f"Wrote resolved config → {outp.as_posix()}")
    else:
        typer.echo(json.dumps(cfg, indent=2, ensure_ascii=False))


@app.command("classify")
def cli_classify(label: str = typer.Argument(..., help="Free-text category label, e.g. 'Beach & islands'.")):
    payload = {
        "label": label,
        "climate": classify_climate(label).value,
        "category": classify_category(label).value,
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command("normalize")
def cli_normalize(
    value: str = typer.Argument(..., help="Raw country field, e.g. 'Chile / Argentina'."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Config with extra aliases."),
):
    tables = _tables_or_exit(_resolve_or_exit(config))
    tokens = split_country_field(value)
    payload = {
        "value": value,
        "tokens": tokens,
        "normalized": [normalize_country_key(t) for t in tokens],
        "canonical": canonical_country_keys(value, tables.aliases),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command("variant")
def cli_variant(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to YAML config."),
    overrides: Optional[str] = typer.Option(None, "--override", "-o", help="JSON string of overrides."),
    month: str = typer.Option(..., "--month", "-m", help="English month name."),
    country: str = typer.Option(..., "--country", help="Country name (informal names are alias-resolved)."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override logging level (e.g. INFO, DEBUG)."),
):
    m = _month_or_fail(month)
    atlas = _load_atlas(config, overrides, log_level)
    variant = atlas.variant_for(m, country)
    typer.echo(json.dumps({"month": m, "country": country, "variant": variant.value if variant else None}))


@app.command("month")
def cli_month(
    month: str = typer.Argument(..., help="English month name."),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to YAML config."),
    overrides: Optional[str] = typer.Option(None, "--override", "-o", help="JSON string of overrides."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override logging level (e.g. INFO, DEBUG)."),
):
    m = _month_or_fail(month)
    atlas = _load_atlas(config, overrides, log_level)
    rows = atlas.month_overview(m)

    table = Table(title=f"{m} ({MONTH_LABELS_HE[m]}): {len(rows)} countries", show_lines=False)
    table.add_column("Country", style="bold")
    table.add_column("Variant")
    table.add_column("Label at (lat, lng)", justify="right")
    for row in rows:
        where = f"{row.centroid[0]:.2f}, {row.centroid[1]:.2f}" if row.centroid else "[dim]<none>[/dim]"
        table.add_row(row.display_name, row.variant.value if row.variant else "[dim]-[/dim]", where)
    console.print(table)


@app.command("report")
def cli_report(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to YAML config."),
    overrides: Optional[str] = typer.Option(None, "--override", "-o", help="JSON string of overrides."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override logging level (e.g. INFO, DEBUG)."),
):
    cfg, _ = _bootstrap_logging(_resolve_or_exit(config, overrides), log_level)
    try:
        art = run_report(cfg)
    except (FileNotFoundError, ValueError) as e:
        raise _fail(e)
    typer.echo(json.dumps(art, indent=2))


# =============================================================================
# Entrypoint
# =============================================================================


def main() -> None:
    app()


if __name__ == "__main__":
    main()
