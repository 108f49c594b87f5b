"""
Command-line entry point: `linkedin-insights run`.
"""
from __future__ import annotations

import logging
import zipfile
from pathlib import Path

import click
import pandas as pd
import yaml

from linkedin_insights.lexicons import load_lexicons
from linkedin_insights.pipeline import run_pipeline
from linkedin_insights.settings import load_settings

logger = logging.getLogger("linkedin_insights")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _parse_as_of(ctx, param, value):
    if value is None:
        return None
    try:
        ts = pd.Timestamp(value)
    except ValueError as exc:
        raise click.BadParameter(f"not a timestamp: {value}") from exc
    return ts.tz_localize("UTC") if ts.tz is None else ts.tz_convert("UTC")


@click.group()
def cli():
    pass


@cli.command()
@click.option("--input", "input_path", type=click.Path(path_type=Path), help="Source sheet (.xlsx/.xls/.csv).")
@click.option("--output-dir", type=click.Path(file_okay=False, path_type=Path), help="Where the JSON documents go.")
@click.option("--sheet", default=None, help="Sheet name for Excel input (first sheet by default).")
@click.option("--brand", default=None, help="Brand keyword for the review tabs.")
@click.option("--lexicons", "lexicons_path", type=click.Path(dir_okay=False, path_type=Path),
              help="YAML file overriding word lists and rules.")
@click.option("--as-of", callback=_parse_as_of, default=None,
              help="Reference time for missing timestamps and relative times (ISO-8601).")
@click.option("--charts-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Also export PNG charts and a top-posts CSV here.")
@click.option("--log-level", default="INFO", show_default=True,
              type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def run(input_path, output_dir, sheet, brand, lexicons_path, as_of, charts_dir, log_level):
    """Process the posts sheet and regenerate all output documents."""
    logging.basicConfig(level=getattr(logging, log_level.upper()), format=LOG_FORMAT)
    settings = load_settings()
    input_path = input_path or settings.input_path
    output_dir = output_dir or settings.output_dir

    try:
        lexicons = load_lexicons(lexicons_path or settings.lexicons_path, brand=brand or settings.brand)
        result = run_pipeline(
            input_path,
            output_dir,
            sheet=sheet or settings.sheet,
            now=as_of,
            lexicons=lexicons,
            top_keywords=settings.top_keywords,
            trend_days=settings.trend_days,
            charts_dir=charts_dir,
        )
    except (OSError, ValueError, yaml.YAMLError, zipfile.BadZipFile) as exc:
        logger.error("Pipeline failed: %s", exc)
        raise click.ClickException(str(exc)) from exc

    click.echo(f"Processed {result.analytics['totalPosts']} posts")
    for path in result.written:
        click.echo(f"  - {path}")


if __name__ == "__main__":  # pragma: no cover
    cli()
