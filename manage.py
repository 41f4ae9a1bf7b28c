#!/usr/bin/env python3
"""
Management script for the work order forms
"""

import json
import os
import sys

import click

# Add the current directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from utils.log_config import configure_logging  # noqa: E402
from config import config  # noqa: E402
from models.work_order import InvalidWorkOrderError, WorkOrderDetail  # noqa: E402
from utils.work_order_pdf import (  # noqa: E402
    company_info_from_config,
    generate_drop_off_form,
    generate_pick_up_form,
)


def _settings():
    config_class = config.get(os.environ.get("FLASK_ENV", "default"), config["default"])
    return {key: getattr(config_class, key) for key in dir(config_class) if key.isupper()}


def _load_work_order(json_file):
    try:
        data = json.load(json_file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"{json_file.name} is not valid JSON: {e}")
    try:
        return WorkOrderDetail.from_dict(data)
    except InvalidWorkOrderError as e:
        raise click.ClickException(str(e))


def _render(generate, json_file, output_dir):
    settings = _settings()
    work_order = _load_work_order(json_file)
    path = generate(
        work_order,
        company_info=company_info_from_config(settings),
        output_dir=output_dir or settings["FORMS_OUTPUT_DIR"],
        invariant=settings["PDF_INVARIANT"],
    )
    click.echo(f"✅ Wrote {path}")


@click.group()
def cli():
    """Work order forms CLI"""
    configure_logging(_settings()["LOG_LEVEL"])


@cli.command("render-drop-off")
@click.argument("json_file", type=click.File("r"))
@click.option("--output-dir", default=None, help="Directory for the PDF (default: FORMS_OUTPUT_DIR)")
def render_drop_off(json_file, output_dir):
    """Render the customer drop-off form for a work order JSON file"""
    _render(generate_drop_off_form, json_file, output_dir)


@cli.command("render-pick-up")
@click.argument("json_file", type=click.File("r"))
@click.option("--output-dir", default=None, help="Directory for the PDF (default: FORMS_OUTPUT_DIR)")
def render_pick_up(json_file, output_dir):
    """Render the customer pick-up form for a work order JSON file"""
    _render(generate_pick_up_form, json_file, output_dir)


if __name__ == "__main__":
    cli()
