#!/usr/bin/env python3
"""
Command-line interface for the pharmacy bonus calculator.
Simple commands that do one thing well.
"""

import click
import json
import logging
import sys
from dataclasses import asdict
from typing import Iterable, Tuple

from bonus_calc import __version__
from bonus_calc.access.tiers import TIERS, compare_scenarios, get_tier
from bonus_calc.data.etl import (
    load_config, load_event_catalog, load_default_inputs, load_deep_integration, load_labels
)
from bonus_calc.models.bonus import calculate
from bonus_calc.models.events import (
    MarketingEvent, set_event_enabled, update_event_share, update_event_profitability
)
from bonus_calc.reports.tables import (
    event_breakdown_frame, comparison_frame, format_currency, format_percent
)

logger = logging.getLogger(__name__)


def _parse_assignment(value: str) -> Tuple[str, float]:
    """Parse ID=VALUE into (id, float)."""
    if '=' not in value:
        raise click.BadParameter(f"Expected ID=VALUE, got {value!r}")
    event_id, raw = value.split('=', 1)
    try:
        return event_id.strip(), float(raw)
    except ValueError:
        raise click.BadParameter(f"Not a number: {raw!r}")


def _apply_overrides(events: Tuple[MarketingEvent, ...],
                     disabled: Iterable[str],
                     shares: Iterable[str],
                     profitabilities: Iterable[str]) -> Tuple[MarketingEvent, ...]:
    for event_id in disabled:
        events = set_event_enabled(events, event_id, False)
    for item in shares:
        event_id, share = _parse_assignment(item)
        events = update_event_share(events, event_id, share)
    for item in profitabilities:
        event_id, profitability = _parse_assignment(item)
        events = update_event_profitability(events, event_id, profitability)
    return events


def _run_calculation(config_path, soz, months, pharmacies, disable, share, profitability):
    """Load config, apply CLI overrides and compute; exits on bad input."""
    try:
        config = load_config(config_path)
        events = load_event_catalog(config)
        defaults = load_default_inputs(config)
        events = _apply_overrides(events, disable, share, profitability)
        logger.debug(f"{sum(e.enabled for e in events)} of {len(events)} events enabled")
        result = calculate(
            soz if soz is not None else defaults['soz'],
            months if months is not None else defaults['months'],
            pharmacies if pharmacies is not None else defaults['pharmacies'],
            events,
        )
    except (ValueError, KeyError, FileNotFoundError) as e:
        click.secho(f"Error: {e}", fg='red')
        sys.exit(1)
    return config, result


def _load_settings(loader, config):
    """Read one config section; exits on a malformed section."""
    try:
        return loader(config)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red')
        sys.exit(1)


def calculation_options(func):
    """Shared input options for calculate and compare."""
    options = [
        click.option('--config', 'config_path', type=click.Path(dir_okay=False),
                     help='YAML configuration file'),
        click.option('--soz', type=float, help='Quarterly purchase volume (RUB)'),
        click.option('--months', type=int, help='Number of months'),
        click.option('--pharmacies', type=int, help='Number of pharmacies'),
        click.option('--disable', multiple=True, metavar='ID', help='Disable an event'),
        click.option('--share', multiple=True, metavar='ID=VALUE',
                     help='Override share of purchase (%)'),
        click.option('--profitability', multiple=True, metavar='ID=VALUE',
                     help='Override profitability (%)'),
        click.option('--json', 'as_json', is_flag=True, help='Print JSON instead of a table'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """ProApteka bonus calculator CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='[%(levelname)s] %(message)s'
    )


@cli.command(name='calculate')
@calculation_options
def calculate_cmd(config_path, soz, months, pharmacies, disable, share, profitability, as_json):
    """Calculate the bonus for the current event catalog."""
    config, result = _run_calculation(config_path, soz, months, pharmacies, disable, share, profitability)

    if as_json:
        click.echo(json.dumps(asdict(result), indent=2, ensure_ascii=False))
        return

    table = event_breakdown_frame(result, _load_settings(load_labels, config))
    click.echo("=" * 50)
    click.echo(table.to_string(index=False, float_format=lambda v: f"{v:,.2f}"))
    click.echo("=" * 50)
    click.echo(f"  Total purchase volume: {format_currency(result.total_soz)}")
    click.echo(f"  Total bonus:           {format_currency(result.total_bonus)}")
    click.echo(f"  Bonus per month:       {format_currency(result.bonus_per_month)}")
    click.echo(f"  Bonus share:           {format_percent(result.bonus_percentage)}")
    click.echo(f"  Marketing share:       {format_percent(result.total_marketing_share)}")


@cli.command()
@calculation_options
@click.option('--tier', default=None, help='Deep integration tier (1.5, 3, 4, 5)')
@click.option('--period-months', type=int, default=None,
              help='Months used for the deep integration monthly bonus')
def compare(config_path, soz, months, pharmacies, disable, share, profitability, as_json,
            tier, period_months):
    """Compare the baseline bonus with deep integration."""
    config, result = _run_calculation(
        config_path, soz, months, pharmacies, disable, share, profitability
    )
    settings = _load_settings(load_deep_integration, config)
    tier_key = tier if tier is not None else settings['default_tier']
    period = period_months if period_months is not None else settings['period_months']

    if tier_key not in TIERS:
        click.secho(f"Unknown tier {tier_key!r}, using {get_tier(tier_key).key}", fg='yellow', err=True)

    try:
        comparison = compare_scenarios(result.to_scenario(), tier_key, period)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red')
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(asdict(comparison), indent=2, ensure_ascii=False))
        return

    click.echo(f"\nDeep integration tier {comparison.tier.key}% ({comparison.tier.name})")
    click.echo(comparison_frame(comparison).to_string(float_format=lambda v: f"{v:,.2f}"))
    delta = comparison.difference
    click.echo(f"\n  Bonus difference: {format_currency(delta.bonus_difference)} "
               f"({delta.bonus_difference_percent:+.1f}%)")


@cli.command()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='YAML configuration file')
def tiers(config_path):
    """List deep integration tiers and their requirements."""
    try:
        settings = load_deep_integration(load_config(config_path))
    except (ValueError, FileNotFoundError) as e:
        click.secho(f"Error: {e}", fg='red')
        sys.exit(1)

    for tier in TIERS.values():
        click.echo(f"  {tier.key:>4}%  {tier.name:<12} {tier.description}")

    if settings['requirements']:
        click.echo("\nRequirements:")
        for item in settings['requirements']:
            click.echo(f"  - {item}")


@cli.command()
@click.option('--config', 'config_path', type=click.Path(dir_okay=False),
              help='YAML configuration file')
def events(config_path):
    """List the marketing event catalog."""
    try:
        catalog = load_event_catalog(load_config(config_path))
    except (ValueError, FileNotFoundError) as e:
        click.secho(f"Error: {e}", fg='red')
        sys.exit(1)

    for event in catalog:
        flag = '[+]' if event.enabled else '[-]'
        click.echo(f"  {flag} {event.id:<12} share {event.share_of_purchase:>6.2f}%  "
                   f"profitability {event.profitability:>6.2f}%  {event.name}")


if __name__ == '__main__':
    cli()
