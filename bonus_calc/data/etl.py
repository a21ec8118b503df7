"""
Configuration loading for the bonus calculator.
Reads the YAML parameter file and validates the marketing event catalog.
"""
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, Tuple
import logging

from bonus_calc.constants import (
    DEFAULT_SOZ, DEFAULT_MONTHS, DEFAULT_PHARMACIES,
    DEFAULT_TIER_KEY, DEFAULT_COMPARISON_MONTHS, DEFAULT_LABELS
)
from bonus_calc.models.events import MarketingEvent, ensure_unique_ids

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "conf" / "params.yml"

# Expected schema for event records
EVENT_SCHEMA = {
    'required_keys': ['id', 'name', 'share_of_purchase', 'profitability'],
    'numeric_keys': ['share_of_purchase', 'profitability'],
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    try:
        with open(path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse config {path}: {e}")
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    except Exception as e:
        logger.error(f"Failed to load config from {path}: {e}")
        raise

    if not isinstance(config, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(config).__name__}")

    logger.info(f"Loaded config from {path}")
    return config


def validate_event_record(record: Dict[str, Any], position: int) -> None:
    """Validate one raw event record against the expected schema."""
    if not isinstance(record, dict):
        raise ValueError(f"Event #{position} must be a mapping, got {type(record).__name__}")

    missing = [k for k in EVENT_SCHEMA['required_keys'] if k not in record]
    if missing:
        raise ValueError(f"Event #{position} is missing required keys: {missing}")

    for key in EVENT_SCHEMA['numeric_keys']:
        value = record[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"Event '{record['id']}': {key} should be numeric but got {value!r}")

    if 'enabled' in record and not isinstance(record['enabled'], bool):
        raise ValueError(f"Event '{record['id']}': enabled should be true or false")


def load_event_catalog(config: Dict[str, Any]) -> Tuple[MarketingEvent, ...]:
    """
    Parse and validate the marketing event catalog.

    Args:
        config: Configuration dict with an 'events' list

    Returns:
        Tuple of MarketingEvent in configuration order

    Raises:
        ValueError: If the catalog is missing, malformed or has duplicate ids
    """
    records = config.get('events')
    if not isinstance(records, list):
        raise ValueError("Configuration must contain an 'events' list")

    for position, record in enumerate(records, start=1):
        validate_event_record(record, position)

    events = tuple(MarketingEvent.from_dict(r) for r in records)
    ensure_unique_ids(events)

    logger.info(f"Loaded {len(events)} marketing events")
    return events


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping")
    return section


def load_default_inputs(config: Dict[str, Any]) -> Dict[str, Any]:
    """Default soz/months/pharmacies from config, with program fallbacks."""
    inputs = _section(config, 'inputs')
    return {
        'soz': inputs.get('soz', DEFAULT_SOZ),
        'months': inputs.get('months', DEFAULT_MONTHS),
        'pharmacies': inputs.get('pharmacies', DEFAULT_PHARMACIES),
    }


def load_deep_integration(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep integration settings: default tier, period and requirement texts.

    Raises:
        ValueError: If period_months is not a positive integer, default_tier
            is not a scalar or requirements is not a list
    """
    section = _section(config, 'deep_integration')

    # YAML reads an unquoted 1.5 or 3 as a number
    tier = section.get('default_tier', DEFAULT_TIER_KEY)
    if isinstance(tier, bool) or not isinstance(tier, (str, int, float)):
        raise ValueError(f"deep_integration.default_tier should be a tier key but got {tier!r}")

    period = section.get('period_months', DEFAULT_COMPARISON_MONTHS)
    if isinstance(period, bool) or not isinstance(period, int) or period <= 0:
        raise ValueError(f"deep_integration.period_months should be a positive integer but got {period!r}")

    requirements = section.get('requirements') or []
    if not isinstance(requirements, list):
        raise ValueError("deep_integration.requirements should be a list")

    return {
        'default_tier': str(tier),
        'period_months': period,
        'requirements': [str(item) for item in requirements],
    }


def load_labels(config: Dict[str, Any]) -> Dict[str, str]:
    """Display labels for the breakdown table's surcharge and total rows."""
    labels = _section(config, 'labels')
    return {
        'complex_letter': str(labels.get('complex_letter', DEFAULT_LABELS['complex_letter'])),
        'total': str(labels.get('total', DEFAULT_LABELS['total'])),
    }


def default_event_catalog() -> Tuple[MarketingEvent, ...]:
    """The ten default program events from the packaged configuration."""
    return load_event_catalog(load_config())
