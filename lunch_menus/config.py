import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple

import yaml

from lunch_menus.exceptions import ConfigurationError
from lunch_menus.models import MENU_BASE_URL, Location

# Environment keys that must be present for a normal run
REQUIRED_CONFIG = {
    'WEBHOOK_URL': True,
    'OESTERGADE_CHANNEL_ID': True,
    'CAMPUS_CHANNEL_ID': True,
    'MIDTOWN_CHANNEL_ID': True,
    'LOVSTRAEDE_ID': True,
}

DEFAULT_MENU_API_URL = f"{MENU_BASE_URL}/api/WeeklyMenu"
DEFAULT_LOCATIONS_FILE = Path(__file__).resolve().parent.parent / 'locations.yaml'
DEFAULT_HTTP_TIMEOUT = 10.0
TRUTHY = {'1', 'true', 'yes', 'on'}

# Index into the configured locations used when TESTING is on
TEST_LOCATION_INDEX = 1


@dataclass
class ConfigError:
    """Configuration error details"""
    key: str
    value: Any
    message: str
    severity: str = 'error'  # error, warning


@dataclass(frozen=True)
class Settings:
    """Everything a run needs, built once at startup and passed around explicitly"""
    webhook_url: str
    locations: Tuple[Location, ...]
    testing: bool = False
    menu_api_url: str = DEFAULT_MENU_API_URL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT


def validate_url(url: str) -> bool:
    """Validate URL format"""
    return url.startswith(('http://', 'https://'))


def format_error_report(errors: List[ConfigError]) -> str:
    """Format configuration errors into readable report"""
    if not errors:
        return "Configuration validated successfully"

    report = ["Configuration Errors:"]
    for error in errors:
        report.append(f"  • {error.key}: {error.message}")
    return "\n".join(report)


def load_locations(path, env: Mapping[str, str], base_url: str = MENU_BASE_URL) -> Tuple[List[Location], List[ConfigError]]:
    """Read the location catalogue and resolve each channel id from env

    Each entry in the YAML file has name, restaurant_id, other_id and
    channel_env, the environment key holding that location's channel id.
    """
    errors: List[ConfigError] = []

    try:
        with open(path, 'r', encoding='utf-8') as f:
            catalogue = yaml.safe_load(f) or {}
    except OSError as e:
        return [], [ConfigError(key='LOCATIONS_FILE', value=str(path), message=f"Cannot read file: {e}")]
    except yaml.YAMLError as e:
        return [], [ConfigError(key='LOCATIONS_FILE', value=str(path), message=f"Invalid YAML: {e}")]

    entries = catalogue.get('locations') if isinstance(catalogue, dict) else None
    if not entries:
        return [], [ConfigError(key='LOCATIONS_FILE', value=str(path), message="No locations defined")]

    locations = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            errors.append(ConfigError(key=f"locations[{i}]", value=entry, message="Must be a mapping"))
            continue
        missing = [k for k in ('name', 'restaurant_id', 'other_id', 'channel_env') if not entry.get(k)]
        if missing:
            errors.append(ConfigError(
                key=f"locations[{i}]",
                value=entry,
                message=f"Missing fields: {', '.join(missing)}"
            ))
            continue

        channel_id = env.get(entry['channel_env'])
        if not channel_id:
            # Required keys are already reported above
            if entry['channel_env'] not in REQUIRED_CONFIG:
                errors.append(ConfigError(
                    key=entry['channel_env'],
                    value=None,
                    message=f"Missing channel id for {entry['name']}"
                ))
            continue

        locations.append(Location(
            name=entry['name'],
            restaurant_id=str(entry['restaurant_id']),
            other_id=str(entry['other_id']),
            channel_id=channel_id,
            base_url=base_url
        ))

    return locations, errors


def load_settings(env: Optional[Mapping[str, str]] = None, locations_file=None) -> Settings:
    """Validate configuration and build Settings, failing fast on anything missing"""
    if env is None:
        env = os.environ

    errors: List[ConfigError] = []

    for key, required in REQUIRED_CONFIG.items():
        if required and not env.get(key):
            errors.append(ConfigError(
                key=key,
                value=None,
                message="Missing required configuration"
            ))

    webhook_url = env.get('WEBHOOK_URL', '').strip()
    if webhook_url and not validate_url(webhook_url):
        errors.append(ConfigError(
            key='WEBHOOK_URL',
            value=webhook_url,
            message="Must start with http:// or https://"
        ))

    testing = env.get('TESTING', '').strip().lower() in TRUTHY
    test_channel_id = env.get('TEST_CHANNEL_ID')
    if testing and not test_channel_id:
        errors.append(ConfigError(
            key='TEST_CHANNEL_ID',
            value=None,
            message="Required when TESTING is enabled"
        ))

    http_timeout = DEFAULT_HTTP_TIMEOUT
    if env.get('HTTP_TIMEOUT'):
        try:
            http_timeout = float(env['HTTP_TIMEOUT'])
            if http_timeout <= 0:
                raise ValueError
        except ValueError:
            errors.append(ConfigError(
                key='HTTP_TIMEOUT',
                value=env['HTTP_TIMEOUT'],
                message="Must be a positive number of seconds"
            ))

    base_url = (env.get('MENU_BASE_URL') or MENU_BASE_URL).rstrip('/')
    menu_api_url = env.get('MENU_API_URL') or f"{base_url}/api/WeeklyMenu"

    locations, location_errors = load_locations(
        locations_file or env.get('LOCATIONS_FILE') or DEFAULT_LOCATIONS_FILE,
        env,
        base_url=base_url
    )
    errors.extend(location_errors)

    if errors:
        raise ConfigurationError(errors)

    if testing:
        if len(locations) <= TEST_LOCATION_INDEX:
            raise ConfigurationError([ConfigError(
                key='LOCATIONS_FILE',
                value=None,
                message=f"TESTING needs at least {TEST_LOCATION_INDEX + 1} locations"
            )])
        source = locations[TEST_LOCATION_INDEX]
        locations = [Location(
            name=f"Test ({source.name})",
            restaurant_id=source.restaurant_id,
            other_id=source.other_id,
            channel_id=test_channel_id,
            base_url=source.base_url
        )]

    return Settings(
        webhook_url=webhook_url,
        locations=tuple(locations),
        testing=testing,
        menu_api_url=menu_api_url,
        http_timeout=http_timeout
    )
