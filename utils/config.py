"""Configuration loading for TxLens

Settings are layered: built-in defaults, then a JSON settings file, then
environment variables. Command-line flags are applied on top by the CLI.
"""

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger('TxLens')

SOURCES = ('rpc', 'etherscan')

PROJECT_CONFIG = Path(__file__).parent.parent / 'config' / 'settings.json'

ENV_OVERRIDES = {
    'TXLENS_RPC_URL': 'rpc_url',
    'ETHERSCAN_API_KEY': 'etherscan_api_key',
    'TXLENS_NETWORK': 'network',
    'TXLENS_SOURCE': 'source',
    'TXLENS_HOME': 'home',
}


def default_home():
    return Path(os.environ.get('TXLENS_HOME', Path.home() / '.txlens'))


@dataclass
class Config:
    network: str = 'mainnet'
    source: str = 'rpc'
    rpc_url: str = None
    etherscan_api_key: str = None
    timeout: int = 10
    history_limit: int = 10
    home: Path = field(default_factory=default_home)

    @property
    def history_path(self):
        return Path(self.home) / 'history.json'

    @property
    def log_dir(self):
        return Path(self.home) / 'logs'

    def with_overrides(self, **overrides):
        """Return a copy with every non-None override applied"""
        values = {k: v for k, v in overrides.items() if v is not None}
        config = replace(self, **values)
        config.validate()
        return config

    def validate(self):
        if self.source not in SOURCES:
            raise ConfigError(f"Unsupported source '{self.source}' (expected one of {', '.join(SOURCES)})")
        if int(self.timeout) <= 0:
            raise ConfigError("timeout must be positive")
        if int(self.history_limit) <= 0:
            raise ConfigError("history_limit must be positive")


def find_config_file():
    """Locate the settings file: TXLENS_CONFIG, then project, then home"""

    explicit = os.environ.get('TXLENS_CONFIG')
    if explicit:
        return Path(explicit)

    for candidate in (PROJECT_CONFIG, default_home() / 'settings.json'):
        if candidate.exists():
            return candidate

    return None


def load_config_file(path):
    """Read a JSON settings file, returning {} when it cannot be used"""

    if path is None or not Path(path).exists():
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable config file {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config file {path}: expected a JSON object")
        return {}

    known = set(Config.__dataclass_fields__)
    unknown = set(data) - known
    if unknown:
        logger.debug(f"Unknown config keys ignored: {', '.join(sorted(unknown))}")

    return {k: v for k, v in data.items() if k in known}


def load_config(path=None, environ=None):
    """Build the effective configuration"""

    environ = os.environ if environ is None else environ

    values = load_config_file(path if path is not None else find_config_file())

    for env_name, key in ENV_OVERRIDES.items():
        if environ.get(env_name):
            values[key] = environ[env_name]

    if 'home' in values:
        values['home'] = Path(values['home']).expanduser()

    config = Config(**values)
    config.validate()
    return config
