"""Config loader with optional overrides for secrets/local settings."""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .contract import STAKING_CONTRACT_ADDRESS
from .units import normalize_address

MIN_STAKE_VALUE = 100000
DEFAULT_STAKE_VALUE = 500000
DEFAULT_GAS_VALUE = 1
DEFAULT_GAS_LIMIT = 200000
DEFAULT_GAS_PRICE = 200000000000
PASSWORD_PLACEHOLDER = "PASTE"


class ConfigError(ValueError):
    """Raised when the merged configuration cannot drive a registration."""


@dataclass(frozen=True)
class NetworkSettings:
    rpc_nodes: List[Dict[str, str]]
    retry_attempts: int = 3
    retry_wait_seconds: int = 1
    timeout_seconds: int = 10
    rate_limit_per_sec: Optional[float] = None


@dataclass(frozen=True)
class RegistrationSettings:
    base_address: str
    miner_address: str
    password: Optional[str]
    stake_value: Decimal = Decimal(DEFAULT_STAKE_VALUE)
    gas_value: Decimal = Decimal(DEFAULT_GAS_VALUE)
    renewal: bool = True
    contract_address: str = STAKING_CONTRACT_ADDRESS
    gas_limit: int = DEFAULT_GAS_LIMIT
    gas_price: int = DEFAULT_GAS_PRICE
    unlock_duration: Optional[int] = None


@dataclass(frozen=True)
class Settings:
    network: NetworkSettings
    registration: RegistrationSettings


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open() as handle:
        return yaml.safe_load(handle) or {}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(base_path: str = "config.yaml", local_path: Optional[str] = None) -> Dict[str, Any]:
    base_file = Path(base_path)
    if not base_file.exists():
        raise FileNotFoundError(f"Config file not found: {base_file}")
    config = _read_yaml(base_file)

    if local_path:
        local_file = Path(local_path)
        if local_file.exists():
            config = _deep_merge(config, _read_yaml(local_file))
    return config


def _section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"{name} must be a mapping, got {section!r}")
    return section


def _address(section: Dict[str, Any], key: str, default: Optional[str] = None) -> str:
    value = section.get(key) or default
    if not value:
        raise ConfigError(f"{key} is not set")
    try:
        return normalize_address(value)
    except ValueError as exc:
        raise ConfigError(f"{key}: {exc}") from exc


def _amount(section: Dict[str, Any], key: str, default: int) -> Decimal:
    value = section.get(key, default)
    if isinstance(value, bool) or value is None:
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ConfigError(f"{key} must be a number, got {value!r}") from exc
    if not amount.is_finite():
        raise ConfigError(f"{key} must be finite, got {value!r}")
    return amount


def _integer(
    section: Dict[str, Any],
    key: str,
    default: Optional[int],
    minimum: int = 0,
    optional: bool = False,
) -> Optional[int]:
    value = section.get(key, default)
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"{key} must be at least {minimum}, got {value}")
    return value


def _password(secrets: Dict[str, Any]) -> Optional[str]:
    password = secrets.get("password")
    if password is None:
        return None
    # YAML loads unquoted digits as numbers.
    password = str(password)
    if not password or PASSWORD_PLACEHOLDER in password:
        return None
    return password


def parse_network(cfg: Dict[str, Any]) -> NetworkSettings:
    net_cfg = _section(cfg, "network")
    rpc_nodes = net_cfg.get("rpc_nodes") or []
    if not isinstance(rpc_nodes, list) or not rpc_nodes or any(
        not isinstance(node, dict) or not node.get("url") for node in rpc_nodes
    ):
        raise ConfigError("network.rpc_nodes must list at least one node with a url")

    rate_limit = net_cfg.get("rate_limit_per_sec")
    if rate_limit is not None:
        if isinstance(rate_limit, bool) or not isinstance(rate_limit, (int, float)) or rate_limit <= 0:
            raise ConfigError(f"rate_limit_per_sec must be a positive number, got {rate_limit!r}")

    return NetworkSettings(
        rpc_nodes=rpc_nodes,
        retry_attempts=_integer(net_cfg, "retry", 3, minimum=1),
        retry_wait_seconds=_integer(net_cfg, "retry_wait", 1),
        timeout_seconds=_integer(net_cfg, "timeout", 10, minimum=1),
        rate_limit_per_sec=rate_limit,
    )


def parse_settings(cfg: Dict[str, Any]) -> Settings:
    account_cfg = _section(cfg, "account")
    stake_cfg = _section(cfg, "stake")
    secrets = _section(cfg, "secrets")

    stake_value = _amount(stake_cfg, "value", DEFAULT_STAKE_VALUE)
    if stake_value < MIN_STAKE_VALUE:
        raise ConfigError(f"stake value {stake_value} is below the minimum of {MIN_STAKE_VALUE}")
    gas_value = _amount(stake_cfg, "gas_value", DEFAULT_GAS_VALUE)
    if gas_value < 0:
        raise ConfigError(f"gas_value must not be negative, got {gas_value}")

    renewal = stake_cfg.get("renewal", True)
    if not isinstance(renewal, bool):
        raise ConfigError(f"renewal must be true or false, got {renewal!r}")

    registration = RegistrationSettings(
        base_address=_address(account_cfg, "base_address"),
        miner_address=_address(account_cfg, "miner_address"),
        password=_password(secrets),
        stake_value=stake_value,
        gas_value=gas_value,
        renewal=renewal,
        contract_address=_address(stake_cfg, "contract_address", STAKING_CONTRACT_ADDRESS),
        gas_limit=_integer(stake_cfg, "gas", DEFAULT_GAS_LIMIT, minimum=21000),
        gas_price=_integer(stake_cfg, "gas_price", DEFAULT_GAS_PRICE),
        unlock_duration=_integer(account_cfg, "unlock_duration", None, optional=True),
    )
    return Settings(network=parse_network(cfg), registration=registration)


__all__ = ["ConfigError", "Settings", "load_config", "parse_network", "parse_settings"]
