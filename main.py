from __future__ import annotations

import argparse
from getpass import getpass
from typing import List, Optional

from staking.config import ConfigError, NetworkSettings, load_config, parse_settings
from staking.logger import logger_from_config
from staking.registration import PartnerRegistration, RegistrationResult
from staking.rpc import RPCClient


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fund a miner and register it as a staking partner")
    parser.add_argument("--config", default="config.yaml", help="Path to config file")
    parser.add_argument(
        "--local-config",
        default="config.local.yaml",
        help="Secret overrides path (account password)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Build and log transactions without sending")
    parser.add_argument("--password-prompt", action="store_true", help="Read the account password from the terminal")
    return parser.parse_args(argv)


def build_rpc(net: NetworkSettings, logger) -> RPCClient:
    return RPCClient(
        net.rpc_nodes,
        logger,
        retry_attempts=net.retry_attempts,
        retry_wait_seconds=net.retry_wait_seconds,
        timeout_seconds=net.timeout_seconds,
        rate_limit_per_sec=net.rate_limit_per_sec,
    )


def main(argv: Optional[List[str]] = None) -> RegistrationResult:
    args = parse_args(argv)
    cfg = load_config(args.config, args.local_config)
    logger = logger_from_config(cfg)

    try:
        settings = parse_settings(cfg)
    except ConfigError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    password = settings.registration.password
    if args.password_prompt:
        password = getpass(f"Password for {settings.registration.base_address}: ")
    if not password and not args.dry_run:
        raise SystemExit("Account password missing. Set secrets.password in config.local.yaml or use --password-prompt.")

    rpc = build_rpc(settings.network, logger)
    registration = PartnerRegistration(rpc, logger, settings.registration)
    return registration.run(password, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
