#!/usr/bin/env python3
"""Print base and miner balances to check funding around a registration."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from eth_utils import from_wei  # noqa: E402

from main import build_rpc  # noqa: E402
from staking.config import ConfigError, load_config, parse_network  # noqa: E402
from staking.logger import logger_from_config  # noqa: E402
from staking.wallet import Account  # noqa: E402


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show balances of the configured accounts")
    parser.add_argument("--config", default="config.yaml", help="Base config path")
    parser.add_argument("--local-config", default="config.local.yaml", help="Secret overrides path")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> Dict[str, int]:
    args = parse_args(argv)
    cfg = load_config(args.config, args.local_config)
    account_cfg = cfg.get("account") or {}

    try:
        net = parse_network(cfg)
    except ConfigError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    logger = logger_from_config(cfg, name="show-account")
    rpc = build_rpc(net, logger)

    balances = {}
    for label in ("base_address", "miner_address"):
        address = account_cfg.get(label)
        if not address:
            logger.warning("%s is not set", label)
            continue
        account = Account(rpc, address, logger, label=label)
        balances[label] = account.balance()
        logger.info("%s %s balance: %s", label, account.address, from_wei(balances[label], "ether"))
    return balances


if __name__ == "__main__":
    main()
