"""Node-managed account: unlock, send and balance queries."""
from __future__ import annotations

from typing import Any, Dict, Optional

from .units import normalize_address


class Account:
    def __init__(self, rpc, address: str, logger, label: Optional[str] = None) -> None:
        self.rpc = rpc
        self.address = normalize_address(address)
        self.logger = logger
        self.label = label or self.address

    def unlock(self, password: str, duration: Optional[int] = None) -> bool:
        params = [self.address, password]
        if duration is not None:
            params.append(duration)
        unlocked = self.rpc.send("personal_unlockAccount", params)
        if not unlocked:
            raise RuntimeError(f"Node refused to unlock {self.label}")
        self.logger.info("Unlocked account %s", self.label)
        return True

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        tx_hash = self.rpc.send("eth_sendTransaction", [tx])
        self.logger.info("Sent transaction %s from %s to %s", tx_hash, self.label, tx.get("to"))
        return tx_hash

    def balance(self, block: str = "latest") -> int:
        return int(self.rpc.call("eth_getBalance", [self.address, block]), 16)
