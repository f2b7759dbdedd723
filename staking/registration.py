"""Partner registration: fund the miner, then call partnerIn on the staking contract."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .config import RegistrationSettings
from .contract import Contract, staking_contract
from .units import to_quantity, to_win
from .wallet import Account


@dataclass
class RegistrationResult:
    funding_tx: Optional[str]
    partner_tx: Optional[str]


class PartnerRegistration:
    def __init__(
        self,
        rpc,
        logger,
        settings: RegistrationSettings,
        contract: Optional[Contract] = None,
    ) -> None:
        self.rpc = rpc
        self.logger = logger
        self.settings = settings
        self.contract = contract or staking_contract(settings.contract_address)
        self.account = Account(rpc, settings.base_address, logger, label="base")

    def funding_transaction(self) -> Dict[str, Any]:
        return {
            "from": self.settings.base_address,
            "to": self.settings.miner_address,
            "value": to_quantity(to_win(self.settings.gas_value)),
        }

    def contract_transaction(self, function: str, value: int, *args: Any) -> Dict[str, Any]:
        if value and not self.contract.is_payable(function):
            raise ValueError(f"{function} is not payable but {value} was attached")
        tx = {
            "from": self.settings.base_address,
            "to": self.contract.address,
            "data": self.contract.encode_call(function, *args),
            "gas": to_quantity(self.settings.gas_limit),
            "gasPrice": to_quantity(self.settings.gas_price),
        }
        if value:
            tx["value"] = to_quantity(value)
        return tx

    def partner_in_transaction(self) -> Dict[str, Any]:
        return self.contract_transaction(
            "partnerIn",
            to_win(self.settings.stake_value),
            self.settings.miner_address,
            self.settings.renewal,
        )

    def run(self, password: Optional[str], dry_run: bool = False) -> RegistrationResult:
        funding_tx = self.funding_transaction()
        partner_tx = self.partner_in_transaction()
        self.logger.info(
            "Registering partner miner=%s stake=%s renewal=%s",
            self.settings.miner_address,
            self.settings.stake_value,
            self.settings.renewal,
        )

        if dry_run:
            self.logger.info("Dry run, funding tx: %s", funding_tx)
            self.logger.info("Dry run, partnerIn tx: %s", partner_tx)
            return RegistrationResult(funding_tx=None, partner_tx=None)

        if not password:
            raise ValueError("Account password is required to unlock the base account")

        self.account.unlock(password, self.settings.unlock_duration)
        funding_hash = self.account.send_transaction(funding_tx)
        self.logger.info("Funding tx=%s", funding_hash)
        partner_hash = self.account.send_transaction(partner_tx)
        self.logger.info("tx=%s", partner_hash)
        return RegistrationResult(funding_tx=funding_hash, partner_tx=partner_hash)
