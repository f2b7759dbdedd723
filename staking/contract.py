"""ABI helpers for the staking precompile contract."""
from __future__ import annotations

from typing import Any, Dict, List

from eth_abi import encode
from eth_utils import function_signature_to_4byte_selector

from .units import normalize_address

STAKING_CONTRACT_ADDRESS = "0x00000000000000000000000000000000000000d8"

STAKING_ABI: List[Dict[str, Any]] = [
    {
        "constant": False,
        "inputs": [{"name": "addr", "type": "address"}],
        "name": "stakeAppend",
        "outputs": [],
        "payable": True,
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [
            {"name": "addr", "type": "address"},
            {"name": "lockEpochs", "type": "uint256"},
        ],
        "name": "stakeUpdate",
        "outputs": [],
        "payable": False,
        "stateMutability": "nonpayable",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [
            {"name": "secPk", "type": "bytes"},
            {"name": "bn256Pk", "type": "bytes"},
            {"name": "lockEpochs", "type": "uint256"},
            {"name": "feeRate", "type": "uint256"},
        ],
        "name": "stakeIn",
        "outputs": [],
        "payable": True,
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [
            {"name": "addr", "type": "address"},
            {"name": "renewal", "type": "bool"},
        ],
        "name": "partnerIn",
        "outputs": [],
        "payable": True,
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [{"name": "delegateAddress", "type": "address"}],
        "name": "delegateIn",
        "outputs": [],
        "payable": True,
        "stateMutability": "payable",
        "type": "function",
    },
    {
        "constant": False,
        "inputs": [{"name": "delegateAddress", "type": "address"}],
        "name": "delegateOut",
        "outputs": [],
        "payable": False,
        "stateMutability": "nonpayable",
        "type": "function",
    },
]


class Contract:
    def __init__(self, abi: List[Dict[str, Any]], address: str) -> None:
        self.address = normalize_address(address)
        self.functions = {
            entry["name"]: entry for entry in abi if entry.get("type") == "function"
        }

    def function(self, name: str) -> Dict[str, Any]:
        try:
            return self.functions[name]
        except KeyError:
            raise KeyError(f"Function {name} not found in contract ABI") from None

    def input_types(self, name: str) -> List[str]:
        return [arg["type"] for arg in self.function(name)["inputs"]]

    def signature(self, name: str) -> str:
        return f"{name}({','.join(self.input_types(name))})"

    def is_payable(self, name: str) -> bool:
        entry = self.function(name)
        return entry.get("stateMutability") == "payable" or bool(entry.get("payable"))

    def encode_call(self, name: str, *args: Any) -> str:
        """Return the hex calldata for ``name(*args)``: selector followed by encoded arguments."""
        types = self.input_types(name)
        if len(args) != len(types):
            raise TypeError(f"{name} expects {len(types)} arguments, got {len(args)}")
        values = [
            normalize_address(value) if abi_type == "address" else value
            for abi_type, value in zip(types, args)
        ]
        selector = function_signature_to_4byte_selector(self.signature(name))
        return "0x" + (selector + encode(types, values)).hex()


def staking_contract(address: str = STAKING_CONTRACT_ADDRESS) -> Contract:
    return Contract(STAKING_ABI, address)
