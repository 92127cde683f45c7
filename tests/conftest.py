"""Shared fixtures: an in-memory chain served through a real Web3 object.

``FakeChain`` answers the JSON-RPC methods the scanner uses. Values stored
as exceptions are raised from the provider, which is how transport failures
(connection refused, timeouts) surface from ``HTTPProvider``.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from web3 import Web3
from web3.providers import BaseProvider

from deployscan.config import ScannerConfig
from deployscan.rpc import ChainClient

CONTRACT = "0xabc" + "1" * 34 + "123"
OTHER_CONTRACT = "0xdef" + "2" * 34 + "456"
RENOUNCED_OWNER = "0x" + "0" * 24 + "0" * 40
LIVE_OWNER = "0x" + "0" * 24 + "1234567890abcdef1234567890abcdef12345678"


class FakeProvider(BaseProvider):
    def __init__(self, handlers: Dict[str, Callable[..., Any]]):
        super().__init__()
        self.handlers = handlers
        self.calls: List[Tuple[str, List[Any]]] = []

    def make_request(self, method, params):
        self.calls.append((method, list(params)))
        handler = self.handlers.get(method)
        if handler is None:
            return {"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": f"method {method} not found"}}
        return {"jsonrpc": "2.0", "id": 1, "result": handler(*params)}

    def is_connected(self, show_traceback: bool = False) -> bool:
        return True


def _raise_or_return(value: Any) -> Any:
    if isinstance(value, Exception):
        raise value
    return value


class FakeChain:
    def __init__(self):
        self.head: Any = 0
        self.blocks: Dict[int, List[str]] = {}
        self.receipts: Dict[str, Any] = {}
        self.owner_responses: Dict[str, Any] = {}
        self.codes: Dict[str, Any] = {}
        self.provider = FakeProvider({
            "eth_blockNumber": self._block_number,
            "eth_getBlockByNumber": self._block_by_number,
            "eth_getTransactionReceipt": self._receipt,
            "eth_call": self._call,
            "eth_getCode": self._code,
        })

    def add_tx(self, height: int, tx_hash: str, contract_address: Optional[str] = None,
               owner: Any = None, code: Any = None) -> None:
        self.blocks.setdefault(height, []).append(tx_hash)
        self.receipts[tx_hash] = {"transactionHash": tx_hash, "contractAddress": contract_address}
        if contract_address is not None:
            if owner is not None:
                self.owner_responses[contract_address] = owner
            if code is not None:
                self.codes[contract_address] = code

    def calls_to(self, method: str) -> List[List[Any]]:
        return [params for name, params in self.provider.calls if name == method]

    def _block_number(self):
        return hex(_raise_or_return(self.head))

    def _block_by_number(self, height_hex, full_transactions):
        height = int(height_hex, 16)
        if height not in self.blocks:
            return None
        return {
            "number": height_hex,
            "transactions": [{"hash": h, "input": "0x"} for h in self.blocks[height]],
        }

    def _receipt(self, tx_hash):
        return _raise_or_return(self.receipts.get(tx_hash))

    def _call(self, message, block_tag):
        return _raise_or_return(self.owner_responses.get(message["to"], "0x"))

    def _code(self, address, block_tag):
        return _raise_or_return(self.codes.get(address, "0x"))


@pytest.fixture
def chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def client(chain: FakeChain) -> ChainClient:
    return ChainClient(Web3(chain.provider))


@pytest.fixture
def config() -> ScannerConfig:
    return ScannerConfig(check_ownership=True, sleep_seconds=0)
