"""Chain client adapter: raw JSON-RPC calls decoded into typed results."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

import requests
from web3 import Web3
from web3.exceptions import Web3Exception

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RpcResult(Generic[T]):
    """Either a decoded value or the reason the call failed."""

    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "RpcResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, reason: str) -> "RpcResult[T]":
        return cls(error=reason)


@dataclass(frozen=True)
class Transaction:
    hash: str


@dataclass(frozen=True)
class Block:
    number: int
    transactions: Tuple[Transaction, ...]


@dataclass(frozen=True)
class Receipt:
    transaction_hash: str
    contract_address: Optional[str]


def add_hex_prefix(value: str) -> str:
    """Return ``value`` with a leading ``0x``, adding one only if missing."""
    if value.startswith("0x"):
        return value
    return "0x" + value


def _decode_transactions(raw: List[Any]) -> Tuple[Transaction, ...]:
    out: List[Transaction] = []
    for entry in raw:
        # Blocks fetched without full transactions list bare hashes
        if isinstance(entry, str):
            out.append(Transaction(hash=entry))
            continue
        tx_hash = entry.get("hash") if isinstance(entry, dict) else None
        if not isinstance(tx_hash, str) or not tx_hash:
            logger.debug(f"Dropping block entry without hash: {entry!r}")
            continue
        out.append(Transaction(hash=tx_hash))
    return tuple(out)


class ChainClient:
    """
    Thin synchronous wrapper over a Web3 provider.

    Every operation returns an ``RpcResult``. Transport exceptions, JSON-RPC
    error members and unexpected response shapes never escape this class.
    """

    def __init__(self, w3: Web3):
        self.w3 = w3

    def _request(self, method: str, params: List[Any]) -> RpcResult[Any]:
        try:
            response: Dict[str, Any] = self.w3.provider.make_request(method, params)
        except (requests.exceptions.RequestException, Web3Exception, OSError, ValueError) as e:
            return RpcResult.failure(f"{method} transport error: {e}")

        if not isinstance(response, dict):
            return RpcResult.failure(f"{method} returned malformed response: {response!r}")
        if response.get("error"):
            err = response["error"]
            message = err.get("message", err) if isinstance(err, dict) else err
            return RpcResult.failure(f"{method} error: {message}")
        return RpcResult.success(response.get("result"))

    def current_height(self) -> RpcResult[int]:
        res = self._request("eth_blockNumber", [])
        if not res.ok:
            return res
        try:
            return RpcResult.success(int(res.value, 16))
        except (TypeError, ValueError):
            return RpcResult.failure(f"eth_blockNumber returned non-hex height: {res.value!r}")

    def block(self, height: int, full_transactions: bool = True) -> RpcResult[Block]:
        res = self._request("eth_getBlockByNumber", [hex(height), full_transactions])
        if not res.ok:
            return res
        raw = res.value
        if raw is None:
            return RpcResult.failure(f"block {height} not available")
        if not isinstance(raw, dict) or not isinstance(raw.get("transactions"), list):
            return RpcResult.failure(f"block {height} has no transactions list")
        return RpcResult.success(Block(number=height, transactions=_decode_transactions(raw["transactions"])))

    def receipt(self, tx_hash: str) -> RpcResult[Receipt]:
        res = self._request("eth_getTransactionReceipt", [add_hex_prefix(tx_hash)])
        if not res.ok:
            return res
        raw = res.value
        if raw is None:
            return RpcResult.failure(f"receipt for {tx_hash} not available")
        if not isinstance(raw, dict):
            return RpcResult.failure(f"receipt for {tx_hash} is malformed: {raw!r}")
        address = raw.get("contractAddress")
        if not isinstance(address, str) or not address:
            address = None
        return RpcResult.success(Receipt(transaction_hash=tx_hash, contract_address=address))

    def call(self, to: str, data: str, block_tag: str = "latest") -> RpcResult[str]:
        res = self._request("eth_call", [{"to": add_hex_prefix(to), "data": data}, block_tag])
        if not res.ok:
            return res
        if not isinstance(res.value, str):
            return RpcResult.failure(f"eth_call to {to} returned non-string result: {res.value!r}")
        return res

    def code(self, address: str, block_tag: str = "latest") -> RpcResult[str]:
        res = self._request("eth_getCode", [add_hex_prefix(address), block_tag])
        if not res.ok:
            return res
        if not isinstance(res.value, str):
            return RpcResult.failure(f"eth_getCode for {address} returned non-string result: {res.value!r}")
        return res


def connect(rpc_url: str, timeout: float = 10) -> ChainClient:
    """
    Build a client for ``rpc_url`` and verify the endpoint answers.

    Raises:
        ConnectionError: if the endpoint is unreachable
    """
    w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))
    if not w3.is_connected():
        raise ConnectionError(f"Cannot connect to RPC {rpc_url}")
    logger.info(f"Connected to {rpc_url}")
    return ChainClient(w3)
