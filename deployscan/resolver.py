"""Resolve contract-creating transactions in a block."""
import logging
from typing import Iterator

from deployscan.rpc import Block, ChainClient

logger = logging.getLogger(__name__)


def resolve_contracts(client: ChainClient, block: Block) -> Iterator[str]:
    """
    Yield the address of every contract created in ``block``, in order.

    A receipt that cannot be fetched is logged and its transaction skipped;
    a receipt without a usable ``contractAddress`` is not a creation.

    Args:
        client: Chain client
        block: Decoded block with transactions

    Yields:
        Contract addresses
    """
    for tx in block.transactions:
        res = client.receipt(tx.hash)
        if not res.ok:
            logger.error(f"Error getting contract address for {tx.hash}: {res.error}")
            continue
        if res.value.contract_address:
            yield res.value.contract_address
