"""Ownership renunciation probe via the ``owner()`` selector."""
from dataclasses import dataclass
from typing import Optional

from deployscan.rpc import ChainClient

OWNER_SELECTOR: str = "0x8da5cb5b"  # owner()
ZERO_ADDRESS_HEX: str = "0" * 40

# "0x" + one 32-byte ABI word
_WORD_RESPONSE_LEN: int = 66


@dataclass(frozen=True)
class OwnerProbe:
    address: str
    owner: Optional[str] = None
    error: Optional[str] = None

    @property
    def renounced(self) -> bool:
        return self.error is None and is_renounced(self.owner)


def extract_owner_address(response: str) -> Optional[str]:
    """
    Pull the 40-hex-digit owner address out of an ``owner()`` response.

    A full ABI word yields characters [26:66); shorter payloads fall back
    to [2:42). Responses of two characters or fewer carry no address.

    Args:
        response: Raw ``eth_call`` result

    Returns:
        Owner address hex (no prefix) or None
    """
    if len(response) >= _WORD_RESPONSE_LEN:
        return response[26:66]
    if len(response) > 2:
        return response[2:42]
    return None


def is_renounced(owner: Optional[str]) -> bool:
    return owner == ZERO_ADDRESS_HEX


def probe_owner(client: ChainClient, address: str, block_tag: str = "latest") -> OwnerProbe:
    """Call ``owner()`` on ``address`` and decode the result."""
    res = client.call(address, OWNER_SELECTOR, block_tag)
    if not res.ok:
        return OwnerProbe(address=address, error=f"error calling contract: {res.error}")

    owner = extract_owner_address(res.value)
    if owner is None:
        return OwnerProbe(address=address, error=f"unexpected response format or empty owner address: {res.value!r}")
    return OwnerProbe(address=address, owner=owner)
