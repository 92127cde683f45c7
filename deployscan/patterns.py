"""Suspicious-pattern table and substring gate."""
from typing import Optional, Tuple

# Order matters: the first entry found in the subject is the one reported.
SUSPICIOUS_PATTERNS: Tuple[str, ...] = (
    "selfdestruct(",
    "delegatecall(",
    "call.value(",
    ".transfer(",
    "suicide(",
    "sha3(",
    "callcode(",
    "assembly {",
    "block.timestamp",
    "blockhash(",
    "tx.origin",
    "gasleft(",
    "ecrecover(",
    "msg.sender.send(",
    "create2(",
    "keccak256(abi.encodePacked(",
    "addmod(",
    "mulmod(",
    "revert(",
    "assert(",
    "require(",
    "throw ",
    "msg.value",
    "block.number",
    "block.difficulty",
    "block.coinbase",
    "now",
    "gasprice",
    "this.balance",
    "tx.gasprice",
    ".call(",
    ".send(",
    "for {",
    "while {",
    "unchecked {",
    "storage slot",
    "external contract",
    "inline assembly",
    "signed integer",
    "permanent storage write",
    "arbitrary jump",
    "high gas usage",
    "transaction origin",
    "floating pragma",
    "shadowing state variables",
    "hardcoded address",
    "magic numbers",
    "unprotected SELFDESTRUCT",
    "missing return value",
    "unchecked return value",
    "reentrancy",
    "unchecked math",
    "denial of service",
    "front running",
    "time manipulation",
    "block miner manipulation",
    "randomness source",
    "hardcoded gas amount",
    "gas limit",
)


def find_suspicious_pattern(subject: str,
                            patterns: Tuple[str, ...] = SUSPICIOUS_PATTERNS) -> Optional[str]:
    """
    Return the first pattern (in table order) contained in ``subject``.

    Matching is plain case-sensitive substring containment. Applied to
    hex-encoded bytecode, none of the Solidity keywords can appear, so in
    practice this returns None for real deployments.

    Args:
        subject: Text to scan (deployed bytecode hex)
        patterns: Ordered pattern table

    Returns:
        The matched pattern or None
    """
    for pattern in patterns:
        if pattern in subject:
            return pattern
    return None
