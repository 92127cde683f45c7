"""Risk classification of newly deployed contracts."""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from deployscan.config import ScannerConfig
from deployscan.ownership import probe_owner
from deployscan.patterns import find_suspicious_pattern
from deployscan.rpc import ChainClient, RpcResult

logger = logging.getLogger(__name__)


class Verdict(str, Enum):
    FLAGGED = "flagged"
    SKIPPED = "skipped"


class Reason(str, Enum):
    SUSPICIOUS_PATTERN = "suspicious_pattern"
    OWNERSHIP_NOT_CHECKED = "ownership_not_checked"
    OWNER_PROBE_FAILED = "owner_probe_failed"
    OWNERSHIP_NOT_RENOUNCED = "ownership_not_renounced"
    CODE_FETCH_FAILED = "code_fetch_failed"
    BELOW_THRESHOLD = "below_threshold"
    OVER_THRESHOLD = "over_threshold"


@dataclass(frozen=True)
class Classification:
    address: str
    verdict: Verdict
    reason: Reason
    code_size: Optional[int] = None
    pattern: Optional[str] = None

    @property
    def flagged(self) -> bool:
        return self.verdict is Verdict.FLAGGED


def _skip(address: str, reason: Reason, **extra) -> Classification:
    return Classification(address=address, verdict=Verdict.SKIPPED, reason=reason, **extra)


def classify(client: ChainClient, address: str, config: ScannerConfig) -> Classification:
    """
    Run the decision pipeline for one contract.

    Gates, in order, each able to end the pipeline with a skip:
      1. suspicious-pattern scan of the bytecode (``config.analysis``)
      2. ``owner()`` must return the zero address (``config.check_ownership``;
         when disabled nothing can be flagged)
      3. bytecode length must exceed ``config.complexity_threshold``

    Args:
        client: Chain client
        address: Deployed contract address
        config: Scanner configuration

    Returns:
        Classification with verdict and the deciding reason
    """
    code: Optional[RpcResult[str]] = None

    if config.analysis:
        code = client.code(address)
        if code.ok:
            pattern = find_suspicious_pattern(code.value)
            if pattern is not None:
                logger.warning(f"Suspicious pattern {pattern!r} found at address: {address}")
                return _skip(address, Reason.SUSPICIOUS_PATTERN, pattern=pattern)
        else:
            logger.error(f"Error getting code for {address}: {code.error}")

    if not config.check_ownership:
        logger.warning(f"/!\\ Ownership not checked for contract at address: {address}")
        return _skip(address, Reason.OWNERSHIP_NOT_CHECKED)

    probe = probe_owner(client, address)
    if probe.error is not None:
        logger.warning(f"Ownership probe failed for contract at address: {address}: {probe.error}")
        return _skip(address, Reason.OWNER_PROBE_FAILED)
    if not probe.renounced:
        logger.warning(f"Ownership not renounced for contract at address: {address} (owner 0x{probe.owner})")
        return _skip(address, Reason.OWNERSHIP_NOT_RENOUNCED)
    logger.info(f"Ownership renounced for contract at address: {address}")

    if code is None or not code.ok:
        code = client.code(address)
    if not code.ok:
        logger.error(f"Error getting code for {address}: {code.error}")
        return _skip(address, Reason.CODE_FETCH_FAILED)

    size = len(code.value)
    if size > config.complexity_threshold:
        return Classification(address=address, verdict=Verdict.FLAGGED, reason=Reason.OVER_THRESHOLD, code_size=size)
    logger.info(f"Contract {address} below complexity threshold ({size} <= {config.complexity_threshold})")
    return _skip(address, Reason.BELOW_THRESHOLD, code_size=size)
