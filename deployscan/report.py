"""Console reporting of flagged contracts."""
import logging

from deployscan.classifier import Classification

logger = logging.getLogger(__name__)


def explorer_link(explorer_url: str, address: str) -> str:
    return f"{explorer_url.rstrip('/')}/address/{address}"


def report_flagged(finding: Classification, height: int, explorer_url: str) -> str:
    """
    Print one line for a flagged contract.

    Args:
        finding: Flagged classification
        height: Block the contract was deployed in
        explorer_url: Explorer base URL

    Returns:
        The printed line
    """
    link = explorer_link(explorer_url, finding.address)
    line = f"[FLAGGED] block={height} size={finding.code_size} {link}"
    print(line, flush=True)
    logger.info(f"Flagged {finding.address} in block {height}")
    return line
