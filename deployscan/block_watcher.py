"""Block watcher for new contract deployments."""
import logging
import time
from typing import Callable, List, Optional

from deployscan.classifier import Classification, classify
from deployscan.config import ScannerConfig
from deployscan.report import report_flagged
from deployscan.resolver import resolve_contracts
from deployscan.rpc import ChainClient

logger = logging.getLogger(__name__)


def process_block(client: ChainClient, height: int, config: ScannerConfig) -> Optional[List[Classification]]:
    """
    Resolve and classify every contract deployed at ``height``.

    Args:
        client: Chain client
        height: Block height
        config: Scanner configuration

    Returns:
        Classifications in transaction order, or None if the block could not be fetched
    """
    res = client.block(height, full_transactions=True)
    if not res.ok:
        logger.error(f"Error processing block {height}: {res.error}")
        return None

    results: List[Classification] = []
    for address in resolve_contracts(client, res.value):
        try:
            finding = classify(client, address, config)
        except Exception as e:
            logger.error(f"Error classifying contract {address}: {e}")
            continue
        results.append(finding)
        if finding.flagged:
            report_flagged(finding, height, config.explorer_url)
    logger.debug(f"Block {height}: {len(res.value.transactions)} txs, {len(results)} contracts")
    return results


def heights_to_process(current: int, last_seen: Optional[int], config: ScannerConfig) -> List[int]:
    """
    Heights to handle in one poll.

    Without catch-up this is always just ``current``, even when it was
    already processed by the previous poll. With catch-up, heights after
    ``last_seen`` up to ``current`` are returned, limited to the most recent
    ``config.max_catch_up_blocks``.
    """
    if not config.catch_up or last_seen is None:
        return [current]
    if current <= last_seen:
        return []
    start = max(last_seen + 1, current - config.max_catch_up_blocks + 1)
    if start > last_seen + 1:
        logger.warning(f"Skipping blocks {last_seen + 1}-{start - 1}: more than {config.max_catch_up_blocks} behind")
    return list(range(start, current + 1))


def poll_once(client: ChainClient, config: ScannerConfig, last_seen: Optional[int] = None) -> Optional[int]:
    """
    Read the head and process the heights it implies.

    Returns:
        The highest head seen so far in catch-up mode, otherwise the head
        that was read; ``last_seen`` if the read failed
    """
    res = client.current_height()
    if not res.ok:
        logger.error(f"Error getting current block number: {res.error}")
        return last_seen

    if config.catch_up and last_seen is not None and res.value < last_seen:
        logger.warning(f"Head went backwards from {last_seen} to {res.value}, keeping {last_seen}")
        return last_seen

    for height in heights_to_process(res.value, last_seen, config):
        process_block(client, height, config)
    return res.value


def watch(client: ChainClient, config: ScannerConfig,
          max_iterations: Optional[int] = None,
          sleep: Callable[[float], None] = time.sleep) -> None:
    """
    Poll the chain forever, one iteration every ``config.sleep_seconds``.

    Args:
        client: Chain client
        config: Scanner configuration
        max_iterations: Stop after this many polls (None = run forever)
        sleep: Sleep function
    """
    logger.info(
        f"Watcher started (complexity={config.complexity_threshold}, sleep={config.sleep_seconds}s, "
        f"analysis={config.analysis}, checkOwnership={config.check_ownership}, catch_up={config.catch_up})"
    )
    last_seen: Optional[int] = None
    iterations = 0
    while max_iterations is None or iterations < max_iterations:
        iterations += 1
        try:
            last_seen = poll_once(client, config, last_seen)
        except Exception as e:
            logger.error(f"Watcher error {e}")
        sleep(config.sleep_seconds)
