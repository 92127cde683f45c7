"""Main entry point for the scanner."""
import logging
import sys
import warnings
from typing import Optional, Sequence

from dotenv import load_dotenv

# Suppress eth_utils network warnings
warnings.filterwarnings("ignore", category=UserWarning, module="eth_utils")
warnings.filterwarnings("ignore", message=".*does not have a valid ChainId.*")

from deployscan.block_watcher import watch
from deployscan.config import ConfigError, load_config
from deployscan.rpc import connect

logger = logging.getLogger("deployscan")


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()
    try:
        config = load_config(argv)
    except ConfigError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [DEPLOYSCAN] %(message)s"
    )

    try:
        client = connect(config.rpc_url, timeout=config.request_timeout)
    except ConnectionError as e:
        logger.error(f"Error connecting: {e}")
        return 1

    try:
        watch(client, config)
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
