"""Configuration for the scanner."""
import argparse
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

DEFAULT_RPC_HTTP: str = "https://bsc-dataseed1.binance.org"
DEFAULT_EXPLORER_URL: str = "https://bscscan.com"
DEFAULT_COMPLEXITY: int = 40000
DEFAULT_SLEEP: int = 10
DEFAULT_RPC_TIMEOUT: int = 10
DEFAULT_MAX_CATCH_UP_BLOCKS: int = 5
DEFAULT_LOG_LEVEL: str = "INFO"


class ConfigError(ValueError):
    """Raised when a configuration value cannot be used."""


@dataclass(frozen=True)
class ScannerConfig:
    rpc_url: str = DEFAULT_RPC_HTTP
    explorer_url: str = DEFAULT_EXPLORER_URL
    complexity_threshold: int = DEFAULT_COMPLEXITY
    sleep_seconds: int = DEFAULT_SLEEP
    analysis: bool = False
    check_ownership: bool = False
    request_timeout: int = DEFAULT_RPC_TIMEOUT
    # Off: always reprocess the current head. On: fill gaps since the last height.
    catch_up: bool = False
    max_catch_up_blocks: int = DEFAULT_MAX_CATCH_UP_BLOCKS
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        for name in ("complexity_threshold", "sleep_seconds", "request_timeout"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must be >= 0, got {getattr(self, name)}")
        if self.max_catch_up_blocks < 1:
            raise ConfigError(f"max_catch_up_blocks must be >= 1, got {self.max_catch_up_blocks}")


def _env_bool(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.lower() in ("1", "true", "yes")


def _env_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


_TRUE_FLAG_VALUES = ("1", "t", "true")
_FALSE_FLAG_VALUES = ("0", "f", "false")


def _flag_bool(raw: str) -> bool:
    """Parse the value of ``-flag=value`` with Go flag.ParseBool spellings."""
    value = raw.lower()
    if value in _TRUE_FLAG_VALUES:
        return True
    if value in _FALSE_FLAG_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"invalid boolean value: {raw!r}")


def _add_bool_flag(parser: argparse.ArgumentParser, *option_strings: str, dest: str, default: bool, help: str) -> None:
    # Bare flag sets True; "-flag=false" and "--no-flag" set False
    parser.add_argument(*option_strings, dest=dest, nargs="?", const=True, type=_flag_bool,
                        default=default, metavar="BOOL", help=help)
    long_name = next(opt for opt in option_strings if opt.startswith("--"))
    parser.add_argument("--no-" + long_name[2:], dest=dest, action="store_false",
                        help=argparse.SUPPRESS)


def build_parser(environ: Mapping[str, str]) -> argparse.ArgumentParser:
    """Command-line flags; defaults come from the environment."""
    parser = argparse.ArgumentParser(
        prog="deployscan",
        description="Watch a chain for new contracts with renounced ownership and large bytecode.",
    )
    parser.add_argument("-complexity", "--complexity", dest="complexity_threshold", type=int,
                        default=_env_int(environ, "COMPLEXITY", DEFAULT_COMPLEXITY),
                        help="Set your complexity threshold (bytecode length)")
    parser.add_argument("-sleep", "--sleep", dest="sleep_seconds", type=int,
                        default=_env_int(environ, "SLEEP", DEFAULT_SLEEP),
                        help="Duration to sleep/wait between checks (in seconds)")
    _add_bool_flag(parser, "-analysis", "--analysis", dest="analysis",
                   default=_env_bool(environ, "ANALYSIS"),
                   help="Perform simple smart contract code analysis")
    _add_bool_flag(parser, "-checkOwnership", "--check-ownership", dest="check_ownership",
                   default=_env_bool(environ, "CHECK_OWNERSHIP"),
                   help="Check for ownership renunciation")
    parser.add_argument("--rpc", dest="rpc_url",
                        default=environ.get("RPC_HTTP") or DEFAULT_RPC_HTTP,
                        help="HTTP JSON-RPC endpoint")
    parser.add_argument("--explorer", dest="explorer_url",
                        default=environ.get("EXPLORER_URL") or DEFAULT_EXPLORER_URL,
                        help="Block explorer base URL used in findings")
    parser.add_argument("--timeout", dest="request_timeout", type=int,
                        default=_env_int(environ, "RPC_TIMEOUT", DEFAULT_RPC_TIMEOUT),
                        help="HTTP request timeout (in seconds)")
    _add_bool_flag(parser, "--catch-up", dest="catch_up",
                   default=_env_bool(environ, "CATCH_UP"),
                   help="Process heights skipped between polls instead of only the head")
    parser.add_argument("--max-catch-up", dest="max_catch_up_blocks", type=int,
                        default=_env_int(environ, "MAX_CATCH_UP_BLOCKS", DEFAULT_MAX_CATCH_UP_BLOCKS),
                        help="Maximum number of heights processed per poll in catch-up mode")
    parser.add_argument("--log-level", dest="log_level",
                        default=environ.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
                        help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def load_config(argv: Optional[Sequence[str]] = None,
                environ: Optional[Mapping[str, str]] = None) -> ScannerConfig:
    """
    Build the immutable configuration from the environment and flags.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])
        environ: Environment mapping (default: os.environ)

    Returns:
        ScannerConfig

    Raises:
        ConfigError: if a value is invalid
    """
    if environ is None:
        environ = os.environ
    args = build_parser(environ).parse_args(argv)
    return ScannerConfig(
        rpc_url=args.rpc_url,
        explorer_url=args.explorer_url.rstrip("/"),
        complexity_threshold=args.complexity_threshold,
        sleep_seconds=args.sleep_seconds,
        analysis=args.analysis,
        check_ownership=args.check_ownership,
        request_timeout=args.request_timeout,
        catch_up=args.catch_up,
        max_catch_up_blocks=args.max_catch_up_blocks,
        log_level=args.log_level.upper(),
    )
