import os
import logging
from typing import Optional, Sequence

from dotenv import load_dotenv

# Import custom errors
from mcp_candy_machine.errors import ConfigurationError

"""
Configuration Management for the Candy Machine Config Server

This module holds the settings that sit around the configuration document
itself: protocol constants, the Solana cluster endpoint, and where the
document lives on disk. Values come from environment variables (a .env file
is honoured) with defaults defined here.

Configuration Sources (in order of precedence):
1. Environment variables
2. Default values defined in this module

Environment Variables:
    RPC_ENDPOINT: Solana JSON RPC endpoint URL
    KEYPAIR_PATH: Path to the authority keypair file (recorded, never read here)
    COMMITMENT: Commitment level (processed, confirmed, finalized)
    CANDY_CONFIG_PATH: Path to the Candy Machine configuration document
    MAX_CONFIG_BYTES: Largest configuration document the server tools accept
"""

# Set up logger
logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

COMMITMENT_LEVELS = ("processed", "confirmed", "finalized")


def _get_env_str(key: str, default: str, required: bool = False) -> str:
    """Get environment variable as string with validation."""
    value = os.getenv(key, default)
    if required and not value:
        raise ConfigurationError(f"Required environment variable {key} is not set")
    return value


def _get_env_int(key: str, default: int, min_val: Optional[int] = None, max_val: Optional[int] = None) -> int:
    """Get environment variable as integer with validation."""
    try:
        value = int(os.getenv(key, str(default)))
    except ValueError:
        raise ConfigurationError(f"Environment variable {key} must be a valid integer")
    if min_val is not None and value < min_val:
        raise ConfigurationError(f"Environment variable {key} must be >= {min_val}")
    if max_val is not None and value > max_val:
        raise ConfigurationError(f"Environment variable {key} must be <= {max_val}")
    return value


def _get_env_choice(key: str, default: str, choices: Sequence[str]) -> str:
    """Get environment variable constrained to a fixed set of values."""
    value = os.getenv(key, default).strip().lower()
    if value not in choices:
        raise ConfigurationError(f"Environment variable {key} must be one of {', '.join(choices)}, got '{value}'")
    return value


# --- Protocol Constants ---
# Lamports (native subunits) per SOL. Passed explicitly to the unit codecs as
# their default so they stay pure.
LAMPORTS_PER_SOL = 10**9

# Hidden settings hash width, fixed by the program.
HIDDEN_SETTINGS_HASH_LENGTH = 32

# Largest value representable by the program's u64 fields.
U64_MAX = 2**64 - 1

try:
    # --- Solana Configuration ---
    RPC_ENDPOINT = _get_env_str("RPC_ENDPOINT", "https://api.devnet.solana.com", required=True)
    KEYPAIR_PATH = _get_env_str("KEYPAIR_PATH", os.path.expanduser("~/.config/solana/id.json"))
    COMMITMENT = _get_env_choice("COMMITMENT", "confirmed", COMMITMENT_LEVELS)

    # --- Document Location ---
    CANDY_CONFIG_PATH = _get_env_str("CANDY_CONFIG_PATH", "config.json", required=True)
    MAX_CONFIG_BYTES = _get_env_int("MAX_CONFIG_BYTES", 65536, min_val=1024, max_val=10 * 1024 * 1024)

    logger.info("Configuration loaded successfully")

except ConfigurationError as e:
    logger.error(f"Configuration error: {e}")
    raise
