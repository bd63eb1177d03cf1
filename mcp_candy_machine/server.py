"""
Candy Machine Config Server - MCP Server Implementation

This module exposes the configuration layer as MCP tools: validating a Candy
Machine configuration document and translating it into the program's
CandyMachineData arguments for the instruction-building layer. No transaction
is built, signed or sent here.

Tools:
- validate_candy_config: Validate a document and summarise it
- get_candy_machine_data: Translate a document into program arguments (JSON)
- get_go_live_timestamp: Resolve the go-live date to epoch seconds
- get_solana_config: Report the cluster settings from the environment

Tool functions return strings; validation failures come back as
"Error: <field>: <message>" rather than raising.

License: MIT-0
"""

import json
import time

from pydantic import Field

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.utilities.logging import get_logger

from mcp_candy_machine import config
from mcp_candy_machine.bridge import candy_machine_uuid
from mcp_candy_machine.codecs import parse_address
from mcp_candy_machine.errors import CandyConfigError
from mcp_candy_machine.schemas import ConfigData, SolanaConfig

logger = get_logger(__name__)

# Constants
MAX_SYMBOL_LENGTH = 10
MAX_SELLER_FEE_BASIS_POINTS = 10000

# --- Server Setup ---
mcp = FastMCP(name="Candy Machine Config Server")


def parse_config_argument(config_json: str) -> ConfigData:
    """
    Validate the raw tool argument and build the configuration from it.

    Raises:
        ValueError: If the argument is empty or too large.
        CandyConfigError: If the document is invalid.
    """
    if not config_json or not isinstance(config_json, str):
        raise ValueError("Configuration JSON must be a non-empty string")
    if len(config_json.encode("utf-8")) > config.MAX_CONFIG_BYTES:
        raise ValueError(f"Configuration JSON is too large (max {config.MAX_CONFIG_BYTES} bytes)")
    return ConfigData.from_json(config_json)


def log_tool_error(tool: str, error: Exception, duration: float) -> None:
    """Log tool failure with structured information."""
    logger.error(f"{tool} failed: {type(error).__name__}: {error}, duration: {duration:.3f}s")


# --- MCP Tools ---

@mcp.tool()
async def validate_candy_config(
    context: Context,
    config_json: str = Field(..., description="The Candy Machine configuration as a JSON string."),
) -> str:
    """Validates a Candy Machine configuration document."""
    start = time.time()
    try:
        config_data = parse_config_argument(config_json)
        summary = (
            f"Configuration is valid: {config_data.number} items at {config_data.price} SOL "
            f"({config_data.price_in_lamports()} lamports), upload method {config_data.upload_method.value}."
        )
        logger.info(f"validate_candy_config succeeded in {time.time() - start:.3f}s")
        return summary
    except (CandyConfigError, ValueError) as e:
        log_tool_error("validate_candy_config", e, time.time() - start)
        return f"Error: {e}"
    except Exception as e:
        logger.exception(f"Unexpected error validating configuration: {e}")
        return "An unexpected error occurred while validating the configuration."


@mcp.tool()
async def get_candy_machine_data(
    context: Context,
    config_json: str = Field(..., description="The Candy Machine configuration as a JSON string."),
    candy_machine: str = Field(..., description="The candy machine account address (base58)."),
    symbol: str = Field("", description="The collection symbol from the asset metadata."),
    seller_fee_basis_points: int = Field(0, description="Royalty in basis points from the asset metadata."),
) -> str:
    """Translates a configuration into the program's CandyMachineData arguments."""
    start = time.time()
    try:
        if not isinstance(symbol, str) or len(symbol) > MAX_SYMBOL_LENGTH:
            raise ValueError(f"Symbol must be a string of at most {MAX_SYMBOL_LENGTH} characters")
        if not isinstance(seller_fee_basis_points, int) or not 0 <= seller_fee_basis_points <= MAX_SELLER_FEE_BASIS_POINTS:
            raise ValueError(f"Seller fee basis points must be between 0 and {MAX_SELLER_FEE_BASIS_POINTS}")

        candy_machine_address = parse_address(candy_machine)
        config_data = parse_config_argument(config_json)
        candy_data = config_data.into_candy_format(
            uuid=candy_machine_uuid(candy_machine_address),
            symbol=symbol,
            seller_fee_basis_points=seller_fee_basis_points,
        )
        logger.info(f"get_candy_machine_data succeeded for {candy_machine_address} in {time.time() - start:.3f}s")
        return candy_data.model_dump_json(indent=2)
    except (CandyConfigError, ValueError) as e:
        log_tool_error("get_candy_machine_data", e, time.time() - start)
        return f"Error: {e}"
    except Exception as e:
        logger.exception(f"Unexpected error translating configuration: {e}")
        return "An unexpected error occurred while translating the configuration."


@mcp.tool()
async def get_go_live_timestamp(
    context: Context,
    config_json: str = Field(..., description="The Candy Machine configuration as a JSON string."),
) -> str:
    """Resolves the configuration's go-live date to Unix epoch seconds."""
    start = time.time()
    try:
        config_data = parse_config_argument(config_json)
        return json.dumps({"goLiveDate": config_data.go_live_date, "timestamp": config_data.go_live_timestamp()})
    except (CandyConfigError, ValueError) as e:
        log_tool_error("get_go_live_timestamp", e, time.time() - start)
        return f"Error: {e}"
    except Exception as e:
        logger.exception(f"Unexpected error resolving go-live date: {e}")
        return "An unexpected error occurred while resolving the go-live date."


@mcp.tool()
async def get_solana_config(context: Context) -> str:
    """Reports the Solana cluster settings taken from the environment."""
    return SolanaConfig.from_env().model_dump_json(indent=2)


# --- Main Execution ---
if __name__ == "__main__":
    logger.info(f"Starting Candy Machine Config MCP Server (rpc: {config.RPC_ENDPOINT})...")
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
