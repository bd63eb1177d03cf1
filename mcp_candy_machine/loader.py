import json
from pathlib import Path
from typing import Optional, Union

from mcp_candy_machine.config import CANDY_CONFIG_PATH
from mcp_candy_machine.errors import CandyConfigError, ConfigurationError
from mcp_candy_machine.schemas import ConfigData
from mcp.server.fastmcp.utilities.logging import get_logger

logger = get_logger(__name__)


def load_config_data(path: Optional[Union[str, Path]] = None) -> ConfigData:
    """
    Loads and validates a Candy Machine configuration document from disk.

    Args:
        path: The JSON file to read. Defaults to CANDY_CONFIG_PATH.

    Returns:
        The validated ConfigData.

    Raises:
        ConfigurationError: If the file cannot be read.
        CandyConfigError: If the document is invalid.
    """
    config_path = Path(path if path is not None else CANDY_CONFIG_PATH).expanduser()

    if not config_path.is_file():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading Candy Machine configuration from: {config_path.resolve()}")
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Unable to read configuration file {config_path}: {e}")

    try:
        config_data = ConfigData.from_json(text)
    except CandyConfigError as e:
        logger.error(f"Invalid Candy Machine configuration in file {config_path}: {e}")
        raise

    logger.info(
        f"Successfully loaded configuration: {config_data.number} items at {config_data.price} SOL, "
        f"upload method {config_data.upload_method.value}"
    )
    return config_data


def save_config_data(config_data: ConfigData, path: Union[str, Path]) -> Path:
    """Writes a configuration back out in document form (user units, JSON keys)."""
    config_path = Path(path).expanduser()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data.model_dump(mode="json", by_alias=True, exclude_none=True), f, indent=4)
    logger.info(f"Successfully saved configuration to {config_path}")
    return config_path
