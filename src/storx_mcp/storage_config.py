"""Discovery of Storx credentials.

Credentials live in the MCP client's ``claude_desktop_config.json``, under
``mcpServers.storx.env`` (or ``mcpServers["storx-mcp-server"].env``)::

    {
      "mcpServers": {
        "storx": {
          "command": "storx-mcp",
          "args": ["serve"],
          "env": {
            "STORX_ACCESS_KEY": "...",
            "STORX_SECRET_KEY": "...",
            "STORX_ENDPOINT": "https://gateway.storx.io",
            "STORX_REGION": "us-east-1"
          }
        }
      }
    }

When no config file exists, the same variables are read from the process
environment, since MCP clients pass ``env`` through to the server process.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from .core import get_logger, settings
from .core.exceptions import ConfigurationError
from .objectstorage import S3ClientConfig
from .schemas import DEFAULT_ENDPOINT, DEFAULT_REGION, StorxCredentials

logger = get_logger(__name__)

CONFIG_FILENAME = "claude_desktop_config.json"
SERVER_KEYS = ("storx", "storx-mcp-server")

# field -> environment variable names, in priority order
ENV_KEYS: Dict[str, Sequence[str]] = {
    "access_key": ("STORX_ACCESS_KEY", "AWS_ACCESS_KEY_ID"),
    "secret_key": ("STORX_SECRET_KEY", "AWS_SECRET_ACCESS_KEY"),
    "endpoint": ("STORX_ENDPOINT", "AWS_ENDPOINT_URL"),
    "region": ("STORX_REGION", "AWS_REGION"),
}
REQUIRED_FIELDS = ("access_key", "secret_key")

EXAMPLE_CONFIG = """{
  "mcpServers": {
    "storx": {
      "command": "storx-mcp",
      "args": ["serve"],
      "env": {
        "STORX_ACCESS_KEY": "your_access_key_here",
        "STORX_SECRET_KEY": "your_secret_key_here",
        "STORX_ENDPOINT": "https://gateway.storx.io",
        "STORX_REGION": "us-east-1"
      }
    }
  }
}"""


def candidate_config_paths(
    extra: Optional[Union[str, Path]] = None,
) -> List[Path]:
    """Return config file locations in search order."""
    home = Path.home()
    paths: List[Path] = []

    explicit = extra or settings.config_path
    if explicit:
        paths.append(Path(explicit).expanduser())

    paths.extend(
        [
            home / "Library" / "Application Support" / "Claude" / CONFIG_FILENAME,
            home / "AppData" / "Roaming" / "Claude" / CONFIG_FILENAME,
            home / ".config" / "Claude" / CONFIG_FILENAME,
            Path(__file__).resolve().parent / CONFIG_FILENAME,
            Path.cwd() / CONFIG_FILENAME,
        ]
    )
    return paths


def find_config_file(paths: Sequence[Path]) -> Optional[Path]:
    """Return the first existing file in ``paths``."""
    for path in paths:
        if path.is_file():
            return path
    return None


def _pick(env: Mapping[str, str], field: str) -> Optional[str]:
    for name in ENV_KEYS[field]:
        value = env.get(name)
        if value:
            return value
    return None


def _missing_message(missing: Sequence[str], source: str) -> str:
    lines = [
        f"Invalid configuration in {source}",
        "Missing environment variables for Storx MCP server:",
    ]
    lines.extend(f"  - {' or '.join(ENV_KEYS[field])}" for field in missing)
    lines.append(f"\nExample configuration in {CONFIG_FILENAME}:")
    lines.append(EXAMPLE_CONFIG)
    return "\n".join(lines)


def credentials_from_env(
    env: Mapping[str, str], source: Optional[str] = None
) -> StorxCredentials:
    """Build credentials from a ``STORX_*``/``AWS_*`` mapping.

    Raises:
        ConfigurationError: If the access key or secret key is missing
    """
    values = {field: _pick(env, field) for field in ENV_KEYS}
    missing = [field for field in REQUIRED_FIELDS if not values[field]]
    if missing:
        raise ConfigurationError(
            _missing_message(missing, source or "environment"),
            searched=[source] if source else [],
        )

    try:
        return StorxCredentials(
            access_key=values["access_key"],
            secret_key=values["secret_key"],
            endpoint=values["endpoint"] or DEFAULT_ENDPOINT,
            region=values["region"] or DEFAULT_REGION,
            source=source,
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid Storx credentials: {e}")


def _server_env(config: Mapping, path: Path) -> Mapping[str, str]:
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Failed to parse {path}: top-level JSON value must be an object",
            searched=[str(path)],
        )
    servers = config.get("mcpServers")
    if not isinstance(servers, dict):
        return {}
    server: Mapping = {}
    for key in SERVER_KEYS:
        if isinstance(servers.get(key), dict) and servers[key]:
            server = servers[key]
            break
    env = server.get("env")
    # Malformed entries count as empty; missing keys are reported by the caller
    return env if isinstance(env, dict) else {}


def load_credentials(
    config_path: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> StorxCredentials:
    """Resolve Storx credentials from the client config file or environment.

    Args:
        config_path: Explicit config file, searched before the default locations
        environ: Environment mapping used when no config file exists
            (defaults to ``os.environ``)

    Returns:
        Validated credentials

    Raises:
        ConfigurationError: If no usable configuration is found
    """
    paths = candidate_config_paths(config_path)
    path = find_config_file(paths)
    environ = os.environ if environ is None else environ

    if path is None:
        if any(_pick(environ, field) for field in REQUIRED_FIELDS):
            logger.info("Loaded configuration from environment")
            return credentials_from_env(environ)

        searched = [str(p) for p in paths]
        message = "\n".join(
            [
                f"{CONFIG_FILENAME} file not found!",
                "Searched in the following locations:",
                *(f"  - {p}" for p in searched),
                f"\nPlease ensure {CONFIG_FILENAME} exists in one of these "
                "locations, or set STORX_ACCESS_KEY and STORX_SECRET_KEY.",
                "The file should contain your Storx MCP server configuration "
                "under the mcpServers section.",
            ]
        )
        raise ConfigurationError(message, searched=searched)

    try:
        config = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Failed to parse {path}\n"
            "Please ensure it contains valid JSON format.\n"
            f"Error: {e}",
            searched=[str(path)],
        )

    credentials = credentials_from_env(_server_env(config, path), source=str(path))
    logger.info("Loaded configuration", path=str(path))
    return credentials


def to_client_config(credentials: StorxCredentials) -> S3ClientConfig:
    """Translate resolved credentials into an S3 client configuration."""
    return S3ClientConfig(
        access_key_id=credentials.access_key,
        secret_access_key=credentials.secret_key,
        region_name=credentials.region,
        endpoint_url=credentials.endpoint,
    )
