"""Object storage connection settings loaded from ``config.yml``."""

from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from bucket_tools.core import get_logger
from bucket_tools.core.exceptions import ConfigurationError

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = "config.yml"
DEFAULT_ENDPOINT = "us-east-1.linodeobjects.com"

# Extra spellings accepted for config file keys, after lowercasing and
# dropping underscores.
_KEY_ALIASES = {
    "region": "region_name",
}


class StorageConfig(BaseSettings):
    """Connection settings for an S3-compatible object store.

    Values come from the config file; ``BUCKET_TOOLS_*`` environment
    variables take precedence over the file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BUCKET_TOOLS_",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    endpoint: str = Field(DEFAULT_ENDPOINT, description="Object storage host")
    access_key: str = Field("", description="Access key ID")
    secret_key: str = Field("", description="Secret access key")
    use_ssl: bool = Field(True, description="Connect over HTTPS")
    region_name: str = Field("us-east-1", description="Signing region")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return env_settings, init_settings

    @property
    def endpoint_url(self) -> str:
        """Endpoint as a URL, with the scheme chosen by ``use_ssl``."""
        if "://" in self.endpoint:
            return self.endpoint
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.endpoint}"


def _normalize_keys(raw: dict[str, Any]) -> dict[str, Any]:
    """Map config file keys such as ``accessKey`` onto field names."""
    fields = {name.replace("_", ""): name for name in StorageConfig.model_fields}
    values: dict[str, Any] = {}

    for key, value in raw.items():
        compact = str(key).lower().replace("_", "").replace("-", "")
        name = fields.get(compact) or _KEY_ALIASES.get(compact)
        if name is None:
            logger.warning("Ignoring unknown config key", key=key)
            continue
        # Blank values fall back to the field default
        if value is None or value == "":
            continue
        values[name] = value

    return values


def load_storage_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> StorageConfig:
    """Load storage settings from a YAML file.

    A missing file is not an error: every setting then takes its default
    (or environment) value.

    Args:
        path: Location of the YAML config file

    Returns:
        Immutable StorageConfig

    Raises:
        ConfigurationError: If the file cannot be read or holds invalid values
    """
    config_path = Path(path)
    values: dict[str, Any] = {}

    if config_path.is_file():
        try:
            with config_path.open(encoding="utf-8") as handle:
                raw = yaml.safe_load(handle)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read config file '{config_path}': {e}")

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"Config file '{config_path}' must contain a mapping, "
                f"got {type(raw).__name__}"
            )
        values = _normalize_keys(raw)
        logger.debug("Config file loaded", path=str(config_path))
    else:
        logger.info("Config file not found, using defaults", path=str(config_path))

    try:
        config = StorageConfig(**values)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid config file '{config_path}': {e}")

    logger.info(
        "Storage config loaded",
        endpoint=config.endpoint,
        use_ssl=config.use_ssl,
        has_credentials=bool(config.access_key and config.secret_key),
    )
    return config
