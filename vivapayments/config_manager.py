"""
Viva Payments Configuration Manager

Loads gateway settings from YAML:
- gateway_config.yaml for environment and request defaults
- secrets.yaml (next to it) for merchant credentials
- VIVA_* environment variables override both
"""

import os
import yaml
from typing import Dict, List, Optional, Any
from dataclasses import dataclass

from .errors import ConfigError
from .gateway_logger import logger, configure_logging
from .network import DEFAULT_TIMEOUT
from .url_config import SANDBOX_BASE_URL, PRODUCTION_BASE_URL, URLConfig

DEFAULT_CONFIG_FILENAME = "gateway_config.yaml"
SECRETS_FILENAME = "secrets.yaml"

ENV_OVERRIDES = {
    "VIVA_MERCHANT_ID": "merchant_id",
    "VIVA_API_KEY": "api_key",
    "VIVA_TEST_MODE": "test_mode",
    "VIVA_SOURCE_CODE": "source_code",
}

TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class GatewayConfig:
    """Gateway connection settings"""
    merchant_id: str
    api_key: str
    test_mode: bool = True
    source_code: Optional[str] = None
    request_lang: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    sandbox_base_url: str = SANDBOX_BASE_URL
    production_base_url: str = PRODUCTION_BASE_URL

    def url_config(self) -> URLConfig:
        return URLConfig(self.sandbox_base_url, self.production_base_url)

    def default_parameters(self) -> Dict[str, Any]:
        """Parameters every request created from this config starts with"""
        return {
            "merchant_id": self.merchant_id,
            "api_key": self.api_key,
            "test_mode": self.test_mode,
            "source_code": self.source_code,
            "request_lang": self.request_lang,
        }


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_VALUES
    return bool(value)


class ConfigManager:
    """
    Configuration Manager for the gateway.

    Reads the config file once per load_config() call and keeps the merged
    result; get_gateway_config() turns it into a GatewayConfig.
    """

    def __init__(self, config_path: Optional[str] = None,
                 environ: Optional[Dict[str, str]] = None):
        self._config: Dict = {}
        self.config_path = config_path or os.path.join(os.getcwd(), DEFAULT_CONFIG_FILENAME)
        self.secrets_path = os.path.join(os.path.dirname(os.path.abspath(self.config_path)),
                                         SECRETS_FILENAME)
        self.environ = os.environ if environ is None else environ
        self.load_config()

    def load_config(self) -> bool:
        """
        Loads the configuration and merges secrets and environment overrides.

        Returns:
            True if the config file existed and was read
        """
        self._config = {"gateway": {}}
        loaded = False

        if os.path.exists(self.config_path):
            self._config = self._read_yaml(self.config_path)
            if not isinstance(self._config.get("gateway"), dict):
                self._config["gateway"] = {}
            logger.debug(f"Loaded configuration from {self.config_path}")
            loaded = True
        else:
            logger.debug(f"Config file not found at {self.config_path}")

        self._merge_secrets()
        self._apply_environment()
        return loaded

    def _read_yaml(self, path: str) -> Dict:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read {path}: {e}", field="config_path", value=path)
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping", field="config_path", value=path)
        return data

    def _merge_secrets(self):
        """
        Merge credentials from secrets.yaml into the gateway section.
        Credentials live in their own file to keep them out of version control.
        """
        if not os.path.exists(self.secrets_path):
            return

        secrets = self._read_yaml(self.secrets_path)
        credentials = secrets.get("credentials") or {}
        if not isinstance(credentials, dict):
            raise ConfigError(
                f"{self.secrets_path}: 'credentials' must be a mapping",
                field="credentials", value=credentials,
                suggestion="Use merchant_id: and api_key: keys under credentials:"
            )
        self._config["gateway"].update(credentials)
        logger.debug(f"Merged credentials from {self.secrets_path}")

    def _apply_environment(self):
        for env_name, key in ENV_OVERRIDES.items():
            value = self.environ.get(env_name)
            if value:
                self._config["gateway"][key] = value

    # ==========================================
    # Config Validation
    # ==========================================

    def validate_config(self, raise_on_error: bool = False) -> List[str]:
        """
        Validate the merged configuration.

        Args:
            raise_on_error: If True, raise ConfigError on first error

        Returns:
            List of validation error messages (empty if valid)
        """
        gateway = self._config.get("gateway", {})
        errors = []

        for key in ("merchant_id", "api_key"):
            if not gateway.get(key):
                errors.append(f"Missing '{key}'")

        for key in ("sandbox_base_url", "production_base_url"):
            url = gateway.get(key)
            if url and not str(url).startswith("https://"):
                errors.append(f"'{key}' must be an https URL: '{url}'")

        timeout = gateway.get("timeout")
        if timeout is not None:
            try:
                if float(timeout) <= 0:
                    errors.append("'timeout' must be positive")
            except (TypeError, ValueError):
                errors.append(f"'timeout' is not a number: '{timeout}'")

        if errors and raise_on_error:
            raise ConfigError(errors[0], suggestion=f"Check {self.config_path} and {self.secrets_path}")
        return errors

    # ==========================================
    # Accessors
    # ==========================================

    def get_gateway_config(self) -> GatewayConfig:
        """Build a GatewayConfig, raising ConfigError if the config is invalid"""
        self.validate_config(raise_on_error=True)
        gateway = self._config["gateway"]
        return GatewayConfig(
            merchant_id=str(gateway["merchant_id"]),
            api_key=str(gateway["api_key"]),
            test_mode=as_bool(gateway.get("test_mode", True)),
            source_code=gateway.get("source_code"),
            request_lang=gateway.get("request_lang"),
            timeout=float(gateway.get("timeout", DEFAULT_TIMEOUT)),
            sandbox_base_url=gateway.get("sandbox_base_url", SANDBOX_BASE_URL),
            production_base_url=gateway.get("production_base_url", PRODUCTION_BASE_URL),
        )

    def _logging_section(self) -> Dict:
        section = self._config.get("logging") or {}
        if not isinstance(section, dict):
            raise ConfigError("'logging' must be a mapping", field="logging", value=section)
        return section

    def get_log_level(self) -> str:
        return self._logging_section().get("level", "INFO")

    def apply_logging(self):
        """Configure the vivapayments logger from the logging section"""
        logging_config = self._logging_section()
        configure_logging(
            level=logging_config.get("level", "INFO"),
            include_timestamp=logging_config.get("include_timestamp", False)
        )
