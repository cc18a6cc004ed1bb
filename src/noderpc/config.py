"""Configuration management for noderpc.

Implements multi-level configuration with precedence:
1. Environment variables (NODERPC_* prefix, ``__`` between levels)
2. Explicit config file (``--config``)
3. Project config (./.noderpc.yaml)
4. Global config (~/.noderpc/config.yaml)
5. Built-in defaults (lowest priority)
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

GLOBAL_CONFIG_PATH = Path.home() / ".noderpc" / "config.yaml"
PROJECT_CONFIG_NAME = ".noderpc.yaml"

_ENV_REFERENCE = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)\}")


class RpcConfig(BaseModel):
    """Node RPC endpoint configuration.

    Attributes:
        url: Node RPC URL (mainnet default port 8332)
        timeout: Request timeout in seconds
        retries: Connection attempts to retry
        verify_ssl: Whether to verify TLS certificates
    """

    url: str = Field(default="http://127.0.0.1:8332")
    timeout: float = Field(default=30, gt=0, le=3600)
    retries: int = Field(default=3, ge=0, le=10)
    verify_ssl: bool = True

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate and normalize URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip("/")


class AuthConfig(BaseModel):
    """RPC credentials.

    Either ``user``/``password`` or ``cookie_file`` (the ``.cookie`` the
    node writes into its data directory). The cookie file wins when both
    are set.
    """

    user: str | None = None
    password: str | None = None
    cookie_file: Path | None = None

    def credentials(self) -> tuple[str, str] | None:
        """Resolve the basic-auth pair, or None for no authentication.

        Raises:
            ValueError: If the cookie file is unreadable or malformed
        """
        if self.cookie_file is not None:
            path = self.cookie_file.expanduser()
            try:
                content = path.read_text(encoding="utf-8").strip()
            except OSError as e:
                raise ValueError(f"Cannot read cookie file {path}: {e}") from e
            user, sep, password = content.partition(":")
            if not sep or not user:
                raise ValueError(f"Malformed cookie file {path}")
            return user, password
        if self.user:
            return self.user, self.password or ""
        return None


class OutputConfig(BaseModel):
    """Output formatting configuration."""

    format: Literal["json", "table"] = "table"
    color: bool = True


class Config(BaseSettings):
    """Complete noderpc configuration.

    Environment variables:
    - NODERPC_RPC__URL: Node RPC URL
    - NODERPC_RPC__TIMEOUT: Request timeout in seconds
    - NODERPC_RPC__RETRIES: Connection retry attempts
    - NODERPC_RPC__VERIFY_SSL: Whether to verify TLS (true/false)
    - NODERPC_AUTH__USER / NODERPC_AUTH__PASSWORD: RPC credentials
    - NODERPC_AUTH__COOKIE_FILE: Path to the node's cookie file
    - NODERPC_OUTPUT__FORMAT: json or table

    Example:
        >>> config = Config()
        >>> config.rpc.url
        'http://127.0.0.1:8332'
    """

    rpc: RpcConfig = Field(default_factory=RpcConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    model_config = SettingsConfigDict(
        env_prefix="NODERPC_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # File values arrive as init kwargs; the environment overrides them.
        return env_settings, init_settings

    @classmethod
    def load(
        cls,
        config_path: Path | None = None,
        skip_global: bool = False,
        skip_project: bool = False,
    ) -> Config:
        """Load configuration with precedence: env > explicit > project > global > defaults.

        Args:
            config_path: Optional explicit config file path
            skip_global: Skip loading global config
            skip_project: Skip loading project config

        Returns:
            Loaded and merged configuration

        Raises:
            ValueError: If a config file is missing, unreadable or invalid
        """
        config_data: dict[str, Any] = {}

        if not skip_global and GLOBAL_CONFIG_PATH.exists():
            config_data = cls._load_yaml_file(GLOBAL_CONFIG_PATH)

        if not skip_project:
            project_config_path = Path.cwd() / PROJECT_CONFIG_NAME
            if project_config_path.exists():
                project_data = cls._load_yaml_file(project_config_path)
                config_data = cls._deep_merge(config_data, project_data)

        if config_path:
            if not config_path.exists():
                raise ValueError(f"Config file not found: {config_path}")
            explicit_data = cls._load_yaml_file(config_path)
            config_data = cls._deep_merge(config_data, explicit_data)

        config_data = cls._substitute_env_vars(config_data)

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    @staticmethod
    def _load_yaml_file(path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        except OSError as e:
            raise ValueError(f"Failed to read {path}: {e}") from e
        return data if isinstance(data, dict) else {}

    @staticmethod
    def _substitute_env_vars(data: Any) -> Any:
        """Substitute ``${VAR_NAME}`` references; unset variables stay as written."""
        if isinstance(data, dict):
            return {k: Config._substitute_env_vars(v) for k, v in data.items()}
        if isinstance(data, list):
            return [Config._substitute_env_vars(item) for item in data]
        if isinstance(data, str):
            return _ENV_REFERENCE.sub(
                lambda match: os.getenv(match.group(1), match.group(0)), data
            )
        return data

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def to_dict(self, mask_secrets: bool = True) -> dict[str, Any]:
        """Return the configuration as plain data, with the password masked."""
        data = self.model_dump(mode="json")
        if mask_secrets and data["auth"].get("password"):
            data["auth"]["password"] = "********"
        return data

    def to_yaml(self, mask_secrets: bool = True) -> str:
        return yaml.dump(
            self.to_dict(mask_secrets), default_flow_style=False, sort_keys=False
        )

    @classmethod
    def get_template(cls) -> str:
        """Get configuration file template."""
        return """# noderpc configuration

# Node RPC endpoint
rpc:
  url: http://127.0.0.1:8332
  timeout: 30
  retries: 3
  verify_ssl: true

# Credentials: user/password, or the node's cookie file
auth:
  user: ${NODERPC_RPC_USER}
  password: ${NODERPC_RPC_PASSWORD}
  # cookie_file: ~/.bitcoin/.cookie

# Output preferences
output:
  format: table  # json | table
  color: true
"""

    def validate_config(self) -> list[str]:
        """Validate configuration and return any warnings.

        Returns:
            List of validation warnings (empty if valid)
        """
        warnings: list[str] = []

        if not self.rpc.verify_ssl and self.rpc.url.startswith("https://"):
            warnings.append(
                "TLS verification is disabled for an HTTPS URL. "
                "This is insecure and not recommended for production."
            )

        if self.auth.password and not self.auth.password.startswith("${"):
            warnings.append(
                "RPC password appears to be hardcoded. "
                "Use an environment variable reference: ${NODERPC_RPC_PASSWORD}"
            )

        if self.auth.password and not self.auth.user:
            warnings.append("RPC password is set but no user is configured.")

        if self.auth.cookie_file and not self.auth.cookie_file.expanduser().exists():
            warnings.append(f"Cookie file does not exist: {self.auth.cookie_file}")

        if self.rpc.timeout < 5:
            warnings.append(
                f"RPC timeout is very low ({self.rpc.timeout}s). "
                "Calls such as gettxoutsetinfo may time out."
            )

        return warnings
