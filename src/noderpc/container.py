"""Dependency container for noderpc.

Wires configuration, transport, dispatcher and services together for the
CLI and for applications that want a ready-made client.

Design principles:
- Singleton instances for infrastructure (config, transport, dispatcher)
- On-demand creation for services (no caching)
- Overridable for tests

Factory functions:
- get_config(): Load and cache configuration
- get_transport(): Create and cache HTTP transport
- get_dispatcher(): Create and cache the typed dispatcher
- get_blockchain_service(), get_network_service(), get_mining_service(),
  get_wallet_service(): Create service instances (no caching)
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, TypeVar

from noderpc.config import Config
from noderpc.protocol.dispatcher import Dispatcher
from noderpc.services.blockchain import BlockchainService
from noderpc.services.mining import MiningService
from noderpc.services.network import NetworkService
from noderpc.services.wallet import WalletService
from noderpc.transport.base import Transport
from noderpc.transport.http import HttpTransport

T = TypeVar("T")

# Global container state for testing/mocking
_overrides: dict[str, Any] = {}
_config_path: Path | None = None


def set_override(key: str, value: Any) -> None:
    """Override a container dependency.

    Args:
        key: Dependency key ("config", "transport", "dispatcher",
            "blockchain_service", "network_service", "mining_service",
            "wallet_service")
        value: Replacement instance

    Example:
        >>> set_override("transport", FakeTransport())
        >>> get_dispatcher().transport  # the fake
    """
    _overrides[key] = value


def clear_overrides() -> None:
    _overrides.clear()


def set_config_path(path: Path | None) -> None:
    """Select an explicit config file for the next :func:`get_config`."""
    global _config_path
    _config_path = path
    get_config.cache_clear()


def _override(key: str, expected: type[T]) -> T | None:
    if key not in _overrides:
        return None
    override = _overrides[key]
    if not isinstance(override, expected):
        raise TypeError(f"Override for '{key}' must be a {expected.__name__} instance")
    return override


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load and cache configuration.

    Raises:
        ValueError: If a config file is invalid
    """
    override = _override("config", Config)
    if override is not None:
        return override
    return Config.load(config_path=_config_path)


@lru_cache(maxsize=1)
def get_transport() -> Transport:
    """Create and cache the HTTP transport (one connection pool per process).

    Raises:
        ValueError: If the configured cookie file cannot be read
    """
    if "transport" in _overrides:
        override = _overrides["transport"]
        if not isinstance(override, Transport):
            raise TypeError("Override for 'transport' must implement send(bytes) -> bytes")
        return override

    config = get_config()
    return HttpTransport(
        url=config.rpc.url,
        auth=config.auth.credentials(),
        timeout=config.rpc.timeout,
        retries=config.rpc.retries,
        verify_ssl=config.rpc.verify_ssl,
    )


@lru_cache(maxsize=1)
def get_dispatcher() -> Dispatcher:
    override = _override("dispatcher", Dispatcher)
    if override is not None:
        return override
    return Dispatcher(get_transport())


def get_blockchain_service() -> BlockchainService:
    override = _override("blockchain_service", BlockchainService)
    if override is not None:
        return override
    return BlockchainService(get_dispatcher())


def get_network_service() -> NetworkService:
    override = _override("network_service", NetworkService)
    if override is not None:
        return override
    return NetworkService(get_dispatcher())


def get_mining_service() -> MiningService:
    override = _override("mining_service", MiningService)
    if override is not None:
        return override
    return MiningService(get_dispatcher())


def get_wallet_service() -> WalletService:
    override = _override("wallet_service", WalletService)
    if override is not None:
        return override
    return WalletService(get_dispatcher())


def reset_container() -> None:
    """Reset container state. Clears all caches and overrides."""
    global _config_path
    clear_overrides()
    _config_path = None
    get_config.cache_clear()
    get_transport.cache_clear()
    get_dispatcher.cache_clear()
