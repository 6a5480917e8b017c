"""Configuration management for raffle deployments."""
from typing import Dict, Optional
import os
from pydantic import BaseModel, Field
from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigurationError

DEFAULT_GAS_LANE = "0x" + "00" * 32


class NetworkConfig(BaseModel):
    """Raffle parameters for a single network."""
    name: str = Field(
        description="Network name"
    )
    entrance_fee: int = Field(
        default=10**16,
        gt=0,
        description="Minimum payment per entry, in base units"
    )
    interval: int = Field(
        default=30,
        ge=0,
        description="Seconds between draws"
    )
    gas_lane: str = Field(
        default=DEFAULT_GAS_LANE,
        description="Hex encoded 32-byte VRF key hash"
    )
    subscription_id: Optional[int] = Field(
        default=None,
        description="VRF subscription id; created on development networks when unset"
    )
    callback_gas_limit: int = Field(
        default=500_000,
        description="Forwarded to the VRF coordinator"
    )
    vrf_coordinator: Optional[str] = Field(
        default=None,
        description="Address of the VRF coordinator on live networks"
    )
    development: bool = Field(
        default=False,
        description="Whether mocks are deployed on this network"
    )


class LoggingConfig(BaseModel):
    """Logging configuration settings."""
    level: str = Field(
        default="INFO",
        description="Logging level"
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format"
    )
    file: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )


def default_networks() -> Dict[str, NetworkConfig]:
    return {
        "local": NetworkConfig(name="local", development=True),
        "anvil": NetworkConfig(name="anvil", development=True),
        "sepolia": NetworkConfig(
            name="sepolia",
            gas_lane="0x474e34a077df58807dbe9c96d3c009b23b3c6d0cce433e59bbf5b34f823bc56c",
            vrf_coordinator="0x8103b0a8a00be2ddc778e6e7eaa21791cd364625",
        ),
    }


class RaffleConfig(BaseModel):
    """Main raffle configuration."""
    active_network: str = Field(
        default="local",
        description="Network used when none is given explicitly"
    )
    networks: Dict[str, NetworkConfig] = Field(
        default_factory=default_networks,
        description="Known networks by name"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings"
    )

    def get_network(self, name: Optional[str] = None) -> NetworkConfig:
        network_name = name or self.active_network
        try:
            return self.networks[network_name]
        except KeyError:
            raise ConfigurationError(
                f"Unknown network '{network_name}'. Known networks: {', '.join(sorted(self.networks))}"
            ) from None

    def is_development(self, name: Optional[str] = None) -> bool:
        return self.get_network(name).development


def _env_int(key: str) -> Optional[int]:
    value = os.getenv(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Environment variable {key} must be an integer, got {value!r}") from None


def load_config() -> RaffleConfig:
    """Load configuration from environment variables."""
    # Load environment variables from the .env file nearest the working directory
    load_dotenv(find_dotenv(usecwd=True))

    active_network = os.getenv("RAFFLE_NETWORK", "local")
    networks = default_networks()
    base = networks.get(active_network, NetworkConfig(name=active_network))

    overrides = {
        "entrance_fee": _env_int("RAFFLE_ENTRANCE_FEE"),
        "interval": _env_int("RAFFLE_INTERVAL"),
        "gas_lane": os.getenv("RAFFLE_GAS_LANE") or None,
        "subscription_id": _env_int("RAFFLE_SUBSCRIPTION_ID"),
        "callback_gas_limit": _env_int("RAFFLE_CALLBACK_GAS_LIMIT"),
        "vrf_coordinator": os.getenv("RAFFLE_VRF_COORDINATOR") or None,
    }
    networks[active_network] = NetworkConfig(
        **{**base.model_dump(), **{k: v for k, v in overrides.items() if v is not None}}
    )

    return RaffleConfig(
        active_network=active_network,
        networks=networks,
        logging=LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            file=os.getenv("LOG_FILE") or None,
        ),
    )
