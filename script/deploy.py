from typing import Optional

from eth_utils import decode_hex

from lucky_winner.clock import Clock, ManualClock
from lucky_winner.config import RaffleConfig, load_config
from lucky_winner.exceptions import ConfigurationError
from lucky_winner.ledger import Ledger
from lucky_winner.raffle import Raffle
from lucky_winner.utils.accounts import normalize_address
from lucky_winner.utils.logging import setup_logger
from lucky_winner.vrf import VRFCoordinator
from script.deploy_mock import deploy_mock

logger = setup_logger("lucky_winner.deploy")


def deploy(
    network: Optional[str] = None,
    config: Optional[RaffleConfig] = None,
    *,
    vrf_coordinator: Optional[VRFCoordinator] = None,
    ledger: Optional[Ledger] = None,
    clock: Optional[Clock] = None,
) -> Raffle:
    config = config or load_config()
    network_config = config.get_network(network)
    subscription_id = network_config.subscription_id

    mock = None
    if vrf_coordinator is None:
        if not network_config.development:
            raise ConfigurationError(
                f"Network {network_config.name} needs a VRF coordinator "
                f"(configured address: {network_config.vrf_coordinator})"
            )
        # Deploy mock first, the raffle needs a fresh subscription on it
        mock = deploy_mock(network_config.name, config)
        vrf_coordinator = mock
        subscription_id = mock.create_subscription()
    else:
        if network_config.vrf_coordinator is not None:
            expected = normalize_address(network_config.vrf_coordinator)
            if normalize_address(vrf_coordinator.address) != expected:
                raise ConfigurationError(
                    f"Network {network_config.name} expects VRF coordinator {expected}, "
                    f"got {vrf_coordinator.address}"
                )
        if subscription_id is None:
            raise ConfigurationError(f"Network {network_config.name} needs a subscription id")

    if clock is None and network_config.development:
        clock = ManualClock()

    raffle_contract = Raffle(
        network_config.entrance_fee,
        network_config.interval,
        vrf_coordinator,
        decode_hex(network_config.gas_lane),
        subscription_id,
        network_config.callback_gas_limit,
        ledger=ledger,
        clock=clock,
    )

    if mock is not None:
        mock.add_consumer(subscription_id, raffle_contract.address)

    logger.info("Raffle deployed at: %s", raffle_contract.address)
    return raffle_contract


def main() -> Raffle:
    config = load_config()
    setup_logger(
        "lucky_winner",
        level=config.logging.level,
        fmt=config.logging.format,
        log_file=config.logging.file,
    )
    return deploy(config=config)


if __name__ == "__main__":
    main()
