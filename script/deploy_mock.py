from typing import Optional

from lucky_winner.config import RaffleConfig, load_config
from lucky_winner.mocks import MockVRFCoordinator
from lucky_winner.utils.logging import setup_logger

logger = setup_logger("lucky_winner.deploy")


def deploy_mock(
    network: Optional[str] = None, config: Optional[RaffleConfig] = None
) -> Optional[MockVRFCoordinator]:
    config = config or load_config()
    network_config = config.get_network(network)
    if not network_config.development:
        logger.info("Network %s is live, not deploying mocks", network_config.name)
        return None

    logger.info("On a local network. Deploying mocks...")
    mock = MockVRFCoordinator()
    logger.info("Mock VRF Coordinator at: %s", mock.address)
    return mock


def main() -> Optional[MockVRFCoordinator]:
    return deploy_mock()


if __name__ == "__main__":
    main()
