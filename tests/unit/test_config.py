import pytest
from pydantic import ValidationError
from lucky_winner.config import NetworkConfig, RaffleConfig, load_config
from lucky_winner.exceptions import ConfigurationError

ENV_KEYS = [
    "RAFFLE_NETWORK",
    "RAFFLE_ENTRANCE_FEE",
    "RAFFLE_INTERVAL",
    "RAFFLE_GAS_LANE",
    "RAFFLE_SUBSCRIPTION_ID",
    "RAFFLE_CALLBACK_GAS_LIMIT",
    "RAFFLE_VRF_COORDINATOR",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    for key in ENV_KEYS:
        # setenv first so values loaded from .env are removed on teardown
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_defaults():
    config = load_config()
    assert config.active_network == "local"
    assert config.is_development()
    assert config.is_development("anvil")
    assert not config.is_development("sepolia")
    local = config.get_network()
    assert local.entrance_fee == 10**16
    assert local.interval == 30
    assert local.callback_gas_limit == 500_000
    assert config.logging.level == "INFO"

def test_env_overrides_apply_to_active_network(monkeypatch):
    monkeypatch.setenv("RAFFLE_NETWORK", "anvil")
    monkeypatch.setenv("RAFFLE_ENTRANCE_FEE", "5")
    monkeypatch.setenv("RAFFLE_INTERVAL", "120")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    config = load_config()

    assert config.active_network == "anvil"
    assert config.get_network().entrance_fee == 5
    assert config.get_network().interval == 120
    assert config.get_network().development
    assert config.get_network("local").interval == 30
    assert config.logging.level == "DEBUG"

def test_unknown_network_from_env_is_live(monkeypatch):
    monkeypatch.setenv("RAFFLE_NETWORK", "mainnet")
    config = load_config()
    assert config.get_network().name == "mainnet"
    assert not config.is_development()

def test_non_integer_env_value(monkeypatch):
    monkeypatch.setenv("RAFFLE_INTERVAL", "soon")
    with pytest.raises(ConfigurationError, match="RAFFLE_INTERVAL"):
        load_config()

def test_env_file_is_loaded(tmp_path):
    (tmp_path / ".env").write_text("RAFFLE_INTERVAL=45\n")
    assert load_config().get_network().interval == 45

def test_unknown_network_lookup():
    with pytest.raises(ConfigurationError, match="Unknown network"):
        RaffleConfig().get_network("nowhere")

def test_entrance_fee_must_be_positive():
    with pytest.raises(ValidationError):
        NetworkConfig(name="local", entrance_fee=0)
