import pytest

from crype.config import ServerConfig, load_config


def test_load_config_reads_environment():
    config = load_config({"CRYPE_PORT": "50051", "CRYPE_DB_NAME": "orders.db"})
    assert config == ServerConfig(port="50051", db_path="orders.db")


def test_missing_values_are_empty():
    config = load_config({})
    assert config.port == ""
    assert config.db_path == ""


def test_address_from_port():
    assert ServerConfig(port="50051", db_path="").address == ("", 50051)


def test_empty_port_means_any():
    assert ServerConfig(port="", db_path="").address == ("", 0)


@pytest.mark.parametrize("port", ["abc", "70000", "-1", "+80"])
def test_invalid_port(port):
    with pytest.raises(ValueError):
        ServerConfig(port=port, db_path="").address