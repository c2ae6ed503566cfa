import pytest
from pydantic import ValidationError

from hello_app.config import ServerConfig, load


def test_defaults_when_unset():
    config = load({})
    assert config.response == "Hello OpenTelemetry!"
    assert config.port == "8080"
    assert config.tls_cert_file == "/etc/tls-config/tls.crt"
    assert config.tls_key_file == "/etc/tls-config/tls.key"


def test_defaults_when_empty():
    config = load({"RESPONSE": "", "PORT": ""})
    assert config.response == "Hello OpenTelemetry!"
    assert config.port == "8080"


def test_explicit_values():
    config = load({"RESPONSE": "hi there", "PORT": "9090"})
    assert config.response == "hi there"
    assert config.port == "9090"


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("RESPONSE", "from env")
    monkeypatch.delenv("PORT", raising=False)
    config = load()
    assert config.response == "from env"
    assert config.port == "8080"


def test_config_is_frozen():
    config = ServerConfig()
    with pytest.raises(ValidationError):
        config.port = "1"
