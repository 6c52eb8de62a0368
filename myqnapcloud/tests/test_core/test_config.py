import pytest
import json
import os
from pathlib import Path
from myqnapcloud.api.api_client import ServiceConfig
from myqnapcloud.core.config import Config, ConfigError

@pytest.fixture(autouse=True)
def clean_env():
    """Clean environment variables before and after each test"""
    saved_vars = {k: v for k, v in os.environ.items() if k.startswith("MYQNAPCLOUD_")}

    for key in list(saved_vars.keys()):
        del os.environ[key]

    yield

    for key in list(os.environ.keys()):
        if key.startswith("MYQNAPCLOUD_"):
            del os.environ[key]

    for key, value in saved_vars.items():
        os.environ[key] = value

@pytest.fixture
def sample_config():
    """Fixture providing a sample configuration"""
    return {
        "app": {
            "name": "myqnapcloud",
            "version": "1.0.0"
        },
        "api": {
            "base_path": "https://api.example.com",
            "version": "v1.1",
            "user_agent": "nas-tool/1.0",
            "debug": True
        },
        "logging": {
            "level": "INFO",
            "file": None,
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        }
    }

@pytest.fixture
def config_file(tmp_path, sample_config):
    """Fixture creating a temporary config file"""
    config_path = tmp_path / "test_config.json"
    with open(config_path, "w") as f:
        json.dump(sample_config, f)
    return config_path

def test_config_loading(config_file):
    """Test basic configuration loading from file"""
    config = Config(config_file)
    assert config.get("app.name") == "myqnapcloud"
    assert config.get("api.base_path") == "https://api.example.com"
    assert config.get("api.debug") is True

def test_environment_variables():
    """Test environment variable overrides"""
    os.environ["MYQNAPCLOUD_API_BASE_PATH"] = "https://env.example.com"
    os.environ["MYQNAPCLOUD_LOGGING_LEVEL"] = "DEBUG"

    config = Config()

    assert config.get("api.base_path") == "https://env.example.com"
    assert config.get("logging.level") == "DEBUG"

def test_config_type_conversion():
    """Test configuration value type conversion"""
    os.environ["MYQNAPCLOUD_API_DEBUG"] = "true"
    os.environ["MYQNAPCLOUD_LOGGING_MAX_SIZE"] = "2048"

    config = Config()
    assert config.get("api.debug") is True
    assert config.get("logging.max_size") == 2048

def test_config_defaults():
    """Test default configuration values"""
    config = Config()
    assert config.get("api.version") == "v1.1"
    assert config.get("api.debug") is False
    assert config.get("api.base_path") is None
    assert config.get("logging.level") == "INFO"
    assert config.get("nonexistent.key", default="default") == "default"

def test_config_validation():
    """Test configuration validation rules"""
    with pytest.raises(ConfigError):
        Config().validate({"api": {"version": ""}})

    with pytest.raises(ConfigError):
        Config().validate({"api": {"base_path": 42}})

    with pytest.raises(ConfigError):
        Config().validate({"logging": {"level": "LOUD"}})

def test_config_update():
    """Test configuration updates"""
    config = Config()
    config.update({"api": {"version": "v2", "debug": True}})
    assert config.get("api.version") == "v2"
    assert config.get("api.debug") is True
    assert config.get("api.user_agent") == ""

def test_nested_config_access():
    """Test accessing nested configuration values"""
    config = Config()
    config.set("deep.nested.value", 42)
    assert config.get("deep.nested.value") == 42
    assert config.get("api.version.missing") is None

def test_invalid_config_file():
    """Test handling of invalid configuration file"""
    with pytest.raises(ConfigError):
        Config(Path("nonexistent_config.json"))

def test_config_serialization(sample_config, tmp_path):
    """Test configuration serialization and deserialization"""
    config = Config()
    config.update(sample_config)

    save_path = tmp_path / "saved_config.json"
    config.save(save_path)

    loaded_config = Config(save_path)
    assert loaded_config.get("api.base_path") == config.get("api.base_path")
    assert loaded_config.get("api.user_agent") == "nas-tool/1.0"

def test_service_config_from_config(config_file):
    """Test building the client configuration from the layered config"""
    service_config = ServiceConfig.from_config(Config(config_file))
    assert service_config.base_path == "https://api.example.com"
    assert service_config.version == "v1.1"
    assert service_config.user_agent == "nas-tool/1.0"
    assert service_config.debug is True

def test_service_config_requires_base_path():
    with pytest.raises(ConfigError):
        ServiceConfig.from_config(Config())

def test_string_keys_not_converted():
    """Test version-like env values are kept as written"""
    os.environ["MYQNAPCLOUD_API_VERSION"] = "2.10"
    os.environ["MYQNAPCLOUD_API_USER_AGENT"] = "1.0"
    os.environ["MYQNAPCLOUD_API_BASE_PATH"] = "https://api.example.com"
    os.environ["MYQNAPCLOUD_LOGGING_MAX_SIZE"] = "1.5"

    config = Config()
    assert config.get("api.version") == "2.10"
    assert config.get("api.user_agent") == "1.0"
    assert config.get("logging.max_size") == 1.5

    service_config = ServiceConfig.from_config(config)
    assert service_config.version == "2.10"
    assert service_config.user_agent == "1.0"
