"""
Unit tests for configuration manager
"""

import pytest

from utils.config_manager import (
    ENV_API_HOST,
    ENV_API_PORT,
    ApiConfig,
    QuoteConfig,
    UnifiedConfigManager,
    get_config_manager,
)
from utils.exceptions import ConfigurationError, ErrorCodes
from utils.path_utils import BASE_DIR, ENV_CONFIG_DIR, resolve_config_dir


@pytest.fixture(autouse=True)
def clear_api_env(monkeypatch):
    """Keep the deployment environment out of config tests"""
    monkeypatch.delenv(ENV_API_HOST, raising=False)
    monkeypatch.delenv(ENV_API_PORT, raising=False)


@pytest.mark.unit
class TestConfigManager:
    """Test cases for UnifiedConfigManager"""

    @pytest.fixture
    def sample_config(self):
        """Sample configuration data"""
        return {
            "api_config": {
                "host": "127.0.0.1",
                "port": 9000,
                "workers": 2,
                "health_path": "/healthz"
            },
            "quote_config": {
                "quotes": ["Hello", "World"],
                "seed": 7
            }
        }

    @pytest.fixture
    def manager(self, config_from, sample_config):
        """Create config manager instance"""
        return config_from({"config.json": sample_config})

    def test_get_nested(self, manager):
        assert manager.get_nested("api_config.host") == "127.0.0.1"
        assert manager.get_nested("api_config.missing", 1) == 1
        assert manager.get_nested("quote_config.quotes.0") is None
        assert manager.get_nested("nonexistent", "default") == "default"

    def test_to_dict_is_a_copy(self, manager):
        data = manager.to_dict()
        data["api_config"] = {}
        assert manager.get_api_config().port == 9000

    def test_typed_config_is_cached(self, manager):
        assert manager.get_api_config() is manager.get_api_config()

    def test_files_are_merged_in_sorted_order(self, config_from):
        manager = config_from({
            "a_base.json": {"api_config": {"port": 1111}, "quote_config": {"quotes": ["a"]}},
            "b_override.json": {"api_config": {"port": 2222}},
        })
        assert manager.get_api_config().port == 2222
        assert manager.get_quote_config().quotes == ["a"]

    def test_typed_api_config(self, manager):
        api_config = manager.get_api_config()
        assert api_config == ApiConfig(
            host="127.0.0.1", port=9000, workers=2, reload=False,
            health_path="/healthz", docs_enabled=False
        )

    def test_api_config_defaults(self, config_from):
        api_config = config_from({"config.json": {}}).get_api_config()
        assert api_config.host == "0.0.0.0"
        assert api_config.port == 8080
        assert api_config.health_path is None
        assert api_config.docs_enabled is False

    def test_environment_overrides_file(self, config_from, sample_config, monkeypatch):
        monkeypatch.setenv(ENV_API_HOST, "10.0.0.5")
        monkeypatch.setenv(ENV_API_PORT, "8181")
        api_config = config_from({"config.json": sample_config}).get_api_config()
        assert api_config.host == "10.0.0.5"
        assert api_config.port == 8181

    @pytest.mark.parametrize("port", ["not-a-port", "0", "70000"])
    def test_invalid_port(self, config_from, sample_config, monkeypatch, port):
        monkeypatch.setenv(ENV_API_PORT, port)
        manager = config_from({"config.json": sample_config})
        with pytest.raises(ConfigurationError) as exc_info:
            manager.get_api_config()
        assert exc_info.value.error_code == ErrorCodes.CONFIG_INVALID_FORMAT

    def test_typed_quote_config(self, manager):
        assert manager.get_quote_config() == QuoteConfig(quotes=["Hello", "World"], seed=7)

    def test_quote_config_defaults(self, config_from):
        assert config_from({"config.json": {}}).get_quote_config() == QuoteConfig()

    @pytest.mark.parametrize("quote_config", [
        "not an object",
        {"quotes": "Hello"},
        {"quotes": ["a"], "seed": "abc"},
        {"quotes": ["a"], "seed": True},
    ])
    def test_invalid_quote_config(self, config_from, quote_config):
        manager = config_from({"config.json": {"quote_config": quote_config}})
        with pytest.raises(ConfigurationError):
            manager.get_quote_config()

    def test_empty_quotes_are_passed_through(self, config_from):
        # 空目录由 QuoteCatalog 拒绝
        manager = config_from({"config.json": {"quote_config": {"quotes": []}}})
        assert manager.get_quote_config().quotes == []

    def test_logging_config(self, config_from):
        manager = config_from({"config.json": {"logging_config": {
            "level": "DEBUG",
            "file_config": {"enabled": False},
            "modules": {"API": {"level": "WARNING"}}
        }}})
        logging_config = manager.get_logging_config()
        assert logging_config.level == "DEBUG"
        assert logging_config.file_config.enabled is False
        assert logging_config.console_config.enabled is True
        assert logging_config.modules["API"].level == "WARNING"
        assert logging_config.modules["API"].enabled is True

    def test_missing_directory(self, temp_dir):
        with pytest.raises(ConfigurationError) as exc_info:
            UnifiedConfigManager(temp_dir / "nonexistent")
        assert exc_info.value.error_code == ErrorCodes.CONFIG_NOT_FOUND

    def test_directory_without_json(self, temp_dir):
        (temp_dir / "readme.txt").write_text("nothing here")
        with pytest.raises(ConfigurationError):
            UnifiedConfigManager(temp_dir)

    def test_malformed_config_file(self, write_config):
        config_dir = write_config({"config.json": "{invalid json content"})
        with pytest.raises(ConfigurationError) as exc_info:
            UnifiedConfigManager(config_dir)
        assert exc_info.value.error_code == ErrorCodes.CONFIG_INVALID_FORMAT

    def test_non_object_config_file(self, write_config):
        config_dir = write_config({"config.json": "[1, 2, 3]"})
        with pytest.raises(ConfigurationError):
            UnifiedConfigManager(config_dir)

    @pytest.mark.parametrize("workers", [0, -2, "4", 1.5, True, None])
    def test_invalid_workers(self, config_from, workers):
        manager = config_from({"config.json": {"api_config": {"workers": workers}}})
        with pytest.raises(ConfigurationError) as exc_info:
            manager.get_api_config()
        assert exc_info.value.error_code == ErrorCodes.CONFIG_INVALID_FORMAT

    def test_workers_default(self, config_from):
        assert config_from({"config.json": {"api_config": {}}}).get_api_config().workers == 1


@pytest.mark.unit
class TestConfigDirectoryResolution:
    """Locating the configuration directory and the shared manager"""

    def test_environment_variable_wins(self, temp_dir, monkeypatch):
        monkeypatch.setenv(ENV_CONFIG_DIR, str(temp_dir))
        assert resolve_config_dir() == temp_dir

    def test_working_directory_config(self, temp_dir, monkeypatch):
        monkeypatch.delenv(ENV_CONFIG_DIR, raising=False)
        (temp_dir / "config").mkdir()
        monkeypatch.chdir(temp_dir)
        assert resolve_config_dir() == temp_dir / "config"

    def test_falls_back_to_source_tree(self, temp_dir, monkeypatch):
        monkeypatch.delenv(ENV_CONFIG_DIR, raising=False)
        monkeypatch.chdir(temp_dir)
        assert resolve_config_dir() == BASE_DIR / "config"

    def test_manager_is_shared_per_directory(self, write_config, monkeypatch):
        config_dir = write_config({"config.json": {"api_config": {"port": 9001}}})
        monkeypatch.setenv(ENV_CONFIG_DIR, str(config_dir))

        manager = get_config_manager()
        assert manager is get_config_manager()
        assert manager.get_api_config().port == 9001

    def test_missing_directory_raises_on_use(self, temp_dir, monkeypatch):
        monkeypatch.setenv(ENV_CONFIG_DIR, str(temp_dir / "missing"))
        with pytest.raises(ConfigurationError) as exc_info:
            get_config_manager()
        assert exc_info.value.error_code == ErrorCodes.CONFIG_NOT_FOUND

        # 失败不会被缓存，目录出现后可以正常加载
        (temp_dir / "missing").mkdir()
        (temp_dir / "missing" / "config.json").write_text("{}", encoding="utf-8")
        assert get_config_manager().get_api_config().port == 8080

    def test_shipped_configuration(self):
        """The repository config directory loads and carries the default catalog"""
        manager = UnifiedConfigManager(BASE_DIR / "config")
        assert len(manager.get_quote_config().quotes) == 5
        assert manager.get_nested("api_config.port") == 8080
