"""Unit tests for the application context."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from src.books_api.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
)
from src.books_api.runtime.context import (
    AppContext,
    get_config,
    get_context,
    merge_configs,
    set_config,
    with_context,
)


class TestContextManager:
    """Test the context manager functionality."""

    def test_default_context_available(self):
        context = get_context()
        config = get_config()

        assert isinstance(context, AppContext)
        assert isinstance(config, ConfigData)
        assert context.config is config

    def test_with_context_override_single_field(self):
        original_config = get_config()

        with with_context(ConfigData(app=AppConfig(port=9000))):
            override_config = get_config()
            assert override_config.app.port == 9000
            assert override_config.app.host == original_config.app.host
            assert override_config.database == original_config.database

        assert get_config() is original_config

    def test_with_context_nested_overrides(self):
        original_config = get_config()

        with with_context(ConfigData(app=AppConfig(port=9001))):
            with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
                config = get_config()
                assert config.app.port == 9001
                assert config.database.connection_string == "sqlite://"

            assert get_config().database.url == original_config.database.url

        assert get_config() is original_config

    def test_with_context_none_is_noop(self):
        original_config = get_config()

        with with_context(None):
            assert get_config() is original_config

    def test_with_context_rejects_other_types(self):
        with pytest.raises(ValueError, match="must be ConfigData"):
            with with_context({"app": {"port": 1}}):  # type: ignore[arg-type]
                pass

    def test_with_context_restores_after_error(self):
        original_config = get_config()

        with pytest.raises(RuntimeError):
            with with_context(ConfigData(app=AppConfig(port=9002))):
                raise RuntimeError("boom")

        assert get_config() is original_config

    def test_override_is_local_to_thread(self):
        """Other threads keep seeing the default configuration."""
        original_port = get_config().app.port

        with with_context(ConfigData(app=AppConfig(port=9003))):
            with ThreadPoolExecutor(max_workers=1) as pool:
                seen = pool.submit(lambda: get_config().app.port).result()

        assert seen == original_port

    def test_set_config_in_copied_context(self):
        import contextvars

        replacement = ConfigData(app=AppConfig(port=9004))

        def run() -> int:
            set_config(replacement)
            return get_config().app.port

        assert contextvars.copy_context().run(run) == 9004
        assert get_config() is not replacement


class TestMergeConfigs:
    def test_merge_keeps_unset_fields(self):
        base = ConfigData(database=DatabaseConfig(host="db", name="library"))
        override = ConfigData(database=DatabaseConfig(name="catalog"))

        merged = merge_configs(base, override)

        assert merged.database.host == "db"
        assert merged.database.name == "catalog"

    def test_merge_attribute_assignment(self):
        base = ConfigData()
        override = ConfigData()
        override.app.port = 7000

        merged = merge_configs(base, override)

        assert merged.app.port == 7000
        assert merged.app.host == base.app.host
