"""Tests for `cmfuncs.config` focusing on behavior and correctness."""

from cmfuncs.config import FUNCTION_CONFIG, FunctionConfig


def test_defaults() -> None:
    """Default configuration matches the documented values."""
    config = FunctionConfig()
    assert config.port_timeout == 2.0
    assert config.mac_format == "__IEEE__"
    assert config.mac_upper_case is True
    assert config.max_expansions == 100_000
    assert config.dump_width == 78


def test_global_instance_is_function_config() -> None:
    """The global configuration instance uses the dataclass defaults."""
    assert isinstance(FUNCTION_CONFIG, FunctionConfig)
    assert FUNCTION_CONFIG.max_expansions == FunctionConfig().max_expansions


def test_check_expansion_size_bounds() -> None:
    """Sizes up to the limit are accepted; larger ones are not."""
    config = FunctionConfig(max_expansions=10)
    assert config.check_expansion_size(0)
    assert config.check_expansion_size(10)
    assert not config.check_expansion_size(11)


def test_check_expansion_size_unlimited() -> None:
    """A limit of None accepts any size."""
    config = FunctionConfig(max_expansions=None)
    assert config.check_expansion_size(10**9)
