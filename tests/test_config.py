"""Tests for fleetforms.config: FormConfig frozen dataclass."""

import pytest

from fleetforms.config import FormConfig
from fleetforms.errors import ConfigurationError


class TestFormConfig:
    def test_defaults(self) -> None:
        cfg = FormConfig()

        assert cfg.validate_on_change is False
        assert cfg.validate_on_blur is True
        assert cfg.guard_reentrant_submit is True
        assert cfg.reraise_submit_errors is False

    def test_override(self) -> None:
        cfg = FormConfig(validate_on_change=True, validate_on_blur=False)

        assert cfg.validate_on_change is True
        assert cfg.validate_on_blur is False

    def test_frozen(self) -> None:
        cfg = FormConfig()

        with pytest.raises(AttributeError):
            cfg.validate_on_change = True  # type: ignore[misc]


class TestWithOptions:
    def test_returns_new_config(self) -> None:
        cfg = FormConfig()
        updated = cfg.with_options(reraise_submit_errors=True)

        assert updated.reraise_submit_errors is True
        assert cfg.reraise_submit_errors is False

    def test_no_options_is_equal_copy(self) -> None:
        cfg = FormConfig(validate_on_change=True)
        assert cfg.with_options() == cfg

    def test_unknown_option(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown form option"):
            FormConfig().with_options(debounce_ms=300)
