"""
Tests for logging level resolution.

The eliminable call set must widen strictly with each level:
debug < info < warn < error < disabled.
"""
import pytest

from lambda_builder.core.logging_policy import LOGGING_LEVELS, is_valid_level, resolve_pure_funcs


class TestResolvePureFuncs:
    """Tests for the level -> eliminable calls table."""

    def test_debug_keeps_everything(self):
        assert resolve_pure_funcs("debug") == ()

    def test_info_strips_debug_calls(self):
        assert resolve_pure_funcs("info") == ("console.debug", "console.log")

    def test_warn_adds_info(self):
        assert resolve_pure_funcs("warn") == ("console.debug", "console.log", "console.info")

    def test_error_adds_warn(self):
        assert resolve_pure_funcs("error") == (
            "console.debug", "console.log", "console.info", "console.warn"
        )

    @pytest.mark.parametrize("level", [None, "", "verbose"])
    def test_disabled_strips_all_calls(self, level):
        """None, empty and unknown levels strip every console call."""
        assert resolve_pure_funcs(level) == (
            "console.debug", "console.log", "console.info", "console.warn", "console.error"
        )

    def test_sets_widen_strictly(self):
        """Each level's set is a strict superset of the previous one."""
        chain = [resolve_pure_funcs(level) for level in LOGGING_LEVELS] + [resolve_pure_funcs(None)]
        for lower, higher in zip(chain, chain[1:]):
            assert set(lower) < set(higher)
            # Previous entries keep their order as a prefix
            assert higher[:len(lower)] == lower


class TestIsValidLevel:

    def test_known_levels(self):
        for level in ("debug", "info", "warn", "error"):
            assert is_valid_level(level)

    def test_unknown_level(self):
        assert not is_valid_level("trace")
        assert not is_valid_level("")
