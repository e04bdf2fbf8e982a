"""Tests for the goteo exception hierarchy."""

import pytest

from goteo.errors import ConfigError, GoteoError, RenderError


class TestConfigError:
    def test_message_names_field(self) -> None:
        err = ConfigError("flush_threshold", "must be positive")
        assert err.field == "flush_threshold"
        assert str(err) == "Invalid config 'flush_threshold': must be positive"

    def test_is_goteo_error(self) -> None:
        assert isinstance(ConfigError("x", "y"), GoteoError)


class TestRenderError:
    def test_carries_stage_and_chunk(self) -> None:
        err = RenderError("convert", "# Title\n", "boom")
        assert err.stage == "convert"
        assert err.chunk == "# Title\n"
        assert "convert failed" in str(err)
        assert "boom" in str(err)

    def test_long_chunk_preview_is_truncated(self) -> None:
        chunk = "x" * 100
        err = RenderError("sanitize", chunk, "bad markup")
        assert "x" * 40 + "..." in str(err)
        assert "x" * 41 not in str(err)
        # Full chunk is kept on the exception
        assert err.chunk == chunk

    def test_catchable_as_base(self) -> None:
        with pytest.raises(GoteoError):
            raise RenderError("convert", "", "failure")
