"""Tests for output format negotiation."""

import pytest

from edge_resizer.core.format_negotiation import resolve_output_format
from edge_resizer.core.models import OutputFormat


class TestResolveOutputFormat:
    """Tests for resolve_output_format."""

    def test_auto_prefers_avif(self):
        assert resolve_output_format("auto", True, True) is OutputFormat.AVIF

    def test_auto_falls_back_to_webp(self):
        assert resolve_output_format("auto", False, True) is OutputFormat.WEBP

    def test_auto_defaults_to_jpeg(self):
        assert resolve_output_format("auto") is OutputFormat.JPEG

    @pytest.mark.parametrize("avif, webp", [(True, True), (False, True), (False, False)])
    def test_jpg_alias_ignores_hint(self, avif, webp):
        assert resolve_output_format("jpg", avif, webp) is OutputFormat.JPEG

    @pytest.mark.parametrize("requested", ["jpeg", "webp", "avif", "png"])
    def test_explicit_format_passes_through(self, requested):
        result = resolve_output_format(requested, True, True)

        assert result.value == requested
        assert result.content_type == f"image/{requested}"
