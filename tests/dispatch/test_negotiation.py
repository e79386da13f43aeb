"""Tests for path-extension content negotiation."""

from __future__ import annotations

import pytest

from restcore.dispatch.negotiation import NegotiatedPath, negotiate, split_extension


class TestSplitExtension:
    @pytest.mark.parametrize(
        ("segment", "expected"),
        [
            ("report.csv", ("report", "csv")),
            ("archive.tar.gz", ("archive.tar", "gz")),
            (".json", ("", "json")),
            ("report", ("report", "")),
            ("report.", ("report.", "")),
            ("", ("", "")),
        ],
    )
    def test_split(self, segment: str, expected: tuple[str, str]) -> None:
        assert split_extension(segment) == expected


class TestNegotiate:
    def test_extension_stripped_and_format_set(self) -> None:
        result = negotiate(["reports", "2024", "report.csv"], allow_extensions=True)
        assert result == NegotiatedPath(("reports", "2024", "report"), "csv")

    def test_disabled_leaves_path_and_format(self) -> None:
        result = negotiate(["reports", "report.csv"], allow_extensions=False)
        assert result.path == ("reports", "report.csv")
        assert result.output_format is None

    def test_no_extension_untouched(self) -> None:
        result = negotiate(["users", "42"], allow_extensions=True)
        assert result.path == ("users", "42")
        assert result.output_format is None

    def test_only_last_segment_inspected(self) -> None:
        result = negotiate(["v1.2", "users"], allow_extensions=True)
        assert result.path == ("v1.2", "users")
        assert result.output_format is None

    def test_extension_only_segment_leaves_empty_base(self) -> None:
        result = negotiate(["users", ".json"], allow_extensions=True)
        assert result.path == ("users", "")
        assert result.output_format == "json"

    def test_empty_path(self) -> None:
        result = negotiate([], allow_extensions=True)
        assert result == NegotiatedPath(())

    def test_input_not_mutated(self) -> None:
        path = ["report.csv"]
        negotiate(path, allow_extensions=True)
        assert path == ["report.csv"]
