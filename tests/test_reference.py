"""Tests for booking reference codes."""

from datetime import date

import pytest

from booking_engine.reference import (
    REFERENCE_ALPHABET,
    generate_booking_reference,
    is_valid_reference,
)


class TestGenerate:
    def test_shape(self):
        ref = generate_booking_reference("IOS", date(2025, 12, 20))
        prefix, stamp, suffix = ref.split("-")
        assert prefix == "IOS"
        assert stamp == "251220"
        assert len(suffix) == 4
        assert all(ch in REFERENCE_ALPHABET for ch in suffix)

    def test_generated_references_validate(self):
        assert is_valid_reference(generate_booking_reference("IOS", date(2025, 12, 20)), "IOS")

    def test_mostly_unique(self):
        refs = {generate_booking_reference("IOS", date(2025, 12, 20)) for _ in range(1000)}
        assert len(refs) > 900

    def test_ambiguous_characters_excluded(self):
        for ch in "01OI":
            assert ch not in REFERENCE_ALPHABET

    def test_defaults_use_configured_prefix(self):
        assert generate_booking_reference().startswith("IOS-")


class TestValidate:
    def test_valid(self):
        assert is_valid_reference("IOS-251220-A3F7")

    @pytest.mark.parametrize(
        "ref",
        ["IOS-251220-abcde", "IOS-25122-ABCD", "ABC-251220-ABCD", "INVALID", ""],
    )
    def test_invalid(self, ref):
        assert not is_valid_reference(ref)

    def test_custom_prefix(self):
        assert is_valid_reference("ABC-251220-ABCD", "ABC")

    def test_non_string(self):
        assert not is_valid_reference(None)  # type: ignore[arg-type]
