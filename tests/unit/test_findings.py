"""
Unit tests for verification findings.
"""

import dataclasses

import pytest

from catalog_verifier.locale import Locale
from catalog_verifier.verifier import EnumTypeRef, ErrorBuilder, ErrorKind, ErrorRecord
from samples.messages import Messages


@pytest.fixture
def builder() -> ErrorBuilder:
    return ErrorBuilder(EnumTypeRef.of(Messages), Locale("fr", "CA"), "app.messages")


class TestErrorKind:
    """Test the closed set of failure classes."""

    def test_members(self):
        assert [kind.value for kind in ErrorKind] == [
            "MISSING_CATALOG_NAME_METADATA",
            "CATALOG_NOT_FOUND",
            "EMPTY_CATALOG",
            "EMPTY_KEY_SET",
            "KEY_ABSENT_FROM_CATALOG",
            "KEY_ABSENT_FROM_ENUM",
        ]

    def test_string_comparison(self):
        assert ErrorKind.EMPTY_CATALOG == "EMPTY_CATALOG"


class TestErrorBuilder:
    """Test stamping of shared context."""

    def test_build_with_key(self, builder):
        error = builder.build(ErrorKind.KEY_ABSENT_FROM_CATALOG, "FAREWELL")

        assert error == ErrorRecord(
            ErrorKind.KEY_ABSENT_FROM_CATALOG,
            "FAREWELL",
            EnumTypeRef(Messages, "samples.messages.Messages"),
            Locale("fr", "CA"),
            "app.messages",
        )

    def test_build_without_key(self, builder):
        assert builder.build(ErrorKind.EMPTY_CATALOG).key == ""

    def test_records_are_immutable(self, builder):
        error = builder.build(ErrorKind.EMPTY_CATALOG)

        with pytest.raises(dataclasses.FrozenInstanceError):
            error.key = "changed"


class TestRendering:
    """Test the human-readable form of findings."""

    @pytest.mark.parametrize("kind", list(ErrorKind))
    def test_every_kind_names_type_and_locale(self, builder, kind):
        text = str(builder.build(kind, "SOME_KEY"))

        assert text.startswith(f"[{kind.value}] ")
        assert "samples.messages.Messages" in text
        assert "[fr_CA]" in text

    def test_absent_from_catalog(self, builder):
        text = str(builder.build(ErrorKind.KEY_ABSENT_FROM_CATALOG, "FAREWELL"))

        assert text == (
            "[KEY_ABSENT_FROM_CATALOG] Key [FAREWELL] present in enum type "
            "[samples.messages.Messages] but absent in catalog [app.messages] for locale [fr_CA]"
        )

    def test_absent_from_enum_names_key(self, builder):
        assert "Key [EXTRA]" in str(builder.build(ErrorKind.KEY_ABSENT_FROM_ENUM, "EXTRA"))

    def test_to_dict(self, builder):
        data = builder.build(ErrorKind.CATALOG_NOT_FOUND).to_dict()

        assert data["kind"] == "CATALOG_NOT_FOUND"
        assert data["key"] == ""
        assert data["enum_type"] == "samples.messages.Messages"
        assert data["locale"] == "fr_CA"
        assert data["catalog_name"] == "app.messages"
        assert "app.messages" in data["message"]
