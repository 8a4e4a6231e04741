"""Tests for identifier value objects and SQL helpers."""

import pytest
from uuid import UUID, uuid4

from streamvault.core.exceptions import ValidationError
from streamvault.core.sql import ensure_safe_identifier, escape_like, is_safe_identifier
from streamvault.core.value_objects import AlbumId, SongId, is_valid_uuid


class TestIdentifiers:

    def test_accepts_uuid_and_string(self):
        value = uuid4()

        assert SongId(value).value == value
        assert SongId(str(value)).value == value

    def test_rejects_malformed(self):
        with pytest.raises(ValueError):
            SongId("not-a-uuid")

    def test_rejects_non_rfc_version(self):
        assert not is_valid_uuid("00000000-0000-0000-0000-000000000000")

    def test_is_valid_uuid(self):
        assert is_valid_uuid(uuid4())
        assert is_valid_uuid(SongId.generate())
        assert is_valid_uuid(str(uuid4()).upper())
        assert not is_valid_uuid(123)

    def test_generate_and_str(self):
        album_id = AlbumId.generate()

        assert isinstance(album_id.value, UUID)
        assert str(album_id) == str(album_id.value)
        assert repr(album_id).startswith("AlbumId(")


class TestSqlHelpers:

    @pytest.mark.parametrize("name", ["title", "created_at", "_x", "songs.title"])
    def test_safe_identifiers(self, name):
        assert is_safe_identifier(name)

    @pytest.mark.parametrize(
        "name", ["1col", "title;", "a b", "x--", "", None, "a" * 65, "title)"]
    )
    def test_unsafe_identifiers(self, name):
        assert not is_safe_identifier(name)

    def test_ensure_safe_identifier_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            ensure_safe_identifier("bad name", "sort.field")

        assert exc_info.value.fields == ["sort.field"]

    def test_escape_like(self):
        assert escape_like("100%_a\\b") == "100\\%\\_a\\\\b"
