"""Unit tests for media type parsing and matching."""

import pytest

from mvcmeta.core.media_types import MediaType, MediaTypeCollection


class TestParse:
    def test_type_and_subtype_are_lower_cased(self) -> None:
        media_type = MediaType.parse("Application/JSON")

        assert media_type.type == "application"
        assert media_type.subtype == "json"
        assert media_type.parameters == ()

    def test_parameters(self) -> None:
        media_type = MediaType.parse('text/plain; charset="UTF-8"; q=0.5')

        assert media_type.parameters == (("charset", "UTF-8"), ("q", "0.5"))
        assert str(media_type) == "text/plain; charset=UTF-8; q=0.5"

    def test_suffix(self) -> None:
        media_type = MediaType.parse("application/vnd.api+json")

        assert media_type.subtype_without_suffix == "vnd.api"
        assert media_type.subtype_suffix == "json"

    @pytest.mark.parametrize("text", ["", "json", "application/", "/json", "text/plain; charset"])
    def test_invalid(self, text) -> None:
        with pytest.raises(ValueError):
            MediaType.parse(text)

    def test_wildcards(self) -> None:
        assert MediaType.parse("*/*").matches_all_types is True
        assert MediaType.parse("text/*").matches_all_subtypes is True
        assert MediaType.parse("application/*+json").matches_all_subtypes is False
        assert MediaType.parse("application/*+json").matches_all_subtypes_without_suffix is True

    def test_has_wildcard(self) -> None:
        assert MediaType.parse("*/*").has_wildcard is True
        assert MediaType.parse("text/*").has_wildcard is True
        assert MediaType.parse("application/*+json").has_wildcard is True
        assert MediaType.parse("application/vnd.api+json").has_wildcard is False


class TestIsSubsetOf:
    @pytest.mark.parametrize(
        "media_type,other,expected",
        [
            ("application/json", "application/json", True),
            ("application/json", "application/*", True),
            ("application/json", "*/*", True),
            ("application/json", "text/json", False),
            ("application/json", "application/xml", False),
            ("application/vnd.api+json", "application/*+json", True),
            ("application/vnd.api+json", "application/vnd.api+json", True),
            ("application/vnd.api+json", "application/json", True),
            ("application/json", "application/*+json", False),
            ("application/vnd.api+xml", "application/*+json", False),
            ("application/*+json", "application/*+json", True),
            ("application/*+json", "application/json", False),
            ("text/*", "text/plain", False),
            ("text/*", "text/*", True),
            ("*/*", "application/json", False),
        ],
    )
    def test_type_and_subtype(self, media_type, other, expected) -> None:
        assert MediaType.parse(media_type).is_subset_of(MediaType.parse(other)) is expected

    def test_parameters_must_be_contained(self) -> None:
        utf8 = MediaType.parse("text/plain; charset=utf-8")

        assert utf8.is_subset_of(MediaType.parse("text/plain")) is True
        assert utf8.is_subset_of(MediaType.parse("text/plain; charset=UTF-8")) is True
        assert MediaType.parse("text/plain").is_subset_of(utf8) is False

    def test_quality_parameter_is_ignored(self) -> None:
        assert MediaType.parse("text/plain").is_subset_of(MediaType.parse("text/plain; q=0.8")) is True


class TestMediaTypeCollection:
    def test_validates_on_insert(self) -> None:
        collection = MediaTypeCollection()

        with pytest.raises(ValueError):
            collection.append("not a media type")

    def test_validates_on_construction(self) -> None:
        with pytest.raises(ValueError):
            MediaTypeCollection(["application/json", "bad"])

    def test_none_means_any(self) -> None:
        collection = MediaTypeCollection(["application/json"])
        collection.append(None)

        assert collection == ["application/json", None]
