"""Media type parsing and matching for content negotiation.

Media types follow the `type/subtype[+suffix][; name=value]*` grammar.
Matching supports `*/*`, `type/*` and `type/*+suffix` wildcards.
"""

import re
from dataclasses import dataclass

_MEDIA_TYPE_PATTERN = re.compile(r"^\s*([^\s/;]+)/([^\s/;]+)\s*(?:;(.*))?$")

# Parameters that describe negotiation rather than the media type itself.
_IGNORED_PARAMETERS = frozenset({"q"})


@dataclass(frozen=True)
class MediaType:
    """A parsed media type."""

    type: str
    subtype: str
    parameters: tuple[tuple[str, str], ...] = ()

    @classmethod
    def parse(cls, text: str) -> "MediaType":
        """Parse a media type string.

        Raises:
            ValueError: If the text is not a valid media type.
        """
        match = _MEDIA_TYPE_PATTERN.match(text or "")
        if match is None:
            raise ValueError(f"Invalid media type '{text}'")

        parameters: list[tuple[str, str]] = []
        if match.group(3):
            for raw in match.group(3).split(";"):
                raw = raw.strip()
                if not raw:
                    continue
                name, sep, value = raw.partition("=")
                if not sep or not name.strip():
                    raise ValueError(f"Invalid parameter '{raw}' in media type '{text}'")
                parameters.append((name.strip().lower(), value.strip().strip('"')))

        return cls(
            type=match.group(1).lower(),
            subtype=match.group(2).lower(),
            parameters=tuple(parameters),
        )

    @property
    def subtype_without_suffix(self) -> str:
        return self.subtype.split("+", 1)[0]

    @property
    def subtype_suffix(self) -> str | None:
        _, sep, suffix = self.subtype.partition("+")
        return suffix if sep else None

    @property
    def matches_all_types(self) -> bool:
        return self.type == "*" and self.subtype == "*"

    @property
    def matches_all_subtypes(self) -> bool:
        return self.subtype == "*"

    @property
    def matches_all_subtypes_without_suffix(self) -> bool:
        return self.subtype_without_suffix == "*"

    @property
    def has_wildcard(self) -> bool:
        return self.type == "*" or self.matches_all_subtypes_without_suffix

    def is_subset_of(self, other: "MediaType") -> bool:
        """Whether this media type is contained in `other`.

        `application/json` is a subset of `application/*` and of `*/*`;
        `application/vnd.api+json` is a subset of `application/*+json`
        and of `application/json`.
        """
        return (
            self._matches_type(other)
            and self._matches_subtype(other)
            and self._contains_all_parameters(other)
        )

    def _matches_type(self, other: "MediaType") -> bool:
        return other.matches_all_types or other.type == self.type

    def _matches_subtype(self, other: "MediaType") -> bool:
        if other.matches_all_subtypes:
            return True

        # A wildcard is never contained in a concrete subtype
        if self.matches_all_subtypes_without_suffix and not other.matches_all_subtypes_without_suffix:
            return False

        if other.subtype_suffix is not None:
            # A suffixed set only contains suffixed media types
            if self.subtype_suffix is None:
                return False
            return (
                other.matches_all_subtypes_without_suffix
                or other.subtype_without_suffix == self.subtype_without_suffix
            ) and other.subtype_suffix == self.subtype_suffix

        return other.subtype in (self.subtype, self.subtype_suffix)

    def _contains_all_parameters(self, other: "MediaType") -> bool:
        own = {name: value.lower() for name, value in self.parameters}
        for name, value in other.parameters:
            if name == "*" or name in _IGNORED_PARAMETERS:
                continue
            if own.get(name) != value.lower():
                return False
        return True

    def __str__(self) -> str:
        text = f"{self.type}/{self.subtype}"
        for name, value in self.parameters:
            text += f"; {name}={value}"
        return text


class MediaTypeCollection(list):
    """Ordered collection of media type strings.

    Entries are validated on insertion; `None` stands for "any content type".
    """

    def __init__(self, media_types=()):
        super().__init__()
        self.extend(media_types)

    def append(self, media_type: str | None) -> None:
        if media_type is not None:
            MediaType.parse(media_type)
        super().append(media_type)

    def extend(self, media_types) -> None:
        for media_type in media_types:
            self.append(media_type)
