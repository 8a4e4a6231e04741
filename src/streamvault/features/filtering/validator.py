"""Filter validation for untrusted caller input.

Each ``validate_*_filters`` method accepts a mapping of filter names
(snake_case or camelCase) to raw values and returns a typed filter object.

- Keys that are not safe identifiers are errors.
- Safe keys the entity does not recognize are ignored.
- Every recognized field is checked; all violations are reported together
  in one ``ValidationError``.
"""

from datetime import date, datetime, time
from typing import Any, Callable, Dict, Iterable, Mapping, Sequence, Tuple, Type, TypeVar
from uuid import UUID

from ...config.constants import Genre, Limits, UserRole
from ...core.exceptions import ValidationError, ValidationErrorCollector
from ...core.sql import is_safe_identifier
from ...core.value_objects import is_valid_uuid
from ..pagination.validator import to_snake_case
from .entities import AlbumFilters, ArtistFilters, DateRange, SongFilters, UserFilters

F = TypeVar("F")

FieldParser = Callable[[Any], Any]

_FORBIDDEN_SEARCH_FRAGMENTS = ("<", ">", "\0")
_TRUE_STRINGS = {"true", "1"}
_FALSE_STRINGS = {"false", "0"}


# ----------------------------------------------------------------------
# Field parsers: return the normalized value or raise ValueError
# ----------------------------------------------------------------------

def parse_uuid(value: Any) -> UUID:
    if not is_valid_uuid(value):
        raise ValueError("must be a valid UUID")
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        return UUID(value)
    return value.value


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError("must be a boolean")


def parse_non_negative_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError("must be a non-negative integer")
    return value


def parse_year(value: Any) -> int:
    max_year = datetime.now().year + Limits.FUTURE_YEAR_ALLOWANCE
    if isinstance(value, bool) or not isinstance(value, int) or not (
        Limits.MIN_YEAR <= value <= max_year
    ):
        raise ValueError(f"must be a year between {Limits.MIN_YEAR} and {max_year}")
    return value


def enum_parser(enum_type: Type) -> FieldParser:
    allowed = ", ".join(member.value for member in enum_type)

    def parse(value: Any):
        try:
            return enum_type(value)
        except ValueError:
            raise ValueError(f"must be one of: {allowed}") from None

    return parse


def parse_search(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("must be a string")
    term = value.strip()
    if not term:
        raise ValueError("cannot be empty")
    if len(term) > Limits.MAX_SEARCH_LENGTH:
        raise ValueError(f"cannot exceed {Limits.MAX_SEARCH_LENGTH} characters")
    if any(fragment in term for fragment in _FORBIDDEN_SEARCH_FRAGMENTS) or (
        "javascript:" in term.lower()
    ):
        raise ValueError("contains invalid characters")
    return term


def _as_list(value: Any, what: str) -> Sequence[Any]:
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable) or isinstance(value, Mapping):
        raise ValueError(f"must be a list of {what}")
    return list(value)


def parse_tags(value: Any) -> Tuple[str, ...]:
    tags = []
    for tag in _as_list(value, "strings"):
        if not isinstance(tag, str):
            raise ValueError("must contain only strings")
        normalized = tag.strip().lower()
        if not normalized:
            continue
        if len(normalized) > Limits.MAX_TAG_LENGTH:
            raise ValueError(f"tags cannot exceed {Limits.MAX_TAG_LENGTH} characters")
        if normalized not in tags:
            tags.append(normalized)
    return tuple(tags)


def parse_genres(value: Any) -> Tuple[Genre, ...]:
    parse_genre = enum_parser(Genre)
    genres = []
    for raw in _as_list(value, "genres"):
        genre = parse_genre(raw)
        if genre not in genres:
            genres.append(genre)
    return tuple(genres)


def _parse_datetime(value: Any, bound: str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValueError(f"'{bound}' must be a valid date")


def parse_date_range(value: Any) -> DateRange:
    if isinstance(value, DateRange):
        start, end = value.start, value.end
    elif isinstance(value, Mapping):
        start, end = value.get("from"), value.get("to")
    else:
        raise ValueError("must be an object with 'from' and/or 'to'")

    start = _parse_datetime(start, "from") if start is not None else None
    end = _parse_datetime(end, "to") if end is not None else None
    if start is not None and end is not None:
        try:
            out_of_order = start > end
        except TypeError:
            raise ValueError("'from' and 'to' must both include or both omit a timezone") from None
        if out_of_order:
            raise ValueError("'from' date cannot be after 'to' date")
    return DateRange(start=start, end=end)


# ----------------------------------------------------------------------
# Per-entity rules
# ----------------------------------------------------------------------

USER_FIELDS: Dict[str, FieldParser] = {
    "role": enum_parser(UserRole),
    "is_active": parse_bool,
    "is_verified": parse_bool,
    "created_at": parse_date_range,
    "search": parse_search,
}

ARTIST_FIELDS: Dict[str, FieldParser] = {
    "is_verified": parse_bool,
    "genres": parse_genres,
    "min_followers": parse_non_negative_int,
    "max_followers": parse_non_negative_int,
    "created_at": parse_date_range,
    "search": parse_search,
}

SONG_FIELDS: Dict[str, FieldParser] = {
    "artist_id": parse_uuid,
    "album_id": parse_uuid,
    "genre": enum_parser(Genre),
    "is_public": parse_bool,
    "min_duration": parse_non_negative_int,
    "max_duration": parse_non_negative_int,
    "year": parse_year,
    "explicit": parse_bool,
    "tags": parse_tags,
    "created_at": parse_date_range,
    "search": parse_search,
}

ALBUM_FIELDS: Dict[str, FieldParser] = {
    "artist_id": parse_uuid,
    "genre": enum_parser(Genre),
    "is_public": parse_bool,
    "release_year": parse_year,
    "min_songs": parse_non_negative_int,
    "max_songs": parse_non_negative_int,
    "created_at": parse_date_range,
    "search": parse_search,
}


class FilterValidator:
    """Validates and normalizes per-entity filter input."""

    @staticmethod
    def validate_user_filters(raw: Any) -> UserFilters:
        return FilterValidator._validate(raw, UserFilters, USER_FIELDS)

    @staticmethod
    def validate_artist_filters(raw: Any) -> ArtistFilters:
        return FilterValidator._validate(
            raw, ArtistFilters, ARTIST_FIELDS, [("min_followers", "max_followers")]
        )

    @staticmethod
    def validate_song_filters(raw: Any) -> SongFilters:
        return FilterValidator._validate(
            raw, SongFilters, SONG_FIELDS, [("min_duration", "max_duration")]
        )

    @staticmethod
    def validate_album_filters(raw: Any) -> AlbumFilters:
        return FilterValidator._validate(
            raw, AlbumFilters, ALBUM_FIELDS, [("min_songs", "max_songs")]
        )

    @staticmethod
    def _validate(
        raw: Any,
        filters_type: Type[F],
        rules: Mapping[str, FieldParser],
        ordered_pairs: Sequence[Tuple[str, str]] = (),
    ) -> F:
        if raw is None:
            return filters_type()
        if isinstance(raw, filters_type):
            return raw
        if not isinstance(raw, Mapping):
            raise ValidationError.for_field("filters", "Filters must be a mapping")

        collector = ValidationErrorCollector()
        values: Dict[str, Any] = {}

        for key, value in raw.items():
            if not is_safe_identifier(key):
                collector.add(str(key), f"Invalid filter name: {key!r}")
                continue
            name = to_snake_case(key)
            parser = rules.get(name)
            if parser is None or value is None:
                continue
            try:
                values[name] = parser(value)
            except ValueError as e:
                collector.add(name, f"{name} {e}")

        for low, high in ordered_pairs:
            if low in values and high in values and values[low] > values[high]:
                collector.add(high, f"{high} must be greater than or equal to {low}")

        collector.raise_if_errors("Invalid filters")
        return filters_type(**values)
