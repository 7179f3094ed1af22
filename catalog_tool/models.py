"""Entity models for catalog-tool.

Pydantic v2 models with one check_<field> class method per attribute. The
field validators run those checks on construction and, because
validate_assignment is on, on every attribute assignment, so setting an
attribute is the setter and the check is its guard. A failing check raises
a pydantic error whose type is the ViolationKind; Entity.create() and
Entity.assign() turn that back into a ConstraintViolation value.

Models:
    Entity: Base class with create/assign/to_record.
    Book: Identified by ISBN; optional edition, author and publisher refs.
    Movie: Identified by a positive integer id; rating and genres enumerated.
    Author: Identified by a positive integer id.
    Publisher: Identified by its name.
    Settings: Persisted user settings (not an entity).
"""

from __future__ import annotations

from collections.abc import Container, Mapping
from datetime import date
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from catalog_tool.checks import (
    check_date_not_before,
    check_enum_code,
    check_enum_codes,
    check_integer_interval,
    check_pattern,
    check_positive_integer,
    check_string,
    check_unique,
    is_blank,
    is_integer_like,
    next_year,
    parse_date,
)
from catalog_tool.enumerations import GENRE, MOVIE_RATING, Genre, MovieRating
from catalog_tool.violations import ConstraintViolation, Result, ViolationKind

YEAR_FIRST_BOOK = 1459
FIRST_MOVIE_RELEASE = date(1895, 12, 28)
BOOK_TITLE_MAX_LENGTH = 50
TITLE_MAX_LENGTH = 120
NAME_MAX_LENGTH = 120


def _raise_on(violation: ConstraintViolation | None) -> None:
    if violation is not None:
        raise violation.to_error()


def _live_instances(info: ValidationInfo) -> Container[str] | None:
    """Registry contents passed through the validation context, if any."""
    if isinstance(info.context, Mapping):
        return info.context.get("instances")
    return None


# =============================================================================
# Base Entity
# =============================================================================


class Entity(BaseModel):
    """Base class for registry entities.

    Subclasses set key_field to the name of their primary attribute and
    declare that field with frozen=True.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    key_field: ClassVar[str]

    @property
    def key(self) -> str:
        """Registry key: the primary attribute as a string."""
        return str(getattr(self, self.key_field))

    @classmethod
    def normalize_key(cls, value: Any) -> str:
        """Registry key for a raw key value as it would be stored."""
        return str(value).strip()

    @classmethod
    def updatable_fields(cls) -> list[str]:
        return [name for name in cls.model_fields if name != cls.key_field]

    @classmethod
    def create(
        cls,
        slots: Mapping[str, Any],
        instances: Container[str] | None = None,
    ) -> Result[Self]:
        """Construct an entity from raw slots with full validation.

        Args:
            slots: Field name to raw value.
            instances: Keys already in use. When given, the primary key must
                not be one of them.

        Returns:
            Result with the entity, or with the first violation found.
        """
        try:
            entity = cls.model_validate(dict(slots), context={"instances": instances})
        except ValidationError as e:
            return Result(violation=ConstraintViolation.from_validation_error(e))
        return Result(value=entity)

    def assign(self, name: str, value: Any) -> ConstraintViolation | None:
        """Set one attribute through its check; return the violation instead of raising."""
        try:
            setattr(self, name, value)
        except ValidationError as e:
            return ConstraintViolation.from_validation_error(e)
        return None

    def to_record(self) -> dict[str, Any]:
        """JSON-compatible dict of the set attributes (unset optionals omitted)."""
        return self.model_dump(mode="json", exclude_none=True)

    def display_fields(self) -> dict[str, Any]:
        return self.to_record()

    def __str__(self) -> str:
        parts = ", ".join(f"{name}: {value}" for name, value in self.display_fields().items())
        return f"{type(self).__name__}{{ {parts} }}"


# =============================================================================
# Book
# =============================================================================


class Book(Entity):
    """A book, identified by its 10-character ISBN.

    Example:
        >>> Book.create({"isbn": "0465026567", "title": "Gödel, Escher, Bach", "year": 1999}).ok
        True
    """

    key_field: ClassVar[str] = "isbn"

    isbn: str = Field(frozen=True, description="9 digits followed by a digit or 'X'")
    title: str = Field(description=f"Title, at most {BOOK_TITLE_MAX_LENGTH} characters")
    year: int = Field(description=f"Publication year, {YEAR_FIRST_BOOK} to next year")
    edition: int | None = Field(default=None, description="Edition number, optional")
    author_ids: list[int] = Field(default_factory=list, description="Ids of the book's authors")
    publisher_id: str | None = Field(default=None, description="Name of the publisher, optional")

    @staticmethod
    def check_isbn(isbn: Any) -> ConstraintViolation | None:
        return check_string(isbn, "ISBN") or check_pattern(
            isbn.strip(),
            r"[0-9]{9}[0-9X]",
            "The ISBN must be a 10-digit string or a 9-digit string followed by 'X'!",
        )

    @classmethod
    def check_isbn_as_id(cls, isbn: Any, instances: Container[str] | None) -> ConstraintViolation | None:
        return cls.check_isbn(isbn) or check_unique(
            isbn.strip(), instances, "There is already a book record with this ISBN!"
        )

    @staticmethod
    def check_title(title: Any) -> ConstraintViolation | None:
        return check_string(title, "title", BOOK_TITLE_MAX_LENGTH)

    @staticmethod
    def check_year(year: Any) -> ConstraintViolation | None:
        return check_integer_interval(year, "year", YEAR_FIRST_BOOK, next_year())

    @staticmethod
    def check_edition(edition: Any) -> ConstraintViolation | None:
        return check_positive_integer(edition, "edition", required=False)

    @staticmethod
    def check_author_ids(author_ids: Any) -> ConstraintViolation | None:
        if author_ids is None or author_ids == "":
            return None
        if not isinstance(author_ids, (list, tuple)):
            return ConstraintViolation(ViolationKind.RANGE, "The author ids must be a list!")
        for author_id in author_ids:
            violation = check_positive_integer(author_id, "author id")
            if violation:
                return violation
        return None

    @staticmethod
    def check_publisher_id(publisher_id: Any) -> ConstraintViolation | None:
        return check_string(publisher_id, "publisher", NAME_MAX_LENGTH, required=False)

    @field_validator("isbn", mode="before")
    @classmethod
    def validate_isbn(cls, v: Any, info: ValidationInfo) -> str:
        _raise_on(cls.check_isbn_as_id(v, _live_instances(info)))
        return str(v).strip()

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        _raise_on(cls.check_title(v))
        return str(v).strip()

    @field_validator("year", mode="before")
    @classmethod
    def validate_year(cls, v: Any) -> int:
        _raise_on(cls.check_year(v))
        return int(v)

    @field_validator("edition", mode="before")
    @classmethod
    def validate_edition(cls, v: Any) -> int | None:
        _raise_on(cls.check_edition(v))
        return None if is_blank(v) else int(v)

    @field_validator("author_ids", mode="before")
    @classmethod
    def validate_author_ids(cls, v: Any) -> list[int]:
        _raise_on(cls.check_author_ids(v))
        return [int(author_id) for author_id in v or []]

    @field_validator("publisher_id", mode="before")
    @classmethod
    def validate_publisher_id(cls, v: Any) -> str | None:
        _raise_on(cls.check_publisher_id(v))
        return None if is_blank(v) else str(v).strip()


# =============================================================================
# Movie
# =============================================================================


class Movie(Entity):
    """A movie with an enumerated rating and one or more genres."""

    key_field: ClassVar[str] = "movie_id"

    movie_id: str = Field(frozen=True, description="Positive integer id, stored as a string")
    title: str = Field(description=f"Title, at most {TITLE_MAX_LENGTH} characters")
    release_date: date | None = Field(default=None, description="Release date, not before 1895-12-28")
    rating: MovieRating = Field(description="Motion picture rating code")
    genres: list[Genre] = Field(description="One or more genre codes")

    @classmethod
    def normalize_key(cls, value: Any) -> str:
        text = str(value).strip()
        return str(int(text)) if is_integer_like(text) else text

    @staticmethod
    def check_movie_id(movie_id: Any) -> ConstraintViolation | None:
        violation = check_string(str(movie_id) if isinstance(movie_id, int) else movie_id, "movie ID")
        if violation:
            return violation
        text = str(movie_id).strip()
        violation = check_pattern(text, r"[0-9]+", "The movie ID must be a positive integer!")
        if violation:
            return violation
        if int(text) < 1:
            return ConstraintViolation(ViolationKind.RANGE, "The movie ID must be a positive integer!")
        return None

    @classmethod
    def check_movie_id_as_id(cls, movie_id: Any, instances: Container[str] | None) -> ConstraintViolation | None:
        return cls.check_movie_id(movie_id) or check_unique(
            cls.normalize_key(movie_id), instances, "There is already a movie record with this ID!"
        )

    @staticmethod
    def check_title(title: Any) -> ConstraintViolation | None:
        return check_string(title, "title", TITLE_MAX_LENGTH)

    @staticmethod
    def check_release_date(release_date: Any) -> ConstraintViolation | None:
        return check_date_not_before(release_date, "release date", FIRST_MOVIE_RELEASE, required=False)

    @staticmethod
    def check_rating(rating: Any) -> ConstraintViolation | None:
        return check_enum_code(rating, "rating", MOVIE_RATING)

    @staticmethod
    def check_genres(genres: Any) -> ConstraintViolation | None:
        return check_enum_codes(genres, "genre", GENRE)

    @field_validator("movie_id", mode="before")
    @classmethod
    def validate_movie_id(cls, v: Any, info: ValidationInfo) -> str:
        _raise_on(cls.check_movie_id_as_id(v, _live_instances(info)))
        return str(int(str(v).strip()))

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        _raise_on(cls.check_title(v))
        return str(v).strip()

    @field_validator("release_date", mode="before")
    @classmethod
    def validate_release_date(cls, v: Any) -> date | None:
        _raise_on(cls.check_release_date(v))
        return None if is_blank(v) else parse_date(v)

    @field_validator("rating", mode="before")
    @classmethod
    def validate_rating(cls, v: Any) -> MovieRating:
        _raise_on(cls.check_rating(v))
        return MOVIE_RATING.member(int(v))

    @field_validator("genres", mode="before")
    @classmethod
    def validate_genres(cls, v: Any) -> list[Genre]:
        _raise_on(cls.check_genres(v))
        return [GENRE.member(code) for code in v]

    def display_fields(self) -> dict[str, Any]:
        fields = self.to_record()
        fields["rating"] = self.rating.name
        fields["genres"] = GENRE.to_string(self.genres)
        return fields


# =============================================================================
# Author
# =============================================================================


class Author(Entity):
    """A book author, identified by a positive integer id."""

    key_field: ClassVar[str] = "author_id"

    author_id: int = Field(frozen=True, description="Positive integer id")
    name: str = Field(description=f"Full name, at most {NAME_MAX_LENGTH} characters")

    @classmethod
    def normalize_key(cls, value: Any) -> str:
        text = str(value).strip()
        return str(int(text)) if is_integer_like(text) else text

    @staticmethod
    def check_author_id(author_id: Any) -> ConstraintViolation | None:
        return check_positive_integer(author_id, "the author ID")

    @classmethod
    def check_author_id_as_id(cls, author_id: Any, instances: Container[str] | None) -> ConstraintViolation | None:
        return cls.check_author_id(author_id) or check_unique(
            cls.normalize_key(author_id), instances, "There is already an author record with this ID!"
        )

    @staticmethod
    def check_name(name: Any) -> ConstraintViolation | None:
        return check_string(name, "name", NAME_MAX_LENGTH)

    @field_validator("author_id", mode="before")
    @classmethod
    def validate_author_id(cls, v: Any, info: ValidationInfo) -> int:
        _raise_on(cls.check_author_id_as_id(v, _live_instances(info)))
        return int(v)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        _raise_on(cls.check_name(v))
        return str(v).strip()


# =============================================================================
# Publisher
# =============================================================================


class Publisher(Entity):
    """A publisher, identified by its name."""

    key_field: ClassVar[str] = "name"

    name: str = Field(frozen=True, description=f"Publisher name, at most {NAME_MAX_LENGTH} characters")
    address: str = Field(description="Postal address or city and country")

    @staticmethod
    def check_name(name: Any) -> ConstraintViolation | None:
        return check_string(name, "publisher name", NAME_MAX_LENGTH)

    @classmethod
    def check_name_as_id(cls, name: Any, instances: Container[str] | None) -> ConstraintViolation | None:
        return cls.check_name(name) or check_unique(
            name.strip(), instances, "There is already a publisher record with this name!"
        )

    @staticmethod
    def check_address(address: Any) -> ConstraintViolation | None:
        return check_string(address, "address", NAME_MAX_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any, info: ValidationInfo) -> str:
        _raise_on(cls.check_name_as_id(v, _live_instances(info)))
        return str(v).strip()

    @field_validator("address", mode="before")
    @classmethod
    def validate_address(cls, v: Any) -> str:
        _raise_on(cls.check_address(v))
        return str(v).strip()


# =============================================================================
# Settings
# =============================================================================


class Settings(BaseModel):
    """Global settings for catalog-tool, persisted in settings.json.

    Attributes:
        data_dir: Directory holding the registry files. None means the
            configuration directory.

    Example:
        >>> settings = Settings(data_dir="/srv/catalog")
    """

    data_dir: str | None = Field(default=None, description="Directory holding the registry files")
