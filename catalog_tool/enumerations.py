"""Enumerations for closed-choice attributes.

Every enumeration is a closed IntEnum whose codes start at 1, paired with a
table of display labels. The Enumeration helper answers the questions the
entity checks and the CLI ask of such a table: the highest valid code, the
label for a code, and how to print or compare a multi-valued selection.

Enums:
    MovieRating: Motion picture rating (G .. NC17).
    Genre: Movie genre.

Helpers:
    MOVIE_RATING: Enumeration over MovieRating with display labels.
    GENRE: Enumeration over Genre with display labels.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence
from enum import IntEnum


class Enumeration[E: IntEnum]:
    """An IntEnum plus its display labels.

    Args:
        members: The IntEnum type. Codes must be 1..N.
        labels: Display label per member. Members without an entry fall
            back to their title-cased name.

    Example:
        >>> GENRE.max
        15
        >>> GENRE.label(3)
        'Crime'
        >>> GENRE.to_string([3, 10])
        'Crime, Drama'
    """

    def __init__(self, members: type[E], labels: Mapping[E, str] | None = None) -> None:
        codes = [m.value for m in members]
        if codes != list(range(1, len(codes) + 1)):
            raise ValueError(f"{members.__name__} codes must run from 1 to {len(codes)}")
        self.members = members
        labels = labels or {}
        self._labels: dict[E, str] = {
            m: labels.get(m, m.name.replace("_", " ").title()) for m in members
        }

    @classmethod
    def from_list(cls, name: str, labels: Sequence[str]) -> Enumeration[IntEnum]:
        """Build an enumeration from an ordered list of labels.

        The label at position i gets code i + 1; member names are the labels
        upper-cased with non-alphanumeric runs replaced by underscores.

        Example:
            >>> forms = Enumeration.from_list("PublicationForm", ["hardcover", "ePub"])
            >>> forms.members.EPUB
            <PublicationForm.EPUB: 2>
        """
        names = [_member_name(label) for label in labels]
        members = IntEnum(name, names, start=1)  # type: ignore[misc]
        return cls(members, {members[n]: label for n, label in zip(names, labels)})  # type: ignore[arg-type]

    @classmethod
    def from_mapping(cls, name: str, mapping: Mapping[str, str]) -> Enumeration[IntEnum]:
        """Build an enumeration from a name-to-label mapping, in mapping order.

        Example:
            >>> languages = Enumeration.from_mapping("Language", {"en": "English", "de": "German"})
            >>> languages.label(2)
            'German'
        """
        names = [_member_name(key) for key in mapping]
        members = IntEnum(name, names, start=1)  # type: ignore[misc]
        return cls(members, {members[n]: label for n, label in zip(names, mapping.values())})  # type: ignore[arg-type]

    @property
    def max(self) -> int:
        """Highest valid code."""
        return len(self._labels)

    @property
    def names(self) -> list[str]:
        return [m.name for m in self.members]

    @property
    def labels(self) -> list[str]:
        return list(self._labels.values())

    def contains(self, code: object) -> bool:
        """True if code is an int (not bool) within 1..max."""
        return isinstance(code, int) and not isinstance(code, bool) and 1 <= code <= self.max

    def member(self, code: int) -> E:
        """Return the member for a code.

        Raises:
            ValueError: If the code is outside 1..max.
        """
        if not self.contains(code):
            raise ValueError(
                f"Invalid {self.members.__name__} code: {code!r}. "
                f"Valid codes are 1 to {self.max}."
            )
        return self.members(code)

    def label(self, code: int) -> str:
        """Return the display label for a code."""
        return self._labels[self.member(code)]

    def to_string(self, codes: Iterable[int]) -> str:
        """Join the labels of a multi-valued selection with ', '."""
        return ", ".join(self.label(code) for code in codes)

    @staticmethod
    def is_equal(first: Sequence[int] | None, second: Sequence[int] | None) -> bool:
        """Compare two selections element-wise, order included."""
        first = list(first or [])
        second = list(second or [])
        return len(first) == len(second) and all(
            int(a) == int(b) for a, b in zip(first, second)
        )

    def __len__(self) -> int:
        return self.max

    def __repr__(self) -> str:
        return f"Enumeration({self.members.__name__}, max={self.max})"


def _member_name(label: str) -> str:
    return re.sub(r"[^0-9A-Za-z]+", "_", label).strip("_").upper()


class MovieRating(IntEnum):
    """Motion picture rating."""

    G = 1
    PG = 2
    PG13 = 3
    R = 4
    NC17 = 5


class Genre(IntEnum):
    """Movie genre."""

    ACTION = 1
    ANIMATION = 2
    CRIME = 3
    WAR = 4
    SCI_FI = 5
    ADVENTURE = 6
    FANTASY = 7
    COMEDY = 8
    DOCUMENTARY = 9
    DRAMA = 10
    FAMILY = 11
    FILM_NOIR = 12
    HORROR = 13
    MUSICAL = 14
    ROMANCE = 15


MOVIE_RATING = Enumeration(
    MovieRating,
    {
        MovieRating.G: "General Audiences",
        MovieRating.PG: "Parental Guidance",
        MovieRating.PG13: "Not Under 13",
        MovieRating.R: "Restricted",
        MovieRating.NC17: "Not Under 17",
    },
)

GENRE = Enumeration(Genre, {Genre.SCI_FI: "Sci-Fi", Genre.FILM_NOIR: "Film-Noir"})
