"""Prize model: labeled, colored wheel entries.

A PrizeSet is rebuilt wholesale whenever the options change; there is no
way to insert into or remove from a live set.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple, overload
import math
import uuid

from ruleta.core.errors import InvalidConfiguration

Color = Tuple[int, int, int]

# Segment colors, assigned by position modulo 6
PALETTE: Tuple[Color, ...] = (
    (255, 0, 85),     # #FF0055 - Hot pink
    (0, 221, 255),    # #00DDFF - Cyan
    (255, 215, 0),    # #FFD700 - Gold
    (157, 0, 255),    # #9D00FF - Violet
    (255, 140, 0),    # #FF8C00 - Orange
    (0, 255, 127),    # #00FF7F - Spring green
)

MIN_PRIZES = 2

DEFAULT_LABELS: Tuple[str, ...] = (
    "10% OFF", "Nada", "2x1", "Sorpresa",
    "50% OFF", "Intenta", "Envío Gratis", "VIP",
)


@dataclass(frozen=True)
class Prize:
    """One option on the wheel."""

    id: str
    text: str
    color: Color


def color_for(index: int) -> Color:
    """Palette color for the prize at a position."""
    return PALETTE[index % len(PALETTE)]


def parse_labels(text: str) -> List[str]:
    """Split an options text block into labels, one per non-blank line."""
    return [line.strip() for line in text.splitlines() if line.strip()]


class PrizeSet(Sequence[Prize]):
    """Immutable ordered collection of at least two prizes.

    Order is meaningful: it decides both the palette color and the angular
    position of each segment.
    """

    __slots__ = ("_prizes",)

    def __init__(self, prizes: Iterable[Prize]):
        items = tuple(prizes)
        if len(items) < MIN_PRIZES:
            raise InvalidConfiguration(
                f"A wheel needs at least {MIN_PRIZES} options, got {len(items)}"
            )
        self._prizes = items

    @classmethod
    def from_labels(cls, labels: Iterable[str]) -> "PrizeSet":
        """Build a prize set from raw labels.

        Labels are trimmed; a label that is blank after trimming is rejected.
        """
        batch = uuid.uuid4().hex[:8]
        prizes = []
        for i, label in enumerate(labels):
            text = label.strip()
            if not text:
                raise InvalidConfiguration(f"Option {i + 1} is blank")
            prizes.append(Prize(id=f"{i}-{batch}", text=text, color=color_for(i)))
        return cls(prizes)

    @property
    def arc_width(self) -> float:
        """Angular width of one segment in radians."""
        return 2 * math.pi / len(self._prizes)

    @property
    def texts(self) -> List[str]:
        return [p.text for p in self._prizes]

    @overload
    def __getitem__(self, index: int) -> Prize: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Prize]: ...

    def __getitem__(self, index):
        return self._prizes[index]

    def __len__(self) -> int:
        return len(self._prizes)

    def __iter__(self) -> Iterator[Prize]:
        return iter(self._prizes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrizeSet):
            return NotImplemented
        return self._prizes == other._prizes

    def __hash__(self) -> int:
        return hash(self._prizes)

    def __repr__(self) -> str:
        return f"PrizeSet({self.texts!r})"
