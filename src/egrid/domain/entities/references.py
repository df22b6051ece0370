# egrid/domain/entities/references.py
from dataclasses import dataclass

SIDE_MARKER = "*"  # trailing marker for the back/bottom side of a component
GROUP_SEPARATOR = ":"  # block:terminal separator, e.g. X20:41


def strip_marker(reference: str) -> tuple[str, bool]:
    """Return the canonical key and whether a trailing side marker was present."""
    return reference.rstrip(SIDE_MARKER), reference.endswith(SIDE_MARKER)


def group_prefix(key: str) -> str | None:
    """``X20:41`` -> ``X20:``; None when the key has no block separator."""
    idx = key.find(GROUP_SEPARATOR)
    if idx < 0:
        return None
    return key[: idx + 1]


@dataclass(frozen=True)
class ComponentMapping:
    reference: str
    row: int
    col: int
    description: str = ""
    default_to_bottom: bool = False
    # only meaningful on copies returned by a lookup
    is_bottom_side: bool = False

    @property
    def coord(self) -> tuple[int, int]:
        return (self.row, self.col)


@dataclass(frozen=True)
class ConnectionPoint:
    reference: str
    is_back_side: bool
    source_text: str = ""

    @property
    def lookup_key(self) -> str:
        return self.reference + (SIDE_MARKER if self.is_back_side else "")


@dataclass
class StandardMeasurement:
    origin_text: str = ""
    destination_text: str = ""
    distance: float = 0.0
    enabled: bool = True

    def matches(self, origin: str, destination: str) -> bool:
        return _contains(origin, self.origin_text) and _contains(
            destination, self.destination_text
        )


def _contains(text: str, needle: str) -> bool:
    return not needle or needle.casefold() in text.casefold()
