# egrid/app/controllers/connections.py
import re
from collections.abc import Mapping

from egrid.domain.entities.grid import Coord
from egrid.domain.entities.references import SIDE_MARKER, ConnectionPoint
from egrid.domain.mechanics.mechanics_core import Mechanics
from egrid.services.mapping_table import MappingTable

# <Letter><Digits>[:<Digits>][*]; the optional terminal part is greedy, so
# at any position the block:terminal form wins over the bare designator.
REFERENCE_RE = re.compile(r"([A-Z]\d+(?::\d+)?)(\*?)")

# leading letter -> (front, back) lead length in mm
LEAD_LENGTHS: dict[str, tuple[float, float]] = {
    "F": (30.0, 50.0),  # fuse
    "X": (20.0, 40.0),  # terminal block
    "K": (60.0, 60.0),  # contactor / relay
    "A": (45.0, 45.0),  # surge protector
}
DEFAULT_LEAD = 25.0


def extract_reference(text: str | None) -> ConnectionPoint | None:
    """First component reference in a free-text cell, e.g. ``"-X20:41* (PE)"``."""
    if not text:
        return None
    m = REFERENCE_RE.search(text)
    if m is None:
        return None
    return ConnectionPoint(
        reference=m.group(1), is_back_side=m.group(2) == SIDE_MARKER, source_text=text
    )


def extract_all_references(text: str | None) -> list[str]:
    if not text:
        return []
    return [m.group(1) for m in REFERENCE_RE.finditer(text)]


class ConnectionResolver:
    def __init__(
        self,
        mappings: MappingTable,
        mechanics: Mechanics,
        lead_lengths: Mapping[str, tuple[float, float]] | None = None,
        default_lead: float = DEFAULT_LEAD,
    ):
        self.mappings = mappings
        self.mechanics = mechanics
        self.lead_lengths = dict(LEAD_LENGTHS if lead_lengths is None else lead_lengths)
        self.default_lead = default_lead

    def resolve_endpoint(self, point: ConnectionPoint) -> Coord | None:
        m = self.mappings.resolve(point.lookup_key)
        if m is None:
            # some keys never encode a side
            m = self.mappings.resolve(point.reference)
        return None if m is None else m.coord

    def connection_offset(self, point: ConnectionPoint) -> float:
        lead = self.lead_lengths.get(point.reference[:1].upper())
        if lead is None:
            return self.default_lead
        front, back = lead
        return back if point.is_back_side else front

    def compute_distance(self, text_a: str | None, text_b: str | None) -> float | None:
        """Wire length between two reference cells; None if it cannot be resolved."""
        a, b = extract_reference(text_a), extract_reference(text_b)
        if a is None or b is None:
            return None
        pos_a, pos_b = self.resolve_endpoint(a), self.resolve_endpoint(b)
        if pos_a is None or pos_b is None:
            return None
        path = self.mechanics.route(pos_a, pos_b)
        if path is None:
            return None
        base = self.mechanics.router.distance_mm(path, ends_in_special=False)
        return base + self.connection_offset(a) + self.connection_offset(b)
