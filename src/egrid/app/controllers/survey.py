# egrid/app/controllers/survey.py
from egrid.app.controllers.batch import scan_rows
from egrid.app.controllers.connections import extract_all_references
from egrid.app.protocols import DESTINATION_COL, ORIGIN_COL, TabularSource, cell_text
from egrid.services.mapping_table import MappingTable

DESCRIPTION_HINTS = {
    "F": "Fuse",
    "X": "Terminal block",
    "K": "Contactor/relay",
    "A": "Surge protector",
    "S": "Signal",
}


def find_unmapped(
    table: TabularSource,
    mappings: MappingTable,
    first_row: int = 2,
    default_last_row: int = 100,
) -> list[str]:
    found: set[str] = set()
    for row in scan_rows(table, first_row, default_last_row):
        for col in (ORIGIN_COL, DESTINATION_COL):
            found.update(extract_all_references(cell_text(table, row, col)))
    return sorted(ref for ref in found if not mappings.has(ref))


def guess_description(reference: str) -> str:
    return DESCRIPTION_HINTS.get(reference[:1], "")
