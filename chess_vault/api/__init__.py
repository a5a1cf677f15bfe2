"""JSON-friendly boundary for collaborators that store or display games.

- position snapshots
- move descriptor encoding
- chess-study documents built from (and read back into) move ledgers
"""

from .serde import (
    descriptor_to_dict,
    ledger_to_study,
    move_flag_codes,
    snapshot,
    study_to_ledger,
)

__all__ = ["descriptor_to_dict", "ledger_to_study", "move_flag_codes", "snapshot", "study_to_ledger"]
