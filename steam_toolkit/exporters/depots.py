# ===== IMPORTS & DEPENDENCIES =====
import csv
import io
from typing import Sequence

from steam_toolkit.models.records import DepotRecord

# ===== CONFIGURATION & CONSTANTS =====
DEPOT_CSV_HEADER = "depot_id,name,manifests,os_list"

# ===== UTILITY FUNCTIONS =====

def export_depots_csv(depots: Sequence[DepotRecord]) -> str:
    """
    Header row as-is, then one row per depot with every field double-quoted
    and embedded quotes doubled.
    """
    buffer = io.StringIO()
    buffer.write(DEPOT_CSV_HEADER + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for depot in depots:
        writer.writerow([depot.id, depot.name, depot.manifests, depot.os_list])
    return buffer.getvalue()
