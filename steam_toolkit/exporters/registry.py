# ===== IMPORTS & DEPENDENCIES =====
import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict

from steam_toolkit.models.records import ToolkitState
from steam_toolkit.exporters.achievements import export_achievements_ini, export_achievements_json
from steam_toolkit.exporters.depots import export_depots_csv
from steam_toolkit.exporters.dlc_lists import (
    export_creamapi, export_lumaemu, export_codex, export_3dmgame,
    export_skidrow, export_id_name, export_dlc_ids, export_greenluma_batch
)

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== TYPES & INTERFACES =====
@dataclass(frozen=True)
class ExportFormat:
    """A named export: the filename suggested for downloads and the renderer."""
    title: str
    filename: str  # may contain {app_id}
    render: Callable[[ToolkitState], str]

    def filename_for(self, state: ToolkitState) -> str:
        return self.filename.format(app_id=state.app_id)

# ===== UTILITY FUNCTIONS =====

def export_store_record_json(state: ToolkitState) -> str:
    """The full normalized StoreRecord, or `null` when the fetch failed."""
    payload = state.record.to_dict() if state.record else None
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"


def to_windows_line_breaks(text: str) -> str:
    """Converts LF line endings to CRLF for files handed to Windows tools."""
    return text.replace("\r\n", "\n").replace("\n", "\r\n")


def app_display_name(state: ToolkitState) -> str:
    """The store name of the app, or "App <id>" when no record was fetched."""
    if state.record and state.record.name:
        return state.record.name
    return f"App {state.app_id}"


EXPORT_FORMATS: Dict[str, ExportFormat] = {
    'creamapi': ExportFormat("CreamAPI", "cream_api.ini", lambda s: export_creamapi(s.app_id, s.dlc)),
    'lumaemu': ExportFormat("LumaEmu (DLC list only)", "LumaEmu_only_dlcs.ini", lambda s: export_lumaemu(s.dlc)),
    'codex': ExportFormat("CODEX (DLC00000, DLCName)", "steam_emu.ini", lambda s: export_codex(s.dlc)),
    '3dmgame': ExportFormat("3DMGAME", "3DMGAME.ini", lambda s: export_3dmgame(s.dlc)),
    'skidrow': ExportFormat("SKIDROW", "steam_api.ini", lambda s: export_skidrow(s.dlc)),
    'id-name': ExportFormat("ID = NAME", "dlcs_id_name.ini", lambda s: export_id_name(s.dlc)),
    'greenluma-batch': ExportFormat("GreenLuma [BATCH MODE]", "{app_id}_AppList.bat", lambda s: export_greenluma_batch(s.app_id, app_display_name(s), s.dlc)),
    'dlc-ids': ExportFormat("DLC IDs", "{app_id}-dlc-ids.txt", lambda s: export_dlc_ids(s.dlc)),
    'achievements-ini': ExportFormat("Achievements (INI)", "achievements.ini", lambda s: export_achievements_ini(s.achievements)),
    'achievements-json': ExportFormat("Achievements (JSON)", "achievements.json", lambda s: export_achievements_json(s.achievements)),
    'depots-csv': ExportFormat("Depots (CSV)", "{app_id}-depots.csv", lambda s: export_depots_csv(s.depots)),
    'json': ExportFormat("Store record (JSON)", "{app_id}-steam-data.json", export_store_record_json),
}


def render_export(format_key: str, state: ToolkitState) -> str:
    """Renders `state` in the named format. Raises KeyError for unknown formats."""
    export_format = EXPORT_FORMATS[format_key]
    logger.debug(f"[render_export] Rendering '{export_format.title}' for app {state.app_id}")
    return export_format.render(state)
