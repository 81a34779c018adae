# ===== IMPORTS & DEPENDENCIES =====
import re
from typing import List, Sequence

from steam_toolkit.config import EXPORT_TOOL_NAME
from steam_toolkit.models.records import DlcRecord

# ===== UTILITY FUNCTIONS =====
# Every renderer here is pure: records come out in the order they went in,
# and an empty list still produces a valid document.

_LINE_BREAK_RX = re.compile(r'[\r\n]+')


def single_line(value: str) -> str:
    """Collapses line breaks so a value cannot split an INI entry."""
    return _LINE_BREAK_RX.sub(' ', value or '').strip()


def zero_pad(index: int, width: int) -> str:
    return str(index).zfill(width)


def _document(lines: List[str]) -> str:
    return "\n".join(lines) + "\n"


def export_creamapi(app_id: str, dlc: Sequence[DlcRecord]) -> str:
    """Renders a CreamAPI-style `cream_api.ini`."""
    lines = [
        f"; Generated by {EXPORT_TOOL_NAME}",
        "[steam]",
        f"appid = {app_id}",
        "",
        "[dlc]",
    ]
    for index, record in enumerate(dlc, start=1):
        lines.append(f"dlc{index} = {record.id} ; {single_line(record.name)}")
    return _document(lines)


def export_lumaemu(dlc: Sequence[DlcRecord]) -> str:
    """LumaEmu DLC list: a name comment above each `DLC_<id> = 1`."""
    lines: List[str] = []
    for record in dlc:
        lines.append(f"; {single_line(record.name)}")
        lines.append(f"DLC_{record.id} = 1")
    return _document(lines)


def export_codex(dlc: Sequence[DlcRecord]) -> str:
    """CODEX `steam_emu.ini` entries, indexed from zero and padded to five digits."""
    lines: List[str] = []
    for index, record in enumerate(dlc):
        padded = zero_pad(index, 5)
        lines.append(f"DLC{padded} = {record.id}")
        lines.append(f"DLCName{padded} = {single_line(record.name)}")
    return _document(lines)


def export_3dmgame(dlc: Sequence[DlcRecord]) -> str:
    """3DMGAME entries, indexed from one and padded to three digits."""
    lines: List[str] = []
    for index, record in enumerate(dlc, start=1):
        lines.append(f"; {single_line(record.name)}")
        lines.append(f"DLC{zero_pad(index, 3)} = {record.id}")
    return _document(lines)


def export_skidrow(dlc: Sequence[DlcRecord]) -> str:
    lines: List[str] = []
    for record in dlc:
        lines.append(f"; {single_line(record.name)}")
        lines.append(record.id)
    return _document(lines)


def export_id_name(dlc: Sequence[DlcRecord]) -> str:
    return _document([f"{record.id} = {single_line(record.name)}" for record in dlc])


def export_dlc_ids(dlc: Sequence[DlcRecord]) -> str:
    """Comma-separated DLC ids on one line."""
    return ", ".join(record.id for record in dlc) + "\n"


_GREENLUMA_PROLOGUE = [
    "@ECHO OFF",
    "TITLE {app_name} - {tool}",
    "CLS",
    "",
    ":: WINDOWS WORKING DIR BUG WORKAROUND",
    "CD /D %~dp0",
    "",
    ":: CHECK APPLIST DIR",
    r"IF EXIST .\AppList\NUL (",
    "    RMDIR /S /Q .\\AppList\\",
    ")",
    "",
    ":: CREATE APPLIST DIR",
    "MKDIR .\\AppList\\",
    ":: CREATE DLCS FILES",
]

_GREENLUMA_LAUNCHER = [
    ":: OPTION START GREENLUMA AND GAME",
    r"IF EXIST .\GreenLuma_Reborn.exe GOTO :Q",
    "GOTO :EXIT",
    "",
    ":Q",
    "SET /P c=Do you want to start GreenLuma Reborn and the game now [Y/N]?",
    'IF /I "%c%" EQU "Y" GOTO :START',
    'IF /I "%c%" EQU "N" GOTO :EXIT',
    "GOTO :Q",
    "",
    ":START",
    "CLS",
    "ECHO Launching Greenluma Reborn...",
    "ECHO Launching {app_name}...",
    "ECHO Click 'Yes' when asked to use saved App List",
    "TASKKILL /F /IM steam.exe >nul 2>&1",
    "TIMEOUT /T 2 >nul 2>&1",
    "GreenLuma_Reborn.exe -applaunch {app_id} -NoHook -AutoExit",
    "",
    ":EXIT",
    "EXIT",
]


def export_greenluma_batch(app_id: str, app_name: str, dlc: Sequence[DlcRecord]) -> str:
    """
    GreenLuma `[BATCH MODE]` script: rebuilds `AppList\\` with the app as `0.txt`
    and one file per DLC numbered from 1, then offers to launch the game.
    """
    app_name = single_line(app_name)
    values = {'app_id': app_id, 'app_name': app_name, 'tool': EXPORT_TOOL_NAME}

    lines = [f":: Generated by {EXPORT_TOOL_NAME}"]
    lines.extend(line.format(**values) for line in _GREENLUMA_PROLOGUE)
    lines.append(f":: {app_name}")
    lines.append(f"ECHO {app_id}> .\\AppList\\0.txt")
    for index, record in enumerate(dlc, start=1):
        lines.append(f":: {single_line(record.name)}")
        lines.append(f"ECHO {record.id}> .\\AppList\\{index}.txt")
    lines.extend(line.format(**values) for line in _GREENLUMA_LAUNCHER)
    return _document(lines)
