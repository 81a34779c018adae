import json

import pytest

from steam_toolkit.exporters.achievements import export_achievements_ini, export_achievements_json
from steam_toolkit.exporters.depots import export_depots_csv
from steam_toolkit.exporters.dlc_lists import (
    export_3dmgame, export_codex, export_creamapi, export_dlc_ids, export_greenluma_batch, export_id_name,
    export_lumaemu, export_skidrow,
)
from steam_toolkit.exporters.registry import EXPORT_FORMATS, render_export, to_windows_line_breaks
from steam_toolkit.models.records import AchievementRecord, DepotRecord, DlcRecord, ToolkitState
from steam_toolkit.sources.store_api import normalize

DLC = [DlcRecord(id="10", name="Alpha"), DlcRecord(id="20", name="Beta")]


def test_creamapi_document():
    assert export_creamapi("500", DLC) == (
        "; Generated by Steam Data Toolkit\n"
        "[steam]\n"
        "appid = 500\n"
        "\n"
        "[dlc]\n"
        "dlc1 = 10 ; Alpha\n"
        "dlc2 = 20 ; Beta\n"
    )


def test_creamapi_without_dlc_is_still_valid():
    document = export_creamapi("500", [])

    assert document.endswith("[dlc]\n")
    assert "appid = 500" in document


def test_creamapi_keeps_names_on_one_line():
    document = export_creamapi("1", [DlcRecord(id="2", name="Two\nLines")])

    assert "dlc1 = 2 ; Two Lines\n" in document


def test_achievements_ini():
    achievements = [AchievementRecord(name="ACH_A", display_name="A"), AchievementRecord(name="ACH_B", display_name="B")]

    assert export_achievements_ini(achievements) == "[Achievements]\nACH_A=1\nACH_B=1\n"
    assert export_achievements_ini([]) == "[Achievements]\n"


def test_achievements_json():
    achievements = [AchievementRecord(name="ACH_A", display_name="A", description="Do A", icon="i.jpg", icon_gray="g.jpg")]

    document = export_achievements_json(achievements)

    assert json.loads(document) == [
        {'name': "ACH_A", 'displayName': "A", 'description': "Do A", 'icon': "i.jpg", 'iconGray': "g.jpg"}
    ]
    assert '\n  {\n    "name": "ACH_A",' in document
    assert export_achievements_json([]) == "[]\n"


def test_depots_csv_quotes_every_field():
    depots = [DepotRecord(id="441", name='He said "hi"', manifests="123", os_list="Windows, macOS")]

    assert export_depots_csv(depots) == (
        "depot_id,name,manifests,os_list\n"
        '"441","He said ""hi""","123","Windows, macOS"\n'
    )


def test_depots_csv_empty():
    assert export_depots_csv([]) == "depot_id,name,manifests,os_list\n"


def test_exporters_preserve_input_order():
    reversed_dlc = list(reversed(DLC))

    assert export_id_name(reversed_dlc) == "20 = Beta\n10 = Alpha\n"
    assert export_dlc_ids(reversed_dlc) == "20, 10\n"


def test_codex_indexes_from_zero_with_padding():
    assert export_codex(DLC) == "DLC00000 = 10\nDLCName00000 = Alpha\nDLC00001 = 20\nDLCName00001 = Beta\n"


def test_3dmgame_indexes_from_one_with_padding():
    assert export_3dmgame(DLC) == "; Alpha\nDLC001 = 10\n; Beta\nDLC002 = 20\n"


def test_lumaemu_and_skidrow():
    assert export_lumaemu(DLC[:1]) == "; Alpha\nDLC_10 = 1\n"
    assert export_skidrow(DLC[:1]) == "; Alpha\n10\n"


def test_exports_are_deterministic():
    assert export_creamapi("500", DLC) == export_creamapi("500", DLC)


@pytest.mark.parametrize("format_key", sorted(EXPORT_FORMATS))
def test_every_format_renders_an_empty_state(format_key):
    document = render_export(format_key, ToolkitState(app_id="1"))

    assert document.endswith("\n")


def test_json_export_dumps_store_record():
    record = normalize("440", {'name': "TF2", 'dlc': [1]})
    state = ToolkitState(app_id="440", record=record)

    payload = json.loads(render_export('json', state))

    assert payload['app_id'] == "440"
    assert payload['dlc'] == ["1"]


def test_filename_for_uses_app_id():
    assert EXPORT_FORMATS['depots-csv'].filename_for(ToolkitState(app_id="440")) == "440-depots.csv"
    assert EXPORT_FORMATS['creamapi'].filename_for(ToolkitState(app_id="440")) == "cream_api.ini"


def test_windows_line_breaks():
    assert to_windows_line_breaks("a\nb\r\nc\n") == "a\r\nb\r\nc\r\n"


GREENLUMA_LAUNCHER = (
    ":: OPTION START GREENLUMA AND GAME\n"
    "IF EXIST .\\GreenLuma_Reborn.exe GOTO :Q\n"
    "GOTO :EXIT\n"
    "\n"
    ":Q\n"
    "SET /P c=Do you want to start GreenLuma Reborn and the game now [Y/N]?\n"
    'IF /I "%c%" EQU "Y" GOTO :START\n'
    'IF /I "%c%" EQU "N" GOTO :EXIT\n'
    "GOTO :Q\n"
    "\n"
    ":START\n"
    "CLS\n"
    "ECHO Launching Greenluma Reborn...\n"
    "ECHO Launching Demo Game...\n"
    "ECHO Click 'Yes' when asked to use saved App List\n"
    "TASKKILL /F /IM steam.exe >nul 2>&1\n"
    "TIMEOUT /T 2 >nul 2>&1\n"
    "GreenLuma_Reborn.exe -applaunch 500 -NoHook -AutoExit\n"
    "\n"
    ":EXIT\n"
    "EXIT\n"
)

GREENLUMA_PROLOGUE = (
    ":: Generated by Steam Data Toolkit\n"
    "@ECHO OFF\n"
    "TITLE Demo Game - Steam Data Toolkit\n"
    "CLS\n"
    "\n"
    ":: WINDOWS WORKING DIR BUG WORKAROUND\n"
    "CD /D %~dp0\n"
    "\n"
    ":: CHECK APPLIST DIR\n"
    "IF EXIST .\\AppList\\NUL (\n"
    "    RMDIR /S /Q .\\AppList\\\n"
    ")\n"
    "\n"
    ":: CREATE APPLIST DIR\n"
    "MKDIR .\\AppList\\\n"
    ":: CREATE DLCS FILES\n"
    ":: Demo Game\n"
    "ECHO 500> .\\AppList\\0.txt\n"
)


def test_greenluma_batch_document():
    assert export_greenluma_batch("500", "Demo Game", DLC) == (
        GREENLUMA_PROLOGUE
        + ":: Alpha\n"
        "ECHO 10> .\\AppList\\1.txt\n"
        ":: Beta\n"
        "ECHO 20> .\\AppList\\2.txt\n"
        + GREENLUMA_LAUNCHER
    )


def test_greenluma_batch_without_dlc_lists_only_the_app():
    assert export_greenluma_batch("500", "Demo Game", []) == GREENLUMA_PROLOGUE + GREENLUMA_LAUNCHER


def test_greenluma_batch_registry_entry():
    state = ToolkitState(app_id="500", dlc=tuple(DLC))
    greenluma = EXPORT_FORMATS['greenluma-batch']

    assert greenluma.filename_for(state) == "500_AppList.bat"
    assert "TITLE App 500 - Steam Data Toolkit\n" in render_export('greenluma-batch', state)
