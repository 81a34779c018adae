from steam_toolkit.core.reconciler import drop_unknown_apps, reconcile
from steam_toolkit.models.records import DlcRecord


def test_scraped_records_win_wholesale():
    scraped = [DlcRecord(id="10", name="Alpha")]

    assert reconcile(scraped, ["10", "20", "30"]) == [DlcRecord(id="10", name="Alpha")]


def test_api_ids_are_wrapped_when_nothing_was_scraped():
    assert reconcile([], ["10", "20"]) == [
        DlcRecord(id="10", name="DLC 10"),
        DlcRecord(id="20", name="DLC 20"),
    ]


def test_repeated_api_ids_collapse():
    assert reconcile([], ["10", "10"]) == [DlcRecord(id="10", name="DLC 10")]


def test_both_sources_empty():
    assert reconcile([], []) == []


def test_drop_unknown_apps():
    records = [DlcRecord(id="1", name="Real DLC"), DlcRecord(id="2", name="SteamDB Unknown App 2")]

    assert drop_unknown_apps(records) == [DlcRecord(id="1", name="Real DLC")]
