import pytest

from steam_toolkit.core.errors import FetchCancelled, SchemaError
from steam_toolkit.core.pipeline import ToolkitPipeline
from steam_toolkit.models.records import AchievementRecord, DepotRecord, DlcRecord, PageSnapshot
from steam_toolkit.sources.store_api import StoreApiClient, normalize

from fakes import FakeResponse, FakeSession, app_payload

SNAPSHOT = PageSnapshot(
    dlc=(DlcRecord(id="1001", name="Alpha Pack"), DlcRecord(id="2", name="SteamDB Unknown App 2")),
    achievements=(AchievementRecord(name="ACH_WIN", display_name="Winner"),),
    depots=(DepotRecord(id="441", name="Content"),),
)


def static_source(snapshot: PageSnapshot):
    async def page_source() -> PageSnapshot:
        return snapshot
    return page_source


class ScriptedClient:
    """Answers fetch() from a queue of records or exceptions."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def fetch(self, app_id, force_refresh=False):
        self.calls.append((app_id, force_refresh))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def tf2_record():
    return normalize("440", app_payload("440")["440"]["data"])


@pytest.mark.asyncio
async def test_without_page_dlc_comes_from_api_ids():
    pipeline = ToolkitPipeline("440", ScriptedClient(tf2_record()))

    state = await pipeline.run()

    assert state.record.name == "Team Fortress 2"
    assert state.dlc == (DlcRecord(id="1001", name="DLC 1001"), DlcRecord(id="1002", name="DLC 1002"))
    assert state.achievements == ()
    assert state.error is None


@pytest.mark.asyncio
async def test_scraped_page_supplies_dlc_achievements_and_depots():
    pipeline = ToolkitPipeline("440", ScriptedClient(tf2_record()), page_source=static_source(SNAPSHOT))

    state = await pipeline.run()

    assert state.dlc == SNAPSHOT.dlc
    assert state.achievements == SNAPSHOT.achievements
    assert state.depots == SNAPSHOT.depots


@pytest.mark.asyncio
async def test_ignore_unknown_apps_filters_dlc():
    pipeline = ToolkitPipeline(
        "440", ScriptedClient(tf2_record()), page_source=static_source(SNAPSHOT), ignore_unknown_apps=True
    )

    state = await pipeline.run()

    assert state.dlc == (DlcRecord(id="1001", name="Alpha Pack"),)


@pytest.mark.asyncio
async def test_fetch_failure_keeps_scraped_data():
    pipeline = ToolkitPipeline(
        "440", ScriptedClient(SchemaError("440", "not found")), page_source=static_source(SNAPSHOT)
    )

    state = await pipeline.run()

    assert state.record is None
    assert state.error
    assert state.dlc == SNAPSHOT.dlc
    assert state.depots == SNAPSHOT.depots


@pytest.mark.asyncio
async def test_superseded_fetch_is_reported_not_errored():
    pipeline = ToolkitPipeline("440", ScriptedClient(FetchCancelled("440")), page_source=static_source(SNAPSHOT))

    state = await pipeline.run()

    assert state.superseded is True
    assert state.error is None
    assert state.dlc == ()


@pytest.mark.asyncio
async def test_refresh_bypasses_cache():
    client = ScriptedClient(tf2_record())

    await ToolkitPipeline("440", client).refresh()

    assert client.calls == [("440", True)]


@pytest.mark.asyncio
async def test_retry_after_failure_recovers(store):
    client = StoreApiClient(
        FakeSession([FakeResponse(status=404), FakeResponse(payload=app_payload("440"))]),
        store=store,
        initial_delay=0,
    )
    pipeline = ToolkitPipeline("440", client)

    failed = await pipeline.run()
    recovered = await pipeline.refresh()

    assert failed.error and failed.record is None
    assert recovered.error is None
    assert recovered.record.name == "Team Fortress 2"
