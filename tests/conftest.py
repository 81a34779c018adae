import pytest

from steam_toolkit.core.cache_store import MemoryStore

from fakes import BrokenStore


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def broken_store() -> BrokenStore:
    return BrokenStore()


STEAMDB_APP_HTML = """
<html>
<head><meta property="og:url" content="https://steamdb.info/app/440/"></head>
<body>
<div class="tab-pane" id="dlc">
  <table>
    <tr class="app" data-appid="1001"><td><a href="/app/1001/">1001</a></td><td>Alpha Pack</td><td title="2020-01-01">Jan 2020</td></tr>
    <tr class="app" data-appid="1002"><td>1002</td><td>Beta Pack</td></tr>
    <tr class="app" data-appid="1001"><td>1001</td><td>Alpha Pack (again)</td></tr>
  </table>
</div>
<div id="achievements">
  <div class="achievement" data-name="ACH_WIN">
    <img class="achievement_image" data-src="https://cdn.example/win.jpg">
    <img class="achievement_image_gray" src="https://cdn.example/win_gray.jpg">
    <div class="achievement_name">Winner</div>
    <div class="achievement_desc">Win a round</div>
  </div>
  <div class="achievement">
    <span class="achievement_api">ACH_LOSE</span>
    <div class="achievement_name"></div>
  </div>
</div>
<div id="depots">
  <table>
    <tbody>
      <tr data-depotid="441"><td>441</td><td>TF2 Content</td><td class="depot-manifests">12345</td><td class="depot-os">Windows</td></tr>
      <tr><td><a href="/depot/442/">442</a></td><td></td><td>67890</td><td>macOS</td></tr>
    </tbody>
  </table>
</div>
</body>
</html>
"""


@pytest.fixture
def steamdb_html() -> str:
    return STEAMDB_APP_HTML
