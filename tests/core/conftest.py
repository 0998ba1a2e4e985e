import json

import pytest

from selectorlens.core.managers.config_manager import ConfigManager
from selectorlens.core.utils.path_utils import PathUtils

# Een standaard, voorspelbare configuratie voor onze tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "scan": {
        "naming": {"enforceBEM": False},
        "seo": {"criticalSelectors": ["main"]}
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Een fixture die een geïsoleerde testomgeving opzet voor de ConfigManager:
    - Plaatst een nep 'settings.json' bestand in een tijdelijke map.
    - Monkeypatched PathUtils om naar dit bestand te wijzen.
    - Herlaadt na de test de echte instellingen.
    """
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))

    monkeypatch.setattr(PathUtils, 'get_settings_file', lambda: settings_file)

    # De singleton is al geladen bij het importeren; forceer herladen vanuit ons nep-bestand
    manager = ConfigManager()
    manager.reset()

    yield manager

    monkeypatch.undo()
    manager.reset()
