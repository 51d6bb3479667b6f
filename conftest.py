import json

import pytest

from exactcalc import config_manager


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")


@pytest.fixture
def config_files(tmp_path, monkeypatch):
    """Point config_manager at a scratch config.json / ui_strings.json."""
    config_json = tmp_path / "config.json"
    ui_strings = tmp_path / "ui_strings.json"
    ui_strings.write_text(json.dumps({"darkmode": "Dark mode"}), encoding="utf-8")
    monkeypatch.setattr(config_manager, "config_json", config_json)
    monkeypatch.setattr(config_manager, "ui_strings", ui_strings)
    return config_json, ui_strings


@pytest.fixture
def default_settings():
    return dict(config_manager.DEFAULT_SETTINGS)
