import logging

import pytest

from ruleta import main as ruleta_main
from ruleta.config.settings import Settings, SpinSettings
from ruleta.core.errors import InvalidConfiguration


@pytest.fixture
def headless_settings(tmp_path):
    return Settings(
        _env_file=None,
        env="headless",
        labels=["A", "B", "C"],
        spins=2,
        screenshot_path=tmp_path,
        spin=SpinSettings(duration_min_ms=300, duration_max_ms=400),
    )


@pytest.mark.asyncio
async def test_headless_run_reports_each_winner(headless_settings, caplog):
    caplog.set_level(logging.INFO)

    winners = await ruleta_main.run_headless(headless_settings, interval_ms=0)

    assert len(winners) == 2
    assert {w.text for w in winners} <= {"A", "B", "C"}
    assert "burst of 200 particles" in caplog.text


@pytest.mark.asyncio
async def test_headless_run_rejects_single_option(headless_settings):
    headless_settings.labels = ["Solo"]
    with pytest.raises(InvalidConfiguration):
        await ruleta_main.run_headless(headless_settings, interval_ms=0)


def test_main_exits_on_invalid_labels(monkeypatch, headless_settings):
    headless_settings.labels = ["Solo"]
    monkeypatch.setattr(ruleta_main, "get_settings", lambda: headless_settings)

    with pytest.raises(SystemExit) as exc:
        ruleta_main.main()
    assert exc.value.code == 1


def test_main_runs_headless(monkeypatch, headless_settings):
    headless_settings.spins = 1
    monkeypatch.setattr(ruleta_main, "get_settings", lambda: headless_settings)

    ruleta_main.main()
