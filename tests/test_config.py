import importlib

import pytest

import config


@pytest.fixture
def reload_config(monkeypatch):
    def _reload(**env: str):
        for name in ("WIZARD_DRAFTS_ENABLED", "WIZARD_DRAFT_DEBOUNCE_MS", "WIZARD_DRAFT_PREFIX"):
            monkeypatch.delenv(name, raising=False)
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


@pytest.mark.parametrize("value", ["1", "true", " YES ", "on"])
def test_truthy_flags(value):
    assert config._is_truthy_flag(value)


@pytest.mark.parametrize("value", [None, "", "0", "false", "off"])
def test_falsy_flags(value):
    assert not config._is_truthy_flag(value)


def test_positive_int_parsing():
    assert config._parse_positive_int_env("250", env_var="X") == 250
    assert config._parse_positive_int_env(" 12.7 ", env_var="X") == 12
    assert config._parse_positive_int_env("", env_var="X") is None
    assert config._parse_positive_int_env("-5", env_var="X") is None
    with pytest.warns(RuntimeWarning):
        assert config._parse_positive_int_env("soon", env_var="X") is None


def test_defaults(reload_config):
    cfg = reload_config()

    assert cfg.DRAFTS_ENABLED is True
    assert cfg.DRAFT_DEBOUNCE_SECONDS == pytest.approx(0.3)
    assert cfg.DRAFT_KEY_PREFIX == "stepperForm"


def test_environment_overrides(reload_config):
    cfg = reload_config(
        WIZARD_DRAFTS_ENABLED="false",
        WIZARD_DRAFT_DEBOUNCE_MS="750",
        WIZARD_DRAFT_PREFIX="adminWizard",
    )

    assert cfg.DRAFTS_ENABLED is False
    assert cfg.DRAFT_DEBOUNCE_SECONDS == pytest.approx(0.75)
    assert cfg.DRAFT_KEY_PREFIX == "adminWizard"


def test_invalid_debounce_falls_back(reload_config):
    with pytest.warns(RuntimeWarning):
        cfg = reload_config(WIZARD_DRAFT_DEBOUNCE_MS="fast")

    assert cfg.DRAFT_DEBOUNCE_SECONDS == pytest.approx(0.3)
