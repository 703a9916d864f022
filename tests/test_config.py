from efficiency.config import Settings
from efficiency.schemas import RuleSet


def test_settings_defaults(monkeypatch):
    for name in ("ALLOW_KOKUSHI", "ALLOW_CHIITOITSU", "TWO_PLY_MAX_SHANTEN", "LOG_LEVEL", "TERMS_DISPLAY"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.allow_kokushi is True
    assert settings.allow_chiitoitsu is True
    assert settings.two_ply_max_shanten == 2
    assert settings.terms_display == "english"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("ALLOW_CHIITOITSU", "false")
    monkeypatch.setenv("TWO_PLY_MAX_SHANTEN", "4")
    settings = Settings(_env_file=None)
    assert settings.allow_chiitoitsu is False
    assert settings.two_ply_max_shanten == 4


def test_explicit_rules_override_settings():
    rules = RuleSet(allow_kokushi=False, allow_chiitoitsu=False)
    assert not rules.allow_kokushi
    assert not rules.allow_chiitoitsu
