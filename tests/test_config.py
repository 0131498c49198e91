from filterplay.config import Settings


def test_thumbnail_ratio_defaults_to_half_size(monkeypatch):
    monkeypatch.delenv("THUMBNAIL_RATIO", raising=False)

    assert Settings.from_env().thumbnail_ratio == 2.0


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("THUMBNAIL_RATIO", "3")
    monkeypatch.setenv("DITHER_METHOD", "ATKINSON")
    monkeypatch.setenv("PORT", "8080")

    settings = Settings.from_env()

    assert settings.thumbnail_ratio == 3.0
    assert settings.dither_method == "atkinson"
    assert settings.port == 8080
