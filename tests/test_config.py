from kanban.config import Settings


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, ,http://b.test")
    monkeypatch.setenv("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", "15")

    settings = Settings()

    assert settings.PORT == 9090
    assert settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES == 15
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_settings_names_are_case_sensitive(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    monkeypatch.setenv("port", "9191")

    assert Settings().PORT == 8080
