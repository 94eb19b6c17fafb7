import pytest

from config import (DEFAULT_OPENAI_MODEL, DEFAULT_PORT, GOOGLE_REQUIRED, MONGO_REQUIRED,
                    MissingConfiguration, load_settings)


def test_missing_variables_are_all_listed():
    with pytest.raises(MissingConfiguration) as exc:
        load_settings(MONGO_REQUIRED, env={"OPENAI_API_KEY": "sk-test", "MONGODB_URI": ""})
    assert exc.value.missing == ["MONGODB_URI", "MONGODB_DATABASE", "MONGODB_COLLECTION"]
    assert str(exc.value) == (
        "Missing required environment variables: MONGODB_URI, MONGODB_DATABASE, MONGODB_COLLECTION"
    )


def test_defaults():
    settings = load_settings(GOOGLE_REQUIRED, env={"OPENAI_API_KEY": "sk-test", "GOOGLE_API_KEY": "g"})
    assert settings.port == DEFAULT_PORT == 3000
    assert settings.openai_model == DEFAULT_OPENAI_MODEL
    assert settings.google_service_account is None


def test_overrides():
    settings = load_settings(GOOGLE_REQUIRED, env={
        "OPENAI_API_KEY": "sk-test",
        "GOOGLE_API_KEY": "g",
        "PORT": "8080",
        "OPENAI_MODEL": "gpt-4o",
    })
    assert settings.port == 8080
    assert settings.openai_model == "gpt-4o"
