import os

import pytest

from playlist_jockey.env import get_env, get_required_env, load_env_file


def test_load_env_file_sets_values(tmp_path, monkeypatch):
    # Registered so the values loaded below are removed after the test.
    monkeypatch.setenv("PJ_TEST_ID", "")
    monkeypatch.setenv("PJ_TEST_URI", "")
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n\nPJ_TEST_ID='abc'\nmalformed line\nPJ_TEST_URI=http://x/cb?a=b\n",
        encoding="utf-8",
    )

    load_env_file(env_file)

    assert os.environ["PJ_TEST_ID"] == "abc"
    assert os.environ["PJ_TEST_URI"] == "http://x/cb?a=b"


def test_missing_env_file_is_ignored(tmp_path):
    load_env_file(tmp_path / "nope.env")


def test_get_required_env(monkeypatch):
    monkeypatch.setenv("PJ_TEST_REQUIRED", "value")
    assert get_required_env("PJ_TEST_REQUIRED") == "value"

    monkeypatch.setenv("PJ_TEST_REQUIRED", "")
    with pytest.raises(RuntimeError, match="PJ_TEST_REQUIRED"):
        get_required_env("PJ_TEST_REQUIRED")


def test_get_env_default(monkeypatch):
    monkeypatch.delenv("PJ_TEST_OPTIONAL", raising=False)
    assert get_env("PJ_TEST_OPTIONAL", "fallback") == "fallback"
