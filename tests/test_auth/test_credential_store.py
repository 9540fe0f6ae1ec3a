"""Tests for the YAML credential store."""

from __future__ import annotations

import os
import stat

import pytest

from gemauth.auth.credential_store import DEFAULT_KEY_NAME, CredentialStore
from gemauth.exceptions import ConfigError


@pytest.fixture()
def store(credentials_path) -> CredentialStore:
    return CredentialStore(credentials_path)


class TestLoad:
    def test_missing_file_is_empty(self, store: CredentialStore) -> None:
        assert store.load() == {}
        assert store.names() == []
        assert store.get(DEFAULT_KEY_NAME) is None

    def test_empty_file_is_empty(self, store: CredentialStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text("")
        assert store.load() == {}

    def test_reads_rubygems_layout(self, store: CredentialStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(
            "---\n"
            ":rubygems_api_key: 701229f217cdf23b1344c7b4b54ca97\n"
            "https://gems.example.com: abc123\n"
            ":other: def456\n"
        )
        assert store.get(DEFAULT_KEY_NAME) == "701229f217cdf23b1344c7b4b54ca97"
        assert store.get("https://gems.example.com") == "abc123"
        assert store.get(":other") == "def456"
        assert store.names() == [DEFAULT_KEY_NAME, "https://gems.example.com", ":other"]

    def test_numeric_token_is_returned_as_string(self, write_credentials) -> None:
        path = write_credentials({DEFAULT_KEY_NAME: 12345})
        assert CredentialStore(path).get(DEFAULT_KEY_NAME) == "12345"

    def test_invalid_yaml_raises(self, store: CredentialStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(":rubygems_api_key: [unterminated\n")
        with pytest.raises(ConfigError, match="Cannot read credential file"):
            store.load()

    def test_non_mapping_raises(self, store: CredentialStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError, match="must contain a mapping"):
            store.load()

    def test_contains(self, write_credentials) -> None:
        store = CredentialStore(write_credentials({":other": "x"}))
        assert ":other" in store
        assert DEFAULT_KEY_NAME not in store


class TestSet:
    def test_creates_file_and_parent_dirs(self, store: CredentialStore) -> None:
        store.set(DEFAULT_KEY_NAME, "secret")
        assert store.path.is_file()
        assert CredentialStore(store.path).get(DEFAULT_KEY_NAME) == "secret"

    def test_file_permissions_are_owner_only(self, store: CredentialStore) -> None:
        store.set(DEFAULT_KEY_NAME, "secret")
        mode = stat.S_IMODE(os.stat(store.path).st_mode)
        assert mode == 0o600

    def test_keeps_unrelated_entries_and_order(
        self, write_credentials, read_credentials
    ) -> None:
        path = write_credentials(
            {":other": "a", "https://gems.example.com": "b", DEFAULT_KEY_NAME: "c"}
        )
        CredentialStore(path).set("https://private.example", "d")

        assert list(read_credentials().items()) == [
            (":other", "a"),
            ("https://gems.example.com", "b"),
            (DEFAULT_KEY_NAME, "c"),
            ("https://private.example", "d"),
        ]

    def test_overwrites_in_place(self, write_credentials, read_credentials) -> None:
        path = write_credentials({DEFAULT_KEY_NAME: "old", ":other": "x"})
        CredentialStore(path).set(DEFAULT_KEY_NAME, "new")
        assert list(read_credentials().items()) == [(DEFAULT_KEY_NAME, "new"), (":other", "x")]

    def test_updates_in_memory_set(self, store: CredentialStore) -> None:
        store.set(":other", "x")
        assert store.get(":other") == "x"
        assert store.names() == [":other"]

    def test_no_temp_files_left_behind(self, store: CredentialStore) -> None:
        store.set(DEFAULT_KEY_NAME, "secret")
        assert [p.name for p in store.path.parent.iterdir()] == [store.path.name]

    def test_write_failure_raises_config_error(self, store: CredentialStore) -> None:
        store.path.mkdir(parents=True)
        with pytest.raises(ConfigError, match="Cannot write credential file"):
            store.set(DEFAULT_KEY_NAME, "secret")
        assert store.path.is_dir()
        assert store.get(DEFAULT_KEY_NAME) is None

    def test_corrupt_file_is_not_overwritten(self, store: CredentialStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text("[broken\n")
        with pytest.raises(ConfigError):
            store.set(DEFAULT_KEY_NAME, "secret")
        assert store.path.read_text() == "[broken\n"
