import json

import pytest

from linkup_client.models import Session
from linkup_client.utils.preferences import PreferenceStore
from linkup_client.utils.secure_store import CredentialNotFoundError, CredentialVault, SecureStore


@pytest.fixture
def store(memory_keyring):
    return SecureStore("test-service", backend=memory_keyring)


def test_store_get_delete(store, memory_keyring):
    store.store("api-token", "abc")
    assert memory_keyring.values[("test-service", "api-token")] == "abc"
    assert store.get("api-token") == "abc"
    store.delete("api-token")
    with pytest.raises(CredentialNotFoundError):
        store.get("api-token")


def test_delete_missing_is_not_found(store):
    with pytest.raises(CredentialNotFoundError):
        store.delete("nothing")


def test_vault_token_absent_is_none(store):
    vault = CredentialVault(store)
    assert vault.get_api_token() is None
    vault.store_api_token("tok")
    assert vault.get_api_token() == "tok"


def test_vault_credentials(store):
    vault = CredentialVault(store)
    assert vault.get_credentials() is None
    vault.store_credentials("me@example.com", "secret")
    assert vault.get_credentials() == ("me@example.com", "secret")
    vault.delete_credentials()
    vault.delete_credentials()
    assert vault.get_credentials() is None


def test_vault_session_roundtrip_and_delete(store):
    vault = CredentialVault(store)
    session = Session(token="tok", account_id="acct", region="eu", expires=1900000000)
    vault.store_session(session)
    assert vault.get_session() == session
    assert vault.get_api_token() == "tok"
    vault.delete_session()
    assert vault.get_session() is None
    assert vault.get_api_token() is None


def test_vault_ignores_corrupt_session(store):
    store.store("session", "{not json")
    assert CredentialVault(store).get_session() is None


def test_session_expiry():
    assert not Session(token="t", account_id="a", region="eu").is_expired()
    session = Session(token="t", account_id="a", region="eu", expires=100)
    assert session.is_expired(now=100)
    assert not session.is_expired(now=99)


def test_preferences_persist(tmp_path):
    path = tmp_path / "prefs" / "app-settings.json"
    prefs = PreferenceStore(str(path))
    assert prefs.get("region", "global") == "global"
    prefs.set("region", "eu")
    prefs.set("window", {"x": 1})
    assert json.loads(path.read_text(encoding="utf-8")) == {"region": "eu", "window": {"x": 1}}

    reloaded = PreferenceStore(str(path))
    assert reloaded.get("region") == "eu"
    assert sorted(reloaded.keys()) == ["region", "window"]
    reloaded.delete("window")
    assert PreferenceStore(str(path)).keys() == ["region"]
    reloaded.clear()
    assert PreferenceStore(str(path)).keys() == []


def test_preferences_survive_corrupt_file(tmp_path):
    path = tmp_path / "app-settings.json"
    path.write_text("{broken", encoding="utf-8")
    assert PreferenceStore(str(path)).keys() == []
