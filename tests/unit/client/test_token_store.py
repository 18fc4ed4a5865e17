import json
import os
import stat

from signet.client.token_store import (
    AUTH_TOKEN_KEY,
    REFRESH_TOKEN_KEY,
    FileTokenStore,
    MemoryTokenStore,
)


class TestMemoryTokenStore:
    def test_set_get_delete(self):
        store = MemoryTokenStore()
        store.set(AUTH_TOKEN_KEY, "access")

        assert store.get(AUTH_TOKEN_KEY) == "access"
        store.delete(AUTH_TOKEN_KEY)
        assert store.get(AUTH_TOKEN_KEY) is None

    def test_delete_missing_key(self):
        MemoryTokenStore().delete("nothing")

    def test_clear_drops_both_credentials(self):
        store = MemoryTokenStore({AUTH_TOKEN_KEY: "access", REFRESH_TOKEN_KEY: "refresh"})
        store.clear()

        assert store.get(AUTH_TOKEN_KEY) is None
        assert store.get(REFRESH_TOKEN_KEY) is None


class TestFileTokenStore:
    def test_values_survive_a_new_instance(self, tmp_path):
        path = tmp_path / "signet" / "tokens.json"
        FileTokenStore(path).set(AUTH_TOKEN_KEY, "access")

        assert FileTokenStore(path).get(AUTH_TOKEN_KEY) == "access"
        assert json.loads(path.read_text()) == {AUTH_TOKEN_KEY: "access"}

    def test_file_is_owner_only(self, tmp_path):
        path = tmp_path / "tokens.json"
        FileTokenStore(path).set(AUTH_TOKEN_KEY, "access")

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_no_temporary_files_are_left_behind(self, tmp_path):
        store = FileTokenStore(tmp_path / "tokens.json")
        store.set(AUTH_TOKEN_KEY, "access")
        store.set(REFRESH_TOKEN_KEY, "refresh")
        store.delete(AUTH_TOKEN_KEY)

        assert [p.name for p in tmp_path.iterdir()] == ["tokens.json"]
        assert store.get(REFRESH_TOKEN_KEY) == "refresh"

    def test_missing_file_reads_as_empty(self, tmp_path):
        assert FileTokenStore(tmp_path / "absent.json").get(AUTH_TOKEN_KEY) is None

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text("{not json")
        store = FileTokenStore(path)

        assert store.get(AUTH_TOKEN_KEY) is None
        store.set(AUTH_TOKEN_KEY, "access")
        assert store.get(AUTH_TOKEN_KEY) == "access"

    def test_clear(self, tmp_path):
        store = FileTokenStore(tmp_path / "tokens.json")
        store.set(AUTH_TOKEN_KEY, "access")
        store.set(REFRESH_TOKEN_KEY, "refresh")
        store.clear()

        assert json.loads((tmp_path / "tokens.json").read_text()) == {}
