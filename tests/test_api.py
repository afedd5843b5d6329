"""Tests for the HTTP API."""

import asyncio

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event

from app.core.config import Settings
from app.db.kv_store import SqlKeyValueStore
from app.db.session import create_db_engine
from app.main import create_app, lifespan
from app.models.schemas import CipherKind
from app.services.engines import codec
from app.services.pipeline.orchestrator import KeywordSolver

PLAINTEXT = "MEET ME AT THE SECRET PLACE"


def _in_event_loop() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class TestCiphers:
    def test_lists_every_kind(self, client):
        response = client.get("/api/v1/ciphers")
        assert response.status_code == 200

        data = response.json()
        assert [c["cipher_type"] for c in data] == [kind.value for kind in CipherKind]
        bacon = next(c for c in data if c["cipher_type"] == "bacon")
        assert bacon["name"] == "Bacon's Cipher"
        assert bacon["family"] == "fractionating"
        assert not bacon["requires_key"]


class TestEncryptDecrypt:
    """Test the codec endpoints."""

    def test_encrypt_with_key(self, client):
        response = client.post(
            "/api/v1/encrypt",
            json={"plaintext": "HELLO", "cipher_type": "vigenere", "key": "KEY"},
        )
        assert response.status_code == 200
        assert response.json() == {
            "ciphertext": "RIJVS",
            "cipher_type": "vigenere",
            "key_used": "KEY",
        }

    def test_encrypt_generates_key(self, client):
        response = client.post(
            "/api/v1/encrypt",
            json={"plaintext": "Hello", "cipher_type": "caesar"},
        )
        data = response.json()

        response = client.post(
            "/api/v1/decrypt",
            json={"ciphertext": data["ciphertext"], "cipher_type": "caesar", "key": data["key_used"]},
        )
        assert response.json()["plaintext"] == "Hello"

    def test_encrypt_invalid_key(self, client):
        response = client.post(
            "/api/v1/encrypt",
            json={"plaintext": "HELLO", "cipher_type": "caesar", "key": "abc"},
        )
        assert response.status_code == 400

    def test_unknown_cipher_type(self, client):
        response = client.post(
            "/api/v1/encrypt",
            json={"plaintext": "HELLO", "cipher_type": "enigma"},
        )
        assert response.status_code == 422

    def test_decrypt(self, client):
        response = client.post(
            "/api/v1/decrypt",
            json={"ciphertext": "OLSSV", "cipher_type": "caesar", "key": "7"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["plaintext"] == "HELLO"
        assert data["key_used"] == "7"
        assert "shift of 7" in data["explanation"]

    def test_decrypt_keyless_cipher(self, client):
        response = client.post(
            "/api/v1/decrypt",
            json={"ciphertext": "AABBBAAAAB", "cipher_type": "bacon"},
        )
        assert response.json()["plaintext"] == "HB"

    def test_text_too_long(self, tmp_path):
        settings = Settings(
            database_url=f"sqlite:///{tmp_path / 'short.db'}",
            max_text_length=10,
        )
        with TestClient(create_app(settings)) as client:
            response = client.post(
                "/api/v1/encrypt",
                json={"plaintext": "A" * 11, "cipher_type": "none"},
            )
        assert response.status_code == 400


class TestSolverEndpoints:
    """Test the keyword solver endpoints."""

    @pytest.fixture
    def ciphertext(self):
        return codec.encrypt(CipherKind.SUBSTITUTION, PLAINTEXT, "CIPHER")

    def test_keyed_alphabet(self, client):
        response = client.post("/api/v1/solver/keyed-alphabet", json={"key": "APPLE"})
        assert response.json() == {"alphabet": "APLEBCDFGHIJKMNOQRSTUVWXYZ"}

    def test_try_key(self, client, ciphertext):
        response = client.post(
            "/api/v1/solver/try-key",
            json={"ciphertext": ciphertext, "keyword": "cipher"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["keyword"] == "CIPHER"
        assert data["keyed_alphabet"] == "CIPHERABDFGJKLMNOQSTUVWXYZ"
        assert data["plaintext"] == PLAINTEXT
        assert data["common_word_count"] == 6

    def test_try_key_without_letters(self, client, ciphertext):
        response = client.post(
            "/api/v1/solver/try-key",
            json={"ciphertext": ciphertext, "keyword": "123"},
        )
        assert response.status_code == 400

    def test_sweep(self, client, ciphertext):
        response = client.post(
            "/api/v1/solver/sweep",
            json={"ciphertext": ciphertext, "keyword": "cipher", "limit": 3},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["keyword"] == "CIPHER"
        assert data["total_permutations"] == 720
        assert data["recorded"] == 720
        assert data["stored"] == 720
        assert not data["truncated"]
        assert len(data["best"]) == 3
        assert data["best"][0]["count"] == 6
        assert data["best"][0]["text"] == PLAINTEXT

    def test_sweep_capped(self, client, ciphertext):
        response = client.post(
            "/api/v1/solver/sweep",
            json={"ciphertext": ciphertext, "keyword": "CIPHER", "max_permutations": 10},
        )
        data = response.json()
        assert data["recorded"] == 10
        assert data["truncated"]

    def test_sweep_keyword_too_long(self, client, ciphertext):
        response = client.post(
            "/api/v1/solver/sweep",
            json={"ciphertext": ciphertext, "keyword": "ABCDEFGHIJKLM"},
        )
        assert response.status_code == 400

    def test_sweep_keyword_without_letters(self, client, ciphertext):
        response = client.post(
            "/api/v1/solver/sweep",
            json={"ciphertext": ciphertext, "keyword": "!!!"},
        )
        assert response.status_code == 400

    def test_sweep_without_readable_ciphertext(self, client):
        response = client.post(
            "/api/v1/solver/sweep",
            json={"ciphertext": "123 456", "keyword": "ABC", "cipher_type": "playfair"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["recorded"] == 6
        assert all(t["text"] == "" and t["count"] == 0 for t in data["best"])

    def test_sweep_runs_in_worker_thread_under_lock(self, client, ciphertext, monkeypatch):
        calls = []
        original = KeywordSolver.sweep

        def tracked_sweep(self, *args, **kwargs):
            calls.append((_in_event_loop(), client.app.state.trial_lock.locked()))
            return original(self, *args, **kwargs)

        monkeypatch.setattr(KeywordSolver, "sweep", tracked_sweep)
        response = client.post(
            "/api/v1/solver/sweep",
            json={"ciphertext": ciphertext, "keyword": "FOX"},
        )
        assert response.status_code == 200
        assert calls == [(False, True)]

    def test_score(self, client):
        response = client.post(
            "/api/v1/solver/score",
            json={"text": "We will hold the line, XQZ"},
        )
        assert response.json() == {"count": 5, "words": 6}


class TestTrialEndpoints:
    """Test the trial store endpoints."""

    def test_record_and_list(self, client):
        response = client.post(
            "/api/v1/trials",
            json={"keyword": "ABC", "plaintext": "THE END", "count": 2},
        )
        assert response.status_code == 201
        assert response.json() == {"index": 0, "keyword": "ABC", "text": "THE END", "count": 2}

        client.post("/api/v1/trials", json={"keyword": "BAC", "plaintext": "NEW", "count": 5})

        response = client.get("/api/v1/trials", params={"order": "count", "descending": True})
        data = response.json()
        assert data["total"] == 2
        assert [t["keyword"] for t in data["items"]] == ["BAC", "ABC"]

        response = client.get("/api/v1/trials", params={"order": "index", "limit": 1, "offset": 1})
        assert [t["keyword"] for t in response.json()["items"]] == ["BAC"]

    def test_record_sentinel(self, client):
        response = client.post(
            "/api/v1/trials",
            json={"keyword": "ABC", "plaintext": "*"},
        )
        assert response.status_code == 409

    def test_count_words(self, client):
        client.post("/api/v1/trials", json={"keyword": "A", "plaintext": "MEET ME"})
        client.post("/api/v1/trials", json={"keyword": "B", "plaintext": "XQZ"})

        response = client.post("/api/v1/trials/count-words")
        assert response.json() == {"trials": 2, "total_words": 2}

    def test_save_clear_restore(self, client):
        client.post("/api/v1/trials", json={"keyword": "ABC", "plaintext": "THE END", "count": 2})

        response = client.post("/api/v1/trials/save")
        assert response.json() == {"ok": True, "trials": 1}

        assert client.delete("/api/v1/trials").status_code == 204
        assert client.get("/api/v1/trials").json()["total"] == 0

        response = client.post("/api/v1/trials/restore")
        assert response.json() == {"ok": True, "trials": 1}

        items = client.get("/api/v1/trials").json()["items"]
        assert items == [{"index": 0, "keyword": "ABC", "text": "THE END", "count": 0}]

    def test_restore_without_save(self, client):
        response = client.post("/api/v1/trials/restore")
        assert response.json() == {"ok": False, "trials": 0}

    def test_listing_leaves_store_order(self, client):
        for keyword, count in [("A", 1), ("B", 3), ("C", 2)]:
            client.post("/api/v1/trials", json={"keyword": keyword, "plaintext": "X", "count": count})

        response = client.get("/api/v1/trials", params={"order": "count", "descending": True})
        assert [t["keyword"] for t in response.json()["items"]] == ["B", "C", "A"]

        store = client.app.state.trial_store
        assert [t.index for t in store] == [0, 1, 2]

    def test_archive_runs_in_worker_thread_under_lock(self, client, monkeypatch):
        calls = []
        original_set = SqlKeyValueStore.set
        original_get = SqlKeyValueStore.get

        def tracked_set(self, key, value):
            calls.append(("set", _in_event_loop(), client.app.state.trial_lock.locked()))
            return original_set(self, key, value)

        def tracked_get(self, key):
            calls.append(("get", _in_event_loop(), client.app.state.trial_lock.locked()))
            return original_get(self, key)

        monkeypatch.setattr(SqlKeyValueStore, "set", tracked_set)
        monkeypatch.setattr(SqlKeyValueStore, "get", tracked_get)

        client.post("/api/v1/trials", json={"keyword": "ABC", "plaintext": "THE END"})
        assert client.post("/api/v1/trials/save").json()["ok"]
        assert client.post("/api/v1/trials/restore").json()["ok"]

        assert calls
        assert all(not in_loop and locked for _, in_loop, locked in calls)


class TestLifespan:
    """Test application startup and shutdown."""

    def test_shutdown_disposes_engine(self, settings, monkeypatch):
        disposed = []

        def create_tracked_engine(database_url):
            engine = create_db_engine(database_url)
            event.listen(engine, "engine_disposed", disposed.append)
            return engine

        monkeypatch.setattr("app.main.create_db_engine", create_tracked_engine)
        with TestClient(create_app(settings)):
            assert not disposed
        assert len(disposed) == 1

    def test_engine_disposed_when_serving_fails(self, settings, monkeypatch):
        disposed = []

        def create_tracked_engine(database_url):
            engine = create_db_engine(database_url)
            event.listen(engine, "engine_disposed", disposed.append)
            return engine

        monkeypatch.setattr("app.main.create_db_engine", create_tracked_engine)
        application = create_app(settings)

        async def serve():
            async with lifespan(application):
                raise RuntimeError("server stopped")

        with pytest.raises(RuntimeError):
            asyncio.run(serve())
        assert len(disposed) == 1
