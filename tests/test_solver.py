"""Tests for the keyword solver."""

import pytest

from app.core.exceptions import SweepAbortedError
from app.models.schemas import CipherKind
from app.services.engines import codec
from app.services.pipeline.orchestrator import KeywordSolver
from app.services.pipeline.trials import TrialStore


class TestKeywordSolver:
    """Test sweeps and the driver protocol."""

    @pytest.fixture
    def solver(self, scorer, store):
        return KeywordSolver(scorer, store)

    @pytest.fixture
    def ciphertext(self):
        return codec.encrypt(CipherKind.SUBSTITUTION, "THE QUICK BROWN FOX", "FOX")

    def test_try_key(self, solver, ciphertext):
        attempt = solver.try_key(ciphertext, "FOX")

        assert attempt.plaintext == "THE QUICK BROWN FOX"
        assert attempt.keyed_alphabet == "FOXABCDEGHIJKLMNPQRSTUVWYZ"
        assert attempt.common_word_count == 3

    def test_sweep_finds_keyword(self, solver, ciphertext):
        result = solver.sweep(ciphertext, "FOX")

        assert result.total_permutations == 6
        assert result.recorded == 6
        assert result.stored == 6
        assert not result.truncated

        best = solver.ranked(1)[0]
        assert best.keyword == "FOX"
        assert best.count == 3
        assert best.text == "THE QUICK BROWN FOX"

    def test_sweep_records_in_heap_order(self, solver, ciphertext):
        solver.sweep(ciphertext, "FOX")
        assert [t.keyword for t in solver.store] == ["FOX", "OFX", "XFO", "FXO", "OXF", "XOF"]

    def test_sweep_with_fixed_letters(self, solver, ciphertext):
        result = solver.sweep(ciphertext, "FOX", fixed_letters="X")

        assert result.total_permutations == 2
        assert [t.keyword for t in solver.store] == ["FOX", "OFX"]

    def test_sweep_without_counting(self, solver, ciphertext):
        solver.sweep(ciphertext, "FOX", count_words=False)
        assert all(t.count == 0 for t in solver.store)

    def test_sweep_stops_at_cap(self, solver, ciphertext):
        result = solver.sweep(ciphertext, "FOX", max_permutations=4)

        assert result.recorded == 4
        assert result.truncated
        assert len(solver.store) == 4

    def test_streamed_sweep_matches_materialized(self, scorer, ciphertext):
        materialized = KeywordSolver(scorer, TrialStore(), materialize_limit=8)
        streamed = KeywordSolver(scorer, TrialStore(), materialize_limit=2)

        materialized.sweep(ciphertext, "FOXY")
        streamed.sweep(ciphertext, "FOXY")

        assert materialized.store.trials == streamed.store.trials

    def test_other_cipher_kind(self, solver):
        ciphertext = codec.encrypt(CipherKind.VIGENERE, "MEET ME AT THE SECRET PLACE", "WE")
        solver.sweep(ciphertext, "EW", kind=CipherKind.VIGENERE)

        assert solver.ranked(1)[0].keyword == "WE"

    def test_sentinel_aborts(self, solver):
        with pytest.raises(SweepAbortedError):
            solver.record_permutation("ABC", "")
        with pytest.raises(SweepAbortedError):
            solver.record_permutation("ABC", "*GARBLED")
        assert len(solver.store) == 0

    def test_sweep_records_empty_plaintext(self, solver):
        result = solver.sweep("123 456", "ABC", kind=CipherKind.PLAYFAIR)

        assert result.recorded == 6
        assert [(t.text, t.count) for t in solver.store] == [("", 0)] * 6

    def test_try_key_playfair_alphabet(self, solver):
        ciphertext = codec.encrypt(CipherKind.PLAYFAIR, "MEET ME", "MONARCHY")
        attempt = solver.try_key(ciphertext, "MONARCHY", CipherKind.PLAYFAIR)

        assert attempt.keyed_alphabet == "MONARCHYBDEFGIKLPQSTUVWXZ"
        assert attempt.plaintext == "MEETME"

    def test_try_key_polybius_alphabet(self, solver):
        attempt = solver.try_key("0011", "KEY", CipherKind.POLYBIUS)

        assert attempt.keyed_alphabet.startswith("KEYABCD")
        assert attempt.keyed_alphabet.endswith("0123456789")
        assert len(attempt.keyed_alphabet) == 36

    def test_record_permutation(self, solver):
        trial = solver.record_permutation("ABC", "HELLO", 2)
        assert (trial.index, trial.count) == (0, 2)
        assert solver.record_permutation("BAC", "HELLO").count == 0

    def test_count_words_after_restore(self, solver):
        solver.record_permutation("A", "THE FOX")
        solver.record_permutation("B", "NOTHING HERE")
        solver.record_permutation("C", "QUICK")

        assert solver.count_words() == 3
        assert [t.count for t in solver.store] == [2, 0, 1]
