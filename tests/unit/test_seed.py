"""Tests for path-key seed derivation."""

from __future__ import annotations

from oam.mock.seed import DEFAULT_SEED, derive_seed


class TestDeriveSeed:
    """Test the rolling hash behind every reseed."""

    def test_default_seed(self) -> None:
        assert DEFAULT_SEED == 12345

    def test_empty_key_is_base_seed(self) -> None:
        assert derive_seed(12345, "") == 12345

    def test_single_character(self) -> None:
        assert derive_seed(0, "a") == 97
        assert derive_seed(12345, "a") == 12442

    def test_multiple_characters(self) -> None:
        # 97 * 30 + 98
        assert derive_seed(12345, "ab") == 15353

    def test_result_is_non_negative(self) -> None:
        assert derive_seed(-100000, "a") == 99903

    def test_astral_characters_hash_as_surrogate_pairs(self) -> None:
        # U+1F600 is 0xD83D 0xDE00 in UTF-16
        assert derive_seed(0, "\U0001f600") == 0xD83D * 30 + 0xDE00

    def test_deterministic(self) -> None:
        key = "GET /users/{id}.name"
        assert derive_seed(DEFAULT_SEED, key) == derive_seed(DEFAULT_SEED, key)

    def test_key_sensitive(self) -> None:
        assert derive_seed(DEFAULT_SEED, "GET /users.name") != derive_seed(
            DEFAULT_SEED, "GET /users.email"
        )

    def test_base_seed_sensitive(self) -> None:
        assert derive_seed(1, "GET /users") != derive_seed(2, "GET /users")

    def test_long_keys_stay_in_int32_range(self) -> None:
        value = derive_seed(0, "GET /" + "segment/" * 500)
        assert 0 <= value <= 2**31
