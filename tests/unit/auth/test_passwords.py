"""Unit tests for bcrypt password helpers."""

from infrastructure.auth.passwords import DUMMY_HASH, hash_password, verify_password


class TestPasswords:
    def test_hash_is_not_plaintext(self) -> None:
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_hashes_are_salted(self) -> None:
        assert hash_password("secret123") != hash_password("secret123")

    def test_verify_accepts_matching_password(self) -> None:
        assert verify_password("secret123", hash_password("secret123")) is True

    def test_verify_rejects_wrong_password(self) -> None:
        assert verify_password("wrong-pass", hash_password("secret123")) is False

    def test_verify_rejects_malformed_hash(self) -> None:
        assert verify_password("secret123", "not-a-bcrypt-hash") is False

    def test_dummy_hash_matches_nothing_users_send(self) -> None:
        assert verify_password("secret123", DUMMY_HASH) is False
