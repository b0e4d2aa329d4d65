import pytest

from src.accounts.infrastructure.passwords import hash_password, is_hashed, verify_credentials


@pytest.fixture(scope="module")
def hashed():
    return hash_password("secreta")


def test_hash_uses_bcrypt_cost_10(hashed):
    assert hashed.startswith("$2b$10$")
    assert is_hashed(hashed)


def test_hashed_match(hashed):
    assert verify_credentials("secreta", hashed)


def test_hashed_mismatch(hashed):
    assert not verify_credentials("otra", hashed)


def test_2y_prefix_is_treated_as_bcrypt(hashed):
    php_style = "$2y$" + hashed[4:]

    assert is_hashed(php_style)
    assert verify_credentials("secreta", php_style)


def test_plaintext_legacy_comparison():
    assert verify_credentials("1234", "1234")
    assert not verify_credentials("12345", "1234")


def test_missing_stored_value_never_matches():
    assert not verify_credentials("", None)
    assert not verify_credentials("", "")


def test_corrupt_hash_is_a_mismatch():
    assert not verify_credentials("secreta", "$2b$10$not-a-real-hash")
