import pytest

from signet.domain.value_objects.password import HashedPassword, Password
from signet.utils.security import verify_password


class TestPassword:
    def test_valid_password(self):
        assert Password("password1").value == "password1"

    def test_empty_password(self):
        with pytest.raises(ValueError, match="Password cannot be empty."):
            Password("")

    def test_short_password(self):
        with pytest.raises(ValueError, match="Password must be at least 8 characters long."):
            Password("short")

    def test_password_at_byte_limit(self):
        assert Password("x" * 72).value == "x" * 72

    def test_long_password(self):
        with pytest.raises(ValueError, match="Password must not exceed 72 bytes."):
            Password("x" * 73)

    def test_multibyte_password_counted_in_bytes(self):
        # 40 characters, 80 bytes
        with pytest.raises(ValueError, match="Password must not exceed 72 bytes."):
            Password("\u00e9" * 40)

    def test_shared_prefix_does_not_verify(self):
        hashed = Password("a" * 72).to_hashed()
        assert not verify_password("a" * 72 + "WRONG", str(hashed))
        assert not verify_password("a" * 72 + "a", str(hashed))

    def test_hash_round_trip(self):
        password = Password("password1")
        hashed = password.to_hashed()
        assert isinstance(hashed, HashedPassword)
        assert str(hashed) != "password1"
        assert password.verify_against_hash(str(hashed))
        assert not Password("password2").verify_against_hash(str(hashed))

    def test_repr_masks_value(self):
        assert "password1" not in repr(Password("password1"))


class TestHashedPassword:
    def test_rejects_plaintext(self):
        with pytest.raises(ValueError, match="Invalid hashed password format"):
            HashedPassword("password1")

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            HashedPassword("")
