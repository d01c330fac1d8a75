"""Tests for password hashing and temporary password generation."""

import unittest

from domain.model.errors import ValidationError
from services.credentials import (
    generate_temporary_password,
    hash_password,
    verify_password,
)


class TestHashPassword(unittest.TestCase):

    def test_hash_is_salted(self):
        first = hash_password("same-password")
        second = hash_password("same-password")

        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("same-password", first))
        self.assertTrue(verify_password("same-password", second))

    def test_wrong_password_does_not_verify(self):
        hashed = hash_password("right")

        self.assertFalse(verify_password("wrong", hashed))

    def test_over_long_password_rejected(self):
        with self.assertRaises(ValidationError):
            hash_password("x" * 73)

    def test_multibyte_length_counted_in_bytes(self):
        # 25 three-byte characters = 75 bytes
        with self.assertRaises(ValidationError):
            hash_password("€" * 25)


class TestVerifyPassword(unittest.TestCase):

    def test_missing_hash_fails(self):
        self.assertFalse(verify_password("anything", None))

    def test_empty_password_fails(self):
        self.assertFalse(verify_password("", hash_password("x")))

    def test_corrupt_hash_fails_without_raising(self):
        self.assertFalse(verify_password("anything", "not-a-bcrypt-hash"))


class TestTemporaryPassword(unittest.TestCase):

    def test_six_digits(self):
        for _ in range(20):
            self.assertRegex(generate_temporary_password(), r"^\d{6}$")


if __name__ == '__main__':
    unittest.main()
