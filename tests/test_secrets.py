"""Tests for identifier and secret helpers."""

import re

import pytest

from ghlogin.utils.secrets import generate_id_from_entropy_size, generate_state, mask_secret

BASE32 = re.compile(r"^[a-z2-7]+$")


class TestGenerateId:
    """Tests for generate_id_from_entropy_size."""

    @pytest.mark.parametrize(("size", "length"), [(10, 16), (25, 40), (5, 8)])
    def test_length(self, size, length):
        value = generate_id_from_entropy_size(size)
        assert len(value) == length
        assert BASE32.match(value)

    def test_unique(self):
        assert len({generate_id_from_entropy_size(10) for _ in range(1000)}) == 1000

    def test_rejects_zero(self):
        with pytest.raises(ValueError):
            generate_id_from_entropy_size(0)


class TestSecretsHelpers:
    """Tests for state and masking helpers."""

    def test_state_is_urlsafe(self):
        state = generate_state()
        assert re.match(r"^[A-Za-z0-9_-]{43}$", state)
        assert state != generate_state()

    def test_mask_secret(self):
        assert mask_secret("abcdefgh") == "****efgh"
        assert mask_secret("abc") == "***"
        assert mask_secret("") == "<empty>"
