"""Unit tests for the token formatter and verification path.

Tests cover:
1. Deterministic assembly from a known sample
2. Length budgeting (including the failure path)
3. Uniform alphanumeric sampling from a seeded generator
4. Parsing, checksum checking and tamper detection
"""

from collections import Counter

import pytest

from auth_tokens.auth.exceptions import (
    ChecksumMismatchError,
    IntegrityError,
    InvalidPrefixError,
    LengthBudgetError,
    MalformedTokenError,
)
from auth_tokens.core.constants import (
    BASE62_ALPHABET,
    CHECKSUM_CHAR_LENGTH,
    DEFAULT_AUTH_TOKEN_CHAR_LENGTH,
)
from auth_tokens.core.token import (
    AuthToken,
    ParsedToken,
    Prefix,
    check_token,
    make_token,
    make_token_with_value,
    minimum_token_length,
    parse_token,
    sample_alphanumeric,
    sample_length_for,
    verify_token,
)
from auth_tokens.entropy.chacha import ChaCha20Rng


SAMPLE = "yzBdc2BoUJhBY13n2nv8k5FXq9fYC0"
SAMPLE_TOKEN = "abc_yzBdc2BoUJhBY13n2nv8k5FXq9fYC00R8GcS"


class CountingSource:
    """Byte source that records how many bytes were requested."""

    def __init__(self, rng: ChaCha20Rng) -> None:
        self.rng = rng
        self.requested = 0

    def random_bytes(self, length: int) -> bytes:
        self.requested += length
        return self.rng.random_bytes(length)


class RejectingSource:
    """Byte source that yields only rejected values (62, 63) for the first call."""

    def __init__(self) -> None:
        self.calls = 0

    def random_bytes(self, length: int) -> bytes:
        self.calls += 1
        if self.calls == 1:
            return bytes([0xFF]) * length
        # 0x04 >> 2 == 1 -> "1"
        return bytes([0x04]) * length


# =============================================================================
# Value Types
# =============================================================================


class TestPrefix:
    """Tests for prefix validation."""

    def test_valid_prefix(self):
        assert str(Prefix("session")) == "session"

    def test_empty_prefix_raises(self):
        with pytest.raises(InvalidPrefixError, match="non-empty"):
            Prefix("")

    def test_separator_in_prefix_raises(self):
        with pytest.raises(InvalidPrefixError, match="separator"):
            Prefix("api_key")

    def test_prefix_is_immutable(self):
        prefix = Prefix("abc")
        with pytest.raises(AttributeError):
            prefix.value = "def"

    def test_invalid_prefix_is_value_error(self):
        with pytest.raises(ValueError):
            make_token_with_value("", SAMPLE)


class TestAuthToken:
    """Tests for the token value type."""

    def test_equality_is_string_equality(self):
        assert AuthToken("abc_x") == AuthToken("abc_x")
        assert AuthToken("abc_x") != AuthToken("abc_y")

    def test_str_and_len(self):
        token = AuthToken(SAMPLE_TOKEN)
        assert str(token) == SAMPLE_TOKEN
        assert len(token) == len(SAMPLE_TOKEN)


# =============================================================================
# Assembly
# =============================================================================


class TestMakeTokenWithValue:
    """Tests for deterministic token assembly."""

    def test_known_vector(self):
        token = make_token_with_value(Prefix("abc"), SAMPLE)
        assert token.value == SAMPLE_TOKEN

    def test_accepts_plain_string_prefix(self):
        assert make_token_with_value("abc", SAMPLE).value == SAMPLE_TOKEN

    def test_checksum_covers_sample_only(self):
        """Same sample under different prefixes carries the same checksum."""
        a = make_token_with_value("abc", SAMPLE).value
        b = make_token_with_value("session", SAMPLE).value
        assert a[-CHECKSUM_CHAR_LENGTH:] == b[-CHECKSUM_CHAR_LENGTH:] == "0R8GcS"

    @pytest.mark.parametrize("sample", ["", "a_b", "héllo", "ab-cd", "ab cd"])
    def test_rejects_sample_outside_alphabet(self, sample):
        with pytest.raises(MalformedTokenError, match="sample"):
            make_token_with_value("abc", sample)

    @pytest.mark.parametrize("sample", ["a", "Z9", SAMPLE])
    def test_assembled_tokens_verify(self, sample):
        assert verify_token(make_token_with_value("abc", sample), "abc")


# =============================================================================
# Length Budget
# =============================================================================


class TestLengthBudget:
    """Tests for sample length derivation."""

    def test_sample_length_formula(self):
        assert sample_length_for("abc", 40) == 40 - 3 - 1 - 6

    def test_default_length(self):
        assert sample_length_for("a") == DEFAULT_AUTH_TOKEN_CHAR_LENGTH - 8

    def test_minimum_length(self):
        assert minimum_token_length("abc") == 11
        assert sample_length_for("abc", 11) == 1

    def test_zero_sample_raises(self):
        with pytest.raises(LengthBudgetError) as exc_info:
            sample_length_for("abc", 10)
        assert exc_info.value.minimum == 11
        assert exc_info.value.total_length == 10
        assert exc_info.value.prefix == "abc"

    def test_negative_sample_raises(self):
        with pytest.raises(LengthBudgetError, match="too small"):
            sample_length_for("session", 5)

    def test_non_int_length_raises(self):
        with pytest.raises(TypeError):
            sample_length_for("abc", 40.0)
        with pytest.raises(TypeError):
            sample_length_for("abc", True)

    def test_make_token_rejects_small_budget(self, rng):
        with pytest.raises(LengthBudgetError):
            make_token(rng, "abc", 7)

    def test_failed_budget_consumes_no_randomness(self, rng):
        source = CountingSource(rng)
        with pytest.raises(LengthBudgetError):
            make_token(source, "abc", 3)
        assert source.requested == 0


# =============================================================================
# Sampling
# =============================================================================


class TestSampleAlphanumeric:
    """Tests for uniform alphanumeric sampling."""

    def test_length_and_alphabet(self, rng):
        sample = sample_alphanumeric(rng, 500)
        assert len(sample) == 500
        assert set(sample) <= set(BASE62_ALPHABET)

    def test_zero_length(self, rng):
        assert sample_alphanumeric(rng, 0) == ""

    def test_negative_length_raises(self, rng):
        with pytest.raises(ValueError):
            sample_alphanumeric(rng, -1)

    def test_same_seed_same_sample(self, seed):
        a = sample_alphanumeric(ChaCha20Rng.from_seed(seed), 64)
        b = sample_alphanumeric(ChaCha20Rng.from_seed(seed), 64)
        assert a == b

    def test_stream_is_not_reused(self, rng):
        """Consecutive draws from one generator differ."""
        assert sample_alphanumeric(rng, 64) != sample_alphanumeric(rng, 64)

    def test_rejected_bytes_are_skipped(self):
        source = RejectingSource()
        assert sample_alphanumeric(source, 5) == "11111"
        assert source.calls == 2

    def test_roughly_uniform(self, rng):
        counts = Counter(sample_alphanumeric(rng, 62 * 400))
        assert len(counts) == 62
        # Expected 400 per symbol; allow a wide margin.
        assert min(counts.values()) > 250
        assert max(counts.values()) < 550


# =============================================================================
# Make Token
# =============================================================================


class TestMakeToken:
    """Tests for random token generation."""

    @pytest.mark.parametrize("prefix", ["a", "ab", "abc"])
    def test_default_length(self, rng, prefix):
        token = make_token(rng, Prefix(prefix))
        assert len(token.value) == DEFAULT_AUTH_TOKEN_CHAR_LENGTH

    @pytest.mark.parametrize("prefix", ["a", "ab", "abc"])
    @pytest.mark.parametrize("length", [40, 64, 11, 1000])
    def test_requested_length(self, rng, prefix, length):
        if length < minimum_token_length(prefix):
            pytest.skip("budget too small for this prefix")
        token = make_token(rng, prefix, length)
        assert len(token.value) == length

    def test_structure(self, rng):
        token = make_token(rng, "session", 64).value
        assert token.startswith("session_")
        body = token[len("session_"):]
        assert set(body) <= set(BASE62_ALPHABET)

    def test_made_token_verifies(self, rng):
        token = make_token(rng, "abc", 40)
        assert verify_token(token, "abc") is True

    def test_two_tokens_from_one_generator_differ(self, rng):
        assert make_token(rng, "abc", 40) != make_token(rng, "abc", 40)


# =============================================================================
# Parsing and Verification
# =============================================================================


class TestParseToken:
    """Tests for positional parsing."""

    def test_known_token(self):
        parsed = parse_token(SAMPLE_TOKEN, "abc")
        assert parsed == ParsedToken(prefix="abc", sample=SAMPLE, checksum="0R8GcS")

    def test_without_expected_prefix(self):
        assert parse_token(SAMPLE_TOKEN).prefix == "abc"

    def test_accepts_auth_token(self):
        assert parse_token(AuthToken(SAMPLE_TOKEN)).sample == SAMPLE

    @pytest.mark.parametrize(
        "token",
        [
            "abcyzBdc2BoUJhBY13n2nv8k5FXq9fYC00R8GcS",  # no separator
            "_yzBdc2BoUJhBY13n2nv8k5FXq9fYC00R8GcS",  # empty prefix
            "abc_0R8GcS",  # no sample
            "abc_",  # nothing after separator
            "abc_yzBdc2BoUJhBY13n2nv8k5FXq9fYC0-R8GcS",  # bad character
            "abc_yzBdc2BoUJhBY13n2nv8k5FXq9fYC0_0R8GcS",  # second separator
        ],
    )
    def test_malformed(self, token):
        with pytest.raises(MalformedTokenError):
            parse_token(token)

    def test_wrong_prefix(self):
        with pytest.raises(MalformedTokenError, match="prefix"):
            parse_token(SAMPLE_TOKEN, "abd")


class TestCheckToken:
    """Tests for checksum verification."""

    def test_valid_token(self):
        assert check_token(SAMPLE_TOKEN, "abc").sample == SAMPLE

    def test_mutated_sample_detected(self):
        tampered = "abc_x" + SAMPLE_TOKEN[len("abc_y"):]
        with pytest.raises(ChecksumMismatchError) as exc_info:
            check_token(tampered, "abc")
        assert exc_info.value.actual == "0R8GcS"
        assert exc_info.value.expected != "0R8GcS"

    def test_mutated_checksum_detected(self):
        tampered = SAMPLE_TOKEN[:-1] + "T"
        with pytest.raises(ChecksumMismatchError):
            check_token(tampered, "abc")

    def test_mismatch_is_integrity_error(self):
        with pytest.raises(IntegrityError):
            check_token(SAMPLE_TOKEN[:-1] + "T")


class TestVerifyToken:
    """Tests for the boolean verification helper."""

    def test_valid(self):
        assert verify_token(SAMPLE_TOKEN, "abc") is True

    def test_mutated_sample(self):
        tampered = SAMPLE_TOKEN.replace("yzB", "yzC", 1)
        assert verify_token(tampered, "abc") is False

    def test_transposed_characters(self):
        tampered = SAMPLE_TOKEN.replace("yz", "zy", 1)
        assert verify_token(tampered, "abc") is False

    def test_wrong_prefix(self):
        assert verify_token(SAMPLE_TOKEN, "xyz") is False

    def test_malformed(self):
        assert verify_token("garbage", "abc") is False

    def test_truncated(self):
        assert verify_token(SAMPLE_TOKEN[:-1], "abc") is False

    def test_invalid_expected_prefix_raises(self):
        with pytest.raises(InvalidPrefixError):
            verify_token(SAMPLE_TOKEN, "a_b")
