r"""
Deterministic pseudonymization.

Derives a stable substitute for a value from a SHA-256 digest of the
value, its semantic type and a seed. With format preservation enabled the
digest material is poured back into the shape of the original value, so
"555-123-4567" stays a "###-###-####" phone number and "John" stays a
four-letter capitalized name.

Example:
    >>> pseudonymizer = Pseudonymizer()
    >>> ssn = pseudonymizer.pseudonymize("123-45-6789", SemanticType.SSN, True, 1)
    >>> re.fullmatch(r"\d{3}-\d{2}-\d{4}", ssn) is not None
    True
"""

import base64
import hashlib
import re
import threading
from typing import Any, Callable, Optional

from record_anonymizer.core.classifier import SemanticType
from record_anonymizer.core.exceptions import DigestUnavailableError
from record_anonymizer.logging.setup import get_logger

logger = get_logger(__name__)

DIGEST_ALGORITHM = "sha256"
DEFAULT_SEED_TOKEN = "default"

# Filler appended when the digest yields too few digits
PHONE_FILLER = "1234567890"
SSN_FILLER = "123456789"
CARD_FILLER = "1234567890123456"
NUMBER_FILLER = "1234567890"

MAX_NUMBER_LENGTH = 10
EMAIL_LOCAL_LENGTH = 8
UNPRESERVED_LENGTH = 16

_NON_DIGITS = re.compile(r"[^0-9]")
_NON_LETTERS = re.compile(r"[^a-zA-Z]")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_ALL_DIGITS = re.compile(r"\d+")

CacheKey = tuple[str, SemanticType, str]


class PseudonymCache:
    """Thread-safe memo table of computed pseudonyms.

    Lookups for distinct keys never wait on each other. Concurrent first
    lookups of the same key share a per-key lock so the value is computed
    once and every caller observes it.

    Entries are never evicted; clear() drops them all and later lookups
    simply recompute.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._values: dict[CacheKey, str] = {}
        self._key_locks: dict[CacheKey, threading.Lock] = {}

    def get_or_compute(self, key: CacheKey, compute: Callable[[], str]) -> str:
        """Return the cached value for key, computing it at most once.

        Args:
            key: Composite (value, type, seed token) key.
            compute: Zero-argument callable producing the value on a miss.

        Returns:
            The cached or freshly computed value.
        """
        with self._lock:
            cached = self._values.get(key)
            if cached is not None:
                return cached
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                cached = self._values.get(key)
                if cached is not None:
                    return cached

            value = compute()

            with self._lock:
                self._values[key] = value
                if self._key_locks.get(key) is key_lock:
                    del self._key_locks[key]

        return value

    def get(self, key: CacheKey) -> Optional[str]:
        with self._lock:
            return self._values.get(key)

    def clear(self) -> None:
        """Drop all cached pseudonyms."""
        with self._lock:
            self._values.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._values


class Pseudonymizer:
    """Digest-based, format-preserving pseudonym generator.

    The output depends only on (str(value), semantic type, seed), so the
    same triple always maps to the same pseudonym. A fresh digest object
    is created per computation, which keeps concurrent callers from
    sharing hash state.

    Attributes:
        cache: Memo table of computed pseudonyms.
    """

    def __init__(self, cache: Optional[PseudonymCache] = None) -> None:
        """Initialize the pseudonymizer.

        Raises:
            DigestUnavailableError: If SHA-256 is not available.
        """
        if DIGEST_ALGORITHM not in hashlib.algorithms_available:
            raise DigestUnavailableError(DIGEST_ALGORITHM)
        self.cache = cache if cache is not None else PseudonymCache()

    def pseudonymize(
        self,
        value: Any,
        semantic_type: SemanticType,
        preserve_format: bool,
        seed: Optional[int] = None,
    ) -> Optional[str]:
        """Return the deterministic pseudonym for a value.

        The cache is keyed on (value, type, seed) only, so whichever
        preserve_format setting computes a pseudonym first is what later
        calls get for that key, whatever flag they pass.

        Args:
            value: Original value; None is passed through.
            semantic_type: Type steering the format reconstruction.
            preserve_format: Rebuild the original's shape when True,
                otherwise return a 16-character digest prefix.
            seed: Optional seed; absent seeds use a fixed token.

        Returns:
            The pseudonym string, or None for a None value.
        """
        if value is None:
            return None

        original = str(value)
        seed_token = str(seed) if seed is not None else DEFAULT_SEED_TOKEN
        key: CacheKey = (original, semantic_type, seed_token)

        return self.cache.get_or_compute(
            key,
            lambda: self._generate(original, semantic_type, preserve_format, seed_token),
        )

    def clear_cache(self) -> None:
        """Clear the pseudonym cache (tests, memory reclamation)."""
        size = len(self.cache)
        self.cache.clear()
        logger.info(
            "Pseudonym cache cleared",
            extra={"event": "pseudonym_cache_cleared", "entries": size},
        )

    @property
    def cache_size(self) -> int:
        return len(self.cache)

    def _generate(
        self,
        original: str,
        semantic_type: SemanticType,
        preserve_format: bool,
        seed_token: str,
    ) -> str:
        digest_input = f"{original}|{semantic_type.value}|{seed_token}"
        digest = hashlib.new(DIGEST_ALGORITHM, digest_input.encode("utf-8")).digest()
        encoded = base64.b64encode(digest).decode("ascii")

        if preserve_format:
            return self._format_pseudonym(encoded, original, semantic_type)
        return encoded[:UNPRESERVED_LENGTH]

    def _format_pseudonym(
        self, hash_text: str, original: str, semantic_type: SemanticType
    ) -> str:
        formatter = _FORMATTERS.get(semantic_type)
        if formatter is None:
            return hash_text[: len(original)]
        return formatter(hash_text, original)


def _digits(hash_text: str) -> str:
    return _NON_DIGITS.sub("", hash_text)


def _pad(digits: str, filler: str, length: int) -> str:
    """Pad a digit pool with filler when it is shorter than length."""
    if len(digits) < length:
        return (digits + filler)[:length]
    return digits


def _format_name(hash_text: str, original: str) -> str:
    """Replace letters with digest letters, keeping case and punctuation."""
    result = []
    hash_index = 0

    for char in original:
        if char.isalpha():
            hash_char = hash_text[hash_index % len(hash_text)]
            if char.isupper():
                result.append(hash_char.upper() if hash_char.isalpha() else "A")
            else:
                result.append(hash_char.lower() if hash_char.isalpha() else "a")
            hash_index += 1
        else:
            result.append(char)

    return "".join(result)


def _format_email(hash_text: str, original: str) -> str:
    username = _NON_ALNUM.sub("", hash_text)[:EMAIL_LOCAL_LENGTH]
    if "@" in original:
        parts = original.split("@")
        domain = f"@{parts[1]}" if parts[1] else "@example.com"
        return username.lower() + domain
    return username + "@example.com"


def _format_phone(hash_text: str, original: str) -> str:
    digits = _pad(_digits(hash_text), PHONE_FILLER, 10)
    result = []
    digit_index = 0

    for char in original:
        if char.isdigit():
            result.append(digits[digit_index % len(digits)])
            digit_index += 1
        else:
            result.append(char)

    return "".join(result)


def _format_ssn(hash_text: str, original: str) -> str:
    digits = _pad(_digits(hash_text), SSN_FILLER, 9)
    return f"{digits[0:3]}-{digits[3:5]}-{digits[5:9]}"


def _format_credit_card(hash_text: str, original: str) -> str:
    digits = _pad(_digits(hash_text), CARD_FILLER, 16)
    groups = [digits[0:4], digits[4:8], digits[8:12], digits[12:16]]

    if "-" in original:
        return "-".join(groups)
    if " " in original:
        return " ".join(groups)
    return digits[:16]


def _format_number(hash_text: str, original: str) -> str:
    digits = _digits(hash_text) or "123"
    target_length = min(len(original), MAX_NUMBER_LENGTH)
    digits = _pad(digits, NUMBER_FILLER, target_length)
    return digits[:target_length]


def _format_id(hash_text: str, original: str) -> str:
    if _ALL_DIGITS.fullmatch(original):
        return _format_number(hash_text, original)

    digits = _digits(hash_text)
    letters = _NON_LETTERS.sub("", hash_text)
    result = []

    # Both pools are indexed by position in the original, not per class
    for index, char in enumerate(original):
        if char.isdigit():
            result.append(digits[index % len(digits)] if digits else "1")
        elif char.isalpha():
            if letters:
                letter = letters[index % len(letters)]
                result.append(letter.upper() if char.isupper() else letter.lower())
            else:
                result.append("A" if char.isupper() else "a")
        else:
            result.append(char)

    return "".join(result)


_FORMATTERS: dict[SemanticType, Callable[[str, str], str]] = {
    SemanticType.NAME: _format_name,
    SemanticType.EMAIL: _format_email,
    SemanticType.PHONE: _format_phone,
    SemanticType.SSN: _format_ssn,
    SemanticType.CREDIT_CARD: _format_credit_card,
    SemanticType.NUMBER: _format_number,
    SemanticType.ID: _format_id,
}
