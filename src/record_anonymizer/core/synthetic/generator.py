"""
Synthetic data generator (masking strategy).

Replaces a value with a random but plausible substitute chosen by the
field's semantic type. With preserve_format the structure of the original
(e-mail domain, phone separators, card grouping, id shape) is kept.

Example:
    >>> gen = SyntheticDataGenerator()
    >>> phone = gen.generate("555-123-4567", SemanticType.PHONE, True, seed=7)
    >>> phone[3], phone[7], len(phone)
    ('-', '-', 12)
"""

import re
import string
from datetime import date, datetime, time
from typing import Any, Callable, Optional

from faker import Faker

from record_anonymizer.core.classifier import SemanticType
from record_anonymizer.core.synthetic.base import BaseSyntheticGenerator

INT_RANGE = (1, 100_000)
LONG_RANGE = (1, 1_000_000)
FLOAT_RANGE = (1, 10_000)
UNKNOWN_NUMBER_RANGE = (1, 1_000)
NUMERIC_ID_RANGE = (100_000, 999_999)
BIRTHDAY_AGE_RANGE = (18, 80)
MAX_SENTENCE_WORDS = 20
INT32_MAX = 2**31 - 1

_LETTERS_THEN_DIGITS = re.compile(r"[A-Za-z]+\d+")

# Checked in order against the lower-cased original value
ADDRESS_KINDS: list[tuple[tuple[str, ...], str]] = [
    (("street", "avenue", "road"), "street_address"),
    (("city",), "city"),
    (("zip", "postal"), "postcode"),
    (("state", "province"), "state"),
    (("country",), "country"),
]


class SyntheticDataGenerator(BaseSyntheticGenerator):
    """Type-guided fake value generator backed by Faker.

    A seeded call re-seeds its Faker stream, so the same seed and the same
    sequence of calls give the same outputs. Unseeded calls draw from a
    shared, non-deterministic stream.
    """

    def __init__(self, *, locale: str = "en_US"):
        super().__init__(locale=locale)
        self._handlers: dict[SemanticType, Callable[[Any, Faker, bool], Any]] = {
            SemanticType.NAME: self._generate_name,
            SemanticType.EMAIL: self._generate_email,
            SemanticType.PHONE: self._generate_phone,
            SemanticType.ADDRESS: self._generate_address,
            SemanticType.SSN: self._generate_ssn,
            SemanticType.CREDIT_CARD: self._generate_credit_card,
            SemanticType.DATE: self._generate_date,
            SemanticType.NUMBER: self._generate_number,
            SemanticType.ID: self._generate_id,
            SemanticType.BOOLEAN: self._generate_boolean,
            SemanticType.TEXT: self._generate_text,
            SemanticType.UNKNOWN: self._generate_generic,
        }

    def generate(
        self,
        value: Any,
        semantic_type: SemanticType,
        preserve_format: bool,
        seed: Optional[int] = None,
    ) -> Any:
        """Generate a synthetic replacement for a value.

        Args:
            value: Original value; None is returned untouched.
            semantic_type: Type selecting the generation policy.
            preserve_format: Keep the structural format of the original.
            seed: Optional seed making the call reproducible.

        Returns:
            A value of a kind compatible with the original.
        """
        if value is None:
            return None

        faker = self._get_faker(seed)
        handler = self._handlers.get(semantic_type, self._generate_generic)
        return handler(value, faker, preserve_format)

    def _generate_name(self, value: Any, faker: Faker, preserve_format: bool) -> str:
        original = str(value)
        if " " in original:
            return faker.name()
        if original and original[0].isupper():
            return faker.first_name()
        return faker.last_name()

    def _generate_email(self, value: Any, faker: Faker, preserve_format: bool) -> str:
        if preserve_format:
            original = str(value)
            domain = original[original.index("@"):] if "@" in original else "@example.com"
            return faker.user_name() + domain
        return faker.email()

    def _generate_phone(self, value: Any, faker: Faker, preserve_format: bool) -> str:
        if preserve_format:
            return _replace_digits(str(value), faker)
        return faker.phone_number()

    def _generate_address(self, value: Any, faker: Faker, preserve_format: bool) -> str:
        original = str(value).lower()
        for keywords, provider in ADDRESS_KINDS:
            if any(keyword in original for keyword in keywords):
                return getattr(faker, provider)()
        return faker.address()

    def _generate_ssn(self, value: Any, faker: Faker, preserve_format: bool) -> str:
        if preserve_format:
            return faker.numerify("###-##-####")
        return faker.ssn()

    def _generate_credit_card(self, value: Any, faker: Faker, preserve_format: bool) -> str:
        if preserve_format:
            original = str(value)
            if len(original) == 16:
                return faker.numerify("#" * 16)
            if "-" in original:
                return faker.numerify("####-####-####-####")
        return faker.credit_card_number()

    def _generate_date(self, value: Any, faker: Faker, preserve_format: bool) -> Any:
        min_age, max_age = BIRTHDAY_AGE_RANGE
        birthday = faker.date_of_birth(minimum_age=min_age, maximum_age=max_age)

        # datetime subclasses date, so it is checked first
        if isinstance(value, datetime):
            return datetime.combine(birthday, time(), tzinfo=value.tzinfo)
        if isinstance(value, date):
            return birthday
        return birthday.isoformat()

    def _generate_number(self, value: Any, faker: Faker, preserve_format: bool) -> Any:
        if isinstance(value, float):
            low, high = FLOAT_RANGE
            return round(faker.pyfloat(right_digits=2, min_value=low, max_value=high), 2)
        if isinstance(value, int) and not isinstance(value, bool) and abs(value) > INT32_MAX:
            return faker.random_int(*LONG_RANGE)
        return faker.random_int(*INT_RANGE)

    def _generate_id(self, value: Any, faker: Faker, preserve_format: bool) -> Any:
        if preserve_format:
            original = str(value)
            if original.isdigit():
                return faker.random_int(*NUMERIC_ID_RANGE)
            if _LETTERS_THEN_DIGITS.fullmatch(original):
                return faker.bothify("??######", letters=string.ascii_uppercase)
        return faker.uuid4()

    def _generate_boolean(self, value: Any, faker: Faker, preserve_format: bool) -> bool:
        return faker.pybool()

    def _generate_text(self, value: Any, faker: Faker, preserve_format: bool) -> str:
        word_count = len(str(value).split()) or 1
        if word_count == 1:
            return faker.word()
        if word_count <= 5:
            return " ".join(faker.words(nb=word_count))
        return faker.sentence(
            nb_words=min(word_count, MAX_SENTENCE_WORDS),
            variable_nb_words=False,
        )

    def _generate_generic(self, value: Any, faker: Faker, preserve_format: bool) -> Any:
        """Fallback keyed on the value's runtime kind instead of its type."""
        if isinstance(value, str):
            return faker.word()
        if isinstance(value, bool):
            return faker.pybool()
        if isinstance(value, (int, float)):
            return faker.random_int(*UNKNOWN_NUMBER_RANGE)
        return faker.word()


def _replace_digits(original: str, faker: Faker) -> str:
    """Swap every digit for a random one, keeping separators in place."""
    return "".join(
        str(faker.random_digit()) if char.isdigit() else char
        for char in original
    )


# Shared generator instance
_generator: Optional[SyntheticDataGenerator] = None


def get_synthetic_generator() -> SyntheticDataGenerator:
    """Get the process-wide synthetic data generator."""
    global _generator
    if _generator is None:
        _generator = SyntheticDataGenerator()
    return _generator
