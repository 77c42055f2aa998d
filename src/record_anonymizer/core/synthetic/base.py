"""
Base class for synthetic value generators.

Owns the Faker instances that back generation: one shared, unseeded
instance for non-reproducible output, and one instance per thread that is
re-seeded at the start of every seeded call so each call replays the same
random stream for the same seed.
"""

import threading
from abc import ABC
from typing import Optional

from faker import Faker


class BaseSyntheticGenerator(ABC):
    """Synthetic generator base providing seeded and unseeded Faker access.

    Attributes:
        locale: Faker locale used for every generated value.
    """

    def __init__(self, *, locale: str = "en_US"):
        """Initialize the generator.

        Args:
            locale: Faker locale (names, addresses and phone formats).
        """
        self.locale = locale
        self._shared_faker = Faker(locale)
        self._local = threading.local()

    def _get_faker(self, seed: Optional[int] = None) -> Faker:
        """Return a Faker instance for one generation call.

        With a seed, the calling thread's private instance is re-seeded so
        the stream restarts for this call; without one, the process-shared
        instance keeps advancing.
        """
        if seed is None:
            return self._shared_faker

        faker = getattr(self._local, "faker", None)
        if faker is None:
            faker = Faker(self.locale)
            self._local.faker = faker
        faker.seed_instance(seed)
        return faker
