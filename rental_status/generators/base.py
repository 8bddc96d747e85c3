"""Base generator class for all sample-data generators."""

from __future__ import annotations

import itertools
import random
from abc import ABC

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all data generators.

    Provides common initialization: Faker instance creation, seed-based
    reproducibility and a sequential integer id counter.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    start_id : int
        First id handed out by :meth:`next_id`.
    """

    def __init__(
        self,
        seed: int | None = None,
        locale: str = "en_US",
        start_id: int = 1,
    ) -> None:
        self.fake = Faker(locale)
        self._ids = itertools.count(start_id)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    def next_id(self) -> int:
        return next(self._ids)
