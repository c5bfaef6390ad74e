"""Base generator class for sample-data generators."""

from __future__ import annotations

import random
from abc import ABC
from datetime import date, datetime, time, timedelta

from faker import Faker


class BaseGenerator(ABC):
    """Base class for all sample-data generators.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``vi_VN``).
    """

    def __init__(self, seed: int | None = None, locale: str = "vi_VN") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    @staticmethod
    def random_day(year: int) -> date:
        """Uniformly random calendar day of ``year``."""
        start = date(year, 1, 1)
        days = (date(year + 1, 1, 1) - start).days
        return start + timedelta(days=random.randrange(days))

    @staticmethod
    def business_time(day: date) -> datetime:
        """Random time between 08:00 and 18:00 on ``day``."""
        offset = timedelta(seconds=random.randrange(10 * 3600))
        return datetime.combine(day, time(8, 0)) + offset
