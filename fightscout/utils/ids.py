from __future__ import annotations

import itertools
import uuid
from typing import Callable

IdFactory = Callable[[], str]


def new_id() -> str:
    return str(uuid.uuid4())


def sequential_ids(prefix: str = "id") -> IdFactory:
    """Deterministic id factory: ``prefix-1``, ``prefix-2``, ..."""
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"
