from __future__ import annotations

import uuid
from collections import defaultdict

from domain.ports.ids import IdFactory


class UuidIdFactory(IdFactory):
    def new_id(self, prefix: str) -> str:
        return f"{prefix}_{uuid.uuid4()}"


class SequentialIdFactory(IdFactory):
    """Predictable ids (``v_1``, ``v_2``, ``l_1`` ...), one counter per prefix.

    ``width`` zero-pads the counter so lexicographic order matches creation order.
    """

    def __init__(self, width: int = 0) -> None:
        self.width = width
        self._counters: defaultdict[str, int] = defaultdict(int)

    def new_id(self, prefix: str) -> str:
        self._counters[prefix] += 1
        number = str(self._counters[prefix]).zfill(self.width)
        return f"{prefix}_{number}"
