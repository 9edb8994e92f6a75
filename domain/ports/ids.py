from __future__ import annotations

from typing import Protocol


class IdFactory(Protocol):
    def new_id(self, prefix: str) -> str: ...
