from __future__ import annotations


class UnknownIdError(KeyError):
    kind = "item"

    def __init__(self, item_id: str) -> None:
        super().__init__(item_id)
        self.item_id = item_id

    def __str__(self) -> str:
        return f"Unknown {self.kind} id: {self.item_id}"


class VertexNotFoundError(UnknownIdError):
    kind = "vertex"


class LineNotFoundError(UnknownIdError):
    kind = "line"
