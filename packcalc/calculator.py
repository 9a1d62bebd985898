"""Optimal packing of ordered items into boxes of fixed sizes."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass


class PackingError(ValueError):
    """Raised when a packing cannot be calculated for the given input."""


@dataclass(frozen=True)
class Packing:
    """A number of boxes of one size."""

    box_size: int
    quantity: int

    def to_dict(self) -> dict[str, int]:
        """Return the JSON representation used by the HTTP API."""
        return {"boxSize": self.box_size, "quantity": self.quantity}


class Calculator:
    """Finds the packing that ships the fewest items, then the fewest boxes."""

    def __init__(self, order_limit: int) -> None:
        self.order_limit = order_limit

    def calculate_packing(self, order: int, *args: int) -> list[Packing]:
        """Return the optimal packing for ``order`` items using pack sizes ``args``.

        The result is sorted by box size, largest first.
        """
        packs = list(args)

        if order <= 0:
            raise PackingError("order size must be greater than zero")
        if order > self.order_limit:
            raise PackingError(
                f"order size exceeds the limit of {self.order_limit} items"
            )
        if not packs:
            raise PackingError("at least one pack size must be provided")
        if any(pack <= 0 for pack in packs):
            raise PackingError("pack sizes must be greater than zero")
        if len(set(packs)) != len(packs):
            raise PackingError("pack sizes must be unique")

        counts = self._solve(order, sorted(packs, reverse=True))
        if counts is None:
            raise PackingError("no packing solution found")

        return sorted(
            (Packing(box_size=size, quantity=qty) for size, qty in counts.items()),
            key=lambda packing: packing.box_size,
            reverse=True,
        )

    @staticmethod
    def _solve(order: int, packs: list[int]) -> Counter[int] | None:
        """Dynamic programming over item totals up to one largest pack past the order.

        ``packs`` must be sorted in descending order; ties are resolved in
        favour of the first solution found, which follows that order.
        """
        limit = order + packs[0]  # allow overpacking up to one largest pack

        # box_count[i] is the fewest boxes that sum to exactly i items, or -1.
        box_count = [-1] * (limit + 1)
        last_pack = [0] * (limit + 1)
        box_count[0] = 0

        for total, boxes in enumerate(box_count):
            if boxes < 0:
                continue
            new_boxes = boxes + 1
            for pack in packs:
                nxt = total + pack
                if nxt > limit:
                    continue
                current = box_count[nxt]
                if current < 0 or new_boxes < current:
                    box_count[nxt] = new_boxes
                    last_pack[nxt] = pack

        best = next(
            (total for total in range(order, limit + 1) if box_count[total] >= 0),
            None,
        )
        if best is None:
            return None

        result: Counter[int] = Counter()
        total = best
        while total > 0:
            pack = last_pack[total]
            result[pack] += 1
            total -= pack
        return result