from __future__ import annotations

from typing import Protocol, Sequence

from .model import BradfordThreshold


class BradfordThresholdRepository(Protocol):
    def list_active(self, *, company_id: int) -> Sequence[BradfordThreshold]:
        raise NotImplementedError
