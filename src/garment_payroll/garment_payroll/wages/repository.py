from __future__ import annotations

from typing import Protocol, Sequence

from .model import WageGrade


class WageGradeRepository(Protocol):
    def list_all(self) -> Sequence[WageGrade]:
        raise NotImplementedError
