from __future__ import annotations

from typing import Optional, Protocol

from .model import EmployeeProfile


class EmployeeRepository(Protocol):
    def get_profile(self, *, month: str, employee_code: str, company: str) -> Optional[EmployeeProfile]:
        raise NotImplementedError
