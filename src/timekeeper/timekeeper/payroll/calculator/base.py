from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...timesheets.model import EmployeePeriodSummary


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def estimate_cost(self, summary: EmployeePeriodSummary) -> Decimal:
        raise NotImplementedError
