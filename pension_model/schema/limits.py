# pension_model/schema/limits.py
"""
Configured bounds for career input.

``CareerRecord`` validates against these. The defaults apply when no limits
are passed in the validation context; the salary band is only enforced when
limits are passed explicitly, which is how the upstream form path validates.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ValidationLimits(BaseModel):
    """Bounds enforced on a career record before it reaches the engine."""

    model_config = ConfigDict(frozen=True)

    min_age: int = Field(18, ge=0)
    max_age: int = Field(67, ge=0)
    min_salary: float = Field(4666.0, ge=0.0)
    max_salary: Optional[float] = Field(None, ge=0.0)
    min_work_year: int = 1960
    max_work_year: int = 2100

    @model_validator(mode="after")
    def check_bounds(self) -> "ValidationLimits":
        if self.min_age > self.max_age:
            raise ValueError("min_age cannot exceed max_age")
        if self.min_work_year > self.max_work_year:
            raise ValueError("min_work_year cannot exceed max_work_year")
        if self.max_salary is not None and self.max_salary < self.min_salary:
            raise ValueError("max_salary cannot be below min_salary")
        return self

    def check_salary(self, gross_salary: float) -> bool:
        """True when the salary lies inside the configured band."""
        if gross_salary < self.min_salary:
            return False
        return self.max_salary is None or gross_salary <= self.max_salary

    def violations(self, career, check_salary: bool = True) -> List[str]:
        """
        Describe every bound the career record breaks.

        Args:
            career: A ``CareerRecord`` (or anything with the same fields).
            check_salary: Whether to test the gross salary against the band.

        Returns:
            One message per broken bound; empty when the record is inside all of them.
        """
        problems = []
        if not self.min_age <= career.age <= self.max_age:
            problems.append(f"age {career.age} is outside {self.min_age}-{self.max_age}")
        for name in ("work_start_year", "work_end_year"):
            year = getattr(career, name)
            if not self.min_work_year <= year <= self.max_work_year:
                problems.append(f"{name} {year} is outside {self.min_work_year}-{self.max_work_year}")
        if check_salary and not self.check_salary(career.gross_salary):
            upper = f"-{self.max_salary}" if self.max_salary is not None else " or more"
            problems.append(f"gross_salary {career.gross_salary} is outside {self.min_salary}{upper}")
        return problems


DEFAULT_LIMITS = ValidationLimits()

__all__ = ["ValidationLimits", "DEFAULT_LIMITS"]
