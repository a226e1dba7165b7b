# pension_model/schema/career.py
"""
Career record: the caller-supplied input to one projection call.

Bounds on age and working years come from ``ValidationLimits``. Pass the
configured limits through the validation context to apply them together
with the salary band:

    CareerRecord.model_validate(fields, context={"limits": config.limits})

Without a context the default limits apply and the salary band is left to
the caller.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from .enums import Sex
from .limits import DEFAULT_LIMITS


class CareerRecord(BaseModel):
    """Career facts for one person. Immutable for the duration of a projection."""

    model_config = ConfigDict(frozen=True, use_enum_values=False)

    age: int = Field(..., ge=0)
    sex: Sex
    gross_salary: float = Field(..., ge=0.0, description="Current gross monthly salary")
    work_start_year: int
    work_end_year: int
    primary_account: Optional[float] = Field(
        None, ge=0.0, description="Balance already recorded on the primary account"
    )
    sub_account: Optional[float] = Field(None, ge=0.0)
    prior_system_capital: Optional[float] = Field(
        None, ge=0.0, description="Initial capital carried over from the pre-reform system"
    )
    external_fund_account: Optional[float] = Field(
        None, ge=0.0, description="Funds held by an external pension fund, merged into the sub-account"
    )
    include_sick_leave: bool = False
    desired_monthly_pension: Optional[float] = Field(None, ge=0.0)

    @model_validator(mode="after")
    def check_work_period(self, info: ValidationInfo) -> "CareerRecord":
        if self.work_end_year < self.work_start_year:
            raise ValueError(
                f"work_end_year ({self.work_end_year}) cannot be earlier than work_start_year ({self.work_start_year})"
            )

        limits = (info.context or {}).get("limits")
        problems = (limits or DEFAULT_LIMITS).violations(self, check_salary=limits is not None)
        if problems:
            raise ValueError("; ".join(problems))
        return self

    def birth_year(self, as_of_year: int) -> int:
        return as_of_year - self.age

    @property
    def years_worked(self) -> int:
        """Length of the whole working period, past and future."""
        return self.work_end_year - self.work_start_year


__all__ = ["CareerRecord"]
