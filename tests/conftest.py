import pytest

from pension_model.config import EngineConfig
from pension_model.reference import load_reference_data
from pension_model.schema import CareerRecord

LIFESPAN_TEXT = "\n".join(
    ["age," + ",".join(f"month_{m}" for m in range(12))]
    + [f"{age}," + ",".join(str(250.0 - (age - 60) * 10) for _ in range(12)) for age in (60, 62, 65, 70)]
)

INDEXATION_TEXT = "\n".join(
    [
        "Quarterly indexation factors (illustrative)",
        "year,quarter,primary,sub",
        "2025,I,105.00%,102.00%",
        "2025,II,106.00%,103.00%",
        "2025,III,110.00%,105.00%",
        "2025,IV,108.00%,104.00%",
    ]
)


@pytest.fixture
def default_config():
    return EngineConfig()


@pytest.fixture
def reference_data():
    return load_reference_data(LIFESPAN_TEXT, INDEXATION_TEXT)


@pytest.fixture
def sample_career():
    # Male, 30 years old in 2026, still working until 2055
    return CareerRecord(
        age=30,
        sex="male",
        gross_salary=8000,
        work_start_year=2015,
        work_end_year=2055,
        include_sick_leave=True,
        desired_monthly_pension=5000,
    )


@pytest.fixture
def lifespan_text():
    return LIFESPAN_TEXT


@pytest.fixture
def indexation_text():
    return INDEXATION_TEXT
