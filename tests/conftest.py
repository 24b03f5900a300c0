import pytest

from bonusplan.models.schemas import BenchmarkRecord, CompanyProfile, MetricSummary


@pytest.fixture
def benchmarks():
    return [
        BenchmarkRecord(display_name="Average Job Value", lower=200, median=370, upper=600),
        BenchmarkRecord(display_name="Monthly Revenue per Team Member", lower=10500, median=21111, upper=24600),
        BenchmarkRecord(display_name="Labor Rate", lower=38, median=30, upper=23, inverted_scale=True),
        BenchmarkRecord(display_name="Billable Efficiency", lower=30, median=48, upper=75),
        BenchmarkRecord(display_name="Callback Rate", lower=9, median=5, upper=2.25, inverted_scale=True),
        BenchmarkRecord(display_name="Google Rating", lower=3.8, median=4.4, upper=4.8),
    ]


@pytest.fixture
def profile():
    return CompanyProfile(
        name="Acme Heating",
        industry="HVAC",
        team_size=15,
        annual_revenue=3_800_000,
        staff_costs=1_482_000,
        avg_job_value=300,
    )


@pytest.fixture
def connected_summary():
    return MetricSummary(
        billable_efficiency=40,
        callback_rate=8,
        google_rating=4.1,
        maintenance_conversion=20,
        first_time_fix_rate=70,
        total_jobs=1200,
    )
