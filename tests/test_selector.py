"""Tests for KPI selection and backfill."""
from bonusplan.core.selector import select_kpi_names
from bonusplan.models.schemas import CompanyProfile, MetricSummary, PlanMode, SelectedKPI


def _nominate(*names):
    return [SelectedKPI(name=name, reason="nominated") for name in names]


class TestGenericMode:
    def test_always_form_kpis_in_order(self, profile, benchmarks, connected_summary):
        names = select_kpi_names(
            _nominate("Callback Rate", "Billable Efficiency"),
            profile, connected_summary, benchmarks, PlanMode.GENERIC,
        )
        assert names == ["Average Job Value", "Revenue Per Technician", "Labor Rate"]

    def test_starved_generic(self, benchmarks):
        names = select_kpi_names([], CompanyProfile(avg_job_value=300), None, benchmarks, "generic")
        assert names == ["Average Job Value"]


class TestCustomMode:
    def test_nominations_preserved_then_gap_backfill(self, profile, benchmarks, connected_summary):
        names = select_kpi_names(
            _nominate("Callback Rate", "Maintenance Agreement Conversion", "Google Rating"),
            profile, connected_summary, benchmarks, PlanMode.CUSTOM,
        )
        # Maintenance conversion has data but no benchmark
        assert names == ["Callback Rate", "Average Google Rating", "Average Job Value"]

    def test_no_nominations_ranked_by_gap(self, profile, benchmarks, connected_summary):
        names = select_kpi_names([], profile, connected_summary, benchmarks, PlanMode.CUSTOM)
        assert names == ["Average Job Value", "Labor Rate", "Billable Efficiency"]

    def test_duplicate_nominations(self, profile, benchmarks, connected_summary):
        names = select_kpi_names(
            _nominate("Callback Rate", "Callback Rate"),
            profile, connected_summary, benchmarks, PlanMode.CUSTOM,
        )
        assert names == ["Callback Rate", "Average Job Value", "Labor Rate"]

    def test_truncates_to_three(self, profile, benchmarks, connected_summary):
        names = select_kpi_names(
            _nominate("Callback Rate", "Billable Efficiency", "Labor Rate", "Average Job Value"),
            profile, connected_summary, benchmarks, PlanMode.CUSTOM,
        )
        assert names == ["Callback Rate", "Billable Efficiency", "Labor Rate"]

    def test_exactly_three_distinct(self, profile, benchmarks, connected_summary):
        names = select_kpi_names(_nominate("Unknown KPI"), profile, connected_summary, benchmarks, "custom")
        assert len(names) == 3
        assert len(set(names)) == 3

    def test_starved_universe(self, benchmarks):
        profile = CompanyProfile(avg_job_value=300)
        names = select_kpi_names(_nominate("Callback Rate"), profile, MetricSummary(), benchmarks, PlanMode.CUSTOM)
        assert names == ["Average Job Value"]

    def test_no_benchmarks(self, profile, connected_summary):
        assert select_kpi_names([], profile, connected_summary, [], PlanMode.CUSTOM) == []
