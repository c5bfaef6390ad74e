"""Tests for the aggregation pipeline."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from loan_reports.aggregation import (
    OTHERS,
    UNKNOWN,
    average_term,
    count_by_status,
    disbursed_only,
    group_by_key,
    legal_document_breakdown,
    loan_statistics,
    month_bucket,
    product_type_breakdown,
    region_breakdown,
    source_breakdown,
    sum_disbursed_amount,
    top_n_with_overflow,
)
from loan_reports.engine import by_year, reconcile
from loan_reports.models import STATUS_LABELS, ApplicationStatus, CorrectionKind, NamedCount


class TestSumsAndCounts:
    """Tests for amount sums and status counts."""

    def test_sum_disbursed_amount(self, make_app) -> None:
        assert sum_disbursed_amount([make_app("A", 100), make_app("B", "50.5")]) == Decimal("150.5")

    def test_sum_of_empty_is_zero(self) -> None:
        assert sum_disbursed_amount([]) == Decimal("0")

    def test_sum_floors_at_zero(self, make_app) -> None:
        assert sum_disbursed_amount([make_app("A", -80), make_app("B", 30)]) == Decimal("0")

    def test_count_by_status_lists_all_statuses(self, make_app) -> None:
        records = [
            make_app("A", status=1),
            make_app("B", status=7),
            make_app("C", status=7),
            make_app("D", status=99),
        ]

        counts = count_by_status(records)

        assert list(counts) == list(STATUS_LABELS.values())
        assert counts["1. Newly Created"] == 1
        assert counts["7. Disbursed"] == 2
        assert counts["4. Rejected"] == 0
        assert sum(counts.values()) == 3

    def test_status_label(self) -> None:
        assert ApplicationStatus.REQUEST_MORE_INFO.label == "3. Request More Info"

    def test_disbursed_only(self, make_app) -> None:
        records = [make_app("A", status=5), make_app("B", status=7)]

        assert [r.code for r in disbursed_only(records)] == ["B"]


class TestGrouping:
    """Tests for group_by_key and top_n_with_overflow."""

    def test_first_seen_order(self, make_app) -> None:
        records = [make_app("A", province="Huế"), make_app("B", province="Hà Nội"), make_app("C", province="Huế")]

        groups = group_by_key(records, lambda r: r.province)

        assert groups == [NamedCount("Huế", 2), NamedCount("Hà Nội", 1)]

    def test_missing_key_goes_to_unknown(self, make_app) -> None:
        records = [make_app("A", province=None), make_app("B", province="")]

        assert group_by_key(records, lambda r: r.province) == [NamedCount(UNKNOWN, 2)]

    def test_seed_keys_listed_first(self, make_app) -> None:
        groups = group_by_key([make_app("A", province="Huế")], lambda r: r.province, seed_keys=["X", "Y"])

        assert groups == [NamedCount("X", 0), NamedCount("Y", 0), NamedCount("Huế", 1)]

    @pytest.mark.parametrize("count", [0, 1, 7, 40])
    def test_grouping_conserves_count(self, make_app, count: int) -> None:
        provinces = ["Huế", "Hà Nội", None, "Đà Nẵng"]
        records = [make_app(f"A{i}", province=provinces[i % len(provinces)]) for i in range(count)]

        for groups in (
            group_by_key(records, lambda r: r.province),
            legal_document_breakdown(records),
            source_breakdown(records),
            product_type_breakdown(records),
        ):
            assert sum(g.value for g in groups) == count

    def test_top_n_folds_overflow(self) -> None:
        groups = [NamedCount("a", 1), NamedCount("b", 5), NamedCount("c", 3), NamedCount("d", 2)]

        result = top_n_with_overflow(groups, 2)

        assert result == [NamedCount("b", 5), NamedCount("c", 3), NamedCount(OTHERS, 3)]

    def test_top_n_without_overflow(self) -> None:
        groups = [NamedCount("a", 1), NamedCount("b", 5)]

        assert top_n_with_overflow(groups, 2) == [NamedCount("b", 5), NamedCount("a", 1)]

    def test_top_n_ties_keep_input_order(self) -> None:
        groups = [NamedCount("a", 2), NamedCount("b", 2), NamedCount("c", 2)]

        assert [g.name for g in top_n_with_overflow(groups, 2)] == ["a", "b", OTHERS]

    @pytest.mark.parametrize("n", [-1, 0, 1, 2, 3, 4, 10])
    def test_top_n_conserves_total(self, n: int) -> None:
        groups = [NamedCount("a", 1), NamedCount("b", 5), NamedCount("c", 3), NamedCount("d", 2)]

        assert sum(g.value for g in top_n_with_overflow(groups, n)) == 11

    def test_top_n_does_not_mutate_input(self) -> None:
        groups = [NamedCount("a", 1), NamedCount("b", 5)]

        top_n_with_overflow(groups, 1)

        assert groups == [NamedCount("a", 1), NamedCount("b", 5)]


class TestBreakdowns:
    """Tests for the fixed-bucket breakdowns and statistics."""

    def test_legal_documents_always_listed(self, make_app) -> None:
        groups = legal_document_breakdown([make_app("A", legal_document_type_code="HC")])

        assert groups == [NamedCount("Căn cước công dân", 0), NamedCount("Hộ chiếu", 1)]

    def test_unknown_legal_document_uses_name(self, make_app) -> None:
        record = make_app("A", legal_document_type_code="GPLX", legal_document_type_name="Giấy phép lái xe")

        assert legal_document_breakdown([record])[-1] == NamedCount("Giấy phép lái xe", 1)

    def test_sources_always_listed(self, make_app) -> None:
        groups = source_breakdown([make_app("A", source_channel_name="Zalo")])

        assert [g.name for g in groups] == ["Apps", "CTV", "Website", "Zalo"]

    def test_region_breakdown_top_n(self, make_app) -> None:
        records = [make_app(f"A{i}", province=f"P{i % 4}") for i in range(10)]

        groups = region_breakdown(records, top_n=2)

        assert len(groups) == 3
        assert groups[-1].name == OTHERS
        assert sum(g.value for g in groups) == 10

    def test_average_term_rounds_half_up(self, make_app) -> None:
        records = [make_app("A", approved_term_months=6), make_app("B", approved_term_months=9)]

        assert average_term(records) == 8

    def test_average_term_ignores_other_statuses(self, make_app) -> None:
        records = [make_app("A", approved_term_months=6), make_app("B", approved_term_months=24, status=5)]

        assert average_term(records) == 6

    def test_average_term_of_nothing_is_zero(self) -> None:
        assert average_term([]) == 0

    def test_loan_statistics(self, make_app) -> None:
        records = [
            make_app("A", 100, commission_amount=Decimal("2")),
            make_app("B", 300, approved_term_months=6),
        ]

        stats = loan_statistics(records)

        assert stats.loan_amount == Decimal("400")
        assert stats.total_commission == Decimal("2")
        assert stats.commission_count == 1
        assert stats.average_term == 9

    def test_loan_statistics_separate_commission_records(self, make_app) -> None:
        created = [make_app("C", 0, status=1, commission_amount=Decimal("5"))]

        stats = loan_statistics([make_app("A", 100)], commission_records=created)

        assert stats.total_commission == Decimal("5")
        assert stats.loan_amount == Decimal("100")


class TestMonthBucket:
    """Tests for per-month isolated reconciliation."""

    def test_twelve_months(self) -> None:
        months = month_bucket([], 2025)

        assert [m.month for m in months] == list(range(1, 13))
        assert months[0].label == "Month 1"
        assert all(m.loan_amount == Decimal("0") for m in months)

    def test_records_bucketed_by_creation_month(self, make_app) -> None:
        records = [
            make_app("JAN", 100, created_at=datetime(2025, 1, 31, 23)),
            make_app("FEB", 200, created_at=datetime(2025, 2, 1, 1)),
            make_app("OLD", 999, created_at=datetime(2024, 2, 1, 1)),
            make_app("NONE", 999, created_at=None),
        ]

        months = month_bucket(records, 2025)

        assert months[0].loan_amount == Decimal("100")
        assert months[1].loan_amount == Decimal("200")
        assert sum(m.disbursed_count for m in months) == 2

    def test_corrections_only_apply_in_their_month(self, make_app, make_correction) -> None:
        records = [make_app("X", 100, created_at=datetime(2025, 1, 10))]
        corrections = [make_correction("X", -100, effective=date(2025, 2, 3))]

        months = month_bucket(records, 2025, corrections)

        # The February cancellation cannot see January's record
        assert months[0].loan_amount == Decimal("100")
        assert months[1].records == []

    def test_synthesized_record_lands_in_its_month(self, make_correction) -> None:
        months = month_bucket([], 2025, [make_correction("NEW", 30, effective=date(2025, 6, 5))])

        assert months[5].loan_amount == Decimal("30")
        assert months[5].disbursed_count == 1
        assert months[5].records[0].is_synthesized

    def test_service_fee_corrections_ignored(self, make_app, make_correction) -> None:
        records = [make_app("X", 100, created_at=datetime(2025, 3, 1))]
        fee = make_correction("X", 50, effective=date(2025, 3, 2), kind=CorrectionKind.SERVICE_FEE)

        assert month_bucket(records, 2025, [fee])[2].loan_amount == Decimal("100")

    def test_status_and_source_counts_use_unreconciled_records(self, make_app, make_correction) -> None:
        records = [make_app("X", 100, created_at=datetime(2025, 3, 1), source_channel_name="Apps")]
        corrections = [make_correction("X", -100, effective=date(2025, 3, 2))]

        march = month_bucket(records, 2025, corrections)[2]

        assert march.status_counts["7. Disbursed"] == 1
        assert march.source_counts[0].value == 1
        assert march.disbursed_count == 0

    def test_undisbursed_applications_are_not_reconciled(self, make_app, make_correction) -> None:
        records = [
            make_app("X", 0, status=int(ApplicationStatus.APPROVED), created_at=datetime(2025, 3, 1)),
            make_app("Y", 0, status=int(ApplicationStatus.CONTRACT_SIGNED), created_at=datetime(2025, 3, 2)),
        ]
        corrections = [
            make_correction("X", 100, effective=date(2025, 3, 5)),
            make_correction("Y", -20, effective=date(2025, 3, 6)),
        ]

        march = month_bucket(records, 2025, corrections)[2]

        assert march.loan_amount == Decimal("100")
        assert march.disbursed_count == 1
        assert [r.is_synthesized for r in march.records] == [True]
        assert march.status_counts["5. Approved"] == 1
        assert march.status_counts["6. Contract signed"] == 1

    def test_monthly_totals_match_yearly_reconciliation(self, make_app, make_correction) -> None:
        """Corrections inside their target's month give the same yearly total."""
        records = [
            make_app("A", 100, created_at=datetime(2025, 1, 5), disbursement_date=date(2025, 1, 5)),
            make_app("B", 200, created_at=datetime(2025, 4, 9), disbursement_date=date(2025, 4, 9)),
            make_app("C", 300, created_at=datetime(2025, 9, 1), disbursement_date=date(2025, 9, 2)),
        ]
        corrections = [
            make_correction("A", 25, effective=date(2025, 1, 20)),
            make_correction("B", -200, effective=date(2025, 4, 30)),
            make_correction("NEW", 40, effective=date(2025, 7, 7)),
            make_correction("C", -50, effective=date(2025, 9, 15)),
            make_correction("C", 10, effective=date(2025, 9, 3), kind=CorrectionKind.SERVICE_FEE),
        ]

        monthly = sum((m.loan_amount for m in month_bucket(records, 2025, corrections)), Decimal("0"))
        yearly = sum_disbursed_amount(reconcile(records, by_year(corrections, 2025)))

        assert monthly == yearly == Decimal("415")
