"""Tests for the disbursement reconciliation engine."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from loan_reports.engine import ApplicationTemplate, reconcile, reconcile_with_diagnostics
from loan_reports.models import ApplicationStatus, LoanApplication


def by_code(records: list[LoanApplication]) -> dict[str, LoanApplication]:
    return {r.code: r for r in records}


class TestReconcileBasics:
    """Single-correction behavior."""

    def test_no_corrections_returns_base(self, make_app) -> None:
        """An empty correction list leaves codes and amounts unchanged."""
        base = [make_app("A", 100), make_app("B", 250)]

        result = reconcile(base, [])

        assert {(r.code, r.disbursed_amount) for r in result} == {
            ("A", Decimal("100")),
            ("B", Decimal("250")),
        }

    def test_positive_correction_adds_to_target(self, make_app, make_correction) -> None:
        """A +50 correction on a 100 balance yields one record of 150."""
        base = [make_app("X", 100)]

        result = reconcile(base, [make_correction("X", 50)])

        assert [r.code for r in result] == ["X"]
        assert result[0].disbursed_amount == Decimal("150")

    def test_positive_correction_moves_disbursement_date(self, make_app, make_correction) -> None:
        base = [make_app("X", 100, disbursement_date=date(2025, 3, 1))]

        result = reconcile(base, [make_correction("X", 50, effective=date(2025, 3, 20))])

        assert result[0].disbursement_date == date(2025, 3, 20)

    def test_full_cancellation_removes_record(self, make_app, make_correction) -> None:
        base = [make_app("X", 100)]

        result = reconcile(base, [make_correction("X", -100)])

        assert "X" not in by_code(result)

    def test_over_cancellation_removes_record(self, make_app, make_correction) -> None:
        """A reduction larger than the balance never leaves a negative amount."""
        base = [make_app("X", 100)]

        result = reconcile(base, [make_correction("X", -150)])

        assert result == []

    def test_partial_reduction_keeps_record(self, make_app, make_correction) -> None:
        base = [make_app("X", 100)]

        result = reconcile(base, [make_correction("X", -30)])

        assert len(result) == 1
        assert result[0].disbursed_amount == Decimal("70")

    def test_partial_reduction_keeps_disbursement_date(self, make_app, make_correction) -> None:
        base = [make_app("X", 100, disbursement_date=date(2025, 3, 1))]

        result = reconcile(base, [make_correction("X", -30, effective=date(2025, 3, 20))])

        assert result[0].disbursement_date == date(2025, 3, 1)

    def test_negative_correction_without_target_is_skipped(self, make_app, make_correction) -> None:
        base = [make_app("A", 100)]

        result = reconcile(base, [make_correction("MISSING", -40)])

        assert [(r.code, r.disbursed_amount) for r in result] == [("A", Decimal("100"))]

    def test_zero_correction_is_noop(self, make_app, make_correction) -> None:
        base = [make_app("X", 100, disbursement_date=date(2025, 3, 1))]

        result = reconcile(base, [make_correction("X", 0, effective=date(2025, 3, 20)), make_correction("NEW", 0)])

        assert len(result) == 1
        assert result[0].disbursed_amount == Decimal("100")
        assert result[0].disbursement_date == date(2025, 3, 1)

    def test_only_first_duplicate_code_is_touched(self, make_app, make_correction) -> None:
        base = [make_app("DUP", 100), make_app("DUP", 200)]

        result = reconcile(base, [make_correction("DUP", 10)])

        assert [r.disbursed_amount for r in result] == [Decimal("110"), Decimal("200")]


class TestSynthesis:
    """Records created from corrections with no matching application."""

    def test_synthesizes_missing_target(self, make_correction) -> None:
        result = reconcile([], [make_correction("NEW", 20)])

        assert len(result) == 1
        assert result[0].code == "NEW"
        assert result[0].disbursed_amount == Decimal("20")

    def test_synthesized_record_fields(self, make_correction) -> None:
        correction = make_correction("NEW", 20, effective=date(2025, 4, 2), province="Cần Thơ", approved_term_months=9)

        record = reconcile([], [correction])[0]

        assert record.id < 0
        assert record.is_synthesized
        assert record.status == ApplicationStatus.DISBURSED
        assert record.loan_amount == Decimal("20")
        assert record.approved_term_months == 9
        assert record.loan_term_months == 9
        assert record.province == "Cần Thơ"
        assert record.disbursement_date == date(2025, 4, 2)
        assert record.created_at == datetime(2025, 4, 2)

    def test_default_template_values(self, make_correction) -> None:
        record = reconcile([], [make_correction("NEW", 20)])[0]

        assert record.country_id == 1
        assert record.country_name == "Việt Nam"
        assert record.country_en == "Vietnam"
        assert record.legal_document_type_code == "CCCD"
        assert record.legal_document_type_name == "Căn cước công dân"
        assert record.product_type_name == "Unsecured Loan"
        assert record.source_channel_name == "Website"
        assert record.commission_amount == Decimal("0")

    def test_synthesized_ids_are_unique_and_negative(self, make_correction) -> None:
        result = reconcile([], [make_correction("N1", 5), make_correction("N2", 5), make_correction("N3", 5)])

        assert [r.id for r in result] == [-1, -2, -3]

    def test_synthesized_ids_avoid_existing_negative_ids(self, make_app, make_correction) -> None:
        base = [make_app("OLD", 10, id=-4)]

        result = reconcile(base, [make_correction("NEW", 5)])

        assert by_code(result)["NEW"].id == -5

    def test_synthesis_independent_of_working_set(self, make_app, make_correction) -> None:
        """Synthesized records do not inherit fields of unrelated applications."""
        base = [make_app("A", 100, province="Hải Phòng", source_channel_name="CTV")]

        record = by_code(reconcile(base, [make_correction("NEW", 20)]))["NEW"]

        assert record.province is None
        assert record.source_channel_name == "Website"

    def test_template_from_application(self, make_app, make_correction) -> None:
        source = make_app("A", 100, province="Hải Phòng", source_channel_name="CTV")
        template = ApplicationTemplate.from_application(source)

        record = by_code(reconcile([source], [make_correction("NEW", 20)], template))["NEW"]

        assert record.province == "Hải Phòng"
        assert record.source_channel_name == "CTV"
        assert record.disbursed_amount == Decimal("20")

    def test_empty_correction_values_fall_back_to_template(self, make_correction) -> None:
        template = ApplicationTemplate(province="Huế")

        record = reconcile([], [make_correction("NEW", 20, province="")], template)[0]

        assert record.province == "Huế"


class TestOrdering:
    """Corrections compose in the order given."""

    def test_increase_then_decrease(self, make_correction) -> None:
        result = reconcile([], [make_correction("NEW", 20), make_correction("NEW", -5)])

        assert len(result) == 1
        assert result[0].disbursed_amount == Decimal("15")

    def test_decrease_before_record_exists_is_skipped(self, make_correction) -> None:
        """Reversing the order changes the outcome."""
        result = reconcile([], [make_correction("NEW", -5), make_correction("NEW", 20)])

        assert len(result) == 1
        assert result[0].disbursed_amount == Decimal("20")

    def test_cancel_then_recreate(self, make_app, make_correction) -> None:
        base = [make_app("X", 100)]

        result = reconcile(base, [make_correction("X", -100), make_correction("X", 40)])

        assert len(result) == 1
        assert result[0].disbursed_amount == Decimal("40")
        assert result[0].is_synthesized

    def test_generator_input_is_consumed_once(self, make_correction) -> None:
        corrections = (c for c in [make_correction("NEW", 20), make_correction("NEW", 5)])

        result = reconcile([], corrections)

        assert result[0].disbursed_amount == Decimal("25")


class TestImmutability:
    """Inputs are never modified."""

    def test_base_list_and_records_unchanged(self, make_app, make_correction) -> None:
        a, b = make_app("A", 100), make_app("B", 100)
        base = [a, b]

        reconcile(base, [make_correction("A", 50), make_correction("B", -100), make_correction("C", 10)])

        assert base == [a, b]
        assert a.disbursed_amount == Decimal("100")
        assert b.disbursed_amount == Decimal("100")

    def test_untouched_records_are_passed_through(self, make_app, make_correction) -> None:
        a, b = make_app("A", 100), make_app("B", 100)

        result = reconcile([a, b], [make_correction("A", 1)])

        assert result[1] is b
        assert result[0] is not a

    def test_corrections_unchanged(self, make_correction) -> None:
        correction = make_correction("NEW", 20)

        reconcile([], [correction])

        assert correction.signed_amount == Decimal("20")
        assert correction.target_code == "NEW"


class TestDiagnostics:
    """reconcile_with_diagnostics reports what each correction did."""

    def test_unmatched_negative_corrections_reported(self, make_app, make_correction) -> None:
        missing = make_correction("MISSING", -40)

        result = reconcile_with_diagnostics([make_app("A", 100)], [missing])

        assert result.unmatched == [missing]
        assert result.synthesized == []
        assert result.removed == []

    def test_synthesized_and_removed_codes(self, make_app, make_correction) -> None:
        result = reconcile_with_diagnostics(
            [make_app("A", 100)],
            [make_correction("A", -100), make_correction("NEW", 5)],
        )

        assert result.removed == ["A"]
        assert result.synthesized == ["NEW"]
        assert [r.code for r in result.records] == ["NEW"]

    @pytest.mark.parametrize("amount", [50, -30, -100, 0])
    def test_records_match_plain_reconcile(self, make_app, make_correction, amount: int) -> None:
        base = [make_app("X", 100)]
        corrections = [make_correction("X", amount)]

        assert reconcile_with_diagnostics(base, corrections).records == reconcile(base, corrections)
