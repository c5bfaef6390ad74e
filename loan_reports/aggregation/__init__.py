"""Aggregation of reconciled applications and ledger rows into report shapes."""

from loan_reports.aggregation.ledger import (
    apply_fee_corrections,
    estimated_profit,
    filter_by_payment_period,
    gross_revenue,
    overdue_debt,
    potential_amounts,
    service_fee_totals,
    statement_totals,
)
from loan_reports.aggregation.pipeline import (
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

__all__ = [
    "OTHERS",
    "UNKNOWN",
    "apply_fee_corrections",
    "average_term",
    "count_by_status",
    "disbursed_only",
    "estimated_profit",
    "filter_by_payment_period",
    "gross_revenue",
    "group_by_key",
    "legal_document_breakdown",
    "loan_statistics",
    "month_bucket",
    "overdue_debt",
    "potential_amounts",
    "product_type_breakdown",
    "region_breakdown",
    "service_fee_totals",
    "source_breakdown",
    "statement_totals",
    "sum_disbursed_amount",
    "top_n_with_overflow",
]
