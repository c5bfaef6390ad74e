"""Disbursement reconciliation and reporting for the loan back office."""

__version__ = "0.1.0"
