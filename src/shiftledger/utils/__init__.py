"""Utility functions for shiftledger."""

from shiftledger.utils.date_parser import parse_datetime, utcnow
from shiftledger.utils.amount_parser import parse_amount, to_money

__all__ = ["parse_datetime", "utcnow", "parse_amount", "to_money"]
