"""Quotation workflow service: quotes, approvals and printable documents."""

__version__ = "0.1.0"
