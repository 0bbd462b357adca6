"""Shared domain utilities.

This package is domain-accessible and should not depend on application code.
"""

from .banklink_protocol import Amount, BanklinkProtocol, OrderReferenceGenerator

__all__ = ["Amount", "BanklinkProtocol", "OrderReferenceGenerator"]
