"""
Orders services package.

- WaitingTransactionService: the transaction store used by restaurant
  operations (lookups, open-order listings, wholesale cart rewrites).
"""

from .transaction_service import WaitingTransactionService

__all__ = [
    'WaitingTransactionService',
]
