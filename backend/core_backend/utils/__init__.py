"""
Shared helpers: injectable id generation (ids) and Decimal rounding (money).
"""
