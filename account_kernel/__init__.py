"""
Account Kernel

A single-owner account with strict transactional policy:
- Caller authentication on every operation
- Funds and ATM quota checks before any mutation
- Transaction counting for periodic management fees
- Silent-reject or explicit-error signalling chosen by policy
"""

__version__ = "0.1.0"
