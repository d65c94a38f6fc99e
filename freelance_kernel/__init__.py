"""
Freelance Kernel - marketplace ledger core

Clients and contractors linked by contracts, contracts containing billable
jobs, with:
- Exactly-once job payment
- Atomic balance transfers under row-level locks
- Deposit cap enforcement against outstanding work
- Time-windowed earnings reports
"""

__version__ = "0.1.0"
