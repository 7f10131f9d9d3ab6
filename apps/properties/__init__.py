"""Properties app package.

Holds the managed properties together with the lease and installment
records the portfolio timeline reads.
"""
