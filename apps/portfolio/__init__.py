"""Portfolio app package.

Read-only, month-by-month timeline across every managed property.
"""
