"""Reservations app package.

This app owns each property's calendar: guest stays and maintenance
blocks, the overlap rules between them, the day-status classification
and the availability date picker. Writes go through the IntervalStore
aggregate and are persisted by the Django repository.
"""
