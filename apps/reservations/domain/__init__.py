"""
Reservation domain

Pure, storage-free model of a property's calendar: intervals, overlap
rules, day classification, the date picker and occupancy figures.
"""
