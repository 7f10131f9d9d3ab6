"""Cleaning app package.

Turnover cleaning tasks created from new guest stays and managed
independently of them afterwards.
"""
