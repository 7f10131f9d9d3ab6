"""Top-level package for Django configuration.

Contains settings modules for different environments and entry points
for WSGI and ASGI.
"""
