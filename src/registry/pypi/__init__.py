"""PyPI registry package.

- client.py: JSON API lookups (``/pypi/<name>/json``)
"""
