"""Go module proxy package.

- client.py: ``@latest`` lookups with module path case-escaping
"""
