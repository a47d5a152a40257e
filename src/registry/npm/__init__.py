"""NPM registry package.

- client.py: ``dist-tags.latest`` lookups and the ``/-/v1/search`` endpoint
"""
