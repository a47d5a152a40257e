"""Registry clients, one subpackage per ecosystem.

Each client issues a single GET per package and returns a PackageVersion;
lookup failures surface as MCP internal errors.
"""
