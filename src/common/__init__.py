"""Shared HTTP, logging, error and stdio helpers."""
