"""Vacation System package.

This package is organized by feature modules (employees, vacations, ...)
with a thin Flask controller layer and service/repository layers. The
vacation engine (cycle generation, classification, leave scheduling) is pure
Python and never touches the database directly.
"""
