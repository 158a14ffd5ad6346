"""Company operations package.

This package is organized by feature modules (employees, interns, attendance, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
