"""HRIS System package.

This package is organized by feature modules (payroll, performance, policies, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
