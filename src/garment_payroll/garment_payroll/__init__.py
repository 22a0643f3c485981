"""Garment Payroll package.

This package is organized by feature modules (attendance, wages, payroll, cash, ...)
with pure calculation code at the core and thin MySQL repository adapters around it.
"""
