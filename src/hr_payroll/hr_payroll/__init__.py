"""HR payroll package.

This package is organized by feature modules (users, attendance, leaves, payroll)
with a thin Flask controller layer over service/repository layers.
"""
