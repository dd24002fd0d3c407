"""Tuition Center back office package.

Organized by feature modules (students, staff, attendance, payroll, academics,
fees, ...) with a thin Flask controller layer on top of service and repository
layers. The payroll and academic aggregation engines are pure functions.
"""
