"""Dayflow package.

Organized by feature modules (users, leave, attendance, payroll) with a thin
Flask controller layer over service and repository layers.
"""
