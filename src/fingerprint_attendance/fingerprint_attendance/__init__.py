"""Fingerprint Attendance package.

This package is organized by feature modules (departments, staff, attendance, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
