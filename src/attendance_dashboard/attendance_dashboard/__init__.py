"""Attendance Dashboard package.

This package is organized by feature modules (attendance, permissions,
employees, reports, ...) with a thin Flask controller layer on top of
service/repository layers backed by MySQL.
"""
