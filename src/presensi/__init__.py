"""Presensi - employee attendance tracker.

The package is organized by feature modules (attendance, overtime, schedules,
holidays, stats, ...) with a thin Flask controller layer on top of
service/repository layers.
"""
