"""Geo Attendance package.

Geofenced check-in/check-out, pay-cycle periods, live monitoring and reports,
organized by feature modules (attendance, offices, periods, ...) with a thin
Flask controller layer over service/repository layers.
"""
