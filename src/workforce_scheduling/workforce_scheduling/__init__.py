"""Workforce Scheduling package.

This package is organized by feature modules (windows, unavailability,
availability, constraints, shifts, ...) with a thin Flask controller layer and
service/repository layers around the schedule resolution engine.
"""
