"""
Application layer.
Use cases and DTOs of the timesheet reporting service.
"""
