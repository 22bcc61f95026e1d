"""
Infrastructure layer.
Persistence, authentication and web adapters of the timesheet reporting service.
"""
