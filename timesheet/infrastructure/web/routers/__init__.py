"""
API routers of the timesheet reporting service.
"""
