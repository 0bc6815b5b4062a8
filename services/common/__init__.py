"""
Common utilities shared by the scheduling services: settings loading,
structured logging and the error hierarchy.
"""
