"""
Tours bounded context: domain layer.

Tour entities, tour-specific errors, and the repository port.
"""
