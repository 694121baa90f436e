"""
Tours bounded context: application layer (use cases).
"""
