"""
Tours bounded context: infrastructure adapters.
"""
