"""
Application layer package.

Contains use cases and DTOs. Use cases orchestrate domain objects
through ports and never touch infrastructure directly.
"""
