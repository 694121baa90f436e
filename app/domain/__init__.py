"""
Domain layer package.

Contains entities, domain errors, and port interfaces.
No framework imports and no IO allowed here.
"""
