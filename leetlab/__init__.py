"""
LeetLab persistence layer: schema, migrations and data access for the
coding practice platform.
"""

__version__ = "0.1.0"
