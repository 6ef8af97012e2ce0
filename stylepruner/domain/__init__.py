"""Domain Layer: value objects, entities, exceptions and ports.

Has no dependencies on the core or infrastructure layers.
"""
