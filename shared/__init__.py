"""
Shared building blocks (domain base classes, value objects, error taxonomy,
unit of work, message bus) used across the booking apps.
"""
