"""
Shared Kernel

Value objects, aggregate/event base classes and the application plumbing
(unit of work, message bus) used by every app of the storefront.
"""
