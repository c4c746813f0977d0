"""
Shared Kernel

Base classes, value objects, the error taxonomy and transaction plumbing
shared by every app in the storage platform.
"""
