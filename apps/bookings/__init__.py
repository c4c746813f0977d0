"""Bookings app package.

This app encapsulates the storage booking domain: the capacity-aware
availability calculator, the pricing engine and the admission workflow
that checks capacity and inserts a booking inside one locked
transaction.
"""
