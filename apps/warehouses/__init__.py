"""Warehouses app package.

Storage facilities, their pallet and floor-area capacity, and the
per-resource pricing schedules the booking core prices against.
"""
