"""
slotcalendar - Build calendar-picker slot grids from provider availability data.
"""

__version__ = "0.1.0"
