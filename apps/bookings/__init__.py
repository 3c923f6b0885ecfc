"""Bookings app package.

This app holds booking requests (schedules) submitted from the cart or
the storefront form, the availability engine that derives booked days
from confirmed schedules, and the command handlers that create
schedules and move them between statuses inside a unit of work.
"""
