"""Bookings app package.

Rent and purchase requests made by customers, the simulated rental
payment flow, and completion and cancellation of bookings.
"""
