"""Notifications app package.

Email delivery helpers and in-app notifications about bookings, payments
and ratings.
"""
