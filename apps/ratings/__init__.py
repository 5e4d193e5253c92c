"""Ratings app package.

Buyers and owners rate each other once a booking is completed.
"""
