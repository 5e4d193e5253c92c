"""Finances app package.

Owner revenue recorded from rent payments and the earnings reports shown
on the owner dashboard.
"""
