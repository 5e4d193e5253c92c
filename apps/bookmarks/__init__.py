"""Bookmarks app package: properties saved by a user for later."""
