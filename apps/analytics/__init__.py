"""Dashboard analytics for owners and customers."""
