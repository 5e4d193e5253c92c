"""Properties app package.

Property listings for rent or for sale, the category rules that govern
which property types can be listed, and the listing API.
"""
