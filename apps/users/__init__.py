"""Users app package.

This module initializes the users app: the custom user model with
customer and owner roles, one-time password sign-in and the cookie
aware JWT authentication used by the API. Use
``apps.users.models.CustomUser`` as the AUTH_USER_MODEL throughout
the project.
"""
