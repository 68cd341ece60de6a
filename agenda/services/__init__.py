"""Business logic for events and users.

Services take an ``AsyncSession`` as their first argument, raise the errors in
``agenda.services.errors`` and leave HTTP concerns to the routers.
"""
