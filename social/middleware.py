"""
================================================================================
SOCIALHUB - CUSTOM MIDDLEWARE
================================================================================

TimezoneMiddleware
    Activates the authenticated user's timezone so every timestamp the API
    formats (see ``social.resources.format_datetime``) is local to the
    viewer. Anonymous users and unknown timezone names get UTC.

Settings Required:
    USE_TZ = True
    TIME_ZONE = 'UTC'
"""

import pytz
from django.utils import timezone


class TimezoneMiddleware:
    """
    Activate user-specific timezone for datetime display.

    Example:
        User.timezone = 'America/New_York'
        Post created 2026-02-05 09:30:00 UTC -> "2026-02-05 04:30:00"
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            try:
                timezone.activate(pytz.timezone(user.timezone))
            except (pytz.UnknownTimeZoneError, AttributeError):
                # Invalid timezone string in database
                timezone.activate(pytz.UTC)
        else:
            timezone.activate(pytz.UTC)

        return self.get_response(request)
