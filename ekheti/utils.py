"""
Small formatting helpers shared by the API and the PDF reports.
"""
from datetime import datetime


def format_number(value):
    """Format number with comma as thousand separator."""
    if value is None:
        return ""
    try:
        if float(value).is_integer():
            return "{:,}".format(int(value))
        return "{:,.2f}".format(float(value))
    except (ValueError, TypeError):
        return value


def time_since(moment, now=None):
    """Human readable age of a timestamp, e.g. "3 days ago"."""
    now = now or datetime.utcnow()
    seconds = int((now - moment).total_seconds())
    for unit, length in (('years', 31536000), ('months', 2592000), ('days', 86400),
                         ('hours', 3600), ('minutes', 60)):
        interval = seconds / length
        if interval > 1:
            return f"{int(interval)} {unit} ago"
    return f"{max(seconds, 0)} seconds ago"


def reply_language():
    """English name of the request locale ("Hindi"), used to steer model replies."""
    from flask_babel import get_locale
    locale = get_locale()
    return locale.english_name if locale else None
