from django.utils import timezone


def end_of_day(dt):
    """Last instant of dt's calendar day in the active time zone."""
    return timezone.localtime(dt).replace(hour=23, minute=59, second=59, microsecond=999999)


def to_local_iso(dt_utc):
    if dt_utc is None:
        return None
    return timezone.localtime(dt_utc).isoformat()


def ensure_aware(dt):
    """Naive datetimes are read as wall-clock time in the active time zone."""
    if timezone.is_naive(dt):
        return timezone.make_aware(dt)
    return dt
