from .data.models import ReviewSchedule  # noqa: F401
