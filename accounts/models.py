from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """
    Quiz player. Review schedules hang off this model; everything else about
    the account (XP, levels, themes) lives outside this service.
    """

    pass
