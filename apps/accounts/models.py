from django.contrib.auth.models import AbstractUser


class User(AbstractUser):
    """Staff member acting on admission records"""

    def __str__(self):
        return self.username
