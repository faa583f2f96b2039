from django.apps import AppConfig


class LaundrymanConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "laundryman"
    verbose_name = "Laundryman - Laundry Orders"
