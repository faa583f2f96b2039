"""Rewards app config."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class RewardsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "laundryman.contrib.rewards"
    label = "laundryman_rewards"
    verbose_name = _("Order Rewards")
