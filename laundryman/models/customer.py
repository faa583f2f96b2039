"""Customer model.

Only customers are stored here. Staff (receptionists, admins) reach the
services through an ``Actor`` value and are not persisted by Laundryman.
"""

import uuid as uuid_lib

from django.db import models
from django.utils.translation import gettext_lazy as _


class Customer(models.Model):
    """
    Registered laundry customer.

    ``code`` is the public identifier printed on tickets and used by every
    service (``PL24``). Generated by ``services.customer.create()``.
    """

    code = models.CharField(
        _("code"),
        max_length=50,
        unique=True,
        help_text=_("Unique customer code (e.g. PL24)"),
    )
    uuid = models.UUIDField(default=uuid_lib.uuid4, editable=False, unique=True)

    name = models.CharField(_("name"), max_length=150)
    phone = models.CharField(_("phone"), max_length=20, blank=True, db_index=True)
    email = models.EmailField(_("email"), blank=True, db_index=True)

    is_active = models.BooleanField(_("active"), default=True, db_index=True)
    notes = models.TextField(_("notes"), blank=True)

    created_at = models.DateTimeField(_("created at"), auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("customer")
        verbose_name_plural = _("customers")
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"

    def save(self, *args, **kwargs):
        if self.phone:
            self.phone = "".join(ch for ch in self.phone if ch.isdigit() or ch == "+")
        if self.email:
            self.email = self.email.lower().strip()
        super().save(*args, **kwargs)
