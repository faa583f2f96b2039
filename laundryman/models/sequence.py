"""Sequence model - named persistent counters."""

from django.db import models, transaction
from django.utils.translation import gettext_lazy as _


class Sequence(models.Model):
    """
    Named monotonically increasing counter.

    Used to hand out human-friendly customer codes (PL24, PL25, ...).
    """

    name = models.CharField(_("name"), max_length=50, unique=True)
    value = models.PositiveIntegerField(_("value"), default=0)

    class Meta:
        db_table = "laundryman_sequence"
        verbose_name = _("sequence")
        verbose_name_plural = _("sequences")

    def __str__(self):
        return f"{self.name}={self.value}"

    @classmethod
    def next_value(cls, name: str, start: int = 0) -> int:
        """
        Increment and return the counter, creating it at ``start`` if missing.

        The row is locked for the duration of the increment, so concurrent
        callers always receive distinct values.
        """
        with transaction.atomic():
            seq, _ = cls.objects.get_or_create(name=name, defaults={"value": start})
            seq = cls.objects.select_for_update().get(pk=seq.pk)
            seq.value += 1
            seq.save(update_fields=["value"])
        return seq.value
