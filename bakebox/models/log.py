"""
ExecutionLog model.

Append-only journal of each time a recipe was baked: date, rating,
feedback and an optional photo. Entries are listed newest first.
"""

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class ExecutionLog(models.Model):
    """Journal entry for one bake of a recipe."""

    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name=_("UUID"),
    )
    recipe = models.ForeignKey(
        "bakebox.Recipe",
        on_delete=models.CASCADE,
        related_name="execution_logs",
        verbose_name=_("Recipe"),
    )
    date = models.DateField(default=timezone.localdate, verbose_name=_("Date"))
    rating = models.PositiveSmallIntegerField(
        default=5,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
        verbose_name=_("Rating"),
    )
    feedback = models.TextField(verbose_name=_("Feedback"))
    photo_url = models.TextField(
        blank=True,
        verbose_name=_("Photo"),
        help_text=_("http(s) or data: URL"),
    )
    created_at = models.DateTimeField(default=timezone.now, verbose_name=_("created at"))

    class Meta:
        db_table = "bakebox_execution_log"
        verbose_name = _("Execution log")
        verbose_name_plural = _("Execution logs")
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.recipe} {self.date} ({self.rating}/5)"
