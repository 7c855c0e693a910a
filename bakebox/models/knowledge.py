"""
Knowledge and Resource models.

Knowledge = free-standing technique note, independent of any recipe.
Resource = reference link (video, PDF, web page).
"""

import uuid

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class Knowledge(models.Model):
    """Technique note, newest first."""

    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name=_("UUID"),
    )
    title = models.CharField(max_length=200, verbose_name=_("Title"))
    content = models.TextField(verbose_name=_("Content"))
    master = models.CharField(max_length=200, blank=True, verbose_name=_("Master"))
    created_at = models.DateTimeField(default=timezone.now, verbose_name=_("created at"))

    class Meta:
        db_table = "bakebox_knowledge"
        verbose_name = _("Knowledge note")
        verbose_name_plural = _("Knowledge notes")
        ordering = ["-created_at", "-id"]

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.title


class ResourceType(models.TextChoices):
    VIDEO = "video", _("Video")
    PDF = "pdf", _("PDF")
    LINK = "link", _("Link")


class Resource(models.Model):
    """Reference link collected for later."""

    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name=_("UUID"),
    )
    title = models.CharField(max_length=200, verbose_name=_("Title"))
    url = models.CharField(max_length=500, verbose_name=_("URL"))
    type = models.CharField(
        max_length=10,
        choices=ResourceType.choices,
        default=ResourceType.LINK,
        verbose_name=_("Type"),
    )
    created_at = models.DateTimeField(default=timezone.now, verbose_name=_("created at"))

    class Meta:
        db_table = "bakebox_resource"
        verbose_name = _("Resource")
        verbose_name_plural = _("Resources")
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return self.title
