"""
Category model.

Categories group recipes (bread, cake, pudding...) and are listed in an
explicit, user-controlled order.
"""

import logging

from django.db import models, transaction
from django.db.models import Max
from django.utils.translation import gettext_lazy as _

from bakebox.exceptions import BakeboxError

logger = logging.getLogger(__name__)


class Category(models.Model):
    """
    Recipe category with explicit display order.

    Reordering swaps neighbours and renumbers the whole list 0..n-1.
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name=_("Name"),
    )
    order = models.PositiveSmallIntegerField(
        default=0,
        verbose_name=_("Order"),
    )

    class Meta:
        db_table = "bakebox_category"
        verbose_name = _("Category")
        verbose_name_plural = _("Categories")
        ordering = ["order", "name"]

    def __str__(self) -> str:
        return self.name

    @classmethod
    def append(cls, name: str) -> "Category":
        """Create a category at the end of the list."""
        last = cls.objects.aggregate(last=Max("order"))["last"]
        return cls.objects.create(
            name=name.strip(),
            order=0 if last is None else last + 1,
        )

    def move(self, direction: str) -> list["Category"]:
        """
        Swap with the previous ("up") or next ("down") category.

        Moving the first category up or the last one down changes nothing.
        Returns the categories in their new order.
        """
        if direction not in ("up", "down"):
            raise BakeboxError("INVALID_DIRECTION", direction=direction)

        with transaction.atomic():
            categories = list(Category.objects.select_for_update().order_by("order", "name"))
            index = next(i for i, c in enumerate(categories) if c.pk == self.pk)
            other = index - 1 if direction == "up" else index + 1

            if 0 <= other < len(categories):
                categories[index], categories[other] = categories[other], categories[index]

            for position, category in enumerate(categories):
                category.order = position
            Category.objects.bulk_update(categories, ["order"])

        self.order = categories.index(self)
        logger.info(
            f"Category {self.name} moved {direction}",
            extra={"category": self.name, "order": self.order},
        )
        return categories
