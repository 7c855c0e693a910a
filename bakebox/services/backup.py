"""
Backup export/import of the whole box.

The file layout is the camelCase JSON the box has always used:

    {
        "recipes": [...],
        "categories": [...],
        "knowledge": [...],
        "resources": [...],
        "exportedAt": "2026-01-24T08:00:00+00:00"
    }

Import is wholesale: every collection present in the payload replaces
the stored one, inside a single transaction. Collections absent from the
payload are left untouched.

Usage:
    from bakebox.services.backup import export_backup, import_backup

    data = export_backup()
    result = import_backup(json.loads(path.read_text()))
"""

from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_date

from bakebox.exceptions import BakeboxError
from bakebox.models import (
    Category,
    ExecutionLog,
    Knowledge,
    Recipe,
    Resource,
    ResourceType,
    TimeUnit,
)
from bakebox.models.recipe import default_sections_order
from bakebox.results import ImportResult
from bakebox.services import scaling

logger = logging.getLogger(__name__)

COLLECTIONS = ("recipes", "categories", "knowledge", "resources")

# Section key -> backup field holding its ingredients
SECTION_FIELDS = {
    scaling.LIQUID_STARTER: "liquidStarterIngredients",
    scaling.MAIN: "ingredients",
    scaling.FILLING: "fillingIngredients",
    scaling.DECORATION: "decorationIngredients",
    scaling.CUSTOM: "customSectionIngredients",
}
FIELD_SECTIONS = {field: key for key, field in SECTION_FIELDS.items()}

UNTITLED = "Untitled recipe"

_NUMERIC = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_CENT = Decimal("0.01")


def backup_filename(day=None) -> str:
    day = day or timezone.localdate()
    return f"bakebox-backup_{day.isoformat()}.json"


# ══════════════════════════════════════════════════════════════
# EXPORT
# ══════════════════════════════════════════════════════════════


def _number(value: Decimal | None):
    if value is None:
        return 0
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _amount(text: str):
    """Numeric amounts go out as numbers, sentinels as text."""
    if _NUMERIC.match(text or ""):
        return _number(Decimal(text))
    return text


def _millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _export_ingredient(ingredient) -> dict:
    return {
        "name": ingredient.name,
        "amount": _amount(ingredient.amount),
        "unit": ingredient.unit,
        "isFlour": ingredient.is_flour,
    }


def _export_recipe(recipe: Recipe) -> dict:
    sections = {key: [] for key in SECTION_FIELDS}
    for ingredient in recipe.ingredients.all():
        sections.setdefault(ingredient.section, []).append(_export_ingredient(ingredient))

    data = {
        "id": str(recipe.uuid),
        "title": recipe.title,
        "master": recipe.master,
        "sourceName": recipe.source_name,
        "sourceUrl": recipe.source_url,
        "sourceDate": recipe.source_date.isoformat() if recipe.source_date else "",
        "recordDate": recipe.record_date.isoformat() if recipe.record_date else "",
        "moldName": recipe.mold_name,
        "doughWeight": _number(recipe.dough_weight),
        "crustWeight": _number(recipe.crust_weight),
        "oilPasteWeight": _number(recipe.oil_paste_weight),
        "fillingWeight": _number(recipe.filling_weight),
        "quantity": _number(recipe.quantity),
        "fermentationStages": [
            {
                "name": stage.name,
                "time": stage.time,
                "timeUnit": stage.time_unit,
                "temperature": stage.temperature,
                "humidity": stage.humidity,
            }
            for stage in recipe.fermentation_stages.all()
        ],
        "bakingStages": [
            {
                "name": stage.name,
                "topHeat": stage.top_heat,
                "bottomHeat": stage.bottom_heat,
                "time": stage.time,
                "note": stage.note,
            }
            for stage in recipe.baking_stages.all()
        ],
        "description": recipe.description,
        "mainSectionName": recipe.main_section_name,
        "liquidStarterName": recipe.liquid_starter_name,
        "customSectionName": recipe.custom_section_name,
        "sectionsOrder": [SECTION_FIELDS[key] for key in recipe.sections_order],
        "instructions": list(recipe.instructions),
        "imageUrl": recipe.image_url,
        "category": recipe.category.name if recipe.category else "",
        "createdAt": _millis(recipe.created_at),
        "isBakingRecipe": recipe.is_baking_recipe,
        "isTried": recipe.is_tried,
        "tags": [tag.name for tag in recipe.tags.all()],
        "notes": recipe.notes,
        "executionLogs": [
            {
                "id": str(log.uuid),
                "date": log.date.isoformat(),
                "rating": log.rating,
                "feedback": log.feedback,
                "photoUrl": log.photo_url,
            }
            for log in recipe.execution_logs.all()
        ],
    }
    for key, field in SECTION_FIELDS.items():
        data[field] = sections[key]
    return data


def export_backup() -> dict:
    """Serialize recipes, categories, knowledge and resources."""
    recipes = Recipe.objects.select_related("category").prefetch_related(
        "ingredients",
        "fermentation_stages",
        "baking_stages",
        "execution_logs",
        "tags",
    )

    data = {
        "recipes": [_export_recipe(recipe) for recipe in recipes],
        "categories": [
            {"id": str(category.pk), "name": category.name, "order": category.order}
            for category in Category.objects.all()
        ],
        "knowledge": [
            {
                "id": str(note.uuid),
                "title": note.title,
                "content": note.content,
                "master": note.master,
                "createdAt": _millis(note.created_at),
            }
            for note in Knowledge.objects.all()
        ],
        "resources": [
            {"id": str(res.uuid), "title": res.title, "url": res.url, "type": res.type}
            for res in Resource.objects.all()
        ],
        "exportedAt": timezone.now().isoformat(),
    }

    logger.info(
        f"Exported backup with {len(data['recipes'])} recipes",
        extra={"recipes": len(data["recipes"]), "categories": len(data["categories"])},
    )
    return data


# ══════════════════════════════════════════════════════════════
# IMPORT
# ══════════════════════════════════════════════════════════════


def _text(value) -> str:
    return "" if value is None else str(value)


def _decimal(value, default: Decimal) -> Decimal:
    number = scaling.parse_amount(value)
    if number is None:
        return default
    try:
        return number.quantize(_CENT)
    except InvalidOperation:
        return default


def _date(value):
    if not value:
        return None
    try:
        return parse_date(str(value))
    except ValueError:
        return None


def _moment(value) -> datetime:
    number = scaling.to_decimal(value)
    if number is None:
        return timezone.now()
    try:
        return datetime.fromtimestamp(float(number) / 1000, tz=dt_timezone.utc)
    except (OverflowError, OSError, ValueError):
        return timezone.now()


def _uuid(value, seen: set) -> uuid.UUID:
    try:
        result = uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        result = uuid.uuid4()
    if result in seen:
        result = uuid.uuid4()
    seen.add(result)
    return result


def _sections_order(value) -> list[str]:
    if not isinstance(value, list):
        return default_sections_order()
    order = [FIELD_SECTIONS.get(item, item) for item in value]
    if sorted(map(str, order)) != sorted(scaling.DEFAULT_SECTIONS_ORDER):
        return default_sections_order()
    return order


def _rating(value) -> int:
    number = scaling.to_decimal(value)
    if number is None:
        return 5
    return min(5, max(1, int(number)))


def _category(name, cache: dict) -> Category | None:
    name = _text(name).strip()
    if not name:
        return None
    if name not in cache:
        category = Category.objects.filter(name=name).first() or Category.append(name)
        cache[name] = category
    return cache[name]


def _import_categories(rows: list) -> int:
    Category.objects.all().delete()
    names = set()
    created = []
    for index, row in enumerate(rows):
        if not isinstance(row, dict):
            continue
        name = _text(row.get("name")).strip()
        if not name or name in names:
            continue
        names.add(name)
        order = scaling.to_decimal(row.get("order"))
        created.append(Category(name=name, order=index if order is None else max(0, int(order))))
    Category.objects.bulk_create(created)
    return len(created)


def _import_recipe(row: dict, seen: set, categories: dict) -> Recipe:
    recipe = Recipe(
        uuid=_uuid(row.get("id"), seen),
        title=_text(row.get("title")).strip() or UNTITLED,
        master=_text(row.get("master")),
        source_name=_text(row.get("sourceName")),
        source_url=_text(row.get("sourceUrl")),
        source_date=_date(row.get("sourceDate")),
        record_date=_date(row.get("recordDate")),
        mold_name=_text(row.get("moldName")),
        dough_weight=_decimal(row.get("doughWeight"), Decimal("0")),
        crust_weight=_decimal(row.get("crustWeight"), Decimal("0")),
        oil_paste_weight=_decimal(row.get("oilPasteWeight"), Decimal("0")),
        filling_weight=_decimal(row.get("fillingWeight"), Decimal("0")),
        quantity=_decimal(row.get("quantity"), Decimal("1")),
        description=_text(row.get("description")),
        main_section_name=_text(row.get("mainSectionName") or "Main dough"),
        liquid_starter_name=_text(row.get("liquidStarterName") or "Liquid starter / old dough"),
        custom_section_name=_text(row.get("customSectionName") or "Other"),
        sections_order=_sections_order(row.get("sectionsOrder")),
        instructions=[_text(step) for step in row.get("instructions") or [] if step is not None]
        if isinstance(row.get("instructions"), list)
        else [],
        image_url=_text(row.get("imageUrl")),
        category=_category(row.get("category"), categories),
        created_at=_moment(row.get("createdAt")),
        is_baking_recipe=bool(row.get("isBakingRecipe", True)),
        is_tried=bool(row.get("isTried", False)),
        notes=_text(row.get("notes")),
    )
    if recipe.quantity <= 0:
        recipe.quantity = Decimal("1")

    try:
        recipe.save()
    except ValidationError as e:
        raise BakeboxError("INVALID_BACKUP", recipe=recipe.title, errors=e.message_dict)

    tags = row.get("tags")
    if isinstance(tags, list):
        recipe.tags.set([_text(tag).strip() for tag in tags if _text(tag).strip()])

    ingredient_rows = []
    for key, field in SECTION_FIELDS.items():
        items = row.get(field)
        if not isinstance(items, list):
            continue
        for item in items:
            if not isinstance(item, dict):
                continue
            ingredient_rows.append({
                "section": key,
                "name": _text(item.get("name")),
                "amount": item.get("amount"),
                "unit": _text(item.get("unit", "g")),
                "is_flour": bool(item.get("isFlour")),
            })
    try:
        recipe.replace_ingredients(ingredient_rows)
    except ValidationError as e:
        raise BakeboxError("INVALID_BACKUP", recipe=recipe.title, errors=e.message_dict)

    stages = row.get("fermentationStages")
    recipe.replace_fermentation_stages([
        {
            "name": _text(stage.get("name")),
            "time": _text(stage.get("time")),
            "time_unit": stage.get("timeUnit") if stage.get("timeUnit") in TimeUnit.values else TimeUnit.MINUTES,
            "temperature": _text(stage.get("temperature")),
            "humidity": _text(stage.get("humidity")),
        }
        for stage in (stages if isinstance(stages, list) else [])
        if isinstance(stage, dict)
    ])

    stages = row.get("bakingStages")
    recipe.replace_baking_stages([
        {
            "name": _text(stage.get("name")),
            "top_heat": _text(stage.get("topHeat")),
            "bottom_heat": _text(stage.get("bottomHeat")),
            "time": _text(stage.get("time")),
            "note": _text(stage.get("note")),
        }
        for stage in (stages if isinstance(stages, list) else [])
        if isinstance(stage, dict)
    ])

    logs = row.get("executionLogs")
    logs = [log for log in logs if isinstance(log, dict)] if isinstance(logs, list) else []
    now = timezone.now()
    # Created oldest first so the newest entry keeps the highest id.
    ExecutionLog.objects.bulk_create(
        ExecutionLog(
            uuid=_uuid(log.get("id"), seen),
            recipe=recipe,
            date=_date(log.get("date")) or timezone.localdate(),
            rating=_rating(log.get("rating")),
            feedback=_text(log.get("feedback")),
            photo_url=_text(log.get("photoUrl")),
            created_at=now,
        )
        for log in reversed(logs)
    )

    return recipe


def _import_knowledge(rows: list, seen: set) -> int:
    Knowledge.objects.all().delete()
    count = 0
    for row in rows:
        if not isinstance(row, dict):
            continue
        title = _text(row.get("title")).strip()
        content = _text(row.get("content")).strip()
        if not title or not content:
            logger.warning("Skipping knowledge note without title or content")
            continue
        try:
            Knowledge.objects.create(
                uuid=_uuid(row.get("id"), seen),
                title=title,
                content=content,
                master=_text(row.get("master")),
                created_at=_moment(row.get("createdAt")),
            )
        except ValidationError as e:
            raise BakeboxError("INVALID_BACKUP", knowledge=title, errors=e.message_dict)
        count += 1
    return count


def _import_resources(rows: list, seen: set) -> int:
    Resource.objects.all().delete()
    created = [
        Resource(
            uuid=_uuid(row.get("id"), seen),
            title=_text(row.get("title")),
            url=_text(row.get("url")),
            type=row.get("type") if row.get("type") in ResourceType.values else ResourceType.LINK,
        )
        for row in rows
        if isinstance(row, dict)
    ]
    for resource in created:
        try:
            resource.full_clean(validate_unique=False)
        except ValidationError as e:
            raise BakeboxError("INVALID_BACKUP", resource=resource.title, errors=e.message_dict)
    Resource.objects.bulk_create(created)
    return len(created)


def import_backup(data) -> ImportResult:
    """
    Replace stored collections with the ones in ``data``.

    Raises:
        BakeboxError: INVALID_BACKUP (nothing is written)
    """
    if not isinstance(data, dict):
        raise BakeboxError("INVALID_BACKUP", reason="payload must be an object")

    present = {}
    for key in COLLECTIONS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, list):
            raise BakeboxError("INVALID_BACKUP", reason=f"{key} must be a list")
        present[key] = value

    result = ImportResult()
    seen: set = set()

    with transaction.atomic():
        if "categories" in present:
            links = {}
            if "recipes" not in present:
                links = dict(
                    Recipe.objects.filter(category__isnull=False).values_list("pk", "category__name")
                )
            result.categories = _import_categories(present["categories"])
            if links:
                by_name = {c.name: c for c in Category.objects.all()}
                for pk, name in links.items():
                    if name in by_name:
                        Recipe.objects.filter(pk=pk).update(category=by_name[name])

        if "recipes" in present:
            Recipe.objects.all().delete()
            categories: dict = {}
            imported = [
                _import_recipe(row, seen, categories)
                for row in present["recipes"]
                if isinstance(row, dict)
            ]
            result.recipes = len(imported)

        if "knowledge" in present:
            result.knowledge = _import_knowledge(present["knowledge"], seen)

        if "resources" in present:
            result.resources = _import_resources(present["resources"], seen)

    logger.info(
        "Imported backup",
        extra={
            "recipes": result.recipes,
            "categories": result.categories,
            "knowledge": result.knowledge,
            "resources": result.resources,
        },
    )
    return result
