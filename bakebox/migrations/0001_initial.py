"""
Initial Bakebox schema.

- Category, Recipe (+ history, tags), Ingredient
- FermentationStage, BakingStage
- ExecutionLog, Knowledge, Resource
"""

import uuid
from decimal import Decimal

import bakebox.models.recipe
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import simple_history.models
import taggit.managers
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("taggit", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        # ══════════════════════════════════════════════════════════════
        # CATEGORY
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Category",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="Name")),
                ("order", models.PositiveSmallIntegerField(default=0, verbose_name="Order")),
            ],
            options={
                "verbose_name": "Category",
                "verbose_name_plural": "Categories",
                "db_table": "bakebox_category",
                "ordering": ["order", "name"],
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # RECIPE
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Recipe",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, unique=True, verbose_name="UUID"
                    ),
                ),
                ("title", models.CharField(max_length=200, verbose_name="Title")),
                (
                    "master",
                    models.CharField(
                        blank=True,
                        help_text="Teacher or author the recipe comes from",
                        max_length=200,
                        verbose_name="Master",
                    ),
                ),
                ("source_name", models.CharField(blank=True, max_length=200, verbose_name="Source")),
                ("source_url", models.CharField(blank=True, max_length=500, verbose_name="Source URL")),
                ("source_date", models.DateField(blank=True, null=True, verbose_name="Source date")),
                (
                    "record_date",
                    models.DateField(
                        blank=True,
                        default=django.utils.timezone.localdate,
                        null=True,
                        verbose_name="Record date",
                    ),
                ),
                (
                    "quantity",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("1"),
                        help_text="Pieces or batches produced by this formula",
                        max_digits=10,
                        verbose_name="Quantity",
                    ),
                ),
                ("mold_name", models.CharField(blank=True, max_length=200, verbose_name="Mold")),
                (
                    "dough_weight",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0"), max_digits=10, verbose_name="Dough weight"
                    ),
                ),
                (
                    "crust_weight",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0"), max_digits=10, verbose_name="Crust weight"
                    ),
                ),
                (
                    "oil_paste_weight",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=10,
                        verbose_name="Oil paste weight",
                    ),
                ),
                (
                    "filling_weight",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=10,
                        verbose_name="Filling weight",
                    ),
                ),
                (
                    "main_section_name",
                    models.CharField(
                        blank=True, default="Main dough", max_length=100, verbose_name="Main section name"
                    ),
                ),
                (
                    "liquid_starter_name",
                    models.CharField(
                        blank=True,
                        default="Liquid starter / old dough",
                        max_length=100,
                        verbose_name="Liquid starter name",
                    ),
                ),
                (
                    "custom_section_name",
                    models.CharField(
                        blank=True, default="Other", max_length=100, verbose_name="Custom section name"
                    ),
                ),
                (
                    "sections_order",
                    models.JSONField(
                        blank=True,
                        default=bakebox.models.recipe.default_sections_order,
                        help_text="Permutation of: liquid_starter, main, filling, decoration, custom",
                        verbose_name="Sections order",
                    ),
                ),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                (
                    "instructions",
                    models.JSONField(
                        blank=True, default=list, help_text="Ordered list of steps", verbose_name="Instructions"
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                (
                    "image_url",
                    models.TextField(blank=True, help_text="http(s) or data: URL", verbose_name="Image"),
                ),
                (
                    "is_baking_recipe",
                    models.BooleanField(
                        default=True, help_text="Show baker's percentages", verbose_name="Baking recipe"
                    ),
                ),
                ("is_tried", models.BooleanField(default=False, verbose_name="Tried")),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, verbose_name="created at"),
                ),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="recipes",
                        to="bakebox.category",
                        verbose_name="Category",
                    ),
                ),
                (
                    "tags",
                    taggit.managers.TaggableManager(
                        blank=True,
                        help_text="A comma-separated list of tags.",
                        through="taggit.TaggedItem",
                        to="taggit.Tag",
                        verbose_name="Tags",
                    ),
                ),
            ],
            options={
                "verbose_name": "Recipe",
                "verbose_name_plural": "Recipes",
                "db_table": "bakebox_recipe",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["title"], name="bakebox_recipe_title_idx"),
                    models.Index(fields=["created_at"], name="bakebox_recipe_created_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoricalRecipe",
            fields=[
                (
                    "id",
                    models.BigIntegerField(
                        auto_created=True, blank=True, db_index=True, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        db_index=True, default=uuid.uuid4, editable=False, verbose_name="UUID"
                    ),
                ),
                ("title", models.CharField(max_length=200, verbose_name="Title")),
                (
                    "master",
                    models.CharField(
                        blank=True,
                        help_text="Teacher or author the recipe comes from",
                        max_length=200,
                        verbose_name="Master",
                    ),
                ),
                ("source_name", models.CharField(blank=True, max_length=200, verbose_name="Source")),
                ("source_url", models.CharField(blank=True, max_length=500, verbose_name="Source URL")),
                ("source_date", models.DateField(blank=True, null=True, verbose_name="Source date")),
                (
                    "record_date",
                    models.DateField(
                        blank=True,
                        default=django.utils.timezone.localdate,
                        null=True,
                        verbose_name="Record date",
                    ),
                ),
                (
                    "quantity",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("1"),
                        help_text="Pieces or batches produced by this formula",
                        max_digits=10,
                        verbose_name="Quantity",
                    ),
                ),
                ("mold_name", models.CharField(blank=True, max_length=200, verbose_name="Mold")),
                (
                    "dough_weight",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0"), max_digits=10, verbose_name="Dough weight"
                    ),
                ),
                (
                    "crust_weight",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0"), max_digits=10, verbose_name="Crust weight"
                    ),
                ),
                (
                    "oil_paste_weight",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=10,
                        verbose_name="Oil paste weight",
                    ),
                ),
                (
                    "filling_weight",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        max_digits=10,
                        verbose_name="Filling weight",
                    ),
                ),
                (
                    "main_section_name",
                    models.CharField(
                        blank=True, default="Main dough", max_length=100, verbose_name="Main section name"
                    ),
                ),
                (
                    "liquid_starter_name",
                    models.CharField(
                        blank=True,
                        default="Liquid starter / old dough",
                        max_length=100,
                        verbose_name="Liquid starter name",
                    ),
                ),
                (
                    "custom_section_name",
                    models.CharField(
                        blank=True, default="Other", max_length=100, verbose_name="Custom section name"
                    ),
                ),
                (
                    "sections_order",
                    models.JSONField(
                        blank=True,
                        default=bakebox.models.recipe.default_sections_order,
                        help_text="Permutation of: liquid_starter, main, filling, decoration, custom",
                        verbose_name="Sections order",
                    ),
                ),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                (
                    "instructions",
                    models.JSONField(
                        blank=True, default=list, help_text="Ordered list of steps", verbose_name="Instructions"
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                (
                    "is_baking_recipe",
                    models.BooleanField(
                        default=True, help_text="Show baker's percentages", verbose_name="Baking recipe"
                    ),
                ),
                ("is_tried", models.BooleanField(default=False, verbose_name="Tried")),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, verbose_name="created at"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(blank=True, editable=False, verbose_name="updated at"),
                ),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="bakebox.category",
                        verbose_name="Category",
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical Recipe",
                "verbose_name_plural": "historical Recipes",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
        # ══════════════════════════════════════════════════════════════
        # INGREDIENTS AND STAGES
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Ingredient",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "section",
                    models.CharField(
                        choices=[
                            ("liquid_starter", "Liquid starter"),
                            ("main", "Main dough"),
                            ("filling", "Filling"),
                            ("decoration", "Decoration / topping"),
                            ("custom", "Other"),
                        ],
                        default="main",
                        max_length=20,
                        verbose_name="Section",
                    ),
                ),
                ("position", models.PositiveSmallIntegerField(default=0, verbose_name="Position")),
                ("name", models.CharField(blank=True, max_length=200, verbose_name="Name")),
                (
                    "amount",
                    models.CharField(
                        blank=True,
                        default="0",
                        help_text="Number or free text such as 'to taste'",
                        max_length=50,
                        verbose_name="Amount",
                    ),
                ),
                ("unit", models.CharField(blank=True, default="g", max_length=20, verbose_name="Unit")),
                (
                    "is_flour",
                    models.BooleanField(
                        default=False, help_text="Counts towards the 100% base", verbose_name="Flour"
                    ),
                ),
                (
                    "recipe",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ingredients",
                        to="bakebox.recipe",
                        verbose_name="Recipe",
                    ),
                ),
            ],
            options={
                "verbose_name": "Ingredient",
                "verbose_name_plural": "Ingredients",
                "db_table": "bakebox_ingredient",
                "ordering": ["recipe", "section", "position", "id"],
                "indexes": [
                    models.Index(fields=["recipe", "section"], name="bakebox_ingr_recipe_sect_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="FermentationStage",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("position", models.PositiveSmallIntegerField(default=0, verbose_name="Position")),
                ("name", models.CharField(blank=True, max_length=100, verbose_name="Name")),
                ("time", models.CharField(blank=True, max_length=50, verbose_name="Time")),
                (
                    "time_unit",
                    models.CharField(
                        choices=[("min", "min"), ("hr", "hr")],
                        default="min",
                        max_length=3,
                        verbose_name="Time unit",
                    ),
                ),
                ("temperature", models.CharField(blank=True, max_length=50, verbose_name="Temperature")),
                ("humidity", models.CharField(blank=True, max_length=50, verbose_name="Humidity")),
                (
                    "recipe",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="fermentation_stages",
                        to="bakebox.recipe",
                        verbose_name="Recipe",
                    ),
                ),
            ],
            options={
                "verbose_name": "Fermentation stage",
                "verbose_name_plural": "Fermentation stages",
                "db_table": "bakebox_fermentation_stage",
                "ordering": ["recipe", "position", "id"],
            },
        ),
        migrations.CreateModel(
            name="BakingStage",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("position", models.PositiveSmallIntegerField(default=0, verbose_name="Position")),
                ("name", models.CharField(blank=True, max_length=100, verbose_name="Name")),
                ("top_heat", models.CharField(blank=True, max_length=50, verbose_name="Top heat")),
                ("bottom_heat", models.CharField(blank=True, max_length=50, verbose_name="Bottom heat")),
                ("time", models.CharField(blank=True, max_length=50, verbose_name="Time")),
                ("note", models.CharField(blank=True, max_length=200, verbose_name="Note")),
                (
                    "recipe",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="baking_stages",
                        to="bakebox.recipe",
                        verbose_name="Recipe",
                    ),
                ),
            ],
            options={
                "verbose_name": "Baking stage",
                "verbose_name_plural": "Baking stages",
                "db_table": "bakebox_baking_stage",
                "ordering": ["recipe", "position", "id"],
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # JOURNAL
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="ExecutionLog",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, unique=True, verbose_name="UUID"
                    ),
                ),
                ("date", models.DateField(default=django.utils.timezone.localdate, verbose_name="Date")),
                (
                    "rating",
                    models.PositiveSmallIntegerField(
                        default=5,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                        verbose_name="Rating",
                    ),
                ),
                ("feedback", models.TextField(verbose_name="Feedback")),
                (
                    "photo_url",
                    models.TextField(blank=True, help_text="http(s) or data: URL", verbose_name="Photo"),
                ),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, verbose_name="created at"),
                ),
                (
                    "recipe",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="execution_logs",
                        to="bakebox.recipe",
                        verbose_name="Recipe",
                    ),
                ),
            ],
            options={
                "verbose_name": "Execution log",
                "verbose_name_plural": "Execution logs",
                "db_table": "bakebox_execution_log",
                "ordering": ["-created_at", "-id"],
            },
        ),
        # ══════════════════════════════════════════════════════════════
        # KNOWLEDGE AND RESOURCES
        # ══════════════════════════════════════════════════════════════
        migrations.CreateModel(
            name="Knowledge",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, unique=True, verbose_name="UUID"
                    ),
                ),
                ("title", models.CharField(max_length=200, verbose_name="Title")),
                ("content", models.TextField(verbose_name="Content")),
                ("master", models.CharField(blank=True, max_length=200, verbose_name="Master")),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, verbose_name="created at"),
                ),
            ],
            options={
                "verbose_name": "Knowledge note",
                "verbose_name_plural": "Knowledge notes",
                "db_table": "bakebox_knowledge",
                "ordering": ["-created_at", "-id"],
            },
        ),
        migrations.CreateModel(
            name="Resource",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "uuid",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, unique=True, verbose_name="UUID"
                    ),
                ),
                ("title", models.CharField(max_length=200, verbose_name="Title")),
                ("url", models.CharField(max_length=500, verbose_name="URL")),
                (
                    "type",
                    models.CharField(
                        choices=[("video", "Video"), ("pdf", "PDF"), ("link", "Link")],
                        default="link",
                        max_length=10,
                        verbose_name="Type",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(default=django.utils.timezone.now, verbose_name="created at"),
                ),
            ],
            options={
                "verbose_name": "Resource",
                "verbose_name_plural": "Resources",
                "db_table": "bakebox_resource",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
