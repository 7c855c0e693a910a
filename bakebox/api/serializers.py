"""
Bakebox API Serializers.
"""

from decimal import Decimal

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from rest_framework import serializers

from bakebox.conf import ASPECT_RATIOS, IMAGE_SIZES
from bakebox.models import (
    BakingStage,
    Category,
    ExecutionLog,
    FermentationStage,
    Ingredient,
    Knowledge,
    Recipe,
    Resource,
)
from bakebox.models.recipe import parse_tags
from bakebox.services import scaling


class CategorySerializer(serializers.ModelSerializer):
    """Serializer for Category model. New categories go to the end."""

    recipe_count = serializers.IntegerField(source="recipes.count", read_only=True)

    class Meta:
        model = Category
        fields = ["id", "name", "order", "recipe_count"]
        read_only_fields = ["id", "recipe_count"]
        extra_kwargs = {"order": {"required": False}}

    def create(self, validated_data):
        if "order" not in validated_data:
            return Category.append(validated_data["name"])
        return super().create(validated_data)


class IngredientSerializer(serializers.ModelSerializer):
    amount = serializers.CharField(max_length=50, allow_blank=True, required=False, default="0")

    class Meta:
        model = Ingredient
        fields = ["section", "position", "name", "amount", "unit", "is_flour"]
        read_only_fields = ["position"]


class FermentationStageSerializer(serializers.ModelSerializer):
    class Meta:
        model = FermentationStage
        fields = ["name", "time", "time_unit", "temperature", "humidity"]


class BakingStageSerializer(serializers.ModelSerializer):
    class Meta:
        model = BakingStage
        fields = ["name", "top_heat", "bottom_heat", "time", "note"]


class ExecutionLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExecutionLog
        fields = ["uuid", "date", "rating", "feedback", "photo_url", "created_at"]
        read_only_fields = fields


class ExecutionLogCreateSerializer(serializers.Serializer):
    """
    Input for the recipe ``logs`` action.

    Blank feedback and out-of-range ratings are rejected by Recipe.add_log.
    """

    feedback = serializers.CharField(allow_blank=True, default="")
    rating = serializers.IntegerField(default=5)
    date = serializers.DateField(required=False, allow_null=True)
    photo_url = serializers.CharField(required=False, allow_blank=True, default="")


class TagListField(serializers.Field):
    """Tags as a list of names; a comma-separated string is accepted too."""

    def to_representation(self, value):
        return sorted(value.names())

    def to_internal_value(self, data):
        if not isinstance(data, (str, list, tuple)):
            raise serializers.ValidationError("Expected a list of tags.")
        return parse_tags(data)


class RecipeListSerializer(serializers.ModelSerializer):
    """Compact recipe card for list views."""

    category = serializers.SlugRelatedField(slug_field="name", read_only=True)
    tags = TagListField(read_only=True)

    class Meta:
        model = Recipe
        fields = [
            "uuid",
            "title",
            "master",
            "category",
            "tags",
            "image_url",
            "is_tried",
            "created_at",
        ]
        read_only_fields = fields


class RecipeSerializer(serializers.ModelSerializer):
    """
    Full recipe with nested ingredients and stages.

    Nested lists are replaced wholesale on write.
    """

    category = serializers.SlugRelatedField(
        slug_field="name",
        queryset=Category.objects.all(),
        allow_null=True,
        required=False,
    )
    tags = TagListField(required=False)
    ingredients = IngredientSerializer(many=True, required=False)
    fermentation_stages = FermentationStageSerializer(many=True, required=False)
    baking_stages = BakingStageSerializer(many=True, required=False)
    execution_logs = ExecutionLogSerializer(many=True, read_only=True)

    class Meta:
        model = Recipe
        fields = [
            "uuid",
            "title",
            "master",
            "source_name",
            "source_url",
            "source_date",
            "record_date",
            "category",
            "tags",
            "quantity",
            "mold_name",
            "dough_weight",
            "crust_weight",
            "oil_paste_weight",
            "filling_weight",
            "main_section_name",
            "liquid_starter_name",
            "custom_section_name",
            "sections_order",
            "description",
            "instructions",
            "notes",
            "image_url",
            "is_baking_recipe",
            "is_tried",
            "ingredients",
            "fermentation_stages",
            "baking_stages",
            "execution_logs",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["uuid", "execution_logs", "created_at", "updated_at"]

    def _save(self, instance, validated_data):
        tags = validated_data.pop("tags", None)
        ingredients = validated_data.pop("ingredients", None)
        fermentation = validated_data.pop("fermentation_stages", None)
        baking = validated_data.pop("baking_stages", None)

        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        try:
            with transaction.atomic():
                instance.save()
                if tags is not None:
                    instance.tags.set(tags)
                if ingredients is not None:
                    instance.replace_ingredients(ingredients)
                if fermentation is not None:
                    instance.replace_fermentation_stages(fermentation)
                if baking is not None:
                    instance.replace_baking_stages(baking)
        except DjangoValidationError as e:
            raise serializers.ValidationError(
                e.message_dict if hasattr(e, "error_dict") else e.messages
            )
        return instance

    def create(self, validated_data):
        return self._save(Recipe(), validated_data)

    def update(self, instance, validated_data):
        return self._save(instance, validated_data)


class MoldSerializer(serializers.Serializer):
    """Mold geometry, or the name of a preset."""

    preset = serializers.CharField(required=False)
    shape = serializers.ChoiceField(
        choices=[scaling.CIRCULAR, scaling.RECTANGULAR], default=scaling.CIRCULAR
    )
    diameter = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)
    length = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)
    width = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)
    height = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)

    def validate(self, attrs):
        preset = attrs.get("preset")
        if preset:
            mold = scaling.get_mold_preset(preset)
            if mold is None:
                raise serializers.ValidationError({"preset": f"Unknown mold preset: {preset}"})
            return {"mold": mold}
        return {"mold": scaling.Mold.from_dict(attrs)}


class ScaleSerializer(serializers.Serializer):
    """
    Input for the recipe ``scale`` action.

    Either a target quantity, or a source and a target mold.
    """

    target_quantity = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.01"),
        required=False,
        allow_null=True,
    )
    source_mold = MoldSerializer(required=False)
    target_mold = MoldSerializer(required=False)

    def validate(self, attrs):
        if ("source_mold" in attrs) != ("target_mold" in attrs):
            raise serializers.ValidationError("source_mold and target_mold go together.")
        return attrs


class MoveSerializer(serializers.Serializer):
    direction = serializers.ChoiceField(choices=["up", "down"])


class MoveSectionSerializer(MoveSerializer):
    index = serializers.IntegerField(min_value=0)


class GenerateImageSerializer(serializers.Serializer):
    prompt = serializers.CharField(allow_blank=True)
    size = serializers.ChoiceField(choices=IMAGE_SIZES, required=False)
    aspect_ratio = serializers.ChoiceField(choices=ASPECT_RATIOS, required=False)


class EditImageSerializer(serializers.Serializer):
    prompt = serializers.CharField(allow_blank=True)


class KnowledgeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Knowledge
        fields = ["uuid", "title", "content", "master", "created_at"]
        read_only_fields = ["uuid", "created_at"]


class ResourceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Resource
        fields = ["uuid", "title", "url", "type", "created_at"]
        read_only_fields = ["uuid", "created_at"]
