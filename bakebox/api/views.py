"""
Bakebox API ViewSets.
"""

from dataclasses import asdict

from django.db.models import Q
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from bakebox.exceptions import BakeboxError
from bakebox.models import Category, Knowledge, Recipe, Resource
from bakebox.services import backup, images, scaling

from .serializers import (
    CategorySerializer,
    EditImageSerializer,
    ExecutionLogCreateSerializer,
    ExecutionLogSerializer,
    GenerateImageSerializer,
    KnowledgeSerializer,
    MoveSectionSerializer,
    MoveSerializer,
    RecipeListSerializer,
    RecipeSerializer,
    ResourceSerializer,
    ScaleSerializer,
)

# Errors raised by the image service when the remote model fails
UPSTREAM_ERRORS = frozenset({"API_KEY_ERROR", "NO_IMAGE_DATA", "IMAGE_BACKEND_FAILED"})


def error_response(error: BakeboxError) -> Response:
    code = status.HTTP_502_BAD_GATEWAY if error.code in UPSTREAM_ERRORS else status.HTTP_400_BAD_REQUEST
    return Response({"error": error.as_dict()}, status=code)


class RecipeViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Recipe.

    list: Recipe cards, newest first (?q=, ?category=, ?tag=)
    create / retrieve / update / destroy: Full recipe by UUID
    scale: Convert ingredients to a new yield or mold
    logs: List or add execution logs
    move_section: Swap a section with its neighbour
    generate_image / edit_image: Recipe photo
    history: Change history
    """

    permission_classes = [IsAuthenticated]
    queryset = Recipe.objects.all()
    serializer_class = RecipeSerializer
    lookup_field = "uuid"

    def get_queryset(self):
        params = self.request.query_params
        qs = Recipe.objects.search(params.get("q", ""), params.get("category"))
        tag = params.get("tag")
        if tag:
            qs = qs.filter(tags__name=tag)
        return qs.select_related("category").prefetch_related(
            "tags", "ingredients", "fermentation_stages", "baking_stages", "execution_logs"
        )

    def get_serializer_class(self):
        if self.action == "list":
            return RecipeListSerializer
        return RecipeSerializer

    @action(detail=True, methods=["get", "post"])
    def scale(self, request, uuid=None):
        """
        Scale the recipe.

        GET  /api/bakebox/recipes/{uuid}/scale/?target_quantity=6
        POST /api/bakebox/recipes/{uuid}/scale/
        {
            "source_mold": {"shape": "circular", "diameter": 15, "height": 7.5},
            "target_mold": {"preset": "8\\" round (D20 H8)"}
        }
        """
        recipe = self.get_object()
        data = request.data if request.method == "POST" else request.query_params
        serializer = ScaleSerializer(data=data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        params = serializer.validated_data
        result = recipe.scale(
            target_quantity=params.get("target_quantity"),
            source_mold=params["source_mold"]["mold"] if "source_mold" in params else None,
            target_mold=params["target_mold"]["mold"] if "target_mold" in params else None,
        )
        return Response(result.as_dict())

    @action(detail=True, methods=["get", "post"])
    def logs(self, request, uuid=None):
        """
        Execution journal, newest first.

        POST /api/bakebox/recipes/{uuid}/logs/
        {
            "feedback": "Crumb a bit tight, extend bulk",
            "rating": 4
        }
        """
        recipe = self.get_object()

        if request.method == "GET":
            return Response(ExecutionLogSerializer(recipe.execution_logs.all(), many=True).data)

        serializer = ExecutionLogCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            log = recipe.add_log(**serializer.validated_data)
        except BakeboxError as e:
            return error_response(e)
        return Response(ExecutionLogSerializer(log).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], url_path="move-section")
    def move_section(self, request, uuid=None):
        """
        POST /api/bakebox/recipes/{uuid}/move-section/
        {"index": 1, "direction": "up"}
        """
        recipe = self.get_object()
        serializer = MoveSectionSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        order = recipe.move_section(
            serializer.validated_data["index"],
            serializer.validated_data["direction"],
        )
        return Response({"sections_order": order})

    @action(detail=True, methods=["post"], url_path="generate-image")
    def generate_image(self, request, uuid=None):
        """
        POST /api/bakebox/recipes/{uuid}/generate-image/
        {"prompt": "...", "size": "2K", "aspect_ratio": "4:3"}
        """
        recipe = self.get_object()
        serializer = GenerateImageSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            image_url = images.generate_recipe_image(recipe, **serializer.validated_data)
        except BakeboxError as e:
            return error_response(e)
        return Response({"image_url": image_url})

    @action(detail=True, methods=["post"], url_path="edit-image")
    def edit_image(self, request, uuid=None):
        """
        POST /api/bakebox/recipes/{uuid}/edit-image/
        {"prompt": "Add a dusting of powdered sugar"}
        """
        recipe = self.get_object()
        serializer = EditImageSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            image_url = images.edit_recipe_image(recipe, serializer.validated_data["prompt"])
        except BakeboxError as e:
            return error_response(e)
        return Response({"image_url": image_url})

    @action(detail=True, methods=["get"])
    def history(self, request, uuid=None):
        recipe = self.get_object()
        return Response(
            [
                {
                    "history_id": record.history_id,
                    "history_date": record.history_date,
                    "history_type": record.history_type,
                    "title": record.title,
                    "quantity": str(record.quantity),
                    "user": getattr(record.history_user, "username", None),
                }
                for record in recipe.history.all()
            ]
        )


class CategoryViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Category.

    move: Swap with the previous or next category
    """

    permission_classes = [IsAuthenticated]
    queryset = Category.objects.all()
    serializer_class = CategorySerializer

    @action(detail=True, methods=["post"])
    def move(self, request, pk=None):
        """
        POST /api/bakebox/categories/{pk}/move/
        {"direction": "down"}
        """
        category = self.get_object()
        serializer = MoveSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        categories = category.move(serializer.validated_data["direction"])
        return Response(CategorySerializer(categories, many=True).data)


class KnowledgeViewSet(viewsets.ModelViewSet):
    """Technique notes (?q= searches title and content)."""

    permission_classes = [IsAuthenticated]
    queryset = Knowledge.objects.all()
    serializer_class = KnowledgeSerializer
    lookup_field = "uuid"

    def get_queryset(self):
        qs = Knowledge.objects.all()
        query = self.request.query_params.get("q", "").strip()
        if query:
            qs = qs.filter(Q(title__icontains=query) | Q(content__icontains=query))
        return qs


class ResourceViewSet(viewsets.ModelViewSet):
    """Reference links (?type=video|pdf|link)."""

    permission_classes = [IsAuthenticated]
    queryset = Resource.objects.all()
    serializer_class = ResourceSerializer
    lookup_field = "uuid"

    def get_queryset(self):
        qs = Resource.objects.all()
        kind = self.request.query_params.get("type")
        if kind:
            qs = qs.filter(type=kind)
        return qs


class BackupView(APIView):
    """
    GET  /api/bakebox/backup/  -> full backup as a JSON attachment
    POST /api/bakebox/backup/  -> replace the collections present in the body
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        response = Response(backup.export_backup())
        response["Content-Disposition"] = f'attachment; filename="{backup.backup_filename()}"'
        return response

    def post(self, request):
        try:
            result = backup.import_backup(request.data)
        except BakeboxError as e:
            return error_response(e)
        return Response(asdict(result))


class MoldPresetView(APIView):
    """GET /api/bakebox/molds/ -> common mold presets."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response([mold.as_dict() for mold in scaling.MOLD_PRESETS])
