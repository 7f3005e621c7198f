"""
ViewSets for the calculators API v1.
Tool endpoints are read-only GET actions; saved calculations are exposed
through a standard ModelViewSet.
"""

import logging

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.calculators.api.v1.serializers import (
    DiscountImpactQuerySerializer,
    FBAStorageQuerySerializer,
    ImportDutyQuerySerializer,
    SafetyStockQuerySerializer,
    SavedCalculationSerializer,
    ShippingQuerySerializer,
    SizeConvertQuerySerializer,
    SizeRecommendQuerySerializer,
    VATQuerySerializer,
    WeightConvertQuerySerializer,
)
from apps.calculators.application.results import to_primitive
from apps.calculators.domain.conversions import convert_size, convert_weight, recommend_size
from apps.calculators.domain.services import (
    DiscountImpactService,
    FBAStorageService,
    ImportDutyService,
    SafetyStockService,
    ShippingService,
    VATService,
)
from apps.calculators.domain.validation import (
    normalize_discount_impact,
    normalize_fba_storage,
    normalize_import_duty,
    normalize_safety_stock,
    normalize_shipping,
    normalize_vat,
)
from apps.calculators.infrastructure.persistence.models import SavedCalculation, ToolSlug
from apps.calculators.infrastructure.persistence.repositories import SavedCalculationRepository

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@extend_schema(tags=['Tools'])
class CalculatorToolViewSet(viewsets.ViewSet):
    """
    Stateless calculator endpoints.

    Every action validates its query parameters, normalizes them and runs the
    matching calculator. A calculator that yields no result maps to HTTP 400.
    """

    def _calculate(self, request, serializer_class, compute, error):
        serializer = serializer_class(data=request.query_params)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = compute(**serializer.validated_data)
        if result is None:
            logger.info("%s rejected query %s", self.action, dict(request.query_params))
            return Response({"error": error}, status=status.HTTP_400_BAD_REQUEST)

        return Response(to_primitive(result))

    @extend_schema(
        parameters=[VATQuerySerializer],
        description="Add VAT to a net amount or extract it from a gross amount"
    )
    @action(detail=False, methods=['get'], url_path='vat')
    def vat(self, request):
        return self._calculate(
            request,
            VATQuerySerializer,
            lambda **data: VATService.calculate(normalize_vat(**data)),
            "amount must be zero or positive",
        )

    @extend_schema(
        parameters=[ImportDutyQuerySerializer],
        description="Estimate customs duty, import VAT and total landed cost"
    )
    @action(detail=False, methods=['get'], url_path='import-duty')
    def import_duty(self, request):
        return self._calculate(
            request,
            ImportDutyQuerySerializer,
            lambda **data: ImportDutyService.calculate(normalize_import_duty(**data)),
            "fob_value, shipping_cost and insurance_cost must be zero or positive",
        )

    @extend_schema(
        parameters=[FBAStorageQuerySerializer],
        description="Estimate monthly storage fees and aged inventory surcharges"
    )
    @action(detail=False, methods=['get'], url_path='fba-storage')
    def fba_storage(self, request):
        return self._calculate(
            request,
            FBAStorageQuerySerializer,
            lambda **data: FBAStorageService.calculate(normalize_fba_storage(**data)),
            "dimensions, units and storage_duration_months must be positive; start_month must be 1-12",
        )

    @extend_schema(
        parameters=[DiscountImpactQuerySerializer],
        description="Simulate the margin and break-even volume of a discount"
    )
    @action(detail=False, methods=['get'], url_path='discount-impact')
    def discount_impact(self, request):
        return self._calculate(
            request,
            DiscountImpactQuerySerializer,
            lambda **data: DiscountImpactService.calculate(normalize_discount_impact(**data)),
            "original_price must be positive and discount_percentage between 0 and 100",
        )

    @extend_schema(
        parameters=[SafetyStockQuerySerializer],
        description="Calculate safety stock, reorder point and stockout urgency"
    )
    @action(detail=False, methods=['get'], url_path='safety-stock')
    def safety_stock(self, request):
        return self._calculate(
            request,
            SafetyStockQuerySerializer,
            lambda **data: SafetyStockService.calculate(normalize_safety_stock(**data)),
            "lead_time_days must be positive; sales, safety days and stock must be zero or positive",
        )

    @extend_schema(
        parameters=[ShippingQuerySerializer],
        description="Compare carrier costs using the chargeable weight"
    )
    @action(detail=False, methods=['get'], url_path='shipping')
    def shipping(self, request):
        return self._calculate(
            request,
            ShippingQuerySerializer,
            lambda **data: ShippingService.calculate(normalize_shipping(**data)),
            "weight and dimensions must be positive",
        )

    @extend_schema(
        parameters=[SizeConvertQuerySerializer],
        description="Convert a clothing or shoe size between CN, US, EU and UK"
    )
    @action(detail=False, methods=['get'], url_path='size-convert')
    def size_convert(self, request):
        return self._calculate(
            request,
            SizeConvertQuerySerializer,
            convert_size,
            "size not found for this category and system",
        )

    @extend_schema(
        parameters=[SizeRecommendQuerySerializer],
        description="Recommend a size from body measurements in centimetres"
    )
    @action(detail=False, methods=['get'], url_path='size-recommend')
    def size_recommend(self, request):
        return self._calculate(
            request,
            SizeRecommendQuerySerializer,
            recommend_size,
            "a positive measurement for this category is required",
        )

    @extend_schema(
        parameters=[WeightConvertQuerySerializer],
        description="Convert a weight between g, oz, lb and kg"
    )
    @action(detail=False, methods=['get'], url_path='weight-convert')
    def weight_convert(self, request):
        return self._calculate(
            request,
            WeightConvertQuerySerializer,
            convert_weight,
            "value must be positive",
        )


class CalculationPageQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, default=1, min_value=1)
    page_size = serializers.IntegerField(
        required=False,
        default=DEFAULT_PAGE_SIZE,
        min_value=1,
        max_value=MAX_PAGE_SIZE,
    )
    tool_slug = serializers.ChoiceField(choices=ToolSlug.choices, required=False)


@extend_schema(tags=['Calculations'])
class SavedCalculationViewSet(viewsets.ModelViewSet):

    queryset = SavedCalculation.objects.all()
    serializer_class = SavedCalculationSerializer
    http_method_names = ['get', 'post', 'delete', 'head', 'options']

    @extend_schema(
        parameters=[
            OpenApiParameter("page", OpenApiTypes.INT, description="Page number (default 1)"),
            OpenApiParameter("page_size", OpenApiTypes.INT, description="Items per page (default 10, max 100)"),
            OpenApiParameter("tool_slug", OpenApiTypes.STR, description="Only calculations from this tool"),
        ],
        description="List saved calculations, newest first"
    )
    def list(self, request):
        query = CalculationPageQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        result = SavedCalculationRepository.get_page(**query.validated_data)
        return Response({
            "count": result.total,
            "page": result.page,
            "page_size": result.page_size,
            "total_pages": result.total_pages,
            "results": [
                {
                    "id": item.id,
                    "tool_slug": item.tool_slug,
                    "title": item.title,
                    "inputs": item.inputs,
                    "outputs": item.outputs,
                    "created_at": item.created_at.isoformat() if item.created_at else None,
                }
                for item in result.items
            ],
        })

    def retrieve(self, request, pk=None):
        calculation = SavedCalculationRepository.get_by_id(pk)
        if calculation is None:
            return Response(
                {"error": f"Calculation {pk} not found"},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(self.get_serializer(calculation).data)

    def destroy(self, request, pk=None):
        calculation = SavedCalculationRepository.get_by_id(pk)
        if calculation is None:
            return Response(
                {"error": f"Calculation {pk} not found"},
                status=status.HTTP_404_NOT_FOUND
            )
        logger.info("Deleting %s calculation %s", calculation.tool_slug, calculation.id)
        SavedCalculationRepository.delete(calculation)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def perform_create(self, serializer):
        serializer.instance = SavedCalculationRepository.create(**serializer.validated_data)
        calculation = serializer.instance
        logger.info("Saved %s calculation %s", calculation.tool_slug, calculation.id)
