"""API views for the storage booking domain."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.filters import OrderingFilter  # type: ignore
from rest_framework.response import Response  # type: ignore

from .application.command_handlers import (
    AdmitBookingCommand,
    AdmitBookingHandler,
    CancelBookingCommand,
    CancelBookingHandler,
)
from .filters import BookingFilterSet
from .models import Booking
from .serializers import BookingRequestSerializer, BookingSerializer, CancelBookingSerializer
from .services import get_pricing_engine


class IsBookingOwnerOrStaff(permissions.BasePermission):
    """Customers see their own bookings, staff see all of them."""

    def has_object_permission(self, request, view, obj: Booking):  # type: ignore
        user = request.user
        if not user.is_authenticated:
            return False
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return True
        return obj.customer_id == user.id


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """Quotes, admits, lists and cancels storage bookings."""

    queryset = Booking.objects.select_related("warehouse", "customer").all()
    serializer_class = BookingSerializer
    permission_classes = [permissions.IsAuthenticated, IsBookingOwnerOrStaff]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_class = BookingFilterSet
    ordering_fields = ["created_at", "start_date", "total_amount"]

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "quote"}:
            return BookingRequestSerializer
        if self.action == "cancel":
            return CancelBookingSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        user = self.request.user
        qs = super().get_queryset()
        if not user.is_authenticated:
            return qs.none()
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return qs
        return qs.filter(customer=user)

    def create(self, request, *args, **kwargs):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        booking = AdmitBookingHandler().handle(
            AdmitBookingCommand(
                customer_id=request.user.id,
                warehouse_id=data["warehouse"].id,
                resource_type=data["resource_type"],
                quantity=data["quantity"],
                start_date=data["start_date"],
                end_date=data["end_date"],
                notes=data["notes"],
            )
        )
        read_serializer = BookingSerializer(booking, context=self.get_serializer_context())
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @action(detail=False, methods=["post"])
    def quote(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        breakdown = get_pricing_engine().quote(
            data["warehouse"].id,
            data["resource_type"],
            data["quantity"],
            data["start_date"],
            data["end_date"],
            customer_id=request.user.id,
        )
        return Response(breakdown.to_dict())

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = request.user
        if booking.customer_id == user.id:
            source = Booking.CancellationSource.CUSTOMER
        else:
            source = Booking.CancellationSource.STAFF
        booking = CancelBookingHandler().handle(
            CancelBookingCommand(
                booking_id=booking.pk,
                source=source,
                reason=serializer.validated_data["reason"],
            )
        )
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)
