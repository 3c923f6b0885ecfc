"""
Booking Command Handlers

These are the use cases for the booking domain.
They orchestrate domain operations within transactions.

Commands:
- SubmitBookingRequestCommand: Turn cart lines into a schedule
- ChangeScheduleStatusCommand: Move a schedule to another status (back-office)
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Optional, Tuple
import logging

from django.utils import timezone  # type: ignore

from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import Money
from apps.bookings.domain.entities import BookingRequest, CustomerDetails, ScheduleStatus
from apps.bookings.models import Schedule, ScheduleItem
from apps.bookings.services import confirmed_booking_windows
from apps.cart.domain.cart import CartLineItem, VariantKind
from apps.cart.domain.exceptions import UnknownItemError

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class SubmitBookingRequestCommand:
    """
    Command to submit a booking request

    Lines are taken as they are (cart snapshot); the total is recomputed
    from them.
    """
    customer: CustomerDetails
    lines: Tuple[CartLineItem, ...] = field(default_factory=tuple)
    try_on_date: Optional[date] = None


@dataclass
class ChangeScheduleStatusCommand:
    """Command to change the status of an existing schedule"""
    schedule_id: int
    status: str


# ===== Command Handlers =====

class SubmitBookingRequestHandler:
    """
    Handler for SubmitBookingRequest command

    Strategy:
    1. Start database transaction (atomic)
    2. Rebuild booking windows from confirmed schedules
    3. Validate the request in domain (ranges, conflicts, try-on date)
    4. Persist the schedule and its lines
    5. Collect events, published after commit
    """

    def __init__(self, windows_provider: Callable[..., Iterable] = confirmed_booking_windows):
        self.windows_provider = windows_provider

    def handle(self, command: SubmitBookingRequestCommand) -> Schedule:
        """
        Handle booking request submission

        Returns: Created Schedule

        Raises:
            SelectionError: If the request breaks a booking invariant
        """
        from apps.catalog.models import Dress

        request = BookingRequest(
            customer=command.customer,
            lines=command.lines,
            try_on_date=command.try_on_date,
        )
        logger.info(
            "Submitting booking request for %s with %d line(s)",
            command.customer.full_name,
            len(request.lines),
        )

        with DjangoUnitOfWork() as uow:
            dresses = self._load_dresses(Dress, request.lines)
            rental_ids = [dresses[line.item_id].pk for line in request.rental_lines]
            request.validate(self.windows_provider(rental_ids))

            customer = request.customer
            schedule = Schedule.objects.create(
                full_name=customer.full_name.strip(),
                phone=customer.phone.strip(),
                address=customer.address,
                note=customer.note,
                try_on_date=request.try_on_date,
                total=Money(request.total).quantize(2),
            )
            ScheduleItem.objects.bulk_create([
                self._build_item(schedule, dresses[line.item_id], line)
                for line in request.lines
            ])

            request.mark_submitted(schedule.pk)
            uow.collect_events(request)

        logger.info("Booking request %s created, total %s", schedule.pk, schedule.total)
        return schedule

    @staticmethod
    def _load_dresses(model, lines) -> dict:
        wanted = {}
        for line in lines:
            try:
                wanted[line.item_id] = int(line.item_id)
            except (TypeError, ValueError):
                raise UnknownItemError(line.item_id)
        found = model.objects.in_bulk(set(wanted.values()))
        dresses = {}
        for item_id, pk in wanted.items():
            if pk not in found:
                raise UnknownItemError(item_id)
            dresses[item_id] = found[pk]
        return dresses

    @staticmethod
    def _build_item(schedule: Schedule, dress, line: CartLineItem) -> ScheduleItem:
        kind = line.variant_kind
        return ScheduleItem(
            schedule=schedule,
            dress=dress,
            dress_name=dress.name,
            color=line.color,
            size=line.size,
            quantity=line.quantity,
            start_date=line.start_date,
            end_date=line.end_date,
            price_per_day=line.unit_price if kind is VariantKind.RENTAL else None,
            buy_price=line.unit_price if kind is VariantKind.PURCHASE else None,
            type=kind.value,
        )


class ChangeScheduleStatusHandler:
    """
    Handler for ChangeScheduleStatus command

    Confirming a schedule re-checks its rental lines against the other
    confirmed schedules so a dress is never committed twice.
    """

    def __init__(self, windows_provider: Callable[..., Iterable] = confirmed_booking_windows):
        self.windows_provider = windows_provider

    def handle(self, command: ChangeScheduleStatusCommand) -> Schedule:
        """
        Raises:
            Schedule.DoesNotExist: If the schedule is unknown
            SelectionError: If confirming would double-book a dress
        """
        with DjangoUnitOfWork() as uow:
            schedule = (
                Schedule.objects.select_for_update()
                .get(pk=command.schedule_id)
            )
            items = list(schedule.items.all())
            request = BookingRequest(
                schedule_id=schedule.pk,
                status=schedule.status,
                try_on_date=schedule.try_on_date,
                submitted_on=timezone.localdate(schedule.created_at),
            )
            old_status = request.status
            new_status = ScheduleStatus(command.status)

            if new_status is ScheduleStatus.CONFIRMED and new_status is not request.status:
                self._ensure_free(schedule, items)

            if request.change_status(new_status):
                schedule.status = new_status.value
                schedule.save(update_fields=["status", "updated_at"])
                logger.info(
                    "Schedule %s moved from %s to %s",
                    schedule.pk,
                    old_status.value,
                    new_status.value,
                )

            uow.collect_events(request)

        return schedule

    def _ensure_free(self, schedule: Schedule, items) -> None:
        rentals = [
            CartLineItem(
                item_id=str(item.dress_id),
                variant_kind=VariantKind.RENTAL,
                color=item.color or '-',
                size=item.size,
                quantity=max(item.quantity, 1),
                start_date=item.start_date,
                end_date=item.end_date,
            )
            for item in items
            if item.type == ScheduleItem.Type.RENTAL
            and item.dress_id is not None
            and item.start_date
            and item.end_date
        ]
        if not rentals:
            return

        from apps.catalog.models import Dress

        # confirmations renting the same dress queue up on its row
        dress_ids = sorted({int(line.item_id) for line in rentals})
        list(Dress.objects.select_for_update().filter(pk__in=dress_ids).order_by("pk"))

        windows = self.windows_provider(
            dress_ids,
            exclude_schedule_id=schedule.pk,
        )
        BookingRequest(lines=rentals).validate_ranges(windows)
