"""Booking request models: a schedule (appointment/order) and its lines."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Schedule(models.Model):
    """Demande de rendez-vous / commande issue du panier."""

    class Status(models.TextChoices):
        PENDING = "pending", _("En attente")
        APPOINTMENT_CONFIRMED = "apConfirmed", _("Rendez-vous confirmé")
        CONFIRMED = "confirmed", _("Confirmée")
        COMPLETED = "completed", _("Terminée")
        CANCELLED = "cancelled", _("Annulée")

    full_name = models.CharField(max_length=200)
    phone = models.CharField(max_length=30)
    address = models.CharField(max_length=300, blank=True)
    note = models.TextField(blank=True)
    try_on_date = models.DateField(
        null=True,
        blank=True,
        help_text=_("Date d'essayage, obligatoire pour une location."),
    )
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Rendez-vous")
        verbose_name_plural = _("Rendez-vous")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["try_on_date"]),
        ]

    def __str__(self) -> str:
        return f"Schedule #{self.pk} ({self.full_name})"

    @property
    def is_quote_only(self) -> bool:
        types = [item.type for item in self.items.all()]
        return bool(types) and all(t == ScheduleItem.Type.QUOTE for t in types)

    @property
    def revenue_date(self) -> date:
        """Try-on date, or the local day the request came in."""
        return self.try_on_date or timezone.localdate(self.created_at)


class ScheduleItem(models.Model):
    class Type(models.TextChoices):
        RENTAL = "rental", _("Location")
        PURCHASE = "purchase", _("Achat")
        QUOTE = "quote", _("Devis")

    schedule = models.ForeignKey(Schedule, on_delete=models.CASCADE, related_name="items")
    dress = models.ForeignKey(
        "catalog.Dress",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="schedule_items",
    )
    dress_name = models.CharField(
        max_length=200,
        help_text=_("Nom de la robe au moment de la demande."),
    )
    color = models.CharField(max_length=100, blank=True)
    size = models.CharField(max_length=50, blank=True)
    quantity = models.PositiveIntegerField(default=1)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    price_per_day = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    buy_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    type = models.CharField(max_length=10, choices=Type.choices)

    class Meta:
        verbose_name = _("Article")
        verbose_name_plural = _("Articles")
        ordering = ["id"]
        indexes = [
            models.Index(fields=["dress", "start_date", "end_date"]),
        ]

    def __str__(self) -> str:
        return f"{self.get_type_display()} {self.dress_name} x{self.quantity}"

    @property
    def unit_price(self) -> Decimal | None:
        if self.type == self.Type.RENTAL:
            return self.price_per_day
        if self.type == self.Type.PURCHASE:
            return self.buy_price
        return None

    def line_total(self) -> Decimal:
        price = self.unit_price
        if price is None:
            return Decimal("0")
        return price * self.quantity
