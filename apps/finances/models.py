"""Financial domain models: monthly revenue records."""

from __future__ import annotations

from decimal import Decimal

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Revenue(models.Model):
    """Chiffre d'affaires d'un mois (ventes et locations)."""

    month = models.DateField(unique=True, help_text=_("Premier jour du mois concerné."))
    total_sales = models.PositiveIntegerField(default=0, help_text=_("Nombre de robes vendues."))
    sales_revenue = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_rental = models.PositiveIntegerField(default=0, help_text=_("Nombre de locations."))
    rental_revenue = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Revenu mensuel")
        verbose_name_plural = _("Revenus mensuels")
        ordering = ["-month"]

    def __str__(self) -> str:
        return f"Revenue {self.month:%Y-%m}"

    @property
    def total_revenue(self) -> Decimal:
        return (self.sales_revenue or Decimal("0")) + (self.rental_revenue or Decimal("0"))
