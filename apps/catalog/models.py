"""Catalog models: dresses, their colors, images and categories."""

from __future__ import annotations

import json

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


def parse_sizes(value) -> list[str]:
    """Normalize a sizes payload (list, JSON list or CSV string) to a list of labels."""

    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(s).strip() for s in value if str(s).strip()]
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            decoded = None
        if isinstance(decoded, list):
            return parse_sizes(decoded)
        return [s.strip() for s in value.split(",") if s.strip()]
    return []


def normalize_image_path(url: str) -> str:
    """Relative image paths are served from the site root."""

    if not url:
        return ""
    if url.startswith(("http://", "https://", "/")):
        return url
    return f"/{url}"


class Category(models.Model):
    """Catégorie du catalogue (mariée, soirée, fiançailles…)."""

    name = models.CharField(max_length=100, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Catégorie")
        verbose_name_plural = _("Catégories")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Dress(models.Model):
    """Robe proposée à la location, à la vente ou sur devis (nouvelle collection)."""

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    new_collection = models.BooleanField(
        default=False,
        help_text=_("Nouvelle collection : uniquement sur devis, sans prix affiché."),
    )
    price_per_day = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    is_rent_on_discount = models.BooleanField(default=False)
    new_price_per_day = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    is_for_sale = models.BooleanField(default=False)
    buy_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    is_sell_on_discount = models.BooleanField(default=False)
    new_buy_price = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    sizes = models.JSONField(default=list, blank=True)
    categories = models.ManyToManyField(Category, related_name="dresses", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Robe")
        verbose_name_plural = _("Robes")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):  # type: ignore
        self.sizes = parse_sizes(self.sizes)
        super().save(*args, **kwargs)

    @property
    def color_names(self) -> list[str]:
        return [color.color_name for color in self.colors.all()]


class DressColor(models.Model):
    dress = models.ForeignKey(Dress, on_delete=models.CASCADE, related_name="colors")
    color_name = models.CharField(max_length=100)

    class Meta:
        verbose_name = _("Couleur")
        verbose_name_plural = _("Couleurs")
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["dress", "color_name"], name="unique_dress_color"),
        ]

    def __str__(self) -> str:
        return f"{self.dress.name} — {self.color_name}"


class DressImage(models.Model):
    """Image record for a color; the file itself is stored outside this API."""

    color = models.ForeignKey(DressColor, on_delete=models.CASCADE, related_name="images")
    image_url = models.CharField(max_length=500)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = _("Image")
        verbose_name_plural = _("Images")
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:
        return self.image_url

    def save(self, *args, **kwargs):  # type: ignore
        self.image_url = normalize_image_path(self.image_url)
        super().save(*args, **kwargs)
