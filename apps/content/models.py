"""Storefront content models."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.catalog.models import normalize_image_path


class Contact(models.Model):
    """Message envoyé depuis le formulaire de contact."""

    name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True)
    subject = models.CharField(max_length=200, blank=True)
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Message de contact")
        verbose_name_plural = _("Messages de contact")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


class DisplayImage(models.Model):
    image_url = models.CharField(max_length=500)
    sort_order = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["sort_order", "id"]

    def __str__(self) -> str:
        return self.image_url

    def save(self, *args, **kwargs):  # type: ignore
        self.image_url = normalize_image_path(self.image_url)
        super().save(*args, **kwargs)


class Banner(DisplayImage):
    class Meta(DisplayImage.Meta):
        verbose_name = _("Bannière")
        verbose_name_plural = _("Bannières")


class AboutImage(DisplayImage):
    class Meta(DisplayImage.Meta):
        verbose_name = _("Image « À propos »")
        verbose_name_plural = _("Images « À propos »")
