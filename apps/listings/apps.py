"""Listings app configuration."""

from django.apps import AppConfig


class ListingsConfig(AppConfig):
    """Configuration for the listings application."""

    name = "apps.listings"
    verbose_name = "Listings"
