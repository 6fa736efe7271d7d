"""Health check endpoint for monitoring."""

from __future__ import annotations

import os

from django.http import JsonResponse

from core.config import get_settings


def health_check(_request: object) -> JsonResponse:
    """
    Health check endpoint.

    Reports whether Shopee and Gemini credentials are configured and whether
    the upload directory is writable. Missing Shopee credentials or an
    unwritable upload directory make the service unhealthy; Gemini is
    optional, since listings can be written by hand.

    Args:
        _request: Django HTTP request object (unused but required by Django).

    Returns:
        JsonResponse with health status, 200 when healthy and 503 otherwise.
    """
    checks: dict[str, dict[str, str]] = {
        "shopee": _check_shopee(),
        "gemini": _check_gemini(),
        "uploads": _check_uploads(),
    }

    all_healthy = all(check.get("status") != "unhealthy" for check in checks.values())

    health_status = {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }

    return JsonResponse(
        health_status,
        status=200 if all_healthy else 503,
    )


def _check_shopee() -> dict[str, str]:
    """Check Shopee partner credentials."""
    if get_settings().shopee.is_configured:
        return {"status": "healthy"}
    return {"status": "unhealthy", "error": "SHOPEE_PARTNER_ID or SHOPEE_PARTNER_KEY not set"}


def _check_gemini() -> dict[str, str]:
    """Check the Gemini API key; AI copy is disabled without it."""
    if get_settings().gemini.is_configured:
        return {"status": "healthy"}
    return {"status": "disabled", "error": "GEMINI_API_KEY not set"}


def _check_uploads() -> dict[str, str]:
    """Check that the upload directory exists or can be created, and is writable."""
    directory = get_settings().uploads.directory
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return {"status": "unhealthy", "error": str(e)}
    if not os.access(directory, os.W_OK):
        return {"status": "unhealthy", "error": f"{directory} is not writable"}
    return {"status": "healthy"}
