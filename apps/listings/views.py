"""Views for Shopee authorization, uploads, AI copy and listing creation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from asgiref.sync import async_to_sync
from django.http import HttpResponseRedirect
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.listings.dependencies import (
    get_image_storage,
    get_listing_service,
    get_shopee_auth,
)
from apps.listings.serializers import (
    CategorySerializer,
    CreateProductSerializer,
    GenerateDescriptionSerializer,
    UploadedFileSerializer,
)
from apps.listings.session import CookieSessionStore, ShopSessionCookies
from core.config import ConfigurationError, get_settings
from core.logging import get_logger
from core.result import Failure
from services.listings.types import ListingError, ListingErrorKind

if TYPE_CHECKING:
    from django.http import HttpRequest, HttpResponse

    from services.shopee.types import ShopCredentials

logger = get_logger(__name__)

NOT_AUTHENTICATED = "Not authenticated. Please authorize with Shopee first."


def _session(request: HttpRequest, response: HttpResponse | None = None) -> ShopSessionCookies:
    store = CookieSessionStore(request, response, secure=get_settings().is_production)
    return ShopSessionCookies(store)


def _error_status(error: ListingError) -> int:
    if error.kind is ListingErrorKind.VALIDATION:
        return status.HTTP_400_BAD_REQUEST
    if error.kind is ListingErrorKind.NOT_CONFIGURED:
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if error.kind is ListingErrorKind.IMAGE and getattr(error.cause, "not_found", False):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(error: ListingError, message: str | None = None) -> Response:
    """Render a ListingError as {error, details}; ``message`` replaces the headline."""
    if message:
        body = {"error": message, "details": str(error)}
    else:
        body = {"error": error.message, "details": error.details}
    return Response(body, status=_error_status(error))


class ListingAPIView(APIView):
    """Base view: unconfigured credentials surface as 503 instead of a crash."""

    def handle_exception(self, exc: Exception) -> Response:
        """Map ConfigurationError to 503, defer everything else to DRF."""
        if isinstance(exc, ConfigurationError):
            logger.error("Service not configured", error=str(exc))
            return Response(
                {"error": "Service not configured", "details": str(exc)},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return super().handle_exception(exc)


class ShopAPIView(ListingAPIView):
    """Base view for endpoints that act on the authorized shop."""

    def get_credentials(self, request: Request) -> ShopCredentials | None:
        """Return the shop credentials from cookies, or None."""
        return _session(request).load()

    def not_authenticated(self) -> Response:
        """Return the 401 response for callers without a shop session."""
        return Response({"error": NOT_AUTHENTICATED}, status=status.HTTP_401_UNAUTHORIZED)


class IndexView(APIView):
    """Landing endpoint reporting the authorization state."""

    @extend_schema(responses={200: dict})
    def get(self, request: Request) -> Response:
        """Return whether a shop is authorized, echoing OAuth result flags."""
        data: dict[str, Any] = {"authorized": _session(request).is_authorized}
        for flag in ("auth", "error"):
            if flag in request.query_params:
                data[flag] = request.query_params[flag]
        return Response(data)


class ShopeeAuthorizeView(ListingAPIView):
    """Start the Shopee OAuth flow."""

    @extend_schema(responses={302: None})
    def get(self, request: Request) -> HttpResponse:
        """Redirect the browser to the Shopee authorization page."""
        try:
            auth_url = get_shopee_auth().get_auth_url(get_settings().oauth_redirect_url)
        except ConfigurationError as e:
            logger.error("OAuth initiation failed", error=str(e))
            return Response(
                {"error": "Failed to initiate OAuth"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return HttpResponseRedirect(auth_url)


class ShopeeCallbackView(ListingAPIView):
    """Shopee redirects here with ``code`` and ``shop_id`` after authorization."""

    @extend_schema(responses={302: None})
    def get(self, request: Request) -> HttpResponse:
        """Exchange the code for tokens and store them in cookies."""
        code = request.query_params.get("code")
        shop_id = request.query_params.get("shop_id", "")

        if not code or not shop_id.isdigit():
            return HttpResponseRedirect("/?error=missing_params")

        result = async_to_sync(get_shopee_auth().get_access_token)(code, int(shop_id))
        if isinstance(result, Failure):
            logger.warning("OAuth callback failed", shop_id=shop_id, error=str(result.error))
            return HttpResponseRedirect("/?error=auth_failed")

        response = HttpResponseRedirect("/?auth=success")
        _session(request, response).save(result.value)
        logger.info("Shop authorized", shop_id=result.value.shop_id)
        return response


class ShopeeRefreshView(ListingAPIView):
    """Refresh the access token with the refresh token cookie."""

    @extend_schema(request=None, responses={200: dict, 401: dict, 502: dict})
    def post(self, request: Request) -> Response:
        """Exchange the refresh token and update the cookies."""
        stored = _session(request).refresh_token()
        if stored is None:
            return Response({"error": NOT_AUTHENTICATED}, status=status.HTTP_401_UNAUTHORIZED)

        refresh_token, shop_id = stored
        result = async_to_sync(get_shopee_auth().refresh_access_token)(refresh_token, shop_id)
        if isinstance(result, Failure):
            logger.warning("Token refresh failed", shop_id=shop_id, error=str(result.error))
            return Response(
                {"error": "Failed to refresh token", "details": result.error.message},
                status=status.HTTP_502_BAD_GATEWAY,
            )

        tokens = result.value
        response = Response(
            {"success": True, "shop_id": tokens.shop_id, "expire_in": tokens.expire_in}
        )
        _session(request, response).save(tokens)
        return response


class UploadView(ListingAPIView):
    """Store product photos locally."""

    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(responses={200: UploadedFileSerializer(many=True)})
    def post(self, request: Request) -> Response:
        """Save every file of the ``images`` field and return their IDs."""
        files = request.FILES.getlist("images")
        if not files:
            return Response({"error": "No files uploaded"}, status=status.HTTP_400_BAD_REQUEST)

        storage = get_image_storage()
        try:
            stored = [storage.save(f.name, f.read(), f.content_type) for f in files]
        except OSError as e:
            logger.error("Upload failed", error=str(e))
            return Response(
                {"error": "Failed to upload files"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        logger.info("Images stored", count=len(stored))
        files_data = UploadedFileSerializer([s.to_dict() for s in stored], many=True).data
        return Response({"success": True, "files": files_data})


class GenerateDescriptionView(ListingAPIView):
    """Generate listing copy from uploaded photos."""

    @extend_schema(request=GenerateDescriptionSerializer, responses={200: dict})
    def post(self, request: Request) -> Response:
        """Return title, description and tags written by Gemini."""
        serializer = GenerateDescriptionSerializer(data=request.data)
        if not serializer.is_valid():
            missing_images = "imageIds" in serializer.errors
            headline = "No images provided" if missing_images else "Invalid request"
            return Response(
                {"error": headline, "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = async_to_sync(get_listing_service().describe)(
            serializer.validated_data["image_ids"],
            serializer.to_hints(),
        )
        if isinstance(result, Failure):
            logger.warning("Description generation failed", error=str(result.error))
            return _error_response(result.error)

        return Response({"success": True, "data": result.value.to_dict()})


class ProductCreateView(ShopAPIView):
    """Publish a listing to the authorized shop."""

    @extend_schema(request=CreateProductSerializer, responses={200: dict})
    def post(self, request: Request) -> Response:
        """Upload the images to Shopee and create the item."""
        credentials = self.get_credentials(request)
        if credentials is None:
            return self.not_authenticated()

        serializer = CreateProductSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {"error": "Missing required fields", "details": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = async_to_sync(get_listing_service().publish)(
            credentials,
            serializer.to_request(),
        )
        if isinstance(result, Failure):
            logger.error("Product creation failed", error=str(result.error))
            if result.error.kind is ListingErrorKind.VALIDATION:
                return _error_response(result.error)
            return _error_response(result.error, "Failed to create product")

        return Response({"success": True, "data": result.value.to_dict()})


class CategoriesView(ShopAPIView):
    """Shopee category list for the category picker."""

    @extend_schema(responses={200: CategorySerializer(many=True)})
    def get(self, request: Request) -> Response:
        """Return the categories in the requested language."""
        credentials = self.get_credentials(request)
        if credentials is None:
            return self.not_authenticated()

        language = request.query_params.get("language", "zh-hant")
        result = async_to_sync(get_listing_service().categories)(credentials, language)
        if isinstance(result, Failure):
            return _error_response(result.error)

        data = CategorySerializer([c.to_dict() for c in result.value], many=True).data
        return Response({"success": True, "data": data})


class CategoryAttributesView(ShopAPIView):
    """Attribute schema of a Shopee category."""

    @extend_schema(responses={200: dict})
    def get(self, request: Request, category_id: int) -> Response:
        """Return the attributes Shopee expects for the category."""
        credentials = self.get_credentials(request)
        if credentials is None:
            return self.not_authenticated()

        result = async_to_sync(get_listing_service().category_attributes)(
            credentials,
            category_id,
        )
        if isinstance(result, Failure):
            return _error_response(result.error)

        return Response({"success": True, "data": result.value})
