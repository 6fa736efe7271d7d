"""URL configuration for the listings API."""

from django.urls import URLPattern, path

from apps.listings import views

app_name = "listings"

urlpatterns: list[URLPattern] = [
    # Shopee OAuth
    path("auth/shopee/", views.ShopeeAuthorizeView.as_view(), name="shopee_authorize"),
    path("auth/shopee/callback/", views.ShopeeCallbackView.as_view(), name="shopee_callback"),
    path("auth/shopee/refresh/", views.ShopeeRefreshView.as_view(), name="shopee_refresh"),
    # Photos and AI copy
    path("upload/", views.UploadView.as_view(), name="upload"),
    path("ai/generate/", views.GenerateDescriptionView.as_view(), name="ai_generate"),
    # Products
    path("product/create/", views.ProductCreateView.as_view(), name="product_create"),
    path("product/categories/", views.CategoriesView.as_view(), name="categories"),
    path(
        "product/categories/<int:category_id>/attributes/",
        views.CategoryAttributesView.as_view(),
        name="category_attributes",
    ),
]
