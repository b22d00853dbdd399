"""Root URL configuration — all API routes are versioned under /api/v1/."""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/v1/auth/", include("apps.accounts.urls")),
    path("api/v1/", include("apps.profiles.urls")),
]

# Uploaded photos are served from MEDIA_URL (a no-op when DEBUG is off;
# production serves /uploads/ from the reverse proxy).
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
