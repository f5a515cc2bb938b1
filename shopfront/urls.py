from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static

# Main URL configuration
urlpatterns = [
    path('', include('storefront.urls')),
]

# Static during debug
if settings.DEBUG:
    urlpatterns += [
        path("__reload__/", include("django_browser_reload.urls")),
    ]
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
