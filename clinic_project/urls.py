# clinic_project/urls.py

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # JSON API, one URLconf per app
    path('api/', include('core.urls')),
    path('api/', include('patients.urls')),
    path('api/', include('staff.urls')),
    path('api/', include('appointments.urls')),
    path('api/', include('medical_records.urls')),
    path('api/', include('billing.urls')),
]

# Unknown routes and unhandled errors answer with the JSON envelope.
handler404 = 'core.views.route_not_found_view'
handler500 = 'core.views.server_error_view'
