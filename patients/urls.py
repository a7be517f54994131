# patients/urls.py

from django.urls import path
from . import views

app_name = 'patients'

urlpatterns = [
    path('patients', views.PatientListView.as_view(), name='patient_list'),
    path('patients/<str:pk>', views.PatientDetailView.as_view(), name='patient_detail'),
]
