# medical_records/urls.py

from django.urls import path
from . import views

app_name = 'medical_records'

urlpatterns = [
    path('medicalrecords', views.MedicalRecordListView.as_view(), name='record_list'),
    path('medicalrecords/<int:pk>', views.MedicalRecordDetailView.as_view(), name='record_detail'),

    # Prescriptions are created with their items in one request.
    path('prescription', views.prescription_list_view, name='prescription_list'),
    path('prescription/<int:pk>', views.prescription_detail_view, name='prescription_detail'),
]
