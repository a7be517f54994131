# staff/urls.py

from django.urls import path
from . import views

app_name = 'staff'

urlpatterns = [
    path('staff', views.StaffListView.as_view(), name='staff_list'),
    path('staff/<int:pk>', views.StaffDetailView.as_view(), name='staff_detail'),
    path('roles', views.RoleListView.as_view(), name='role_list'),
    path('roles/<int:pk>', views.RoleDetailView.as_view(), name='role_detail'),
    path('specializations', views.SpecializationListView.as_view(), name='specialization_list'),
    path('specializations/<int:pk>', views.SpecializationDetailView.as_view(), name='specialization_detail'),
    path('doctors', views.DoctorListView.as_view(), name='doctor_list'),
    path('doctors/<int:pk>', views.DoctorDetailView.as_view(), name='doctor_detail'),
]
