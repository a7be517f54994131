# appointments/urls.py

from django.urls import path
from . import views

app_name = 'appointments'

urlpatterns = [
    path('appointments', views.appointment_list_view, name='appointment_list'),
    path('appointments/date/<str:day>', views.appointments_by_date_view, name='appointments_by_date'),
    path('appointments/<int:pk>', views.appointment_detail_view, name='appointment_detail'),
    path('appointments/<int:pk>/status', views.appointment_status_view, name='appointment_status'),

    path('rooms', views.RoomListView.as_view(), name='room_list'),
    path('rooms/<int:pk>', views.RoomDetailView.as_view(), name='room_detail'),
]
