# core/urls.py

from django.urls import path
from . import views

app_name = 'core'

urlpatterns = [
    path('test', views.api_status_view, name='api_status'),
    path('test/db', views.database_status_view, name='database_status'),
    path('query', views.sql_console_view, name='sql_console'),
]
