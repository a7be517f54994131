# billing/urls.py

from django.urls import path
from . import views

app_name = 'billing'

urlpatterns = [
    # Medicines
    path('medicine', views.MedicineListView.as_view(), name='medicine_list'),
    path('medicine/<int:pk>', views.MedicineDetailView.as_view(), name='medicine_detail'),

    # Invoices
    path('invoice', views.InvoiceListView.as_view(), name='invoice_list'),
    path('invoice/<int:pk>', views.InvoiceDetailView.as_view(), name='invoice_detail'),
    path('invoice/<int:pk>/payment', views.invoice_payment_view, name='invoice_payment'),

    # Medicine cost of an appointment's prescriptions, used when drafting an invoice
    path('appointment/<int:pk>/prescription-cost', views.prescription_cost_view, name='prescription_cost'),
    path('invoice/appointment/<int:pk>/prescription-cost', views.prescription_cost_view, name='invoice_prescription_cost'),
]
