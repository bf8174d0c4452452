"""Supplier URL configuration."""

from django.urls import path

from modules.suppliers.views import SupplierStatisticsView

urlpatterns = [
    path("suppliers/statistics", SupplierStatisticsView.as_view(), name="supplier_statistics"),
]
