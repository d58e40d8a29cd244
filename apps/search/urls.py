from django.urls import path
from . import views

app_name = 'search'

urlpatterns = [
    # POST /api/search/  - {"query": "..."}
    path('', views.search, name='search'),
]
