from django.urls import path
from . import views

app_name = 'projects'

urlpatterns = [
    # GET  /api/projects/details/ - Project details + effective constants
    # POST /api/projects/details/ - Create or update by project code
    path('details/', views.project_details, name='details'),
]
