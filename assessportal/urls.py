"""
URL configuration for assessportal project.

The admin site manages skills, questions and assessments; the JSON API under
``/api/`` serves the assignment console and the student exam client.
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('students.urls')),
    path('', include('apps.exams.api.urls')),
]
