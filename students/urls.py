from django.urls import path

from .views import StudentImportView, StudentListView

app_name = "students"

urlpatterns = [
    path("api/students/", StudentListView.as_view(), name="student-list"),
    path("api/students/import/", StudentImportView.as_view(), name="student-import"),
]
