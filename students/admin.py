from django.contrib import admin

from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "year_of_pass", "stream", "college", "date_of_registration")
    list_filter = ("year_of_pass", "stream", "college")
    search_fields = ("name", "email", "mobile")
