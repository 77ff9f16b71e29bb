from django import forms
from django.contrib import admin

from .models import (
    Assessment,
    AssessmentSkill,
    Assignment,
    AssignmentAnswer,
    AssignmentStudent,
    Question,
    Skill,
    StudentLog,
)
from .service_utils import assignments as assignment_service


class QuestionAdminForm(forms.ModelForm):
    payload = forms.JSONField(
        required=False,
        widget=forms.Textarea(attrs={"rows": 8, "cols": 80}),
        help_text=(
            "Shape depends on the type. For example: "
            '{"options": ["a", "b", "c", "d"], "correct_option": 2} or '
            '{"expected_answer": "55"}.'
        ),
    )

    class Meta:
        model = Question
        fields = "__all__"


class QuestionInline(admin.TabularInline):
    model = Question
    form = QuestionAdminForm
    extra = 0
    fields = ("question", "type", "payload")


@admin.register(Skill)
class SkillAdmin(admin.ModelAdmin):
    list_display = ("name", "description")
    search_fields = ("name",)
    inlines = [QuestionInline]


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    form = QuestionAdminForm
    list_display = ("id", "skill", "type", "question")
    list_filter = ("type", "skill")
    search_fields = ("question",)


class AssessmentSkillInline(admin.TabularInline):
    model = AssessmentSkill
    extra = 1
    fields = ("order", "skill", "question_count", "pick")


@admin.register(Assessment)
class AssessmentAdmin(admin.ModelAdmin):
    list_display = ("name", "duration", "max_questions")
    search_fields = ("name",)
    inlines = [AssessmentSkillInline]

    @admin.display(description="Max questions")
    def max_questions(self, obj: Assessment) -> int:
        return obj.max_questions


class AssignmentStudentInline(admin.TabularInline):
    model = AssignmentStudent
    extra = 0
    can_delete = False
    fields = ("student", "code", "attended", "start_time", "end_time")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ("name", "assessment", "date", "total_students", "attendees")
    list_filter = ("assessment", "date")
    search_fields = ("name",)
    readonly_fields = ("total_students", "attendees")
    inlines = [AssignmentStudentInline]

    def has_add_permission(self, request):
        # Sessions are generated together with the assignment by the API
        return False

    def get_deleted_objects(self, objs, request):
        deleted, model_count, _perms_needed, protected = super().get_deleted_objects(
            objs, request
        )
        # Sessions and answers are removed by delete_assignment, not by their own admins
        return deleted, model_count, set(), protected

    def delete_model(self, request, obj):
        assignment_service.delete_assignment(obj.pk)

    def delete_queryset(self, request, queryset):
        for assignment_id in list(queryset.values_list("pk", flat=True)):
            assignment_service.delete_assignment(assignment_id)


@admin.register(AssignmentStudent)
class AssignmentStudentAdmin(admin.ModelAdmin):
    list_display = ("student", "assignment", "code", "attended", "start_time", "end_time")
    list_filter = ("attended", "assignment")
    search_fields = ("student__name", "student__email", "code")
    readonly_fields = ("assignment", "student", "code", "attended", "start_time", "end_time")

    def has_add_permission(self, request):
        return False

    # Sessions go away only with their assignment
    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AssignmentAnswer)
class AssignmentAnswerAdmin(admin.ModelAdmin):
    list_display = ("assignment_student", "question", "answer_time")
    list_filter = ("assignment_student__assignment",)
    readonly_fields = ("assignment_student", "question", "answer", "answer_time")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(StudentLog)
class StudentLogAdmin(admin.ModelAdmin):
    list_display = ("datetime", "student", "event", "assignment_id")
    list_filter = ("event",)
    search_fields = ("student__email",)

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
