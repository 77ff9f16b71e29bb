from django.urls import path

from .views import (
    AssessmentListView,
    AssignmentDetailView,
    AssignmentListCreateView,
    AssignmentStudentListView,
    ExamAnswerView,
    ExamDataView,
    ExamFinalizeView,
    ExamLoginView,
    SkillListView,
)

app_name = "exams"

urlpatterns = [
    path("api/skills/", SkillListView.as_view(), name="skill-list"),
    path("api/assessments/", AssessmentListView.as_view(), name="assessment-list"),
    path("api/assignments/", AssignmentListCreateView.as_view(), name="assignment-list"),
    path(
        "api/assignments/<int:assignment_id>/",
        AssignmentDetailView.as_view(),
        name="assignment-detail",
    ),
    path(
        "api/assignments/<int:assignment_id>/students/",
        AssignmentStudentListView.as_view(),
        name="assignment-students",
    ),
    path("api/exam/login/", ExamLoginView.as_view(), name="exam-login"),
    path("api/exam/<int:assignment_student_id>/", ExamDataView.as_view(), name="exam-data"),
    path(
        "api/exam/<int:assignment_student_id>/answers/<int:question_id>/",
        ExamAnswerView.as_view(),
        name="exam-answer",
    ),
    path(
        "api/exam/<int:assignment_student_id>/finalize/",
        ExamFinalizeView.as_view(),
        name="exam-finalize",
    ),
]
