from rest_framework import serializers

from students.models import Student

from ..models import (
    Assessment,
    AssessmentSkill,
    Assignment,
    AssignmentAnswer,
    AssignmentStudent,
    Question,
    Skill,
)
from ..service_utils import sessions as session_service
from ..service_utils.cohort import CohortFilter
from ..utils.rendering import render_question_text


class SkillSerializer(serializers.ModelSerializer):
    questions_count = serializers.IntegerField(source="questions.count", read_only=True)

    class Meta:
        model = Skill
        fields = ["id", "name", "description", "questions_count"]


class AssessmentSkillSerializer(serializers.ModelSerializer):
    skill_name = serializers.CharField(source="skill.name", read_only=True)

    class Meta:
        model = AssessmentSkill
        fields = ["skill", "skill_name", "question_count", "pick", "order"]
        read_only_fields = fields


class AssessmentSerializer(serializers.ModelSerializer):
    requirements = AssessmentSkillSerializer(many=True, read_only=True)
    max_questions = serializers.IntegerField(read_only=True)

    class Meta:
        model = Assessment
        fields = ["id", "name", "description", "duration", "max_questions", "requirements"]
        read_only_fields = fields


class AssignmentSerializer(serializers.ModelSerializer):
    assessment_name = serializers.CharField(source="assessment.name", read_only=True)

    class Meta:
        model = Assignment
        fields = [
            "id",
            "name",
            "date",
            "assessment",
            "assessment_name",
            "filter_year_of_pass",
            "filter_stream",
            "filter_college",
            "filter_date_of_registration",
            "total_students",
            "attendees",
        ]
        read_only_fields = fields


class AssignmentCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    assessment_id = serializers.IntegerField()
    year_of_pass = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    stream = serializers.ChoiceField(
        choices=Student.Stream.choices, required=False, allow_blank=True
    )
    college = serializers.CharField(required=False, allow_blank=True, max_length=255)
    date_of_registration = serializers.DateField(required=False, allow_null=True)

    def to_cohort(self) -> CohortFilter:
        data = self.validated_data
        return CohortFilter(
            year_of_pass=data.get("year_of_pass"),
            stream=data.get("stream") or None,
            college=data.get("college") or None,
            date_of_registration=data.get("date_of_registration"),
        )


class AssignmentStudentRowSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    student_id = serializers.IntegerField()
    student_name = serializers.CharField()
    student_email = serializers.EmailField()
    code = serializers.CharField()
    attended = serializers.BooleanField()
    start_time = serializers.DateTimeField(allow_null=True)
    end_time = serializers.DateTimeField(allow_null=True)


class AssignmentStudentSerializer(serializers.ModelSerializer):
    state = serializers.CharField(read_only=True)

    class Meta:
        model = AssignmentStudent
        fields = [
            "id",
            "assignment",
            "student",
            "attended",
            "start_time",
            "end_time",
            "state",
        ]
        read_only_fields = fields


class StudentLoginSerializer(serializers.Serializer):
    assignment_id = serializers.IntegerField()
    email = serializers.CharField(max_length=254)
    code = serializers.CharField(max_length=32)


class ExamQuestionSerializer(serializers.ModelSerializer):
    """Question as shown to the student: no correct option, answer or solution."""

    skill_name = serializers.CharField(source="skill.name", read_only=True)
    question_html = serializers.SerializerMethodField()
    payload = serializers.SerializerMethodField()

    class Meta:
        model = Question
        fields = ["id", "skill", "skill_name", "type", "question", "question_html", "payload"]
        read_only_fields = fields

    def get_question_html(self, obj: Question) -> str:
        return str(render_question_text(obj.question))

    def get_payload(self, obj: Question) -> dict:
        return obj.parsed_payload.public_dict()


class ExamAnswerSerializer(serializers.ModelSerializer):
    class Meta:
        model = AssignmentAnswer
        fields = ["id", "assignment_student", "question", "answer", "answer_time"]
        read_only_fields = fields


class AnswerInputSerializer(serializers.Serializer):
    answer = serializers.CharField(allow_blank=True, trim_whitespace=False)


class ExamDataSerializer(serializers.Serializer):
    assignment_student = AssignmentStudentSerializer(read_only=True)
    assignment = AssignmentSerializer(read_only=True)
    assessment = AssessmentSerializer(read_only=True)
    student = serializers.SerializerMethodField()
    questions = ExamQuestionSerializer(many=True, read_only=True)
    answers = ExamAnswerSerializer(many=True, read_only=True)
    time_left = serializers.SerializerMethodField()

    def get_student(self, obj) -> dict:
        return {"id": obj.student.id, "name": obj.student.name, "email": obj.student.email}

    def get_time_left(self, obj):
        remaining = session_service.time_left(obj.assignment_student)
        if remaining is None:
            return None
        return int(remaining.total_seconds())


__all__ = [
    "AnswerInputSerializer",
    "AssessmentSerializer",
    "AssessmentSkillSerializer",
    "AssignmentCreateSerializer",
    "AssignmentSerializer",
    "AssignmentStudentRowSerializer",
    "AssignmentStudentSerializer",
    "ExamAnswerSerializer",
    "ExamDataSerializer",
    "ExamQuestionSerializer",
    "SkillSerializer",
    "StudentLoginSerializer",
]
