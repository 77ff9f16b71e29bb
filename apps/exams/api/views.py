from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from ..models import Assessment, Skill
from ..service_utils import assignments as assignment_service
from ..service_utils import sessions as session_service
from .permissions import IsExamSessionHolder, remember_exam_session
from .serializers import (
    AnswerInputSerializer,
    AssessmentSerializer,
    AssignmentCreateSerializer,
    AssignmentSerializer,
    AssignmentStudentRowSerializer,
    AssignmentStudentSerializer,
    ExamAnswerSerializer,
    ExamDataSerializer,
    SkillSerializer,
    StudentLoginSerializer,
)


class SkillListView(generics.ListAPIView):
    queryset = Skill.objects.all()
    serializer_class = SkillSerializer
    permission_classes = [permissions.IsAdminUser]


class AssessmentListView(generics.ListAPIView):
    queryset = Assessment.objects.prefetch_related("requirements__skill")
    serializer_class = AssessmentSerializer
    permission_classes = [permissions.IsAdminUser]


class AssignmentListCreateView(APIView):
    """List assignments or issue an assessment to a filtered cohort."""

    permission_classes = [permissions.IsAdminUser]

    def get(self, request, *args, **kwargs):
        serializer = AssignmentSerializer(assignment_service.list_assignments(), many=True)
        return Response(serializer.data)

    def post(self, request, *args, **kwargs):
        serializer = AssignmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        assignment = assignment_service.create_assignment(
            serializer.validated_data["name"],
            serializer.validated_data["assessment_id"],
            serializer.to_cohort(),
        )
        return Response(AssignmentSerializer(assignment).data, status=status.HTTP_201_CREATED)


class AssignmentDetailView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def get(self, request, assignment_id: int, *args, **kwargs):
        assignment = assignment_service.get_assignment_or_404(assignment_id)
        return Response(AssignmentSerializer(assignment).data)

    def delete(self, request, assignment_id: int, *args, **kwargs):
        assignment_service.delete_assignment(assignment_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AssignmentStudentListView(APIView):
    """Roster of an assignment with access codes and attendance."""

    permission_classes = [permissions.IsAdminUser]

    def get(self, request, assignment_id: int, *args, **kwargs):
        rows = assignment_service.list_assignment_students(assignment_id)
        return Response(AssignmentStudentRowSerializer(rows, many=True).data)


class ExamLoginView(APIView):
    """Authenticate a student by email and access code."""

    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        serializer = StudentLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = session_service.student_login(**serializer.validated_data)
        remember_exam_session(request, session.pk)
        return Response(AssignmentStudentSerializer(session).data)


class ExamDataView(APIView):
    """Start or resume the exam and return questions with saved answers."""

    permission_classes = [IsExamSessionHolder]

    def get(self, request, assignment_student_id: int, *args, **kwargs):
        exam_data = session_service.get_exam_data(assignment_student_id)
        return Response(ExamDataSerializer(exam_data, context={"request": request}).data)


class ExamAnswerView(APIView):
    """Save (or overwrite) the answer to one question."""

    permission_classes = [IsExamSessionHolder]

    def put(self, request, assignment_student_id: int, question_id: int, *args, **kwargs):
        serializer = AnswerInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        answer = session_service.save_answer(
            assignment_student_id,
            question_id,
            serializer.validated_data["answer"],
        )
        return Response(ExamAnswerSerializer(answer).data)


class ExamFinalizeView(APIView):
    """Submit the exam; repeated calls return the already finalized session."""

    permission_classes = [IsExamSessionHolder]

    def post(self, request, assignment_student_id: int, *args, **kwargs):
        session = session_service.finalize_exam(assignment_student_id)
        return Response(AssignmentStudentSerializer(session).data)
