from rest_framework import permissions, serializers, status
from rest_framework.response import Response
from rest_framework.views import APIView

from .importing import StudentImportError, import_students
from .models import Student


class StudentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Student
        fields = [
            "id",
            "name",
            "email",
            "mobile",
            "year_of_pass",
            "date_of_registration",
            "stream",
            "college",
        ]
        read_only_fields = fields


class StudentListView(APIView):
    permission_classes = [permissions.IsAdminUser]

    def get(self, request, *args, **kwargs):
        return Response(StudentSerializer(Student.objects.all(), many=True).data)


class StudentImportView(APIView):
    """Accept a CSV roster upload and report created/skipped rows."""

    permission_classes = [permissions.IsAdminUser]

    class InputSerializer(serializers.Serializer):
        file = serializers.FileField()

    def post(self, request, *args, **kwargs):
        serializer = self.InputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = import_students(input_file=serializer.validated_data["file"])
        except StudentImportError as exc:
            raise serializers.ValidationError({"file": [str(exc)]}) from exc
        return Response(
            {
                "processed": result.processed_rows,
                "created": result.created_students,
                "skipped": result.skipped_rows,
                "errors": result.errors,
            },
            status=status.HTTP_201_CREATED,
        )
