from rest_framework import permissions

EXAM_SESSION_KEY = "exam_session_ids"


def remember_exam_session(request, assignment_student_id: int) -> None:
    """Bind an exam session to the browser session after a successful login."""

    session_ids = list(request.session.get(EXAM_SESSION_KEY, []))
    if assignment_student_id not in session_ids:
        session_ids.append(assignment_student_id)
    request.session[EXAM_SESSION_KEY] = session_ids


class IsExamSessionHolder(permissions.BasePermission):
    """Allow access only to the exam session this browser logged into."""

    message = "Log in with your access code to open this exam."

    def has_permission(self, request, view):
        assignment_student_id = view.kwargs.get("assignment_student_id")
        if assignment_student_id is None:
            return False
        return int(assignment_student_id) in request.session.get(EXAM_SESSION_KEY, [])
