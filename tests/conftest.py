# /tests/conftest.py

import copy
import json

import httpx
import pytest
import pytest_asyncio

from edudesk.core.http import ApiClient
from edudesk.state.session import MemorySessionStore, SessionContext

BASE_URL = "http://backend.test"

STUDENTS = [
    {"student_id": "STU2024001", "first_name": "Asha", "last_name": "Rao", "email": "asha@college.edu",
     "department": "CMPN", "current_year": 3, "status": "Active"},
    {"student_id": "STU2024002", "first_name": "Rohan", "last_name": "Mehta", "email": "rohan@college.edu",
     "department": "IT", "current_year": 2, "status": "Inactive"},
]

COURSES = [
    {"course_id": "CS301", "course_name": "Operating Systems", "credit_hours": 4, "faculty_name": "Dr. Iyer",
     "department": "CMPN", "schedule": "Mon 10:00", "status": "Active", "enrollmentCount": 42},
    {"course_id": "IT205", "course_name": "Computer Networks", "credit_hours": 3, "faculty_name": "Prof. Shah",
     "department": "IT", "schedule": "Wed 14:00", "status": "Inactive", "enrollmentCount": 18},
]

SEMESTERS = [{"semester_id": n, "semester_name": f"Semester {n}"} for n in range(1, 9)]


class FakeBackend:
    """In-memory records backend answering through httpx.MockTransport.

    Keeps a call log so tests can assert what did (or did not) hit the wire.
    ``fail()`` overrides one route with a canned error, ``drop()`` makes it a
    network failure.
    """

    def __init__(self):
        self.students = copy.deepcopy(STUDENTS)
        self.courses = copy.deepcopy(COURSES)
        self.enrollments = [{"student_id": "STU2024001", "course_id": "CS301", "semester_id": 5}]
        self.calls = []
        self.overrides = {}

    # --- Test controls ---

    def fail(self, method, path, status=500, body=None):
        self.overrides[(method, path)] = ("status", status, body)

    def drop(self, method, path):
        self.overrides[(method, path)] = ("network", None, None)

    def clear(self, method, path):
        self.overrides.pop((method, path), None)

    def called(self, method, path):
        return sum(1 for c in self.calls if c == (method, path))

    def paths(self):
        return [path for _, path in self.calls]

    # --- Transport ---

    def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.calls.append((method, path))
        body = json.loads(request.content) if request.content else None

        override = self.overrides.get((method, path))
        if override:
            kind, status, payload = override
            if kind == "network":
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(status, json=payload) if payload is not None else httpx.Response(status)

        return self.route(method, path, body)

    def route(self, method, path, body):
        parts = path.strip("/").split("/")

        if path == "/api/login" and method == "POST":
            if body.get("password") != "secret":
                return httpx.Response(401, json={"message": "Invalid credentials"})
            if body["role"] == "admin":
                return httpx.Response(200, json={"user": {"admin_id": body["userId"], "first_name": "Meera"}})
            student = self._student(body["userId"])
            if student is None:
                return httpx.Response(401, json={"message": "Invalid credentials"})
            return httpx.Response(200, json={"user": dict(student)})

        if path == "/api/students":
            if method == "GET":
                return httpx.Response(200, json=self.students)
            if self._student(body["student_id"]):
                return httpx.Response(400, json={"message": "Student ID already exists"})
            self.students.append({"status": "Active", **body})
            return httpx.Response(201, json={"message": "Student added successfully"})

        if parts[:2] == ["api", "students"] and len(parts) == 3:
            student = self._student(parts[2])
            if student is None:
                return httpx.Response(404, json={"message": "Student not found"})
            if method == "GET":
                return httpx.Response(200, json={"student": student, "sgpa": "8.12"})
            if method == "PUT":
                student.update(body)
                return httpx.Response(200, json={"message": "Student updated successfully"})
            if method == "DELETE":
                if any(e["student_id"] == parts[2] for e in self.enrollments):
                    return httpx.Response(
                        400, json={"message": "Cannot delete student with existing enrollment records"}
                    )
                self.students.remove(student)
                return httpx.Response(200, json={"message": "Student deleted successfully"})

        if path == "/api/stats/average-gpa":
            return httpx.Response(200, json={"averageSgpa": "7.85"})

        if path == "/api/admin/dashboard-stats":
            return httpx.Response(200, json={
                "totalStudents": len(self.students), "activeCourses": 1,
                "facultyMembers": 12, "averageAttendance": "86.4",
            })

        if path == "/api/admin/courses-overview":
            return httpx.Response(200, json={
                "stats": {"totalCourses": len(self.courses), "activeCourses": 1, "totalEnrollment": 60},
                "courses": self.courses,
            })

        if path == "/api/courses" and method == "POST":
            self.courses.append({"enrollmentCount": 0, "status": "Active", **body})
            return httpx.Response(201, json=body)

        if parts[:2] == ["api", "courses"] and len(parts) == 3:
            course = next((c for c in self.courses if c["course_id"] == parts[2]), None)
            if course is None:
                return httpx.Response(404, json={"message": "Course not found"})
            if method == "PUT":
                course.update(body)
                return httpx.Response(200, json=course)
            if method == "DELETE":
                self.courses.remove(course)
                return httpx.Response(200, json={"message": "Course deleted successfully"})

        if path == "/api/enrollment-data":
            return httpx.Response(200, json={"courses": self.courses, "semesters": SEMESTERS})

        if path == "/api/enrollments" and method == "POST":
            self.enrollments.append(body)
            return httpx.Response(201, json={"message": "Student enrolled successfully"})

        if path == "/api/admin/reports-data":
            return httpx.Response(200, json={
                "keyMetrics": {"totalEnrollment": 60, "averageGpa": "7.85"},
                "enrollmentTrend": [{"month": "Jan", "students": 40}, {"month": "Feb", "students": 60}],
                "weeklyAttendance": [{"day": "Mon", "percentage": 91.5}],
                "departmentDistribution": [{"name": "CMPN", "value": 1}, {"name": "IT", "value": 1}],
                "performanceDistribution": [{"range": "8-10", "students": 1}],
            })

        if parts[:2] == ["api", "grades"]:
            return httpx.Response(200, json={
                "summary": {"currentSgpa": "8.12", "totalCredits": 7, "coursesPassed": 1,
                            "totalCourses": 2, "averageScore": 78.5},
                "details": [
                    {"course_id": "CS301", "course_name": "Operating Systems", "credit_hours": 4,
                     "numeric_score": 78.5, "letter_grade": "B+"},
                    {"course_id": "IT205", "course_name": "Computer Networks", "credit_hours": 3,
                     "numeric_score": None, "letter_grade": None},
                ],
            })

        if parts[:2] == ["api", "attendance"]:
            return httpx.Response(200, json={
                "summary": None,
                "details": [
                    {"course_id": "CS301", "course_name": "Operating Systems", "total_classes": 10,
                     "present": 8, "absent": 1, "late": 1},
                ],
                "recent": [
                    {"class_date": "2025-01-10", "course_id": "CS301", "course_name": "Operating Systems",
                     "status": "Present"},
                ],
            })

        return httpx.Response(404, json={"message": f"No route for {method} {path}"})

    def _student(self, student_id):
        return next((s for s in self.students if s["student_id"] == student_id), None)


# --- Fixtures ---

@pytest.fixture
def backend():
    """A fresh fake backend per test."""
    return FakeBackend()


@pytest_asyncio.fixture
async def http(backend):
    """ApiClient wired to the fake backend instead of the network."""
    client = ApiClient(BASE_URL, transport=httpx.MockTransport(backend.handler))
    yield client
    await client.close()


@pytest.fixture
def admin_session():
    store = MemorySessionStore({"role": "admin", "admin_id": "ADM001", "first_name": "Meera"})
    return SessionContext(store)


@pytest.fixture
def student_session():
    store = MemorySessionStore({**STUDENTS[0], "role": "student"})
    return SessionContext(store)


@pytest.fixture
def empty_session():
    return SessionContext(MemorySessionStore())
