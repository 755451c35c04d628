# /tests/test_form_flow.py

import pytest

from edudesk.console.flows.delete import DeleteFlow
from edudesk.console.flows.form import FormFlow, FormState
from edudesk.console.flows.login import LoginFlow
from edudesk.console.resources import COURSES, STUDENTS
from edudesk.schemas.course import Course
from edudesk.schemas.student import Student
from edudesk.state.session import SessionState

NEW_STUDENT = {
    "student_id": "STU2025001",
    "first_name": "Neha",
    "last_name": "Kulkarni",
    "email": "neha@college.edu",
    "department": "CMPN",
    "current_year": "1",
}


def fill(flow, values):
    for name, value in values.items():
        assert flow.set_field(name, value) is True


# --- Create / edit ---

@pytest.mark.asyncio
async def test_nothing_is_sent_before_submit(http, backend):
    flow = FormFlow(http, STUDENTS)
    flow.open_create()
    fill(flow, NEW_STUDENT)
    flow.cancel()
    assert backend.calls == []
    assert flow.state is FormState.CLOSED and flow.draft == {}


@pytest.mark.asyncio
async def test_create_omits_blank_status(http, backend, mocker):
    refresh = mocker.AsyncMock()
    flow = FormFlow(http, STUDENTS, on_success=refresh)
    flow.open_create()
    fill(flow, {**NEW_STUDENT, "status": ""})

    assert await flow.submit() is True
    assert flow.state is FormState.CLOSED
    assert flow.notice == "Student added successfully"
    refresh.assert_awaited_once()

    created = backend.students[-1]
    assert created["current_year"] == 1
    assert created["status"] == "Active"
    assert backend.calls == [("POST", "/api/students")]


@pytest.mark.asyncio
async def test_missing_required_fields_fail_fast(http, backend):
    flow = FormFlow(http, STUDENTS)
    flow.open_create()
    fill(flow, {"student_id": "STU2025001", "first_name": "  "})

    assert flow.can_submit is False
    assert await flow.submit() is False
    assert flow.error.startswith("Please fill in the required fields: First name, Last name")
    assert flow.state is FormState.OPEN
    assert backend.calls == []


@pytest.mark.asyncio
async def test_local_coercion_error_names_the_field(http, backend):
    flow = FormFlow(http, STUDENTS)
    flow.open_create()
    fill(flow, {**NEW_STUDENT, "current_year": "first"})

    assert await flow.submit() is False
    assert flow.error.startswith("Year:")
    assert backend.calls == []


@pytest.mark.asyncio
async def test_server_rejection_keeps_draft(http, backend, mocker):
    refresh = mocker.AsyncMock()
    flow = FormFlow(http, STUDENTS, on_success=refresh)
    flow.open_create()
    fill(flow, {**NEW_STUDENT, "student_id": "STU2024001"})

    assert await flow.submit() is False
    assert flow.state is FormState.OPEN
    assert flow.error == "Student ID already exists"
    assert flow.draft["student_id"] == "STU2024001"
    assert flow.draft["first_name"] == "Neha"
    refresh.assert_not_awaited()


@pytest.mark.asyncio
async def test_network_failure_uses_generic_message(http, backend):
    backend.drop("POST", "/api/students")
    flow = FormFlow(http, STUDENTS)
    flow.open_create()
    fill(flow, NEW_STUDENT)

    assert await flow.submit() is False
    assert flow.error == "Failed to save. Please try again."
    assert flow.is_open


@pytest.mark.asyncio
async def test_submit_is_ignored_while_submitting(http, backend):
    flow = FormFlow(http, STUDENTS)
    flow.open_create()
    fill(flow, NEW_STUDENT)
    flow.state = FormState.SUBMITTING

    assert await flow.submit() is False
    assert flow.set_field("first_name", "Other") is False
    assert flow.cancel() is False
    assert backend.calls == []


@pytest.mark.asyncio
async def test_edit_puts_without_primary_key(http, backend):
    flow = FormFlow(http, STUDENTS)
    flow.open_edit(Student.model_validate(backend.students[1]))

    assert flow.set_field("student_id", "STU9999") is False
    fill(flow, {"email": "rohan.m@college.edu", "status": "Alumni"})

    assert await flow.submit() is True
    assert backend.calls == [("PUT", "/api/students/STU2024002")]
    updated = backend.students[1]
    assert updated["student_id"] == "STU2024002"
    assert updated["email"] == "rohan.m@college.edu"
    assert updated["status"] == "Alumni"


@pytest.mark.asyncio
async def test_course_edit(http, backend):
    flow = FormFlow(http, COURSES)
    flow.open_edit(Course.model_validate(backend.courses[0]))
    fill(flow, {"credit_hours": "3"})

    assert await flow.submit() is True
    assert backend.courses[0]["credit_hours"] == 3
    assert backend.courses[0]["course_id"] == "CS301"


@pytest.mark.asyncio
async def test_result_after_detach_is_discarded(http, backend, mocker):
    refresh = mocker.AsyncMock()
    flow = FormFlow(http, STUDENTS, on_success=refresh)
    flow.open_create()
    fill(flow, NEW_STUDENT)
    flow.detach()

    assert await flow.submit() is True
    refresh.assert_not_awaited()


# --- Delete ---

@pytest.mark.asyncio
async def test_delete_rejected_shows_exact_message(http, backend, mocker):
    refresh = mocker.AsyncMock()
    flow = DeleteFlow(http, STUDENTS, on_success=refresh)
    flow.open_for(Student.model_validate(backend.students[0]))

    assert await flow.submit() is False
    assert flow.error == "Cannot delete student with existing enrollment records"
    assert flow.is_open
    assert len(backend.students) == 2
    refresh.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_success(http, backend, mocker):
    refresh = mocker.AsyncMock()
    flow = DeleteFlow(http, STUDENTS, on_success=refresh)
    flow.open_for(Student.model_validate(backend.students[1]), "Rohan Mehta")

    assert flow.target_label == "Rohan Mehta"
    assert await flow.submit() is True
    assert backend.calls == [("DELETE", "/api/students/STU2024002")]
    refresh.assert_awaited_once()


# --- Login ---

@pytest.mark.asyncio
async def test_login_persists_user_with_role(http, backend, empty_session, mocker):
    on_login = mocker.AsyncMock()
    flow = LoginFlow(http, empty_session, on_login=on_login)
    fill(flow, {"userId": "STU2024001", "password": "secret"})

    assert await flow.submit() is True
    assert empty_session.state is SessionState.ACTIVE
    assert empty_session.user.role == "student"
    assert empty_session.user.student_id == "STU2024001"
    on_login.assert_awaited_once_with(empty_session.user)

    stored = await empty_session.store.load()
    assert '"role": "student"' in stored


@pytest.mark.asyncio
async def test_login_failure_shows_server_message(http, backend, empty_session):
    flow = LoginFlow(http, empty_session)
    assert flow.switch_role("admin") is True
    fill(flow, {"userId": "ADM001", "password": "wrong"})

    assert await flow.submit() is False
    assert flow.error == "Invalid credentials"
    assert flow.draft["userId"] == "ADM001"
    assert empty_session.state is SessionState.ABSENT


@pytest.mark.asyncio
async def test_login_role_comes_from_tab(http, empty_session):
    flow = LoginFlow(http, empty_session)
    fill(flow, {"userId": "STU2024001"})
    assert flow.set_field("role", "admin") is False

    flow.switch_role("admin")
    assert flow.role == "admin"
    assert flow.draft["userId"] == ""
    assert flow.switch_role("parent") is False


@pytest.mark.asyncio
async def test_login_response_without_user(http, backend, empty_session):
    backend.fail("POST", "/api/login", status=200, body={"message": "ok"})
    flow = LoginFlow(http, empty_session)
    fill(flow, {"userId": "STU2024001", "password": "secret"})

    assert await flow.submit() is False
    assert flow.error == "Login response did not include a user."
    assert empty_session.state is SessionState.ABSENT


@pytest.mark.asyncio
async def test_unexpected_error_reopens_dialog(http, backend, mocker):
    flow = FormFlow(http, STUDENTS)
    flow.open_create()
    fill(flow, NEW_STUDENT)
    mocker.patch.object(flow, "send", side_effect=RuntimeError("boom"))

    assert await flow.submit() is False
    assert flow.state is FormState.OPEN
    assert flow.error == "Failed to save. Please try again."
    assert flow.draft["student_id"] == "STU2025001"
    assert flow.cancel() is True


@pytest.mark.asyncio
async def test_login_with_unusable_user_record(http, backend, empty_session):
    backend.fail("POST", "/api/login", status=200, body={"user": {"student_id": 2025001}})
    flow = LoginFlow(http, empty_session)
    fill(flow, {"userId": "STU2025001", "password": "secret"})

    assert await flow.submit() is False
    assert flow.state is FormState.OPEN
    assert flow.error == "The server returned an unusable user record."
    assert empty_session.state is SessionState.ABSENT

    # Not stuck: the tabs and a second attempt still work
    backend.clear("POST", "/api/login")
    assert flow.switch_role("student") is True
    fill(flow, {"userId": "STU2024001", "password": "secret"})
    assert await flow.submit() is True


@pytest.mark.asyncio
async def test_login_when_session_store_fails(http, backend, empty_session, mocker):
    mocker.patch.object(empty_session.store, "save", side_effect=OSError("read-only file system"))
    flow = LoginFlow(http, empty_session)
    fill(flow, {"userId": "STU2024001", "password": "secret"})

    assert await flow.submit() is False
    assert flow.state is FormState.OPEN
    assert flow.error == "Could not save your session. Please try again."
    assert empty_session.user is None
    assert flow.cancel() is True
