# edudesk/schemas/student.py
from enum import Enum

from pydantic import BaseModel, ConfigDict


class Department(str, Enum):
    CMPN = "CMPN"
    IT = "IT"
    EXCS = "EXCS"
    EXTC = "EXTC"


class StudentStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ALUMNI = "Alumni"


class Student(BaseModel):
    model_config = ConfigDict(extra="allow")

    student_id: str
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    department: str | None = None
    current_year: int | None = None
    status: str = StudentStatus.ACTIVE.value

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class StudentCreate(BaseModel):
    student_id: str
    first_name: str
    last_name: str
    email: str
    department: Department
    current_year: int
    # Left out of the payload when blank, the backend defaults it to Active
    status: StudentStatus | None = None


class StudentUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    department: Department | None = None
    current_year: int | None = None
    status: StudentStatus | None = None


class StudentDetail(BaseModel):
    student: Student
    sgpa: str | float | None = None


class AverageGpa(BaseModel):
    averageSgpa: str | float | None = None
