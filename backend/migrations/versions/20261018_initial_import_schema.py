"""Initial schema: people, taxonomy, classes with rosters and weekly schedules

Revision ID: 20261018_initial_import_schema
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_initial_import_schema"
down_revision = None
branch_labels = None
depends_on = None


def _inspector():
    return sa.inspect(op.get_bind())


def _has_table(table_name):
    return table_name in _inspector().get_table_names()


def upgrade():
    if not _has_table("Department"):
        op.create_table(
            "Department",
            sa.Column("DepartmentID", sa.Integer(), primary_key=True),
            sa.Column("DepartmentName", sa.String(length=100), nullable=False, unique=True),
        )

    if not _has_table("Users"):
        op.create_table(
            "Users",
            sa.Column("UserID", sa.Integer(), primary_key=True),
            sa.Column("Email", sa.String(length=120), nullable=False, unique=True),
            sa.Column("FullName", sa.String(length=120), nullable=False),
            sa.Column("Role", sa.String(length=20), nullable=False),
            sa.Column("password_hash", sa.String(length=256), nullable=True),
            sa.Column("DepartmentID", sa.Integer(), sa.ForeignKey("Department.DepartmentID"), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_Users_FullName", "Users", ["FullName"])

    if not _has_table("YearGroup"):
        op.create_table(
            "YearGroup",
            sa.Column("YearGroupID", sa.Integer(), primary_key=True),
            sa.Column("YearGroupName", sa.String(length=50), nullable=False, unique=True),
        )

    if not _has_table("Student"):
        op.create_table(
            "Student",
            sa.Column("StudentID", sa.Integer(), primary_key=True),
            sa.Column("FullName", sa.String(length=120), nullable=False),
            sa.Column("YearGroupID", sa.Integer(), sa.ForeignKey("YearGroup.YearGroupID"), nullable=True),
            sa.Column("SchoolYearGroup", sa.String(length=50), nullable=True),
            sa.Column("CreatedBy", sa.Integer(), sa.ForeignKey("Users.UserID"), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_Student_FullName", "Student", ["FullName"])
        op.create_index("ix_Student_YearGroupID", "Student", ["YearGroupID"])

    if not _has_table("Qualification"):
        op.create_table(
            "Qualification",
            sa.Column("QualificationID", sa.Integer(), primary_key=True),
            sa.Column("QualificationName", sa.String(length=100), nullable=False),
        )

    if not _has_table("ExamBoard"):
        op.create_table(
            "ExamBoard",
            sa.Column("ExamBoardID", sa.Integer(), primary_key=True),
            sa.Column("ExamBoardName", sa.String(length=100), nullable=False),
            sa.Column("QualificationID", sa.Integer(), sa.ForeignKey("Qualification.QualificationID"), nullable=False),
            sa.UniqueConstraint("QualificationID", "ExamBoardName"),
        )

    if not _has_table("Subject"):
        op.create_table(
            "Subject",
            sa.Column("SubjectID", sa.Integer(), primary_key=True),
            sa.Column("SubjectName", sa.String(length=100), nullable=False),
            sa.Column("ExamBoardID", sa.Integer(), sa.ForeignKey("ExamBoard.ExamBoardID"), nullable=True),
            sa.UniqueConstraint("ExamBoardID", "SubjectName"),
        )

    if not _has_table("Topic"):
        op.create_table(
            "Topic",
            sa.Column("TopicID", sa.Integer(), primary_key=True),
            sa.Column("TopicName", sa.String(length=200), nullable=False),
            sa.Column("SubjectID", sa.Integer(), sa.ForeignKey("Subject.SubjectID"), nullable=False),
            sa.UniqueConstraint("SubjectID", "TopicName"),
        )

    if not _has_table("Subtopic"):
        op.create_table(
            "Subtopic",
            sa.Column("SubtopicID", sa.Integer(), primary_key=True),
            sa.Column("SubtopicName", sa.String(length=200), nullable=False),
            sa.Column("TopicID", sa.Integer(), sa.ForeignKey("Topic.TopicID"), nullable=False),
            sa.UniqueConstraint("TopicID", "SubtopicName"),
        )

    if not _has_table("Class"):
        op.create_table(
            "Class",
            sa.Column("ClassID", sa.Integer(), primary_key=True),
            sa.Column("ClassName", sa.String(length=200), nullable=False),
            sa.Column("TeacherID", sa.Integer(), sa.ForeignKey("Users.UserID"), nullable=False),
            sa.Column("SubjectID", sa.Integer(), sa.ForeignKey("Subject.SubjectID"), nullable=False),
            sa.Column("YearGroupID", sa.Integer(), sa.ForeignKey("YearGroup.YearGroupID"), nullable=True),
            sa.Column("DepartmentID", sa.Integer(), sa.ForeignKey("Department.DepartmentID"), nullable=True),
            sa.Column("CreatedBy", sa.Integer(), sa.ForeignKey("Users.UserID"), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
        )
        op.create_index("ix_Class_ClassName", "Class", ["ClassName"])

    if not _has_table("ClassStudent"):
        op.create_table(
            "ClassStudent",
            sa.Column("ClassStudentID", sa.Integer(), primary_key=True),
            sa.Column("ClassID", sa.Integer(), sa.ForeignKey("Class.ClassID"), nullable=False),
            sa.Column("StudentID", sa.Integer(), sa.ForeignKey("Student.StudentID"), nullable=False),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.UniqueConstraint("ClassID", "StudentID"),
        )
        op.create_index("ix_ClassStudent_ClassID", "ClassStudent", ["ClassID"])

    if not _has_table("ClassSchedule"):
        op.create_table(
            "ClassSchedule",
            sa.Column("ClassScheduleID", sa.Integer(), primary_key=True),
            sa.Column("ClassID", sa.Integer(), sa.ForeignKey("Class.ClassID"), nullable=False),
            sa.Column("DayOfWeek", sa.Integer(), nullable=False),
            sa.Column("StartTime", sa.Time(), nullable=False),
            sa.Column("EndTime", sa.Time(), nullable=False),
        )
        op.create_index("ix_ClassSchedule_ClassID", "ClassSchedule", ["ClassID"])


def downgrade():
    for table_name in (
        "ClassSchedule",
        "ClassStudent",
        "Class",
        "Subtopic",
        "Topic",
        "Subject",
        "ExamBoard",
        "Qualification",
        "Student",
        "YearGroup",
        "Users",
        "Department",
    ):
        if _has_table(table_name):
            op.drop_table(table_name)
