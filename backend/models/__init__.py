from extensions import db
from .department import Department
from .user import User
from .year_group import YearGroup
from .student import Student
from .taxonomy import Qualification, ExamBoard, Subject, Topic, Subtopic
from .class_model import Class
from .class_student import ClassStudent
from .class_schedule import ClassSchedule

__all__ = [
    'db',
    'Department',
    'User',
    'YearGroup',
    'Student',
    'Qualification',
    'ExamBoard',
    'Subject',
    'Topic',
    'Subtopic',
    'Class',
    'ClassStudent',
    'ClassSchedule'
]
