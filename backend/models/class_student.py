from extensions import db
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from utils.timezone import school_now_naive


class ClassStudent(db.Model):
    __tablename__ = 'ClassStudent'
    __table_args__ = (UniqueConstraint('ClassID', 'StudentID'),)

    id = Column('ClassStudentID', Integer, primary_key=True)
    class_id = Column('ClassID', Integer, ForeignKey('Class.ClassID'), nullable=False, index=True)
    student_id = Column('StudentID', Integer, ForeignKey('Student.StudentID'), nullable=False)
    created_at = Column(DateTime, default=school_now_naive)

    class_record = db.relationship('Class', back_populates='student_links')
    student = db.relationship('Student', back_populates='class_links')
