from extensions import db
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from utils.timezone import school_now_naive


class Class(db.Model):
    __tablename__ = 'Class'

    id = Column('ClassID', Integer, primary_key=True)
    name = Column('ClassName', String(200), nullable=False, index=True)
    teacher_id = Column('TeacherID', Integer, ForeignKey('Users.UserID'), nullable=False)
    subject_id = Column('SubjectID', Integer, ForeignKey('Subject.SubjectID'), nullable=False)
    year_group_id = Column('YearGroupID', Integer, ForeignKey('YearGroup.YearGroupID'), nullable=True)
    department_id = Column('DepartmentID', Integer, ForeignKey('Department.DepartmentID'), nullable=True)
    created_by = Column('CreatedBy', Integer, ForeignKey('Users.UserID'), nullable=True)
    created_at = Column(DateTime, default=school_now_naive)

    # Relationships
    teacher = db.relationship('User', foreign_keys=[teacher_id], backref='classes')
    creator = db.relationship('User', foreign_keys=[created_by])
    subject = db.relationship('Subject', backref='classes')
    year_group = db.relationship('YearGroup', backref='classes')
    department = db.relationship('Department', backref='classes')
    student_links = db.relationship('ClassStudent', back_populates='class_record', cascade='all, delete-orphan')
    schedules = db.relationship('ClassSchedule', back_populates='class_record', cascade='all, delete-orphan',
                                order_by='ClassSchedule.day_of_week')

    def __repr__(self):
        return f'<Class {self.id}: {self.name}>'
