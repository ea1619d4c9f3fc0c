from extensions import db
from utils.timezone import school_now_naive


class Student(db.Model):
    __tablename__ = 'Student'

    id = db.Column('StudentID', db.Integer, primary_key=True)
    full_name = db.Column('FullName', db.String(120), nullable=False, index=True)
    year_group_id = db.Column('YearGroupID', db.Integer, db.ForeignKey('YearGroup.YearGroupID'), nullable=True, index=True)
    # Year group label exactly as the school export wrote it
    school_year_group = db.Column('SchoolYearGroup', db.String(50), nullable=True)
    created_by = db.Column('CreatedBy', db.Integer, db.ForeignKey('Users.UserID'), nullable=True)
    created_at = db.Column(db.DateTime, default=school_now_naive)

    year_group = db.relationship('YearGroup', backref='students')
    class_links = db.relationship('ClassStudent', back_populates='student', cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Student {self.id}: {self.full_name}>'
