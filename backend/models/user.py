from extensions import db
from flask_login import UserMixin
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from werkzeug.security import generate_password_hash, check_password_hash
from utils.timezone import school_now_naive


class User(UserMixin, db.Model):
    __tablename__ = 'Users'

    id = Column('UserID', Integer, primary_key=True)
    email = Column('Email', String(120), unique=True, nullable=False)
    full_name = Column('FullName', String(120), nullable=False, index=True)
    role = Column('Role', String(20), nullable=False)  # 'admin', 'teacher'
    password_hash = Column(String(256))
    department_id = Column('DepartmentID', Integer, ForeignKey('Department.DepartmentID'), nullable=True)
    created_at = Column(DateTime, default=school_now_naive)

    department = db.relationship('Department', backref='teachers')

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self):
        return self.role == 'admin'

    def __repr__(self):
        return f'<User {self.id}: {self.email} ({self.role})>'
