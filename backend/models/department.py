from extensions import db
from sqlalchemy import Column, Integer, String


class Department(db.Model):
    __tablename__ = 'Department'

    id = Column('DepartmentID', Integer, primary_key=True)
    name = Column('DepartmentName', String(100), unique=True, nullable=False)
