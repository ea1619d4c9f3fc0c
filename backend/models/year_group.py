from extensions import db
from sqlalchemy import Column, Integer, String


class YearGroup(db.Model):
    __tablename__ = 'YearGroup'

    id = Column('YearGroupID', Integer, primary_key=True)
    name = Column('YearGroupName', String(50), unique=True, nullable=False)  # Example: 'Y10'

    def __repr__(self):
        return f'<YearGroup {self.id}: {self.name}>'
