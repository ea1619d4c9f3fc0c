from extensions import db
from sqlalchemy import Column, Integer, Time, ForeignKey


class ClassSchedule(db.Model):
    __tablename__ = 'ClassSchedule'

    id = Column('ClassScheduleID', Integer, primary_key=True)
    class_id = Column('ClassID', Integer, ForeignKey('Class.ClassID'), nullable=False, index=True)
    day_of_week = Column('DayOfWeek', Integer, nullable=False)  # 0 = Sunday ... 6 = Saturday
    start_time = Column('StartTime', Time, nullable=False)
    end_time = Column('EndTime', Time, nullable=False)

    class_record = db.relationship('Class', back_populates='schedules')

    def __repr__(self):
        return f'<ClassSchedule {self.class_id} day={self.day_of_week} {self.start_time}-{self.end_time}>'
