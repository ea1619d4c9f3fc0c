from extensions import db
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint


class Qualification(db.Model):
    __tablename__ = 'Qualification'

    id = Column('QualificationID', Integer, primary_key=True)
    name = Column('QualificationName', String(100), nullable=False)

    exam_boards = db.relationship('ExamBoard', backref='qualification', cascade='all, delete-orphan')


class ExamBoard(db.Model):
    __tablename__ = 'ExamBoard'
    __table_args__ = (UniqueConstraint('QualificationID', 'ExamBoardName'),)

    id = Column('ExamBoardID', Integer, primary_key=True)
    name = Column('ExamBoardName', String(100), nullable=False)
    qualification_id = Column('QualificationID', Integer, ForeignKey('Qualification.QualificationID'), nullable=False)

    subjects = db.relationship('Subject', backref='exam_board', cascade='all, delete-orphan')


class Subject(db.Model):
    __tablename__ = 'Subject'
    __table_args__ = (UniqueConstraint('ExamBoardID', 'SubjectName'),)

    id = Column('SubjectID', Integer, primary_key=True)
    name = Column('SubjectName', String(100), nullable=False)
    exam_board_id = Column('ExamBoardID', Integer, ForeignKey('ExamBoard.ExamBoardID'), nullable=True)

    topics = db.relationship('Topic', backref='subject', cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Subject {self.id}: {self.name}>'


class Topic(db.Model):
    __tablename__ = 'Topic'
    __table_args__ = (UniqueConstraint('SubjectID', 'TopicName'),)

    id = Column('TopicID', Integer, primary_key=True)
    name = Column('TopicName', String(200), nullable=False)
    subject_id = Column('SubjectID', Integer, ForeignKey('Subject.SubjectID'), nullable=False)

    subtopics = db.relationship('Subtopic', backref='topic', cascade='all, delete-orphan')


class Subtopic(db.Model):
    __tablename__ = 'Subtopic'
    __table_args__ = (UniqueConstraint('TopicID', 'SubtopicName'),)

    id = Column('SubtopicID', Integer, primary_key=True)
    name = Column('SubtopicName', String(200), nullable=False)
    topic_id = Column('TopicID', Integer, ForeignKey('Topic.TopicID'), nullable=False)
