"""Build the Qualification > Exam Board > Subject > Topic > Subtopic tree from CSV rows.

Names are matched case-insensitively under their parent; anything missing is
created, anything already present is reused.
"""
import logging

from extensions import db
from models import Qualification, ExamBoard, Subject, Topic, Subtopic

logger = logging.getLogger(__name__)


def _first_by_key(records, key):
    lookup = {}
    for record in records:
        lookup.setdefault(key(record), record)
    return lookup


class TaxonomyImporter:

    def __init__(self):
        self.created = {'qualifications': 0, 'examBoards': 0, 'subjects': 0, 'topics': 0, 'subtopics': 0}
        self.qualifications = _first_by_key(
            Qualification.query.order_by(Qualification.id), lambda q: q.name.lower())
        self.exam_boards = _first_by_key(
            ExamBoard.query.order_by(ExamBoard.id), lambda b: (b.qualification_id, b.name.lower()))
        self.subjects = _first_by_key(
            Subject.query.order_by(Subject.id), lambda s: (s.exam_board_id, s.name.lower()))
        self.topics = _first_by_key(
            Topic.query.order_by(Topic.id), lambda t: (t.subject_id, t.name.lower()))
        self.subtopics = _first_by_key(
            Subtopic.query.order_by(Subtopic.id), lambda s: (s.topic_id, s.name.lower()))

    def _get_or_create(self, lookup, key, counter, factory):
        record = lookup.get(key)
        if record is None:
            record = factory()
            db.session.add(record)
            db.session.flush()
            lookup[key] = record
            self.created[counter] += 1
        return record

    def add_row(self, row):
        qualification = self._get_or_create(
            self.qualifications, row.qualification.lower(), 'qualifications',
            lambda: Qualification(name=row.qualification))
        exam_board = self._get_or_create(
            self.exam_boards, (qualification.id, row.exam_board.lower()), 'examBoards',
            lambda: ExamBoard(name=row.exam_board, qualification_id=qualification.id))
        subject = self._get_or_create(
            self.subjects, (exam_board.id, row.subject.lower()), 'subjects',
            lambda: Subject(name=row.subject, exam_board_id=exam_board.id))
        if not row.topic:
            return
        topic = self._get_or_create(
            self.topics, (subject.id, row.topic.lower()), 'topics',
            lambda: Topic(name=row.topic, subject_id=subject.id))
        if not row.subtopic:
            return
        self._get_or_create(
            self.subtopics, (topic.id, row.subtopic.lower()), 'subtopics',
            lambda: Subtopic(name=row.subtopic, topic_id=topic.id))


def import_taxonomy(rows):
    """Import all rows in one transaction and return the created counts per level."""
    importer = TaxonomyImporter()
    for row in rows:
        importer.add_row(row)
    db.session.commit()
    logger.info('Taxonomy import: %d rows, created %s', len(rows), importer.created)
    return importer.created
