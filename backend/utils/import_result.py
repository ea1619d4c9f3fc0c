import logging

logger = logging.getLogger(__name__)

# Only the first errors are sent back; error_count stays exact
MAX_REPORTED_ERRORS = 50


class ImportSummary:
    """Counters and error messages collected while an import runs."""

    def __init__(self, **counters):
        self.counters = dict(counters)
        self.error_count = 0
        self.errors = []

    def add(self, counter, amount=1):
        self.counters[counter] = self.counters.get(counter, 0) + amount

    def __getitem__(self, counter):
        return self.counters[counter]

    def record_error(self, message):
        self.error_count += 1
        logger.debug('Import row skipped: %s', message)
        if len(self.errors) < MAX_REPORTED_ERRORS:
            self.errors.append(message)

    @property
    def truncated(self):
        return self.error_count > len(self.errors)

    def as_dict(self, message):
        payload = {'message': message}
        payload.update(self.counters)
        payload['errorCount'] = self.error_count
        payload['errors'] = list(self.errors)
        return payload
