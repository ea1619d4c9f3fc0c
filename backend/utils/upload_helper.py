from flask import request

from exceptions import ImportValidationError, MalformedInputError


def read_csv_upload(field_name='file'):
    """Decoded text of the uploaded CSV, or None when nothing usable was sent."""
    file = request.files.get(field_name)
    if file is None or file.filename == '':
        return None
    content = file.read()
    if not content.strip():
        return None
    try:
        # utf-8-sig drops the BOM spreadsheet exports put in front of the header
        return content.decode('utf-8-sig')
    except UnicodeDecodeError:
        raise MalformedInputError('File must be a UTF-8 encoded CSV')


def parse_and_validate(text, parser, validator):
    """Run a parser/validator pair, raising ImportValidationError with every problem found."""
    rows = parser(text)
    result = validator(rows)
    if not result.valid:
        raise ImportValidationError(result.errors)
    return rows
