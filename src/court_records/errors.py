"""Exceptions raised for caller mistakes.

Data-shape problems never raise; they degrade to defaults instead.
"""


class CourtRecordsError(Exception):
    pass


class UnsupportedSourceError(CourtRecordsError, ValueError):
    def __init__(self, value):
        super().__init__(f"Unsupported source kind: {value!r}")
        self.value = value


__all__ = ['CourtRecordsError', 'UnsupportedSourceError']
