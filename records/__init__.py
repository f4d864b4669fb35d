#Marks records as a package.
#Re-exports the Record Source contract and its adapters so the registry
#imports from records without knowing internal file names.
#No business logic.

from .source import RecordSource, RecordSourceError, Row, StaticRecordSource
from .csv_source import CsvRecordSource

__all__ = [
           "RecordSource",
           "RecordSourceError",
             "Row",
             "StaticRecordSource",
             "CsvRecordSource",
             ]
