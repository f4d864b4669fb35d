#Purpose: The CSV "adapter" for the Record Source contract.
#Sole responsibility: read passengers.csv, drivers.csv and trips.csv from one
#directory and return plain rows.
#Encapsulates file details:
#file names
#required columns
#blank cells -> None
#It should not contain linking or dispatch rules.

from __future__ import annotations

import os
from typing import List, Sequence

import pandas as pd

from .source import (
    DRIVER_FIELDS,
    PASSENGER_FIELDS,
    TRIP_FIELDS,
    RecordSourceError,
    Row,
    clean_value,
)


class CsvRecordSource:
    """
    Reads the three record files from `directory`.

    Every column is read as text; turning text into ints, timestamps and
    numbers happens in the registry loader so that every malformed cell
    fails the same way regardless of where the rows came from.
    """

    PASSENGERS_FILE = "passengers.csv"
    DRIVERS_FILE = "drivers.csv"
    TRIPS_FILE = "trips.csv"

    def __init__(self, directory: str):
        self.directory = directory

    def __repr__(self) -> str:
        return f"CsvRecordSource(directory={self.directory!r})"

    def passenger_rows(self) -> List[Row]:
        return self._read(self.PASSENGERS_FILE, PASSENGER_FIELDS)

    def driver_rows(self) -> List[Row]:
        return self._read(self.DRIVERS_FILE, DRIVER_FIELDS)

    def trip_rows(self) -> List[Row]:
        return self._read(self.TRIPS_FILE, TRIP_FIELDS)

    #----------------
    # Internal helpers
    #----------------
    def _read(self, filename: str, required: Sequence[str]) -> List[Row]:
        path = os.path.join(self.directory, filename)

        try:
            frame = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
        except FileNotFoundError as exc:
            raise RecordSourceError(f"Record file not found: {path}") from exc
        except pd.errors.EmptyDataError as exc:
            raise RecordSourceError(f"Record file is empty: {path}") from exc
        except pd.errors.ParserError as exc:
            raise RecordSourceError(f"Could not parse {path}: {exc}") from exc

        frame.columns = [str(column).strip() for column in frame.columns]

        missing = [column for column in required if column not in frame.columns]
        if missing:
            raise RecordSourceError(f"{path} is missing required column(s): {', '.join(missing)}")

        rows = frame.to_dict(orient="records")
        return [{key: clean_value(value) for key, value in row.items()} for row in rows]
