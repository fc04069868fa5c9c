"""
Calculation history.

An append-only log of short text records (tool, inputs, results) with
CSV and JSON export. Record fields are bounded: anything longer than
MAX_FIELD_LEN characters is cut at construction.
"""

import csv
import io
import json
from dataclasses import asdict, dataclass
from typing import Iterator, List

MAX_FIELD_LEN = 63

CSV_HEADER = ['Tool Name', 'Inputs', 'Results']


@dataclass(frozen=True)
class CalcRecord:
    tool_name: str
    details: str
    result: str

    def __post_init__(self):
        # frozen: bypass __setattr__ to store the truncated text
        for name in ('tool_name', 'details', 'result'):
            object.__setattr__(self, name, str(getattr(self, name))[:MAX_FIELD_LEN])


class CalcHistory:
    """Ordered log of CalcRecords. Records can be added, never changed."""

    def __init__(self):
        self._records: List[CalcRecord] = []

    def add(self, tool_name: str, details: str, result: str) -> CalcRecord:
        return self.append(CalcRecord(tool_name=tool_name, details=details, result=result))

    def append(self, record: CalcRecord) -> CalcRecord:
        self._records.append(record)
        return record

    @property
    def records(self) -> List[CalcRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CalcRecord]:
        return iter(list(self._records))


def export_csv(history: CalcHistory) -> str:
    """Export history as CSV string."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(CSV_HEADER)
    for record in history:
        writer.writerow([record.tool_name, record.details, record.result])
    return output.getvalue()


def export_json(history: CalcHistory) -> str:
    """Export history as JSON string."""
    return json.dumps({'records': [asdict(r) for r in history]}, indent=2)


def csv_filename(name: str) -> str:
    """Append '.csv' unless the name already ends with it."""
    name = name.strip()
    if not name:
        raise ValueError("Filename cannot be empty")
    return name if name.endswith('.csv') else f"{name}.csv"
