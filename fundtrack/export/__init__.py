"""Mini README: Report exporters for the fund tracker.

Currently CSV only: transaction and diesel-log reports with a matching
reader so an exported report can be loaded again.
"""

from .csv_exporter import (
    CsvReportExporter,
    diesel_logs_from_csv,
    diesel_logs_to_csv,
    transactions_from_csv,
    transactions_to_csv,
)

__all__ = [
    "CsvReportExporter",
    "diesel_logs_from_csv",
    "diesel_logs_to_csv",
    "transactions_from_csv",
    "transactions_to_csv",
]
