from .csv_exporter import CsvReportExporter
from .json_exporter import JsonReportExporter

__all__ = ["CsvReportExporter", "JsonReportExporter"]
