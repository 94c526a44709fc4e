"""
Serialization utilities for CivicSeries and ForecastReport.

This module contains the CivicSeriesSerializer and ForecastReportSerializer
classes for reading and writing series and reports as CSV and JSON.
"""

from typing import Any, Dict, Optional
import json
import io
import os
import logging
import pandas as pd

from ..utils.exceptions import SerializationError, SeriesError

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ['csv', 'json']

_EXTENSION_FORMATS = {
    '.csv': 'csv',
    '.json': 'json'
}


def _normalize_format(format: str) -> str:
    format_lower = format.lower()
    if format_lower not in SUPPORTED_FORMATS:
        raise ValueError(f"Unsupported format: {format}. Use 'csv' or 'json'")
    return format_lower


def format_from_path(filepath: str) -> str:
    """
    Infer the serialization format from a file extension.

    Raises:
        ValueError: If the extension is not .csv or .json
    """
    extension = os.path.splitext(filepath)[1].lower()
    if extension not in _EXTENSION_FORMATS:
        raise ValueError(f"Cannot infer format from extension '{extension}'. Use .csv or .json")
    return _EXTENSION_FORMATS[extension]


class CivicSeriesSerializer:
    """
    Handles serialization and deserialization of CivicSeries objects.

    CSV data has a header row with a period column and a count column.
    JSON data is either an object with ``name``, ``periods`` and ``counts``
    keys, or a list of ``{period, count}`` records.
    """

    @staticmethod
    def serialize(series: 'CivicSeries', format: str = 'csv') -> str:
        """
        Serialize a CivicSeries to a string.

        Args:
            series: The CivicSeries to serialize
            format: Serialization format ('csv' or 'json')

        Returns:
            Serialized data

        Raises:
            ValueError: If format is not supported
        """
        format_lower = _normalize_format(format)
        if format_lower == 'csv':
            return CivicSeriesSerializer._serialize_csv(series)
        return CivicSeriesSerializer._serialize_json(series)

    @staticmethod
    def deserialize(data: str, format: str = 'csv', period_column: str = 'period',
                    value_column: str = 'count', name: Optional[str] = None) -> 'CivicSeries':
        """
        Deserialize data to create a CivicSeries.

        Args:
            data: Serialized data
            format: Format of the serialized data ('csv' or 'json')
            period_column: Name of the period column or record key
            value_column: Name of the count column or record key
            name: Series name (overrides any name stored in JSON)

        Returns:
            New CivicSeries instance

        Raises:
            ValueError: If format is not supported
            SerializationError: If the data cannot be parsed into a valid series
        """
        format_lower = _normalize_format(format)
        try:
            if format_lower == 'csv':
                return CivicSeriesSerializer._deserialize_csv(data, period_column, value_column, name)
            return CivicSeriesSerializer._deserialize_json(data, period_column, value_column, name)
        except (SeriesError, ValueError, KeyError, TypeError) as e:
            raise SerializationError(f"Failed to deserialize {format_lower} series: {e}") from e

    @staticmethod
    def load(filepath: str, format: Optional[str] = None, **kwargs) -> 'CivicSeries':
        """
        Load a CivicSeries from a file.

        Args:
            filepath: Path to a CSV or JSON file
            format: Format override (default: inferred from the extension)
            **kwargs: Passed to deserialize()

        Raises:
            SerializationError: If the file cannot be read or parsed
        """
        format_name = format or format_from_path(filepath)
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = f.read()
        except OSError as e:
            raise SerializationError(f"Failed to read series from {filepath}: {e}") from e

        series = CivicSeriesSerializer.deserialize(data, format=format_name, **kwargs)
        logger.info(f"Loaded {len(series)} periods from {filepath}")
        return series

    @staticmethod
    def save(series: 'CivicSeries', filepath: str, format: Optional[str] = None) -> None:
        """Save a CivicSeries to a file, inferring the format from the extension."""
        format_name = format or format_from_path(filepath)
        _write_text(filepath, CivicSeriesSerializer.serialize(series, format=format_name))

    @staticmethod
    def _serialize_csv(series: 'CivicSeries') -> str:
        """Serialize to CSV format."""
        df = series.to_dataframe()
        df.index = df.index.strftime('%Y-%m-%d')
        return df.to_csv(index_label='period')

    @staticmethod
    def _serialize_json(series: 'CivicSeries') -> str:
        """Serialize to JSON format."""
        data = {
            'name': series.name,
            'periods': [ts.strftime('%Y-%m-%d') for ts in pd.to_datetime(series.timestamps)],
            'counts': series.values.tolist(),
            'metadata': series.metadata
        }
        return json.dumps(data, indent=2, default=str)

    @staticmethod
    def _deserialize_csv(data: str, period_column: str, value_column: str,
                         name: Optional[str]) -> 'CivicSeries':
        """Deserialize from CSV format."""
        from .series import CivicSeries  # Import here to avoid circular imports

        df = pd.read_csv(io.StringIO(data))
        return CivicSeries.from_dataframe(df, period_column=period_column,
                                          value_column=value_column, name=name)

    @staticmethod
    def _deserialize_json(data: str, period_column: str, value_column: str,
                          name: Optional[str]) -> 'CivicSeries':
        """Deserialize from JSON format."""
        from .series import CivicSeries  # Import here to avoid circular imports

        parsed = json.loads(data)

        if isinstance(parsed, list):
            return CivicSeries.from_records(parsed, period_key=period_column,
                                            value_key=value_column, name=name)

        if not isinstance(parsed, dict):
            raise ValueError("JSON series must be an object or a list of records")

        periods = parsed['periods']
        counts = parsed['counts']
        df = pd.DataFrame({'period': periods, 'count': counts})
        series = CivicSeries.from_dataframe(df, name=name or parsed.get('name'))
        if parsed.get('metadata'):
            series = CivicSeries(series.timestamps, series.values, name=series.name,
                                 metadata=dict(parsed['metadata']))
        return series


class ForecastReportSerializer:
    """
    Handles serialization of ForecastReport objects.

    JSON output mirrors the report's dictionary form with separate
    ``historical`` and ``forecast`` lists. CSV output has one row per point.
    """

    @staticmethod
    def serialize(report: 'ForecastReport', format: str = 'json', float_precision: int = 4) -> str:
        """
        Serialize a ForecastReport to a string.

        Args:
            report: The ForecastReport to serialize
            format: Serialization format ('csv' or 'json')
            float_precision: Decimal places for CSV values

        Returns:
            Serialized data

        Raises:
            ValueError: If format is not supported
        """
        format_lower = _normalize_format(format)
        if format_lower == 'csv':
            df = report.to_dataframe()
            return df.to_csv(index=False, float_format=f'%.{float_precision}f')

        data: Dict[str, Any] = report.to_dict()
        data['summary'] = report.summary()
        return json.dumps(data, indent=2)

    @staticmethod
    def save(report: 'ForecastReport', filepath: str, format: Optional[str] = None) -> None:
        """Save a ForecastReport to a file, inferring the format from the extension."""
        format_name = format or format_from_path(filepath)
        _write_text(filepath, ForecastReportSerializer.serialize(report, format=format_name))


def _write_text(filepath: str, text: str) -> None:
    directory = os.path.dirname(filepath)
    try:
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        raise SerializationError(f"Failed to write {filepath}: {e}") from e
    logger.info(f"Wrote {filepath}")
