"""
Arrivals feed parsing.

Each line of the arrivals file describes one incoming animal::

    species,age,sex,color,weight,origin...,arrival_date,birth_season

The origin sits between five leading and two trailing fixed fields and may
contain the delimiter, either inside a quoted span or unquoted across several
segments. Lines are parsed individually: a bad line becomes a ParseFailure
and the rest of the file is still processed.
"""

import csv
import logging
import math
import re
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from config import Config
from exceptions import (
    RecordParseError, FieldCountError, NumberParseError,
    DateParseError, TokenizeError, LineDecodeError
)
from models import AnimalRecord, ParseFailure, ParseReport
from utils import decode_line

logger = logging.getLogger(__name__)

LEADING_FIELDS = 5
TRAILING_FIELDS = 2

# Plain decimal notation only: no underscores, nan or inf
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class FieldTokenizer:
    """Splits one line into fields, keeping delimiters inside quoted spans."""

    def __init__(self, delimiter: str = ",", quotechar: str = '"'):
        self.delimiter = delimiter
        self.quotechar = quotechar

    def tokenize(self, line: str) -> List[str]:
        try:
            rows = list(csv.reader([line], delimiter=self.delimiter,
                                   quotechar=self.quotechar, skipinitialspace=True))
        except csv.Error as e:
            raise TokenizeError(f"Could not split line into fields: {e}", line) from e
        return rows[0] if rows else []


class ArrivalParser:
    """Turns arrivals lines into AnimalRecords."""

    def __init__(self, config: Config):
        self.config = config
        self.min_fields = config.parser.min_fields
        self.tokenizer = FieldTokenizer(config.parser.delimiter, config.parser.quotechar)

    def parse_line(self, line: str, line_number: int = 0) -> Union[AnimalRecord, ParseFailure]:
        """Parse one line. Never raises; rejected lines come back as ParseFailure."""
        raw_line = line.rstrip("\r\n")
        try:
            return self._build_record(raw_line, line_number)
        except RecordParseError as e:
            return ParseFailure(line_number, raw_line, e.kind, str(e))
        except Exception as e:
            logger.debug(f"Unexpected error on line {line_number}", exc_info=True)
            return ParseFailure(line_number, raw_line, "unexpected", f"Error processing line: {e}")

    def parse_file(self, path: Optional[Path] = None) -> ParseReport:
        """Parse a whole arrivals file, collecting records and rejected lines."""
        path = Path(path) if path is not None else self.config.input.arrivals_path
        report = ParseReport()
        try:
            # Binary mode so an undecodable line only rejects itself
            with open(path, "rb") as f:
                for line_number, raw in enumerate(f, start=1):
                    self._collect(report, self._parse_raw_line(raw, line_number))
        except OSError as e:
            report.file_error = f"{path}: {e}"
            logger.error(f"Error processing arriving animals: {report.file_error}")

        logger.info(f"Parsed {path}: {report.accepted} accepted, {report.rejected} rejected")
        return report

    def _parse_raw_line(self, raw: bytes, line_number: int) -> Union[AnimalRecord, ParseFailure, None]:
        encoding = self.config.input.encoding
        try:
            line = decode_line(raw, encoding)
        except LineDecodeError as e:
            shown = raw.decode(encoding, errors="replace").rstrip("\r\n")
            return ParseFailure(line_number, shown, e.kind, str(e))
        if not line.strip():
            return None
        return self.parse_line(line, line_number)

    def _collect(self, report: ParseReport, result: Union[AnimalRecord, ParseFailure, None]) -> None:
        if result is None:
            return
        if isinstance(result, ParseFailure):
            report.failures.append(result)
            logger.warning(f"Rejected line {result.line_number} ({result.kind}): "
                           f"{result.message}: {result.raw_line!r}")
            return
        report.records.append(result)
        report.species_counts[result.species] = report.species_counts.get(result.species, 0) + 1

    def _build_record(self, line: str, line_number: int) -> AnimalRecord:
        fields = self.tokenizer.tokenize(line)
        if len(fields) < self.min_fields:
            raise FieldCountError(
                f"Skipping invalid animal data line (less than {self.min_fields} parts, "
                f"found {len(fields)})", line)

        species, age_text, sex, color, weight_text = (f.strip() for f in fields[:LEADING_FIELDS])
        date_text = fields[-TRAILING_FIELDS].strip()
        birth_season = fields[-1].strip()

        return AnimalRecord(
            species=species,
            age=self._parse_number(int, INTEGER_PATTERN, "age", age_text, line),
            sex=sex,
            color=color,
            weight=self._parse_number(float, DECIMAL_PATTERN, "weight", weight_text, line),
            origin=self.reconstruct_origin(fields[LEADING_FIELDS:-TRAILING_FIELDS]),
            arrival_date=self._parse_date(date_text, line),
            birth_season=birth_season,
            line_number=line_number,
        )

    def reconstruct_origin(self, segments: List[str]) -> str:
        """Rejoin the origin segments and strip one pair of surrounding quotes."""
        origin = self.config.parser.delimiter.join(s.strip() for s in segments).strip()
        quote = self.config.parser.quotechar
        if len(origin) >= 2 and origin.startswith(quote) and origin.endswith(quote):
            origin = origin[1:-1]
        return origin

    @staticmethod
    def _parse_number(convert, pattern, field_name: str, text: str, line: str):
        if not pattern.fullmatch(text):
            raise NumberParseError(f"Error parsing {field_name} {text!r}", line)
        value = convert(text)
        if isinstance(value, float) and not math.isfinite(value):
            # 1e999 overflows to inf
            raise NumberParseError(f"Error parsing {field_name} {text!r}: not finite", line)
        return value

    @staticmethod
    def _parse_date(text: str, line: str) -> date:
        if not ISO_DATE_PATTERN.fullmatch(text):
            raise DateParseError(f"Error parsing arrival date {text!r}: expected YYYY-MM-DD", line)
        try:
            return date.fromisoformat(text)
        except ValueError as e:
            raise DateParseError(f"Error parsing arrival date {text!r}", line) from e
