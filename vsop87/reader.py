"""
Readers for the official VSOP87 distribution: the series files
(`VSOP87D.ear`, `VSOP87A.jup`, ...) and the reference values in `vsop87.chk`.
Both are Fortran fixed-column text files.
"""
from dataclasses import dataclass
import logging
import os
import re

from .variants import FILE_EXTENSIONS, Variant, normalize_body

logger = logging.getLogger(__name__)

# Term record: 1x, iv, ib, ic, it, term number, 12 multipliers of the mean
# longitudes, S, K, A, B, C. Only ic, it, A, B, C are needed for evaluation.
TERM_FORMAT = '1,i1,i1,i1,i1,i5,12i3,f15,2f18,f14,f20'
CHECK_HEADER_FORMAT = 's8,x2,s12,x2,f11'
CHECK_VALUES_FORMAT = '3,f14,30,f14,57,f14'

_FIELD_PATTERN = re.compile(r'^(\d*)([a-z])(\d*)$')
_FIELD_TYPES = {'x': None, 'i': int, 'f': float, 's': str}

class FixedLengthReader:
    """
    Reads records with a fixed column layout described by a compact format string.

    Parts are comma separated. A bare number moves to that (0-based) column.
    Otherwise a part is `[m]t[w]`: `m` repetitions of a field of type `t`
    (`i` int, `f` float, `s` str, `x` skipped) and width `w`. A field without a
    width extends up to the column given by the next part, or to the end of the
    line if it is the last part.

    Usage:
    ```
    reader = FixedLengthReader(TERM_FORMAT)
    iv, ib, ic, it, n, *multipliers, s, k, a, b, c = reader.read(line)
    ```
    """
    def __init__(self, format_string: str):
        self.fields = self._compile(format_string.lower().replace(' ', ''))

    @staticmethod
    def _compile(format_string):
        fields = []
        parts = format_string.split(',')
        column = 0
        for index, part in enumerate(parts):
            if part.isdigit():
                column = int(part)
                continue
            match = _FIELD_PATTERN.match(part)
            if match is None or match.group(2) not in _FIELD_TYPES:
                raise ValueError(f'Invalid field specification {part!r} in {format_string!r}')
            count = int(match.group(1) or 1)
            field_type = _FIELD_TYPES[match.group(2)]
            width = int(match.group(3)) if match.group(3) else None

            if width is None and index + 1 < len(parts):
                if not parts[index + 1].isdigit():
                    raise ValueError(f'Width of {part!r} cannot be inferred: next part is not a column.')
                span = int(parts[index + 1]) - column
                if span % count != 0:
                    raise ValueError(f'Span {span} of {part!r} is not divisible by {count}.')
                width = span // count

            for _ in range(count):
                if field_type is not None:
                    fields.append((column, field_type, width))
                if width is not None:
                    column += width
        return fields

    def read(self, line: str, strip_strings=True):
        values = []
        for start, field_type, width in self.fields:
            text = line[start:start + width] if width is not None else line[start:]
            if field_type is str:
                values.append(text.strip() if strip_strings else text)
            elif field_type is float:
                # Fortran double precision exponents
                values.append(float(text.strip().replace('D', 'E').replace('d', 'e')))
            else:
                values.append(int(text.strip()))
        return values

_term_reader = FixedLengthReader(TERM_FORMAT)

def vsop87_file_name(variant, body: str) -> str:
    """
    Name of the distribution file, e.g. `VSOP87D.ear`.
    """
    return f'{Variant.parse(variant).file_prefix}.{FILE_EXTENSIONS[normalize_body(body)]}'

def read_vsop87_file(path):
    """
    Yields `(variable, power, a, b, c)` for every term in a VSOP87 series file.
    The variable index is 0-based (the files count from 1).
    """
    with open(path, 'r') as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip() or line[1:7] == 'VSOP87':    # header lines (no coefficients)
                continue
            try:
                _, _, ic, it, _, *_, _, _, a, b, c = _term_reader.read(line)
            except ValueError as e:
                raise ValueError(f'{os.fspath(path)}:{line_number}: malformed term record ({e})') from e
            yield ic - 1, it, a, b, c

@dataclass(frozen=True)
class CheckRecord:
    """
    Reference output listed in vsop87.chk for one version, body and date.
    `values` holds the six numbers in the order of the file (two lines of three).
    """
    variant: Variant
    body: str
    julian_day: float
    values: tuple

def read_check_file(path, variant=None):
    """
    Reads the reference values from vsop87.chk. If variant is given, only
    records for that version are returned.
    """
    wanted = Variant.parse(variant) if variant is not None else None
    header_reader = FixedLengthReader(CHECK_HEADER_FORMAT)
    values_reader = FixedLengthReader(CHECK_VALUES_FORMAT)
    with open(path, 'r') as f:
        lines = f.readlines()

    records = []
    for k, line in enumerate(lines):
        if line[1:7] != 'VSOP87':
            continue
        name, body, jd = header_reader.read(line)
        record_variant = Variant.parse(name)
        if wanted is not None and record_variant is not wanted:
            continue
        if k + 2 >= len(lines):
            raise ValueError(f'{os.fspath(path)}:{k+1}: truncated check record')
        values = values_reader.read(lines[k+1]) + values_reader.read(lines[k+2])
        records.append(CheckRecord(record_variant, normalize_body(body), jd, tuple(values)))
    logger.debug('Read %d check records from %s', len(records), path)
    return records
