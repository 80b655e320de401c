"""
Exceptions and warnings raised by the library.

Numeric functions do not raise on NaN or infinite input by default: the bad
value propagates into every output field. Conversions called with
`strict=True` raise InvalidInput instead.
"""

class VSOP87Error(Exception):
    pass

class InvalidInput(VSOP87Error, ValueError):
    """
    Non-finite time or coordinate values.
    """

class TermTableError(VSOP87Error, KeyError):
    """
    Requested (variant, body) tables are not available in the store.
    """

class DegenerateGeometry(UserWarning):
    """
    Eccentricity or inclination is so close to zero that the perihelion
    argument or the ascending node is not well defined. The conversion still
    returns elements using the documented convention.
    """
