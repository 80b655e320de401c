"""
The six published versions of VSOP87 and the bodies each one covers.

| Version | Variables                    | Frame                    | Origin      |
|---------|------------------------------|--------------------------|-------------|
| VSOP87  | a, lambda, k, h, q, p        | ecliptic, J2000.0        | Sun         |
| A       | X, Y, Z                      | ecliptic, J2000.0        | Sun         |
| B       | L, B, R                      | ecliptic, J2000.0        | Sun         |
| C       | X, Y, Z                      | ecliptic, equinox of day | Sun         |
| D       | L, B, R                      | ecliptic, equinox of day | Sun         |
| E       | X, Y, Z                      | ecliptic, J2000.0        | barycenter  |
"""
import enum

MERCURY = 'MERCURY'
VENUS = 'VENUS'
EARTH = 'EARTH'
EARTH_MOON = 'EARTH-MOON'
MARS = 'MARS'
JUPITER = 'JUPITER'
SATURN = 'SATURN'
URANUS = 'URANUS'
NEPTUNE = 'NEPTUNE'
SUN = 'SUN'

# File extensions of the official distribution files.
FILE_EXTENSIONS = {
    MERCURY: 'mer',
    VENUS: 'ven',
    EARTH: 'ear',
    EARTH_MOON: 'emb',
    MARS: 'mar',
    JUPITER: 'jup',
    SATURN: 'sat',
    URANUS: 'ura',
    NEPTUNE: 'nep',
    SUN: 'sun',
}

ELLIPTIC = 'elliptic'
RECTANGULAR = 'rectangular'
SPHERICAL = 'spherical'

class Variant(enum.Enum):
    VSOP87 = ''
    A = 'A'
    B = 'B'
    C = 'C'
    D = 'D'
    E = 'E'

    @property
    def representation(self) -> str:
        if self is Variant.VSOP87:
            return ELLIPTIC
        if self in (Variant.B, Variant.D):
            return SPHERICAL
        return RECTANGULAR

    @property
    def of_date(self) -> bool:
        """
        True for the versions referred to the mean equinox and ecliptic of date.
        """
        return self in (Variant.C, Variant.D)

    @property
    def origin(self) -> str:
        return 'BARYCENTER' if self is Variant.E else SUN

    @property
    def file_prefix(self) -> str:
        return f'VSOP87{self.value}'

    @property
    def slot_names(self):
        return SLOT_NAMES[self.representation]

    @property
    def bodies(self):
        return BODIES_BY_VARIANT[self]

    @classmethod
    def parse(cls, value):
        """
        Accepts a Variant, a letter ('d', 'D'), a full name ('VSOP87D') or
        '' / 'VSOP87' for the main version.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        if text.startswith('VSOP87'):
            text = text[len('VSOP87'):]
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f'Unknown VSOP87 version: {value!r}') from None

SLOT_NAMES = {
    ELLIPTIC: ('a', 'l', 'k', 'h', 'q', 'p'),
    RECTANGULAR: ('x', 'y', 'z', 'vx', 'vy', 'vz'),
    SPHERICAL: ('longitude', 'latitude', 'radius', 'longitude_rate', 'latitude_rate', 'radius_rate'),
}

_PLANETS = (MERCURY, VENUS, EARTH, MARS, JUPITER, SATURN, URANUS, NEPTUNE)

BODIES_BY_VARIANT = {
    Variant.VSOP87: (MERCURY, VENUS, EARTH_MOON, MARS, JUPITER, SATURN, URANUS, NEPTUNE),
    Variant.A: _PLANETS + (EARTH_MOON,),
    Variant.B: _PLANETS,
    Variant.C: _PLANETS,
    Variant.D: _PLANETS,
    Variant.E: _PLANETS + (SUN,),
}

def normalize_body(name: str) -> str:
    """
    Maps 'earth_moon', 'Earth-Moon', 'emb' etc. to the canonical body name.
    """
    text = str(name).strip().upper().replace('_', '-')
    if text in ('EMB', 'EARTHMOON'):
        return EARTH_MOON
    if text not in FILE_EXTENSIONS:
        raise ValueError(f'Unknown body: {name!r}')
    return text
