"""
Dimension extraction from recognized drawing text.

Each line is scanned by an ordered list of independent matchers (fit
callouts, thread callouts, radius callouts, plain measurements). A line may
feed several matchers, so the same number can be registered more than once;
downstream consumers only rely on counts and extremes.
"""
import re
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, List, Optional

from text_utils import parse_decimal

logger = logging.getLogger(__name__)

# Plausible range for a single measurement in millimetres; anything outside
# is treated as OCR noise.
MIN_DIMENSION_MM = 2.0
MAX_DIMENSION_MM = 2000.0
MIN_RADIUS_MM = 0.5

DIAMETER_MARKERS = "Øø⌀"
DIAMETER_SYMBOL = "Ø"

_NUM = r'\d+(?:[.,]\d+)?'
# A number starts a token of its own, or follows an "x"/"×" multiplier
# as in 4xM8 or 100x50x20. Scales like 1:2 are not measurements.
_START = r'(?:(?<=[\d\s][xX×])|(?<![\w.,\-])(?<!\d:))'
# ...and is not glued to a following digit, decimal part or letter (except x).
_END = r'(?![.,:]?\d)(?![^\W\dxX])'
_UNIT = r'(?:\s?mm\b)?'

_FIT_RE = re.compile(
    _START + r'(?:[' + DIAMETER_MARKERS + r']\s*)?(' + _NUM + r')\s*'
    r'([A-Za-z]\d{1,2})\s*\(\s*([+-]?' + _NUM + r')\s*\)'
)
_THREAD_RE = re.compile(
    _START + r'M(\d{1,3})(?:\s*[xX×]\s*(\d+(?:[.,]\d+)?))?(?!\d)'
)
_RADIUS_RE = re.compile(
    _START + r'R\s*(' + _NUM + r')' + _UNIT + _END
)
_MEASUREMENT_RE = re.compile(
    _START + r'([' + DIAMETER_MARKERS + r'])?\s*(' + _NUM + r')' + _UNIT + _END
)
# "4x" in front of a diameter or thread callout is a count, not a length
_COUNT_PREFIX_RE = re.compile(r'\s*[xX×]\s*(?:[' + DIAMETER_MARKERS + r']|M\d)')


class DimensionKind(str, Enum):
    PLAIN = "plain"
    FIT = "fit"
    THREAD = "thread"
    RADIUS = "radius"


@dataclass(frozen=True)
class Dimension:
    """A measurement in millimetres found on the drawing"""
    value: float
    is_diameter: bool
    kind: DimensionKind = DimensionKind.PLAIN

    def format(self) -> str:
        if self.is_diameter:
            return f"{DIAMETER_SYMBOL}{self.value:.2f}"
        return f"{self.value:.2f}"


@dataclass(frozen=True)
class FitAnnotation:
    """ISO fit callout such as Ø25 h6 (0,008); informational only"""
    diameter: float
    fit_class: str
    tolerance: float


@dataclass(frozen=True)
class ThreadCallout:
    nominal_diameter: float
    pitch: Optional[float] = None


@dataclass
class DimensionExtraction:
    dimensions: List[Dimension] = field(default_factory=list)
    threads: List[ThreadCallout] = field(default_factory=list)
    fits: List[FitAnnotation] = field(default_factory=list)

    def add_dimension(self, value: float, is_diameter: bool, kind: DimensionKind) -> bool:
        """Register a dimension if it lies in the plausible range."""
        if not is_plausible_dimension(value):
            logger.debug(f"Discarding {kind.value} value {value} outside "
                         f"[{MIN_DIMENSION_MM}, {MAX_DIMENSION_MM}] mm")
            return False
        self.dimensions.append(Dimension(value=value, is_diameter=is_diameter, kind=kind))
        return True


def is_plausible_dimension(value: float) -> bool:
    return MIN_DIMENSION_MM <= value <= MAX_DIMENSION_MM


def _scan_fits(line: str, result: DimensionExtraction) -> None:
    for m in _FIT_RE.finditer(line):
        diameter = parse_decimal(m.group(1))
        tolerance = parse_decimal(m.group(3))
        if diameter is None or tolerance is None or diameter < MIN_DIMENSION_MM:
            continue
        if result.add_dimension(diameter, True, DimensionKind.FIT):
            result.fits.append(FitAnnotation(diameter=diameter, fit_class=m.group(2), tolerance=tolerance))
            logger.debug(f"Fit callout found: {m.group(0)!r} -> Ø{diameter} {m.group(2)}")


def _scan_threads(line: str, result: DimensionExtraction) -> None:
    for m in _THREAD_RE.finditer(line):
        nominal = parse_decimal(m.group(1))
        if nominal is None or nominal < MIN_DIMENSION_MM:
            continue
        pitch = parse_decimal(m.group(2)) if m.group(2) else None
        if result.add_dimension(nominal, True, DimensionKind.THREAD):
            result.threads.append(ThreadCallout(nominal_diameter=nominal, pitch=pitch))
            logger.debug(f"Thread callout found: {m.group(0)!r}")


def _scan_radii(line: str, result: DimensionExtraction) -> None:
    for m in _RADIUS_RE.finditer(line):
        radius = parse_decimal(m.group(1))
        if radius is None or radius <= MIN_RADIUS_MM:
            continue
        # radii take part in geometry as the equivalent diameter
        if result.add_dimension(2 * radius, True, DimensionKind.RADIUS):
            logger.debug(f"Radius callout found: {m.group(0)!r} -> Ø{2 * radius}")


def _scan_measurements(line: str, result: DimensionExtraction) -> None:
    # the pitch in M20x2 belongs to the thread
    thread_spans = [t.span() for t in _THREAD_RE.finditer(line)]
    for m in _MEASUREMENT_RE.finditer(line):
        if any(start <= m.start(2) < end for start, end in thread_spans):
            continue
        if _COUNT_PREFIX_RE.match(line, m.end()):
            continue
        value = parse_decimal(m.group(2))
        if value is None:
            continue
        result.add_dimension(value, bool(m.group(1)), DimensionKind.PLAIN)


Matcher = Callable[[str, DimensionExtraction], None]

DIMENSION_MATCHERS: List[Matcher] = [
    _scan_fits,
    _scan_threads,
    _scan_radii,
    _scan_measurements,
]


def extract_dimensions(lines: Iterable[str], matchers: Optional[List[Matcher]] = None) -> DimensionExtraction:
    """
    Run every matcher over every line and collect tagged dimensions,
    thread callouts and fit annotations in extraction order.
    """
    result = DimensionExtraction()
    for line in lines:
        for matcher in (matchers or DIMENSION_MATCHERS):
            matcher(line, result)

    logger.info(f"Extracted {len(result.dimensions)} dimensions "
                f"({len(result.threads)} threads, {len(result.fits)} fits)")
    return result
