"""Shared constants for SVG line spacing analysis."""

# Standard Library
import re

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
SVG_FLOAT_PATTERN = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
SVG_TOKEN_SEPARATOR_PATTERN = re.compile(r"[\s,]+")
PATH_COMMAND_PATTERN = re.compile(r"[MLHVZCSQTAmlhvzcsqta][^MLHVZCSQTAmlhvzcsqta]*")
SUPPORTED_PATH_COMMANDS = frozenset("MmLlHhVv")

SEGMENT_KINDS = ("path", "line", "polyline")

DEFAULT_THRESHOLD = 0.5
BUDGET_TIERS = (100000, 500000, 1000000, 5000000)
DEFAULT_MAX_COMPARISONS = 1000000
# bbox buffer is threshold plus this margin
PRUNE_BUFFER_MARGIN = 1.0
# coincident points where elements touch are not spacing issues
MIN_REPORTED_DISTANCE = 0.01
MAX_REPORTED_ISSUES = 100
MAX_ANNOTATION_MARKS = 100
ZERO_LENGTH_EPSILON = 1e-12

DISTANCE_MODES = ("approximate", "exact")
DEFAULT_DISTANCE_MODE = "approximate"
DEFAULT_YIELD_INTERVAL = 50

STATUS_COMPLETE = "complete"
STATUS_TRUNCATED = "truncated"
STATUS_CANCELLED = "cancelled"
STATUS_DEADLINE = "deadline"

PROGRESS_PATHS_END = 20.0
PROGRESS_LINES = 20.0
PROGRESS_POLYLINES = 25.0
PROGRESS_SCAN_START = 30.0
PROGRESS_SCAN_SPAN = 60.0
PROGRESS_SCAN_MAX = 90.0
PROGRESS_ANNOTATING = 95.0
PROGRESS_DONE = 100.0

OVERLAY_GROUP_ID = "spacing-issues"
OVERLAY_COLOR = "red"
OVERLAY_OPACITY = "0.7"
MARKER_STROKE_WIDTH = "0.2"
CROSSHAIR_STROKE_WIDTH = "0.1"

LOCATION_ROUND_DECIMALS = 1
DISTANCE_ROUND_DECIMALS = 3
DEFAULT_INPUT_GLOB = "*.svg"
DEFAULT_OUTPUT_DIR = "output_spacing"
DEFAULT_JSON_REPORT = "output_spacing/spacing_report.json"
DEFAULT_TEXT_REPORT = "output_spacing/spacing_report.txt"
ANNOTATED_SUFFIX = "_spacing"
