"""SVG document parsing and segment extraction for spacing analysis."""

# Standard Library
import glob
import math
import pathlib

# Third Party
import defusedxml
import defusedxml.ElementTree as ET

from spacinglib.constants import (
	OVERLAY_GROUP_ID,
	PATH_COMMAND_PATTERN,
	PROGRESS_LINES,
	PROGRESS_PATHS_END,
	PROGRESS_POLYLINES,
	SEGMENT_KINDS,
	SUPPORTED_PATH_COMMANDS,
	SVG_FLOAT_PATTERN,
	SVG_TOKEN_SEPARATOR_PATTERN,
)
from spacinglib.errors import CoordinateValueError, DocumentParseError
from spacinglib.geometry import make_segment, point_is_finite
from spacinglib.progress import ProgressReporter


#============================================
def local_tag_name(tag: str) -> str:
	"""Return local XML tag name without namespace prefix."""
	if "}" in tag:
		return tag.rsplit("}", 1)[-1]
	return tag


#============================================
def svg_tag_with_namespace(svg_root, local_name: str) -> str:
	"""Return namespaced tag when the parsed SVG root has one."""
	root_tag = str(svg_root.tag)
	if root_tag.startswith("{") and "}" in root_tag:
		namespace = root_tag[1:].split("}", 1)[0]
		return f"{{{namespace}}}{local_name}"
	return local_name


#============================================
def parse_svg_document(svg_text: str | bytes):
	"""Parse SVG text into an element root, failing fast on malformed input."""
	try:
		root = ET.fromstring(svg_text)
	except ET.ParseError as error:
		raise DocumentParseError(f"SVG document is not well-formed XML: {error}") from error
	except defusedxml.DefusedXmlException as error:
		raise DocumentParseError(f"SVG document rejected as unsafe XML: {error!r}") from error
	root_name = local_tag_name(str(root.tag))
	if root_name != "svg":
		raise DocumentParseError(f"Expected <svg> root element, found <{root_name}>")
	return root


#============================================
def parse_float(raw_value: str | None, default_value: float) -> float:
	"""Parse one SVG numeric attribute with a default fallback."""
	if raw_value is None:
		return float(default_value)
	try:
		return float(str(raw_value).strip())
	except ValueError:
		return float(default_value)


#============================================
def svg_number_tokens(text_value: str) -> list[float]:
	"""Return numeric values from one SVG attribute string, one slot per value.

	Whitespace and commas separate tokens. A token made only of numbers,
	such as "10-5" or ".5.5", expands to each of them. Any other token keeps
	its slot as NaN so the coordinates after it stay in place.
	"""
	values = []
	for raw_token in SVG_TOKEN_SEPARATOR_PATTERN.split(str(text_value or "")):
		if not raw_token:
			continue
		numbers = SVG_FLOAT_PATTERN.findall(raw_token)
		if numbers and "".join(numbers) == raw_token:
			values.extend(float(number) for number in numbers)
		else:
			values.append(parse_float(raw_token, math.nan))
	return values


#============================================
def _value_at(values: list[float], index: int) -> float:
	"""Return one coordinate value, NaN when the list runs short."""
	if index < len(values):
		return values[index]
	return math.nan


#============================================
def coordinate_pairs(values: list[float]) -> list[tuple[float, float]]:
	"""Group a flat coordinate list into points; a dangling x gets a NaN y."""
	return [
		(values[index], _value_at(values, index + 1))
		for index in range(0, len(values), 2)
	]


#============================================
def polyline_points(points_text: str) -> list[tuple[float, float]]:
	"""Parse SVG polyline points string into coordinate tuples."""
	return coordinate_pairs(svg_number_tokens(points_text))


#============================================
def path_points(path_d: str) -> tuple[list[tuple[float, float]], int]:
	"""Return visited cursor points for straight path commands.

	Only M/m, L/l, H/h and V/v move the cursor. Every other command letter
	(close-path, curves, arcs) is skipped together with its operands.

	Returns:
		(points, ignored_command_count)
	"""
	points = []
	ignored_commands = 0
	current_x = 0.0
	current_y = 0.0
	for chunk in PATH_COMMAND_PATTERN.findall(str(path_d or "")):
		command = chunk[0]
		if command not in SUPPORTED_PATH_COMMANDS:
			ignored_commands += 1
			continue
		values = svg_number_tokens(chunk[1:])
		if command in "ML":
			for x_value, y_value in coordinate_pairs(values):
				current_x = x_value
				current_y = y_value
				points.append((current_x, current_y))
		elif command in "ml":
			for dx, dy in coordinate_pairs(values):
				current_x += dx
				current_y += dy
				points.append((current_x, current_y))
		elif command == "H":
			for x_value in values:
				current_x = x_value
				points.append((current_x, current_y))
		elif command == "h":
			for dx in values:
				current_x += dx
				points.append((current_x, current_y))
		elif command == "V":
			for y_value in values:
				current_y = y_value
				points.append((current_x, current_y))
		elif command == "v":
			for dy in values:
				current_y += dy
				points.append((current_x, current_y))
	return points, ignored_commands


#============================================
def node_is_overlay_group(node) -> bool:
	"""Return True when one SVG node is a spacing-issue overlay group."""
	if local_tag_name(str(node.tag)) != "g":
		return False
	node_id = str(node.get("id") or "").strip().lower()
	return node_id == OVERLAY_GROUP_ID


#============================================
def collect_svg_elements(svg_root) -> dict[str, list]:
	"""Collect path, line and polyline nodes in document order per kind."""
	elements = {kind: [] for kind in SEGMENT_KINDS}
	def walk(node, overlay_excluded: bool) -> None:
		excluded_here = overlay_excluded or node_is_overlay_group(node)
		if excluded_here:
			return
		tag_name = local_tag_name(str(node.tag))
		if tag_name in elements:
			elements[tag_name].append(node)
		for child in list(node):
			walk(child, excluded_here)
	walk(svg_root, False)
	return elements


#============================================
def line_points(node) -> list[tuple[float, float]]:
	"""Return the two endpoints of one line element (NaN when missing)."""
	return [
		(parse_float(node.get("x1"), math.nan), parse_float(node.get("y1"), math.nan)),
		(parse_float(node.get("x2"), math.nan), parse_float(node.get("y2"), math.nan)),
	]


#============================================
def append_point_segments(
		kind: str,
		owner_index: int,
		owner_id: int,
		points: list[tuple[float, float]],
		segments: list,
		errors: list) -> None:
	"""Slice consecutive points into segments; bad endpoints become errors."""
	for index in range(len(points) - 1):
		start = points[index]
		end = points[index + 1]
		bad_point = next((point for point in (start, end) if not point_is_finite(point)), None)
		if bad_point is not None:
			errors.append(CoordinateValueError(kind, owner_index, index, bad_point))
			continue
		segments.append(make_segment(kind, owner_index, owner_id, start, end))


#============================================
def collect_svg_segments(svg_root, progress: ProgressReporter | None = None) -> tuple[list, list, dict]:
	"""Extract line segments from path, line and polyline elements.

	Args:
		svg_root: parsed SVG root element.
		progress: optional reporter receiving extraction progress (0-30%).

	Returns:
		(segments, coordinate_errors, stats) where stats counts elements,
		segments per kind and ignored path commands.
	"""
	if progress is None:
		progress = ProgressReporter()
	elements = collect_svg_elements(svg_root)
	segments = []
	errors = []
	ignored_path_commands = 0
	owner_id = 0
	paths = elements["path"]
	progress.report(0.0, f"Processing {len(paths)} paths...")
	for index, node in enumerate(paths):
		points, ignored = path_points(str(node.get("d") or ""))
		ignored_path_commands += ignored
		append_point_segments("path", index, owner_id, points, segments, errors)
		owner_id += 1
		if index % 100 == 0:
			progress.report((index / len(paths)) * PROGRESS_PATHS_END)
	lines = elements["line"]
	progress.report(PROGRESS_LINES, f"Processing {len(lines)} lines...")
	for index, node in enumerate(lines):
		append_point_segments("line", index, owner_id, line_points(node), segments, errors)
		owner_id += 1
	polylines = elements["polyline"]
	progress.report(PROGRESS_POLYLINES, f"Processing {len(polylines)} polylines...")
	for index, node in enumerate(polylines):
		points = polyline_points(str(node.get("points") or ""))
		append_point_segments("polyline", index, owner_id, points, segments, errors)
		owner_id += 1
	segment_counts = {kind: 0 for kind in SEGMENT_KINDS}
	for segment in segments:
		segment_counts[segment.kind] += 1
	stats = {
		"element_counts": {kind: len(nodes) for kind, nodes in elements.items()},
		"segment_counts": segment_counts,
		"segment_count": len(segments),
		"ignored_path_commands": ignored_path_commands,
		"coordinate_error_count": len(errors),
	}
	return segments, errors, stats


#============================================
def resolve_svg_paths(base_dir: pathlib.Path, input_glob: str) -> list[pathlib.Path]:
	"""Resolve sorted SVG paths from one glob pattern."""
	pattern = str(input_glob)
	if not pattern.startswith("/"):
		pattern = str(base_dir / pattern)
	paths = [pathlib.Path(raw).resolve() for raw in glob.glob(pattern, recursive=True)]
	return sorted(path for path in paths if path.is_file())
