"""Overlay writer marking spacing issues on a copy of the source SVG."""

# Standard Library
import copy
import dataclasses
import pathlib
import xml.etree.ElementTree as StdET

from spacinglib.constants import (
	CROSSHAIR_STROKE_WIDTH,
	MARKER_STROKE_WIDTH,
	MAX_ANNOTATION_MARKS,
	OVERLAY_COLOR,
	OVERLAY_GROUP_ID,
	OVERLAY_OPACITY,
	SVG_NAMESPACE,
	XLINK_NAMESPACE,
)
from spacinglib.svg_parse import node_is_overlay_group, svg_tag_with_namespace


#============================================
@dataclasses.dataclass(frozen=True)
class AnnotationMark:
	center: tuple[float, float]
	radius: float

	@property
	def crosshair_half_length(self) -> float:
		# crosshair spans 2 * threshold, circle radius is 2 * threshold
		return self.radius * 0.5


#============================================
def build_annotation_marks(issues, threshold: float, limit: int = MAX_ANNOTATION_MARKS) -> tuple[AnnotationMark, ...]:
	"""Return one mark per issue location for the first `limit` issues."""
	radius = 2.0 * float(threshold)
	return tuple(
		AnnotationMark(center=issue.location, radius=radius)
		for issue in list(issues)[:limit]
	)


#============================================
def overlay_group(svg_root, marks) -> StdET.Element:
	"""Build the overlay group: one circle and one crosshair per mark."""
	tag_group = svg_tag_with_namespace(svg_root, "g")
	tag_circle = svg_tag_with_namespace(svg_root, "circle")
	tag_line = svg_tag_with_namespace(svg_root, "line")
	group = StdET.Element(
		tag_group,
		attrib={
			"id": OVERLAY_GROUP_ID,
			"stroke": OVERLAY_COLOR,
			"fill": OVERLAY_COLOR,
			"opacity": OVERLAY_OPACITY,
		},
	)
	for mark in marks:
		cx, cy = mark.center
		half = mark.crosshair_half_length
		group.append(
			StdET.Element(
				tag_circle,
				attrib={
					"cx": f"{cx:.6f}",
					"cy": f"{cy:.6f}",
					"r": f"{mark.radius:.6f}",
					"fill": "none",
					"stroke": OVERLAY_COLOR,
					"stroke-width": MARKER_STROKE_WIDTH,
				},
			)
		)
		group.append(
			StdET.Element(
				tag_line,
				attrib={
					"x1": f"{cx - half:.6f}",
					"y1": f"{cy:.6f}",
					"x2": f"{cx + half:.6f}",
					"y2": f"{cy:.6f}",
					"stroke-width": CROSSHAIR_STROKE_WIDTH,
				},
			)
		)
		group.append(
			StdET.Element(
				tag_line,
				attrib={
					"x1": f"{cx:.6f}",
					"y1": f"{cy - half:.6f}",
					"x2": f"{cx:.6f}",
					"y2": f"{cy + half:.6f}",
					"stroke-width": CROSSHAIR_STROKE_WIDTH,
				},
			)
		)
	return group


#============================================
def annotated_svg_root(svg_root, marks):
	"""Return a copy of svg_root with one fresh overlay group appended.

	Overlay groups left by an earlier run are removed from the copy.
	"""
	annotated = copy.deepcopy(svg_root)
	stale = [
		(parent, child)
		for parent in annotated.iter()
		for child in list(parent)
		if node_is_overlay_group(child)
	]
	for parent, child in stale:
		parent.remove(child)
	annotated.append(overlay_group(annotated, marks))
	return annotated


#============================================
def svg_to_string(svg_root) -> str:
	"""Serialize one SVG root with the SVG namespace as default."""
	StdET.register_namespace("", SVG_NAMESPACE)
	StdET.register_namespace("xlink", XLINK_NAMESPACE)
	svg_bytes = StdET.tostring(svg_root, encoding="utf-8", xml_declaration=True)
	return svg_bytes.decode("utf-8")


#============================================
def write_annotated_svg(svg_text: str, output_path: pathlib.Path) -> pathlib.Path:
	"""Write annotated SVG text to disk, creating parent directories."""
	output_path = pathlib.Path(output_path)
	output_path.parent.mkdir(parents=True, exist_ok=True)
	output_path.write_text(svg_text, encoding="utf-8")
	return output_path
