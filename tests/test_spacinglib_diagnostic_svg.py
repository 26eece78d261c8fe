"""Tests for spacinglib.diagnostic_svg module."""

# Third Party
import defusedxml.ElementTree as ET
import pytest

# Local
import conftest
conftest.add_tools_to_sys_path()

from spacinglib.diagnostic_svg import (
	AnnotationMark,
	annotated_svg_root,
	build_annotation_marks,
	overlay_group,
	svg_to_string,
	write_annotated_svg,
)
from spacinglib.geometry import make_segment
from spacinglib.issues import IssueCollector
from spacinglib.svg_parse import local_tag_name, parse_svg_document


SVG_NS = "http://www.w3.org/2000/svg"


#============================================
def _issues(count):
	collector = IssueCollector()
	for index in range(count):
		segment_a = make_segment("line", index, 2 * index, (index * 10.0, 0.0), (index * 10.0, 10.0))
		segment_b = make_segment("line", index + 1, 2 * index + 1, (index * 10.0 + 0.3, 0.0), (index * 10.0 + 0.3, 10.0))
		collector.add(segment_a, segment_b, 0.3)
	return collector.issues


#============================================
def _children_by_tag(node):
	counts = {}
	for child in list(node):
		name = local_tag_name(child.tag)
		counts[name] = counts.get(name, 0) + 1
	return counts


#============================================
def test_build_annotation_marks_radius_and_center():
	marks = build_annotation_marks(_issues(1), threshold=0.5)
	assert len(marks) == 1
	assert marks[0].radius == pytest.approx(1.0)
	assert marks[0].center == pytest.approx((0.0, 5.0))
	assert marks[0].crosshair_half_length == pytest.approx(0.5)


#============================================
def test_build_annotation_marks_capped_at_100():
	assert len(build_annotation_marks(_issues(130), threshold=0.5)) == 100


#============================================
def test_build_annotation_marks_empty():
	assert build_annotation_marks((), threshold=0.5) == ()


#============================================
def test_overlay_group_structure():
	root = parse_svg_document(conftest.svg_document())
	marks = (AnnotationMark(center=(10.0, 20.0), radius=1.0), AnnotationMark(center=(5.0, 5.0), radius=1.0))
	group = overlay_group(root, marks)
	assert group.tag == f"{{{SVG_NS}}}g"
	assert group.get("id") == "spacing-issues"
	assert group.get("stroke") == "red"
	assert group.get("opacity") == "0.7"
	assert _children_by_tag(group) == {"circle": 2, "line": 4}


#============================================
def test_overlay_crosshair_geometry():
	root = parse_svg_document(conftest.svg_document())
	group = overlay_group(root, (AnnotationMark(center=(10.0, 20.0), radius=1.0),))
	circle, horizontal, vertical = list(group)
	assert float(circle.get("cx")) == pytest.approx(10.0)
	assert float(circle.get("r")) == pytest.approx(1.0)
	assert circle.get("fill") == "none"
	assert float(horizontal.get("x1")) == pytest.approx(9.5)
	assert float(horizontal.get("x2")) == pytest.approx(10.5)
	assert float(horizontal.get("y1")) == pytest.approx(20.0)
	assert float(vertical.get("y1")) == pytest.approx(19.5)
	assert float(vertical.get("y2")) == pytest.approx(20.5)


#============================================
def test_annotated_svg_root_does_not_mutate_original():
	root = parse_svg_document(conftest.svg_document(conftest.line_element(0, 0, 10, 0)))
	before = len(list(root))
	annotated = annotated_svg_root(root, build_annotation_marks(_issues(3), threshold=0.5))
	assert len(list(root)) == before
	assert len(list(annotated)) == before + 1


#============================================
def test_svg_to_string_uses_default_namespace():
	root = parse_svg_document(conftest.svg_document(conftest.line_element(0, 0, 10, 0)))
	text = svg_to_string(annotated_svg_root(root, ()))
	assert text.startswith("<?xml")
	assert "ns0:" not in text
	assert 'id="spacing-issues"' in text
	reparsed = ET.fromstring(text.encode("utf-8"))
	assert reparsed.tag == f"{{{SVG_NS}}}svg"


#============================================
def test_svg_to_string_is_deterministic():
	root = parse_svg_document(conftest.svg_document(conftest.line_element(0, 0, 10, 0)))
	marks = build_annotation_marks(_issues(5), threshold=0.5)
	assert svg_to_string(annotated_svg_root(root, marks)) == svg_to_string(annotated_svg_root(root, marks))


#============================================
def test_write_annotated_svg_creates_directories(tmp_path):
	output_path = tmp_path / "nested" / "out_spacing.svg"
	written = write_annotated_svg("<svg/>", output_path)
	assert written == output_path
	assert output_path.read_text(encoding="utf-8") == "<svg/>"


#============================================
def test_annotated_svg_root_replaces_earlier_overlays():
	elements = (
		conftest.line_element(0, 0, 10, 0)
		+ "<g id='spacing-issues'><circle cx='1' cy='1' r='1'/></g>"
		+ "<g id='layer1'><g id='spacing-issues'><circle cx='2' cy='2' r='1'/></g></g>"
	)
	root = parse_svg_document(conftest.svg_document(elements))
	marks = (AnnotationMark(center=(5.0, 5.0), radius=1.0),)
	text = svg_to_string(annotated_svg_root(root, marks))
	assert text.count('id="spacing-issues"') == 1
	assert text.count("<circle") == 1
	assert 'id="layer1"' in text
