# Standard Library
import os
import sys


def repo_root():
	root = _find_repo_root(os.path.dirname(os.path.abspath(__file__)))
	if not root:
		root = _find_repo_root(os.getcwd())
	if not root:
		raise RuntimeError("repo root could not be resolved from tests directory or current working directory")
	return root


#============================================
def _find_repo_root(start_dir):
	current = os.path.abspath(start_dir)
	while True:
		if _looks_like_repo_root(current):
			return current
		parent = os.path.dirname(current)
		if parent == current:
			return ""
		current = parent


#============================================
def _looks_like_repo_root(path):
	if not path:
		return False
	if not os.path.isdir(path):
		return False
	if not os.path.isfile(os.path.join(path, "pyproject.toml")):
		return False
	if not os.path.isdir(os.path.join(path, "tools", "spacinglib")):
		return False
	return True


def add_tools_to_sys_path():
	root = repo_root()
	tools_dir = os.path.join(root, "tools")
	if tools_dir not in sys.path:
		sys.path.insert(0, tools_dir)
	return root


#============================================
def svg_document(elements="", attributes="width='200' height='200'"):
	"""Return one minimal SVG document string wrapping the given elements."""
	return (
		"<?xml version='1.0' encoding='utf-8'?>"
		f"<svg xmlns='http://www.w3.org/2000/svg' {attributes}>"
		f"{elements}"
		"</svg>"
	)


#============================================
def line_element(x1, y1, x2, y2):
	return f"<line x1='{x1}' y1='{y1}' x2='{x2}' y2='{y2}' stroke='black'/>"
