"""
二维投影与 SVG 输出测试
"""
import xml.dom.minidom as dom

import pytest

from core.molecule import (
    Atom,
    Bond,
    calculate_bonds,
    parse_xyz,
    project_scene,
    scene_to_svg,
)
from core.molecule.projection import compute_viewport, project_point
from core.molecule.svg import _serialize_number


def _scene(text):
    atoms = parse_xyz(text)
    return project_scene(atoms, calculate_bonds(atoms))


class TestProjection:
    """投影与视口"""

    def test_project_point_flips_y_and_drops_z(self):
        assert project_point(Atom("C", 1.0, 2.0, 3.0)) == (1.0, -2.0)

    def test_empty_atoms_yield_no_scene(self):
        assert project_scene([], []) is None

    def test_single_atom_fallback_viewport(self):
        """单原子：宽高均回落到 100"""
        scene = project_scene([Atom("C", 3.0, 4.0, 0.0)], [])
        viewport = scene.viewport
        assert (viewport.width, viewport.height) == (100.0, 100.0)
        assert (viewport.x, viewport.y) == (-17.0, -24.0)
        assert scene.atom_radius == pytest.approx(5.0)
        assert scene.bond_width == pytest.approx(1.0)

    def test_hydrogen_along_z_is_degenerate(self, hydrogen_xyz):
        """沿 z 轴排列的 H2 投影后重合"""
        scene = _scene(hydrogen_xyz)
        assert scene.viewport.width == 100.0
        assert scene.viewport.height == 100.0
        assert len(scene.circles) == 2
        assert len(scene.lines) == 1

    def test_viewport_padding(self):
        """包围盒四周留 20 单位"""
        viewport = compute_viewport([(0.0, 0.0), (10.0, -5.0)])
        assert viewport.x == -20.0
        assert viewport.y == -25.0
        assert viewport.width == pytest.approx(50.0)
        assert viewport.height == pytest.approx(45.0)

    def test_mixed_degenerate_axis(self):
        """只有一个方向退化"""
        viewport = compute_viewport([(0.0, 0.0), (1.2, 0.0)])
        assert viewport.width == pytest.approx(41.2)
        assert viewport.height == 100.0

    def test_threshold_is_exclusive(self):
        """宽度恰为 0.1 时视为退化"""
        viewport = compute_viewport([(0.0, 0.0), (0.1, 0.0)])
        assert viewport.width == 100.0

    def test_radius_from_smaller_side(self):
        atoms = [Atom("C", 0.0, 0.0, 0.0), Atom("O", 1.2, 0.0, 0.0)]
        scene = project_scene(atoms, calculate_bonds(atoms))
        assert scene.atom_radius == pytest.approx(41.2 * 0.05)
        assert scene.bond_width == pytest.approx(41.2 * 0.05 * 0.2)

    def test_circles_follow_atom_order_and_colors(self, water_xyz):
        scene = _scene(water_xyz)
        assert [c.index for c in scene.circles] == [0, 1, 2]
        assert [c.fill for c in scene.circles] == ["#FF0000", "#FFFFFF", "#FFFFFF"]
        assert all(c.stroke == "#FFFFFF" for c in scene.circles)
        assert scene.circles[1].center == (0.757, -0.586)

    def test_lines_connect_projected_atoms(self, water_xyz):
        scene = _scene(water_xyz)
        assert [(line.atom1, line.atom2) for line in scene.lines] == [(0, 1), (0, 2)]
        first = scene.lines[0]
        assert first.p1 == scene.circles[0].center
        assert first.p2 == scene.circles[1].center
        assert first.color == "#555"

    def test_unknown_element_pink(self):
        scene = project_scene([Atom("Xx", 0.0, 0.0, 0.0)], [])
        assert scene.circles[0].fill == "#FFC0CB"

    def test_deterministic(self, ethanol_xyz):
        """相同输入得到相同场景"""
        assert _scene(ethanol_xyz) == _scene(ethanol_xyz)

    def test_to_dict(self, hydrogen_xyz):
        data = _scene(hydrogen_xyz).to_dict()
        assert set(data) == {"viewport", "atom_radius", "bond_width", "atoms", "bonds"}
        assert data["viewport"] == {"x": -20.0, "y": -20.0, "width": 100.0, "height": 100.0}
        assert data["bonds"][0]["atom1"] == 0
        assert data["atoms"][1]["cx"] == 0.0


class TestSvgOutput:
    """SVG 序列化"""

    def test_serialize_number(self):
        assert _serialize_number(1.23456789) == "1.2346"
        assert _serialize_number(-0.0) == "0.0"
        assert _serialize_number(-0.00001) == "0.0"
        assert _serialize_number(20) == "20.0"

    def test_document_structure(self, water_xyz):
        svg = scene_to_svg(_scene(water_xyz))
        document = dom.parseString(svg)
        root = document.documentElement

        assert root.tagName == "svg"
        assert root.getAttribute("xmlns") == "http://www.w3.org/2000/svg"
        assert root.getAttribute("preserveAspectRatio") == "xMidYMid meet"
        assert len(root.getElementsByTagName("line")) == 2
        assert len(root.getElementsByTagName("circle")) == 3

    def test_lines_drawn_before_circles(self, water_xyz):
        """键线位于原子圆下方"""
        svg = scene_to_svg(_scene(water_xyz))
        group = dom.parseString(svg).getElementsByTagName("g")[0]
        tags = [node.tagName for node in group.childNodes]
        assert tags == ["line", "line", "circle", "circle", "circle"]

    def test_view_box(self, hydrogen_xyz):
        svg = scene_to_svg(_scene(hydrogen_xyz))
        root = dom.parseString(svg).documentElement
        assert root.getAttribute("viewBox") == "-20.0 -20.0 100.0 100.0"

    def test_circle_attributes(self):
        scene = project_scene([Atom("N", 1.0, 2.0, 0.0)], [])
        circle = dom.parseString(scene_to_svg(scene)).getElementsByTagName("circle")[0]
        assert circle.getAttribute("cx") == "1.0"
        assert circle.getAttribute("cy") == "-2.0"
        assert circle.getAttribute("r") == "5.0"
        assert circle.getAttribute("fill") == "#0000FF"
        assert circle.getAttribute("stroke-width") == "0.5"

    def test_identical_output(self, ethanol_xyz):
        assert scene_to_svg(_scene(ethanol_xyz)) == scene_to_svg(_scene(ethanol_xyz))

    def test_bond_only_references_existing_atoms(self):
        atoms = [Atom("C", 0.0, 0.0, 0.0), Atom("C", 1.5, 0.0, 0.0)]
        scene = project_scene(atoms, [Bond(0, 1)])
        line = dom.parseString(scene_to_svg(scene)).getElementsByTagName("line")[0]
        assert line.getAttribute("x2") == "1.5"
