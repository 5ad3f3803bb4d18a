"""
场景到 SVG 的序列化
"""
import xml.dom.minidom as dom

from .projection import Scene

SVG_NS = "http://www.w3.org/2000/svg"


def _serialize_number(value: float, digits: int = 4) -> str:
    rounded = round(float(value), digits)
    if rounded == 0:
        rounded = 0.0  # 避免输出 -0.0
    return repr(rounded)


def _element_under(parent, name: str, attributes) -> dom.Element:
    document = parent.ownerDocument if parent.ownerDocument is not None else parent
    element = document.createElement(name)
    for key, value in attributes:
        element.setAttribute(key, value)
    parent.appendChild(element)
    return element


def scene_to_svg(scene: Scene, digits: int = 4) -> str:
    """
    将场景序列化为 SVG 文档

    键线先于原子圆写出，使原子覆盖在键之上。
    """
    def num(value: float) -> str:
        return _serialize_number(value, digits)

    document = dom.Document()
    viewport = scene.viewport
    top = _element_under(document, "svg", (
        ("xmlns", SVG_NS),
        ("version", "1.1"),
        ("width", "100%"),
        ("height", "100%"),
        ("viewBox", " ".join(num(v) for v in (viewport.x, viewport.y, viewport.width, viewport.height))),
        ("preserveAspectRatio", "xMidYMid meet"),
    ))
    group = _element_under(top, "g", ())

    for line in scene.lines:
        _element_under(group, "line", (
            ("x1", num(line.p1[0])),
            ("y1", num(line.p1[1])),
            ("x2", num(line.p2[0])),
            ("y2", num(line.p2[1])),
            ("stroke", line.color),
            ("stroke-width", num(line.width)),
        ))

    for circle in scene.circles:
        _element_under(group, "circle", (
            ("cx", num(circle.center[0])),
            ("cy", num(circle.center[1])),
            ("r", num(circle.radius)),
            ("fill", circle.fill),
            ("stroke", circle.stroke),
            ("stroke-width", num(circle.stroke_width)),
        ))

    return document.toxml(encoding=None)
