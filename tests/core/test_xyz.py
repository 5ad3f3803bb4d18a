"""
XYZ 解析与严格校验测试
"""
import pytest

from core.molecule import Atom, count_data_lines, parse_xyz, validate_xyz, read_declared_count


# ===== 宽松解析 =====

class TestParseXyz:
    """宽松解析测试"""

    def test_parse_hydrogen(self, hydrogen_xyz):
        """两原子示例"""
        atoms = parse_xyz(hydrogen_xyz)
        assert atoms == [Atom("H", 0.0, 0.0, 0.0), Atom("H", 0.0, 0.0, 0.74)]

    @pytest.mark.parametrize("text", ["", None, "   \n  ", "2", "2\nTest", "2\nTest\n"])
    def test_degenerate_input_yields_no_atoms(self, text):
        """空文本或不足 3 行"""
        assert parse_xyz(text) == []

    def test_declared_count_is_informational(self):
        """声明原子数与实际不符时仍解析全部数据行"""
        atoms = parse_xyz("3\nTest\nH 0 0 0\nH 0 0 0.74\n")
        assert len(atoms) == 2

    def test_malformed_lines_are_skipped(self):
        """无法解析的行被跳过"""
        text = "5\nMixed\nC 0 0 0\nthis is not an atom\nO 1 2\nN 1 2 3 4\nH 1.0 abc 0\nS 0 0 1.5\n"
        atoms = parse_xyz(text)
        assert [a.element for a in atoms] == ["C", "S"]

    def test_signed_and_exponential_coordinates(self):
        """带符号与指数格式"""
        atoms = parse_xyz("1\nx\nC +1.5 -2.5E+1 .5e-1\n")
        assert atoms == [Atom("C", 1.5, -25.0, 0.05)]

    @pytest.mark.parametrize("coord", ["nan", "inf", "-Infinity", "1e400", "0x10", "1,5", "1_0"])
    def test_non_finite_or_non_decimal_rejected(self, coord):
        """非有限值或非十进制写法不是合法坐标"""
        assert parse_xyz(f"1\nx\nC {coord} 0 0\n") == []

    def test_whitespace_runs_and_crlf(self):
        """任意空白分隔与 CRLF 换行"""
        text = "2\r\nLabel\r\n  O\t0.0   0.0  0.0 \r\nH  0.96\t0 0\r\n"
        atoms = parse_xyz(text)
        assert atoms == [Atom("O", 0.0, 0.0, 0.0), Atom("H", 0.96, 0.0, 0.0)]

    def test_element_symbol_kept_verbatim(self):
        """元素符号原样保留（大小写不敏感仅用于查表）"""
        atoms = parse_xyz("1\nx\ncl 0 0 0\n")
        assert atoms[0].element == "cl"

    def test_atom_is_immutable(self):
        """原子不可变"""
        atom = Atom("H", 0.0, 0.0, 0.0)
        with pytest.raises(AttributeError):
            atom.x = 1.0


# ===== 严格校验 =====

class TestValidateXyz:
    """严格校验测试"""

    def test_valid_blocks(self, hydrogen_xyz, water_xyz, ethanol_xyz):
        assert validate_xyz(hydrogen_xyz) is True
        assert validate_xyz(water_xyz) is True
        assert validate_xyz(ethanol_xyz) is True

    def test_known_bad_count_mismatch(self):
        """声明 3 个原子但只有 2 行数据"""
        text = "3\nTest\nH 0 0 0\nH 0 0 0.74\n"
        assert validate_xyz(text) is False
        # 宽松解析仍能得到原子
        assert len(parse_xyz(text)) == 2

    def test_single_data_line_mismatch(self):
        """声明 3 个原子但只有 1 行数据"""
        text = "3\nTest\nH 0 0 0\n"
        assert validate_xyz(text) is False
        assert len(parse_xyz(text)) == 1

    @pytest.mark.parametrize("text", [
        "",
        None,
        "   ",
        "1\nonly two lines",
        "0\nTest\nH 0 0 0",
        "-1\nTest\nH 0 0 0",
        "abc\nTest\nH 0 0 0",
        "1.5\nTest\nH 0 0 0",
        "2\nTest\nH 0 0 0\n\nH 0 0 1",
        "1\nTest\nH 0 0",
        "1\nTest\nH 0 0 0 0",
        "1\nTest\nH 0 0 z",
        "1\nTest\nH 0 nan 0",
    ])
    def test_invalid_blocks(self, text):
        assert validate_xyz(text) is False

    def test_non_string_rejected(self):
        assert validate_xyz(123) is False

    def test_element_symbol_not_checked(self):
        """元素符号不做化学合法性检查"""
        assert validate_xyz("1\nTest\nXx 0 0 0") is True

    def test_empty_label_line(self):
        """注释行可以为空"""
        assert validate_xyz("1\n\nH 0 0 0") is True

    @pytest.mark.parametrize("text", [
        "2\nTest\nH 0 0 0\nH 0 0 0.74\n",
        "3\nWater\nO 0 0 0\nH 0.757 0.586 0\nH -0.757 0.586 0",
        "1\nlabel with spaces\nAu 1e2 -3 4.0",
    ])
    def test_valid_block_atom_count_matches_declared(self, text):
        """严格校验通过时，解析得到的原子数等于声明数"""
        assert validate_xyz(text)
        assert len(parse_xyz(text)) == read_declared_count(text)


class TestReadDeclaredCount:
    """读取声明原子数"""

    def test_positive(self):
        assert read_declared_count("5\nx") == 5

    @pytest.mark.parametrize("text", ["", None, "0\nx", "-2\nx", "five\nx"])
    def test_invalid(self, text):
        assert read_declared_count(text) is None

    @pytest.mark.parametrize("first_line", ["3 atoms", "+3", " 3 x"])
    def test_count_must_be_bare_digits(self, first_line):
        """首行必须只含数字，带单位或符号的计数不被接受"""
        text = f"{first_line}\nWater\nO 0 0 0\nH 0.757 0.586 0\nH -0.757 0.586 0"
        assert read_declared_count(text) is None
        assert validate_xyz(text) is False
        # 宽松解析不读首行
        assert len(parse_xyz(text)) == 3


class TestCountDataLines:
    """数据行计数"""

    def test_counts_lines_after_header(self, water_xyz):
        assert count_data_lines(water_xyz) == 3

    def test_includes_unparseable_lines(self):
        assert count_data_lines("1\nx\nH 0 0 0\nnot an atom\n") == 2

    @pytest.mark.parametrize("text", ["", None, "2", "2\nTest\n"])
    def test_no_data_lines(self, text):
        assert count_data_lines(text) == 0
