"""
pytest 配置
"""
import json
import os
from unittest.mock import AsyncMock

import pytest

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")


HYDROGEN_XYZ = "2\nTest\nH 0 0 0\nH 0 0 0.74\n"

WATER_XYZ = """3
Water
O 0.000 0.000 0.000
H 0.757 0.586 0.000
H -0.757 0.586 0.000
"""

ETHANOL_XYZ = """9
Ethanol
C -0.0011 -0.0041 0.0021
C 1.5138 0.0029 -0.0048
O 1.9772 1.3417 0.0019
H -0.3926 1.0202 0.0154
H -0.3906 -0.5130 -0.8820
H -0.3862 -0.5271 0.8826
H 1.8960 -0.5217 0.8818
H 1.8914 -0.5100 -0.8878
H 2.9382 1.3257 -0.0019
"""


@pytest.fixture(scope="session")
def test_settings():
    """测试配置"""
    from core.config import Settings
    return Settings()


@pytest.fixture
def hydrogen_xyz():
    return HYDROGEN_XYZ


@pytest.fixture
def water_xyz():
    return WATER_XYZ


@pytest.fixture
def ethanol_xyz():
    return ETHANOL_XYZ


@pytest.fixture
def material_payload():
    """AI 返回的材料记录"""
    return {
        "materialName": "Cellulose Nanofiber Hydrogel",
        "description": "A biodegradable conductive hydrogel.",
        "xyzCoordinates": WATER_XYZ,
        "synthesisMethodology": "1. Disperse nanofibers in water.",
        "validationSummary": "Confidence: Medium.",
    }


@pytest.fixture
def fake_genai_client(material_payload):
    """返回固定 JSON 的 AI 客户端"""
    client = AsyncMock()
    client.generate_json = AsyncMock(return_value=json.dumps(material_payload))
    return client
