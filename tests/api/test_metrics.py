"""
Prometheus 指标测试
"""
import pytest
from fastapi.testclient import TestClient

from api.main import app
from api.metrics import (
    increment_request,
    increment_design,
    increment_render,
    increment_export,
    _format_prometheus_metric,
    _metrics_state,
)


client = TestClient(app)


class TestMetricsEndpoint:
    """/metrics 端点测试"""

    def test_metrics_endpoint_exists(self):
        """测试指标端点存在"""
        response = client.get("/metrics")
        assert response.status_code == 200
        assert response.headers["content-type"] == "text/plain; charset=utf-8"

    def test_metrics_format(self):
        """测试指标格式符合 Prometheus 规范"""
        content = client.get("/metrics").text

        assert "# HELP" in content
        assert "# TYPE" in content
        assert "matforge_info" in content
        assert "matforge_uptime_seconds" in content

    def test_metrics_contains_app_info(self):
        """测试包含应用信息"""
        content = client.get("/metrics").text
        assert 'version="' in content
        assert 'environment="' in content

    def test_metrics_contains_design_and_structure_metrics(self):
        content = client.get("/metrics").text
        assert "matforge_http_requests_total" in content
        assert "matforge_designs_requested_total" in content
        assert "matforge_structure_exports_total" in content
        assert "matforge_structure_exports_refused_total" in content


class TestMetricsFunctions:
    """指标计数函数测试"""

    def test_increment_request(self):
        before = _metrics_state["requests_total"]
        increment_request(200, "/api/v1/health", 0.01)
        assert _metrics_state["requests_total"] == before + 1
        assert _metrics_state["requests_by_status"]["200"] >= 1

    def test_increment_design(self):
        requested = _metrics_state["designs_requested_total"]
        increment_design("requested")
        increment_design("failed", "rate_limit")
        increment_design("failed")

        assert _metrics_state["designs_requested_total"] == requested + 1
        assert _metrics_state["designs_failed_by_category"]["rate_limit"] >= 1
        assert _metrics_state["designs_failed_by_category"]["generic"] >= 1

    def test_increment_render(self):
        before = _metrics_state["renders_by_status"].get("invalid", 0)
        increment_render("invalid")
        assert _metrics_state["renders_by_status"]["invalid"] == before + 1

    def test_increment_export(self):
        exported = _metrics_state["exports_total"]
        refused = _metrics_state["exports_refused_total"]
        increment_export()
        increment_export(refused=True)
        assert _metrics_state["exports_total"] == exported + 1
        assert _metrics_state["exports_refused_total"] == refused + 1

    def test_middleware_counts_requests(self, water_xyz):
        """中间件按路由累计请求"""
        before = _metrics_state["requests_by_endpoint"].get("/api/v1/structures/validate", 0)
        response = client.post("/api/v1/structures/validate", json={"xyz": water_xyz})
        assert response.status_code == 200
        assert "X-Response-Time" in response.headers
        assert _metrics_state["requests_by_endpoint"]["/api/v1/structures/validate"] == before + 1

    def test_labelled_metric_rendered(self):
        increment_render("rendered")
        content = client.get("/metrics").text
        assert 'matforge_structure_renders_total{status="rendered"}' in content

    def test_format_metric(self):
        text = _format_prometheus_metric("x_total", 3, "help", metric_type="counter", labels={"a": "b"})
        assert text == '# HELP x_total help\n# TYPE x_total counter\nx_total{a="b"} 3'
