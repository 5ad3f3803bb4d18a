"""
Prometheus 指标模块

提供服务监控指标，支持 Prometheus 抓取
"""
from typing import Optional
import time

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from core.config import get_settings

router = APIRouter()
settings = get_settings()

# 内存中的指标计数器
_metrics_state = {
    "requests_total": 0,
    "requests_by_status": {},
    "requests_by_endpoint": {},
    "request_duration_sum": 0.0,
    "request_count": 0,
    "start_time": time.time(),

    # 设计请求指标
    "designs_requested_total": 0,
    "designs_succeeded_total": 0,
    "designs_failed_by_category": {},

    # 结构指标
    "renders_by_status": {},
    "exports_total": 0,
    "exports_refused_total": 0,
}


def increment_request(status_code: int, endpoint: str, duration: float):
    """记录请求指标"""
    _metrics_state["requests_total"] += 1

    # 按状态码分组
    status_key = str(status_code)
    _metrics_state["requests_by_status"][status_key] = \
        _metrics_state["requests_by_status"].get(status_key, 0) + 1

    # 按端点分组
    _metrics_state["requests_by_endpoint"][endpoint] = \
        _metrics_state["requests_by_endpoint"].get(endpoint, 0) + 1

    # 延迟统计
    _metrics_state["request_duration_sum"] += duration
    _metrics_state["request_count"] += 1


def increment_design(status: str, category: Optional[str] = None):
    """记录设计请求指标"""
    if status == "requested":
        _metrics_state["designs_requested_total"] += 1
    elif status == "succeeded":
        _metrics_state["designs_succeeded_total"] += 1
    elif status == "failed":
        key = category or "generic"
        _metrics_state["designs_failed_by_category"][key] = \
            _metrics_state["designs_failed_by_category"].get(key, 0) + 1


def increment_render(status: str):
    """记录渲染指标"""
    _metrics_state["renders_by_status"][status] = \
        _metrics_state["renders_by_status"].get(status, 0) + 1


def increment_export(refused: bool = False):
    """记录导出指标"""
    if refused:
        _metrics_state["exports_refused_total"] += 1
    else:
        _metrics_state["exports_total"] += 1


def _format_prometheus_metric(name: str, value, help_text: str, metric_type: str = "gauge", labels: Optional[dict] = None) -> str:
    """格式化 Prometheus 指标"""
    lines = []

    # HELP 和 TYPE
    lines.append(f"# HELP {name} {help_text}")
    lines.append(f"# TYPE {name} {metric_type}")

    # 值
    if labels:
        label_str = ",".join(f'{k}="{v}"' for k, v in labels.items())
        lines.append(f"{name}{{{label_str}}} {value}")
    else:
        lines.append(f"{name} {value}")

    return "\n".join(lines)


@router.get("", response_class=PlainTextResponse)
async def get_metrics():
    """
    Prometheus 指标端点

    返回 Prometheus 格式的监控指标，包括：
    - 应用信息
    - 请求统计
    - 设计请求统计
    - 渲染与导出统计
    """
    lines = []

    # ===== 应用信息 =====
    lines.append(_format_prometheus_metric(
        "matforge_info",
        1,
        "Application information",
        labels={
            "version": settings.app_version,
            "environment": settings.environment,
        },
    ))

    # 运行时间
    uptime = time.time() - _metrics_state["start_time"]
    lines.append(_format_prometheus_metric(
        "matforge_uptime_seconds",
        round(uptime, 2),
        "Application uptime in seconds",
        metric_type="counter",
    ))

    # ===== 请求指标 =====
    lines.append(_format_prometheus_metric(
        "matforge_http_requests_total",
        _metrics_state["requests_total"],
        "Total number of HTTP requests",
        metric_type="counter",
    ))

    for status, count in _metrics_state["requests_by_status"].items():
        lines.append(_format_prometheus_metric(
            "matforge_http_requests_by_status",
            count,
            "HTTP requests by status code",
            metric_type="counter",
            labels={"status": status},
        ))

    if _metrics_state["request_count"] > 0:
        avg_duration = _metrics_state["request_duration_sum"] / _metrics_state["request_count"]
        lines.append(_format_prometheus_metric(
            "matforge_http_request_duration_seconds_avg",
            round(avg_duration, 6),
            "Average HTTP request duration in seconds",
        ))

    # ===== 设计请求指标 =====
    lines.append(_format_prometheus_metric(
        "matforge_designs_requested_total",
        _metrics_state["designs_requested_total"],
        "Total number of design requests",
        metric_type="counter",
    ))

    lines.append(_format_prometheus_metric(
        "matforge_designs_succeeded_total",
        _metrics_state["designs_succeeded_total"],
        "Total number of successful design requests",
        metric_type="counter",
    ))

    for category, count in _metrics_state["designs_failed_by_category"].items():
        lines.append(_format_prometheus_metric(
            "matforge_designs_failed_total",
            count,
            "Failed design requests by failure category",
            metric_type="counter",
            labels={"category": category},
        ))

    # ===== 结构指标 =====
    for status, count in _metrics_state["renders_by_status"].items():
        lines.append(_format_prometheus_metric(
            "matforge_structure_renders_total",
            count,
            "Structure renders by result status",
            metric_type="counter",
            labels={"status": status},
        ))

    lines.append(_format_prometheus_metric(
        "matforge_structure_exports_total",
        _metrics_state["exports_total"],
        "Total number of .xyz exports",
        metric_type="counter",
    ))

    lines.append(_format_prometheus_metric(
        "matforge_structure_exports_refused_total",
        _metrics_state["exports_refused_total"],
        "Exports refused because the coordinate block failed validation",
        metric_type="counter",
    ))

    return "\n\n".join(lines) + "\n"
