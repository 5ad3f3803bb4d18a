"""
配置系统测试
"""
import pytest

from core.config import Settings, GenAISettings, ViewerSettings, LoggingSettings


class TestGenAISettings:
    """AI 服务配置测试"""

    def test_default_values(self, monkeypatch):
        """测试默认值"""
        monkeypatch.delenv("API_KEY", raising=False)
        monkeypatch.delenv("GENAI_API_KEY", raising=False)
        genai = GenAISettings()
        assert genai.model == "gemini-2.5-flash"
        assert genai.temperature == 0.7
        assert genai.api_key is None
        assert genai.is_configured is False

    def test_api_key_from_plain_env(self, monkeypatch):
        """API_KEY 环境变量"""
        monkeypatch.delenv("GENAI_API_KEY", raising=False)
        monkeypatch.setenv("API_KEY", "plain-key")
        genai = GenAISettings()
        assert genai.api_key == "plain-key"
        assert genai.is_configured is True

    def test_prefixed_env_wins(self, monkeypatch):
        """GENAI_API_KEY 优先于 API_KEY"""
        monkeypatch.setenv("API_KEY", "plain-key")
        monkeypatch.setenv("GENAI_API_KEY", "prefixed-key")
        assert GenAISettings().api_key == "prefixed-key"

    def test_model_from_env(self, monkeypatch):
        monkeypatch.setenv("GENAI_MODEL", "gemini-2.5-pro")
        assert GenAISettings().model == "gemini-2.5-pro"

    def test_temperature_bounds(self):
        """采样温度范围"""
        with pytest.raises(ValueError):
            GenAISettings(temperature=3.0)


class TestViewerSettings:
    """预览配置测试"""

    def test_default_cache_size(self):
        assert ViewerSettings().render_cache_size == 256

    def test_default_max_atoms(self):
        assert ViewerSettings().max_atoms == 2000

    def test_max_atoms_from_env(self, monkeypatch):
        monkeypatch.setenv("VIEWER_MAX_ATOMS", "50")
        assert ViewerSettings().max_atoms == 50

    def test_max_atoms_must_be_positive(self):
        with pytest.raises(ValueError):
            ViewerSettings(max_atoms=0)

    def test_negative_cache_size_rejected(self):
        with pytest.raises(ValueError):
            ViewerSettings(render_cache_size=-1)


class TestSettings:
    """主配置测试"""

    def test_default_settings(self):
        """测试默认配置"""
        settings = Settings()
        assert settings.app_name == "MatForge"
        assert settings.environment == "development"
        assert settings.api_prefix == "/api/v1"

    def test_cors_origin_list(self):
        """测试 CORS 源列表解析"""
        settings = Settings(cors_origins="http://localhost:3000, http://example.com,")
        origins = settings.cors_origin_list
        assert origins == ["http://localhost:3000", "http://example.com"]

    def test_display_config_hides_secrets(self, monkeypatch):
        """测试配置脱敏"""
        monkeypatch.setenv("API_KEY", "super-secret-key")
        settings = Settings()
        display = settings.display_config()
        assert "super-secret-key" not in str(display)
        assert display["genai_configured"] is True

    def test_invalid_environment_raises_error(self):
        """测试无效环境值"""
        with pytest.raises(ValueError):
            Settings(environment="invalid")

    def test_invalid_log_level_raises_error(self):
        """测试无效日志级别"""
        with pytest.raises(ValueError):
            LoggingSettings(level="TRACE")

    def test_log_format_normalized(self):
        assert LoggingSettings(format="CONSOLE").format == "console"
