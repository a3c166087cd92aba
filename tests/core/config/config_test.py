import pytest
from pathlib import Path
import yaml
import tempfile
import os

from research_hub.core.config import Config, LLMConfig, StorageConfig, OrchestratorConfig


def test_llm_config():
    """测试LLMConfig的默认值和自定义值"""
    # 测试默认值
    default_config = LLMConfig()
    assert default_config.model_name == "gpt-4o-mini"
    assert default_config.api_key == ""
    assert default_config.base_url == ""
    assert default_config.temperature == 0.7
    assert default_config.max_tokens == 2000
    assert default_config.search_model_name == ""
    assert default_config.reasoning_model_name == ""

    # 测试自定义值
    custom_config = LLMConfig(
        model_name="gpt-4",
        api_key="test-key",
        base_url="https://api.test.com",
        temperature=0.5,
        max_tokens=1000,
    )
    assert custom_config.model_name == "gpt-4"
    assert custom_config.api_key == "test-key"
    assert custom_config.base_url == "https://api.test.com"
    assert custom_config.temperature == 0.5
    assert custom_config.max_tokens == 1000


def test_config_file_loading():
    """测试配置文件加载功能"""
    # 创建临时配置文件
    config_data = {
        "llm": {"model_name": "gpt-4", "api_key": "test-key", "temperature": 0.5},
        "storage": {"base_path": "/tmp/test", "storage_type": "memory"},
        "orchestrator": {"chat_timeout": 5, "search_result_count": 3},
    }

    with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
        yaml.dump(config_data, f)
        config_path = f.name

    try:
        # 测试从文件加载配置
        config = Config.from_yaml(config_path)

        # 验证LLM配置
        assert config.llm.model_name == "gpt-4"
        assert config.llm.api_key == "test-key"
        assert config.llm.temperature == 0.5
        assert config.llm.base_url == ""  # 默认值

        # 验证Storage配置
        assert config.storage.base_path == "/tmp/test"
        assert config.storage.storage_type == "memory"

        # 验证编排配置
        assert config.orchestrator.chat_timeout == 5
        assert config.orchestrator.search_result_count == 3
        assert config.orchestrator.lab_timeout == 300.0  # 默认值

    finally:
        # 清理临时文件
        os.unlink(config_path)


def test_config_file_not_found():
    """测试配置文件不存在的情况"""
    with pytest.raises(FileNotFoundError):
        Config.from_yaml("non_existent_config.yaml")


def test_empty_config():
    """测试空配置的情况"""
    config = Config()
    assert isinstance(config.llm, LLMConfig)
    assert isinstance(config.storage, StorageConfig)
    assert isinstance(config.orchestrator, OrchestratorConfig)
    assert config.llm.model_name == "gpt-4o-mini"  # 默认值


def test_empty_yaml_file(tmp_path: Path):
    """测试空的配置文件"""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")
    config = Config.from_yaml(str(config_path))
    assert config.storage.storage_type == "local"


def test_load_falls_back_to_env(monkeypatch):
    """测试配置文件缺失时从环境变量读取凭证"""
    monkeypatch.setenv("LLM_API_KEY", "env-key")
    monkeypatch.setenv("LLM_BASE_URL", "https://env.example.com/v1")
    monkeypatch.setenv("CHAT_MODEL_NAME", "env-model")

    config = Config.load("non_existent_config.yaml")
    assert config.llm.api_key == "env-key"
    assert config.llm.base_url == "https://env.example.com/v1"
    assert config.llm.model_name == "env-model"


def test_load_keeps_file_credentials(tmp_path: Path, monkeypatch):
    """测试配置文件中的凭证优先于环境变量"""
    monkeypatch.setenv("LLM_API_KEY", "env-key")
    monkeypatch.delenv("CHAT_MODEL_NAME", raising=False)
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"llm": {"api_key": "file-key"}}), encoding="utf-8")

    config = Config.load(str(config_path))
    assert config.llm.api_key == "file-key"
    assert config.llm.model_name == "gpt-4o-mini"


def test_configs_do_not_share_defaults():
    """测试默认的嵌套配置不会在实例之间共享"""
    a = Config()
    b = Config()
    a.llm.api_key = "changed"
    assert b.llm.api_key == ""
