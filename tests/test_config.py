"""Tests for EngineConfig loading"""

import json

from compliance_engine.config import DEFAULT_FRAMEWORKS, EngineConfig, parse_framework_list


def test_defaults():
    config = EngineConfig()
    assert config.frameworks == DEFAULT_FRAMEWORKS
    assert config.frameworks is not DEFAULT_FRAMEWORKS
    assert config.formats == ["json"]
    assert config.output_path is None
    assert config.strict is False


def test_parse_framework_list_trims_blanks():
    assert parse_framework_list(" OWASP, NIST ,,ISO27001 ") == ["OWASP", "NIST", "ISO27001"]


def test_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "frameworks": "NIST, ISO27001",
        "formats": ["markdown", "pdf"],
        "output_dir": "out",
        "strict": True,
        "unknown_key": 42,
    }), encoding="utf-8")

    config = EngineConfig.from_file(path)

    assert config.frameworks == ["NIST", "ISO27001"]
    assert config.formats == ["markdown"]
    assert str(config.export_dir) == "out"
    assert config.strict is True
    assert config.verbose is False
