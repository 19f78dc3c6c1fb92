"""Tests for audit file loading and parsing"""

import json

import pytest

from compliance_engine.audit import InvalidAuditData, load_audit_file, parse_audit_data


class TestParseAuditData:
    def test_parses_repositories(self, audit_payload):
        audit = parse_audit_data(audit_payload)
        assert len(audit) == 2
        api, web = audit.repositories
        assert api.name == "org/api"
        assert api.feature_enabled("codeScanning") is True
        assert web.feature_enabled("secretScanning") is False
        assert len(api.alerts.code) == 2
        assert api.alerts.secret[0].secret_type == "github_personal_access_token"
        assert api.metric("meanTimeToResolve") == 12.0

    def test_missing_repositories_raises(self):
        with pytest.raises(InvalidAuditData) as exc:
            parse_audit_data({"summary": {}})
        assert exc.value.path == "repositories"

    def test_repositories_must_be_list(self):
        with pytest.raises(InvalidAuditData, match="must be a list"):
            parse_audit_data({"repositories": {"a": 1}})

    def test_document_must_be_object(self):
        with pytest.raises(InvalidAuditData):
            parse_audit_data([1, 2])

    def test_repository_entry_must_be_object(self):
        with pytest.raises(InvalidAuditData) as exc:
            parse_audit_data({"repositories": ["org/api"]})
        assert exc.value.path == "repositories[0]"

    def test_non_numeric_metric_raises_with_path(self):
        with pytest.raises(InvalidAuditData) as exc:
            parse_audit_data({"repositories": [{"metrics": {"meanTimeToResolve": "slow"}}]})
        assert exc.value.path == "repositories[0].metrics.meanTimeToResolve"

    def test_missing_sections_stay_none(self):
        repo = parse_audit_data({"repositories": [{"name": "bare"}]}).repositories[0]
        assert repo.security_features is None
        assert repo.alerts is None
        assert repo.metrics is None

    def test_name_fallbacks(self):
        audit = parse_audit_data({"repositories": [{"fullName": "org/x"}, {}]})
        assert [r.name for r in audit.repositories] == ["org/x", "repositories[1]"]

    def test_bare_boolean_features_accepted(self):
        repo = parse_audit_data({"repositories": [{"securityFeatures": {"dependabot": True}}]}).repositories[0]
        assert repo.feature_enabled("dependabot") is True

    def test_nested_rule_object_flattened(self):
        audit = parse_audit_data({"repositories": [{"alerts": {
            "code": [{"rule": {"id": "js/sql-injection", "name": "SQL"}, "description": None}],
            "secret": [],
        }}]})
        alerts = audit.repositories[0].alerts
        assert "js/sql-injection" in alerts.code[0].finding_text
        assert alerts.secret == ()

    def test_missing_alert_group_stays_none(self):
        audit = parse_audit_data({"repositories": [{"alerts": {"secret": [], "dependency": []}}]})
        assert audit.repositories[0].alerts.code is None
        assert audit.secret_alerts() == []
        with pytest.raises(InvalidAuditData) as exc:
            audit.code_alerts()
        assert exc.value.path == "repositories[0].alerts.code"
        with pytest.raises(InvalidAuditData):
            audit.all_alerts()

    def test_alert_group_must_be_list(self):
        with pytest.raises(InvalidAuditData) as exc:
            parse_audit_data({"repositories": [{"alerts": {"code": {"rule": "x"}}}]})
        assert exc.value.path == "repositories[0].alerts.code"

    @pytest.mark.parametrize("value", ["false", "no", 0.5, 1])
    def test_non_boolean_enabled_flag_raises(self, value):
        with pytest.raises(InvalidAuditData, match="must be a boolean") as exc:
            parse_audit_data({"repositories": [{"securityFeatures": {"codeScanning": {"enabled": value}}}]})
        assert exc.value.path == "repositories[0].securityFeatures.codeScanning.enabled"

    def test_non_boolean_bare_feature_raises(self):
        with pytest.raises(InvalidAuditData) as exc:
            parse_audit_data({"repositories": [{"securityFeatures": {"dependabot": "true"}}]})
        assert exc.value.path == "repositories[0].securityFeatures.dependabot"

    def test_absent_enabled_flag_means_disabled(self):
        repo = parse_audit_data({"repositories": [{"securityFeatures": {
            "codeScanning": {}, "dependabot": None,
        }}]}).repositories[0]
        assert repo.feature_enabled("codeScanning") is False
        assert repo.feature_enabled("dependabot") is False


class TestLoadAuditFile:
    def test_reads_json_file(self, tmp_path, audit_payload):
        path = tmp_path / "audit.json"
        path.write_text(json.dumps(audit_payload), encoding="utf-8")
        assert len(load_audit_file(path)) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "audit.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidAuditData, match="not valid JSON"):
            load_audit_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidAuditData, match="cannot read audit file"):
            load_audit_file(tmp_path / "missing.json")
