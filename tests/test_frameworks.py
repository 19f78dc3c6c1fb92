"""Tests for the framework registry and check spec serialization"""

import pytest

from compliance_engine.scoring import (
    COMPLIANCE_FRAMEWORKS,
    AlertCheck,
    CodeCheck,
    Control,
    DependencyCheck,
    FeatureCheck,
    MetricCheck,
    SecretCheck,
    UnimplementedCheck,
    check_from_dict,
    get_framework,
)


def test_registry_codes():
    assert list(COMPLIANCE_FRAMEWORKS) == ["OWASP", "NIST", "ISO27001"]


def test_lookup_is_case_sensitive():
    assert get_framework("NIST") is COMPLIANCE_FRAMEWORKS["NIST"]
    assert get_framework("nist") is None


@pytest.mark.parametrize("code,controls", [("OWASP", 10), ("NIST", 5), ("ISO27001", 8)])
def test_control_counts(code, controls):
    assert len(COMPLIANCE_FRAMEWORKS[code].controls) == controls


def test_all_weights_positive():
    for framework in COMPLIANCE_FRAMEWORKS.values():
        for control in framework.controls.values():
            assert control.weight > 0
            for check in control.checks:
                assert check.weight > 0


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        COMPLIANCE_FRAMEWORKS["NEW"] = COMPLIANCE_FRAMEWORKS["NIST"]
    with pytest.raises(TypeError):
        COMPLIANCE_FRAMEWORKS["NIST"].controls["Identify (ID)"] = None


def test_check_specs_are_frozen():
    check = FeatureCheck(name="codeScanning", weight=4)
    with pytest.raises(AttributeError):
        check.weight = 10


def test_unrecognized_kinds_are_explicit_variants():
    kinds = {
        check.kind
        for framework in COMPLIANCE_FRAMEWORKS.values()
        for control in framework.controls.values()
        for check in control.checks
        if isinstance(check, UnimplementedCheck)
    }
    assert kinds == {"repository", "process", "documentation", "backup", "audit"}


@pytest.mark.parametrize("data,expected", [
    ({"type": "feature", "name": "dependabot", "weight": 2}, FeatureCheck(name="dependabot", weight=2)),
    ({"type": "code", "pattern": "sql", "weight": 7}, CodeCheck(pattern="sql", weight=7)),
    ({"type": "secret", "pattern": "key", "weight": 5}, SecretCheck(pattern="key", weight=5)),
    ({"type": "dependency", "outdated": True, "weight": 7}, DependencyCheck(outdated=True, weight=7)),
    ({"type": "alert", "severity": ["Critical", "HIGH"], "weight": 3},
     AlertCheck(severity=("critical", "high"), weight=3)),
    ({"type": "metric", "name": "meanTimeToResolve", "threshold": 30, "weight": 8},
     MetricCheck(name="meanTimeToResolve", threshold=30.0, weight=8)),
])
def test_check_from_dict(data, expected):
    assert check_from_dict(data) == expected


def test_unknown_type_becomes_unimplemented_check():
    check = check_from_dict({"type": "backup", "exists": True, "weight": 5})
    assert isinstance(check, UnimplementedCheck)
    assert check.kind == "backup"
    assert check.params == {"exists": True}
    assert check.to_dict() == {"type": "backup", "exists": True, "weight": 5.0}


def test_registry_checks_serialize_back_to_equal_specs():
    for framework in COMPLIANCE_FRAMEWORKS.values():
        for control in framework.controls.values():
            for check in control.checks:
                assert check_from_dict(check.to_dict()) == check


@pytest.mark.parametrize("weight", [0, -4, float("nan")])
def test_non_positive_check_weight_rejected(weight):
    with pytest.raises(ValueError, match="must be positive"):
        FeatureCheck(name="codeScanning", weight=weight)
    with pytest.raises(ValueError, match="must be positive"):
        UnimplementedCheck(kind="backup", weight=weight)


def test_check_from_dict_rejects_negative_weight():
    with pytest.raises(ValueError, match="must be positive"):
        check_from_dict({"type": "code", "pattern": "sql", "weight": -7})


def test_non_positive_control_weight_rejected():
    with pytest.raises(ValueError, match="Control weight must be positive"):
        Control(weight=-10, checks=(FeatureCheck(name="dependabot", weight=2),))


def test_incident_response_check_keeps_its_declaration():
    control = COMPLIANCE_FRAMEWORKS["ISO27001"].controls["A.16 Information Security Incident Management"]
    alert_check = control.checks[0]
    assert alert_check.response is True
    assert alert_check.to_dict() == {"type": "alert", "weight": 8, "response": True}
    assert check_from_dict(alert_check.to_dict()) == alert_check
