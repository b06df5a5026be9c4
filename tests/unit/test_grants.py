import pytest

from rolecheck import Grants, InvalidGrantError, validate_grants


def test_grants_is_read_only_mapping(mock_grants):
    grants = Grants(mock_grants)

    assert list(grants) == ["editor", "viewer", "admin"]
    assert len(grants) == 3
    assert grants["admin"] == ("*",)
    assert "viewer" in grants
    assert "toString" not in grants

    with pytest.raises(TypeError):
        grants["admin"] = ["nothing"]


def test_grants_copy_pattern_lists(mock_grants):
    grants = Grants(mock_grants)
    mock_grants["admin"].append("extra")
    mock_grants["intruder"] = ["*"]

    assert grants["admin"] == ("*",)
    assert "intruder" not in grants


def test_grants_accepts_generators():
    grants = Grants({"a": (p for p in ["x.*", "y"])})
    assert grants["a"] == ("x.*", "y")


def test_empty_grants():
    assert len(Grants()) == 0
    assert len(Grants({})) == 0


def test_coerce_reuses_instance(mock_grants):
    grants = Grants(mock_grants)
    assert Grants.coerce(grants) is grants
    assert isinstance(Grants.coerce(mock_grants), Grants)


def test_effective_patterns(mock_grants):
    grants = Grants(mock_grants)
    assert grants.effective_patterns(["viewer", "ghost", "admin"]) == (
        "content.view.*",
        "image.view",
        "*",
    )
    assert grants.effective_patterns([]) == ()


def test_effective_patterns_keep_duplicates():
    grants = Grants({"a": ["x"], "b": ["x"]})
    assert grants.effective_patterns(["a", "b", "a"]) == ("x", "x", "x")


@pytest.mark.parametrize(
    "table",
    [
        {"admin": "*"},
        {"admin": None},
        {"admin": [""]},
        {"admin": ["ok", 3]},
        {1: ["*"]},
        ["admin", "*"],
    ],
)
def test_invalid_tables_rejected(table):
    with pytest.raises(InvalidGrantError) as exc_info:
        Grants(table)
    assert exc_info.value.issues
    assert isinstance(exc_info.value, ValueError)


def test_validate_grants_collects_every_issue():
    ok, issues = validate_grants({"a": "*", "b": ["", "fine"], "c": ["*"]})
    assert not ok
    assert len(issues) == 2
    assert any("'a'" in issue for issue in issues)
    assert any("'b'" in issue and "#0" in issue for issue in issues)


def test_validate_grants_passes(mock_grants):
    assert validate_grants(mock_grants) == (True, [])
