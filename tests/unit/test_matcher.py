import pytest

from rolecheck.matcher import matches, matches_any, validate_pattern


@pytest.mark.parametrize(
    "candidate,pattern,expected",
    [
        ("content.read.comment", "content.read.*", True),
        ("content.write.comment", "content.read.*", False),
        ("unlisted.nonsense", "*", True),
        ("audit/logs", "*", False),
        ("audit/logs/2024", "audit/**", True),
        ("deploy.qa", "deploy.?a", True),
        ("deploy.a", "deploy.?a", False),
        ("a.read", "[ab].read", True),
        ("c.read", "[ab].read", False),
        ("deploy.prod", "deploy.{staging,prod}", True),
        ("deploy.dev", "deploy.{staging,prod}", False),
        ("b.read", "@(a|b).read", True),
        ("content.read", "!billing.*", True),
        ("billing.pay", "!billing.*", False),
        ("Image.Upload", "image.upload", False),
        ("image.upload", "image.upload", True),
    ],
)
def test_glob_semantics(candidate, pattern, expected):
    assert matches(candidate, pattern) is expected


def test_matches_any():
    assert matches_any("image.view", ["content.*", "image.view"]) is True
    assert matches_any("image.view", ["content.*"]) is False


def test_matches_any_empty_is_false():
    assert matches_any("anything", []) is False


def test_negated_patterns_are_independent():
    # One negation does not veto another pattern that matches
    assert matches_any("billing.pay", ["!billing.*", "billing.pay"]) is True


def test_validate_pattern_accepts_globs():
    validate_pattern("content.{read,write}.**")
    validate_pattern("!secret.*")


@pytest.mark.parametrize("pattern,error", [("", ValueError), (None, TypeError), (5, TypeError)])
def test_validate_pattern_rejects(pattern, error):
    with pytest.raises(error):
        validate_pattern(pattern)


def test_validate_pattern_rejects_runaway_braces():
    with pytest.raises(ValueError):
        validate_pattern("x.{1..2000}")
