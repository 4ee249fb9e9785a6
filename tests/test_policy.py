"""Tests for the pattern acceptance policy."""

from __future__ import annotations

import pydantic
import pytest

from domainpattern.config import Config
from domainpattern.errors import ConfigError, InvalidTokenError, PatternRejectedError
from domainpattern.policy import PatternPolicy


class TestPolicyModel:
    """Tests for policy construction and validation."""

    def test_defaults(self) -> None:
        policy = PatternPolicy()
        assert policy.separator == "."
        assert policy.max_wildcard_run is None
        assert policy.max_segments is None

    @pytest.mark.parametrize("separator", ["", "::", "*", "+"])
    def test_invalid_separator(self, separator: str) -> None:
        with pytest.raises(pydantic.ValidationError):
            PatternPolicy(separator=separator)

    def test_limits_must_be_positive(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            PatternPolicy(max_wildcard_run=0)
        with pytest.raises(pydantic.ValidationError):
            PatternPolicy(max_segments=-1)

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            PatternPolicy(max_wildcards=3)  # type: ignore[call-arg]


class TestPolicyFromConfig:
    """Tests for building a policy from configuration."""

    def test_from_yaml_config(self, config_yaml: str) -> None:
        policy = PatternPolicy.from_config(Config.load(config_yaml))
        assert policy.separator == "/"
        assert policy.max_wildcard_run == 3
        assert policy.max_segments == 16

    def test_missing_section_gives_defaults(self) -> None:
        assert PatternPolicy.from_config(Config({})) == PatternPolicy()

    def test_custom_section(self) -> None:
        config = Config({"acl": {"hosts": {"max_segments": 5}}})
        assert PatternPolicy.from_config(config, section="acl.hosts").max_segments == 5

    def test_invalid_values_raise_config_error(self) -> None:
        config = Config({"patterns": {"separator": "::"}})
        with pytest.raises(ConfigError) as exc_info:
            PatternPolicy.from_config(config)
        assert isinstance(exc_info.value.cause, pydantic.ValidationError)


class TestPolicyCheck:
    """Tests for rejecting patterns before compilation."""

    def test_wildcard_run_limit(self) -> None:
        policy = PatternPolicy(max_wildcard_run=3)
        policy.check("*.*.*.example.com")
        policy.check("+.+.+.example.*.*.*")
        with pytest.raises(PatternRejectedError) as exc_info:
            policy.check("*.+.*.+.example.com")
        assert "4 adjacent" in exc_info.value.reason

    def test_multi_segment_wildcards_do_not_count(self) -> None:
        policy = PatternPolicy(max_wildcard_run=1)
        policy.check("**.**+.**.example.com")

    def test_segment_limit(self) -> None:
        policy = PatternPolicy(max_segments=3)
        policy.check("a.b.c")
        with pytest.raises(PatternRejectedError):
            policy.check("a.b.c.d")

    def test_rejection_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        policy = PatternPolicy(max_segments=1)
        with pytest.raises(PatternRejectedError):
            policy.check("a.b")
        assert any("Rejected pattern" in record.getMessage() for record in caplog.records)


class TestPolicyCompile:
    """Tests for compiling through a policy."""

    def test_compile_uses_separator(self) -> None:
        pattern = PatternPolicy(separator="/").compile("src/**/tests")
        assert pattern.separator == "/"
        assert pattern.matches("src/a/b/tests") is True

    def test_compile_rejects_before_parsing(self) -> None:
        with pytest.raises(PatternRejectedError):
            PatternPolicy(max_wildcard_run=1).compile("*.*.bad*")

    def test_compile_raises_invalid_token(self) -> None:
        with pytest.raises(InvalidTokenError):
            PatternPolicy().compile("bad*.example.com")
