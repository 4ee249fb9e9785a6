"""Ordered allow/deny rule sets built on compiled patterns.

A :class:`RuleSet` evaluates a name against rules in order; the first rule
with a matching pattern decides, otherwise the default effect applies.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field, replace

import yaml

from domainpattern.errors import ConfigNotFoundError, RuleError
from domainpattern.pattern import CompiledPattern
from domainpattern.policy import PatternPolicy

__all__ = ["MatchRule", "RuleSet"]

_EFFECTS = ("allow", "deny")


@dataclass
class MatchRule:
    """A single rule: any of ``patterns`` matching a name applies ``effect``."""

    patterns: list[str]
    effect: str
    description: str = ""
    compiled: list[CompiledPattern] = field(default_factory=list, repr=False, compare=False)


class RuleSet:
    """First-match-wins list of pattern rules.

    Thread safety:
        Internally synchronized. ``check``, ``first_match``, ``add_rule``,
        ``remove_rule`` and ``reload`` are safe to call concurrently.
    """

    def __init__(
        self,
        rules: list[MatchRule],
        default_effect: str = "deny",
        policy: PatternPolicy | None = None,
    ) -> None:
        """Initialize with ordered rules, compiling every pattern.

        Args:
            rules: Ordered list of rules (first match wins).
            default_effect: Effect when no rule matches ('allow' or 'deny').
            policy: Acceptance policy used to compile patterns. Defaults to
                an unrestricted policy with ``"."`` as separator.

        Raises:
            RuleError: If an effect is not 'allow' or 'deny'.
            InvalidTokenError: If a pattern has a malformed token.
            PatternRejectedError: If a pattern violates the policy.
        """
        if default_effect not in _EFFECTS:
            raise RuleError(
                f"Invalid default effect '{default_effect}', must be 'allow' or 'deny'"
            )
        self._logger: logging.Logger = logging.getLogger("domainpattern.rules")
        self._lock = threading.Lock()
        self._policy: PatternPolicy = policy or PatternPolicy()
        self._rules: list[MatchRule] = [self._prepare(rule) for rule in rules]
        self._default_effect: str = default_effect
        self._yaml_path: str | None = None

    @property
    def policy(self) -> PatternPolicy:
        return self._policy

    @property
    def rules(self) -> list[MatchRule]:
        """A snapshot of the current rules in evaluation order."""
        with self._lock:
            return list(self._rules)

    @classmethod
    def load(cls, yaml_path: str, policy: PatternPolicy | None = None) -> RuleSet:
        """Load a rule set from a YAML file.

        Expected layout::

            default_effect: deny
            rules:
              - patterns: ["**.example.com"]
                effect: allow
                description: "example.com and subdomains"

        Raises:
            ConfigNotFoundError: If the file does not exist.
            RuleError: If the YAML is invalid or has structural errors.
            InvalidTokenError: If a pattern has a malformed token.
            PatternRejectedError: If a pattern violates the policy.
        """
        if not os.path.isfile(yaml_path):
            raise ConfigNotFoundError(config_path=yaml_path)

        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise RuleError(f"Invalid YAML in {yaml_path}: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise RuleError(f"Rule config must be a mapping, got {type(data).__name__}")

        if "rules" not in data:
            raise RuleError("Rule config missing required 'rules' key")

        raw_rules = data["rules"]
        if not isinstance(raw_rules, list):
            raise RuleError(f"'rules' must be a list, got {type(raw_rules).__name__}")

        rules: list[MatchRule] = []
        for i, raw_rule in enumerate(raw_rules):
            if not isinstance(raw_rule, dict):
                raise RuleError(f"Rule {i} must be a mapping, got {type(raw_rule).__name__}")

            for key in ("patterns", "effect"):
                if key not in raw_rule:
                    raise RuleError(f"Rule {i} missing required key '{key}'")

            patterns = raw_rule["patterns"]
            if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
                raise RuleError(f"Rule {i} 'patterns' must be a list of strings")

            rules.append(
                MatchRule(
                    patterns=patterns,
                    effect=raw_rule["effect"],
                    description=raw_rule.get("description", ""),
                )
            )

        rule_set = cls(
            rules=rules,
            default_effect=data.get("default_effect", "deny"),
            policy=policy,
        )
        rule_set._yaml_path = yaml_path
        return rule_set

    def first_match(self, name: str) -> MatchRule | None:
        """Return the first rule with a pattern matching ``name``, if any.

        The returned rule is the rule set's own compiled copy, equal to the
        rule that was passed in.
        """
        with self._lock:
            rules = list(self._rules)

        for rule in rules:
            if any(pattern.matches(name) for pattern in rule.compiled):
                return rule
        return None

    def check(self, name: str) -> bool:
        """Return True if ``name`` is allowed.

        Args:
            name: The concrete name, e.g. ``"api.example.com"``.

        Returns:
            The effect of the first matching rule, or the default effect.
        """
        rule = self.first_match(name)
        if rule is not None:
            decision = rule.effect == "allow"
            self._logger.debug(
                "Rule check: name=%s decision=%s rule=%s",
                name,
                rule.effect,
                rule.description or "(no description)",
            )
            return decision

        with self._lock:
            default_effect = self._default_effect
        self._logger.debug(
            "Rule check: name=%s decision=%s rule=default", name, default_effect
        )
        return default_effect == "allow"

    def add_rule(self, rule: MatchRule) -> None:
        """Add a rule at position 0 (highest priority)."""
        prepared = self._prepare(rule)
        with self._lock:
            self._rules.insert(0, prepared)

    def remove_rule(self, patterns: list[str]) -> bool:
        """Remove the first rule with exactly these patterns.

        Returns:
            True if a rule was found and removed, False otherwise.
        """
        with self._lock:
            for i, rule in enumerate(self._rules):
                if rule.patterns == patterns:
                    self._rules.pop(i)
                    return True
            return False

    def reload(self) -> None:
        """Re-read the rules from the original YAML file.

        Raises:
            RuleError: If the rule set was not created via RuleSet.load().
        """
        with self._lock:
            yaml_path = self._yaml_path
        if yaml_path is None:
            raise RuleError("Cannot reload: rule set was not loaded from a YAML file")
        reloaded = RuleSet.load(yaml_path, policy=self._policy)
        with self._lock:
            self._rules = reloaded._rules
            self._default_effect = reloaded._default_effect

    def _prepare(self, rule: MatchRule) -> MatchRule:
        if rule.effect not in _EFFECTS:
            raise RuleError(
                f"Invalid effect '{rule.effect}', must be 'allow' or 'deny'"
            )
        return replace(
            rule,
            patterns=list(rule.patterns),
            compiled=[self._policy.compile(pattern) for pattern in rule.patterns],
        )
