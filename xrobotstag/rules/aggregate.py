from __future__ import annotations

import copy
from typing import Dict, Iterable, List

from .directives import Value
from .scanner import ScannedRule


RawRuleSet = Dict[str, Dict[str, Value]]


class RuleAggregator:
    """Folds scanned rules into ``scope -> {directive -> value}``.

    Rules must be added in header order; a later value for the same scope and
    directive replaces the earlier one.
    """

    def __init__(self) -> None:
        self._rules: RawRuleSet = {}

    def add(self, rule: ScannedRule) -> None:
        scope_rules = self._rules.setdefault(rule.scope, {})
        scope_rules[rule.directive.value] = rule.value

    def extend(self, rules: Iterable[ScannedRule]) -> "RuleAggregator":
        for rule in rules:
            self.add(rule)
        return self

    @property
    def rules(self) -> RawRuleSet:
        return self._rules

    def scopes(self) -> List[str]:
        return list(self._rules)

    def snapshot(self) -> RawRuleSet:
        return copy.deepcopy(self._rules)
