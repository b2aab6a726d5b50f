"""Access rule exports."""

from .policy_classification import AccessPolicy, EntityPolicy, classify_entity_policy
from .rule_compiler import STORAGE_RULES, CompiledRules, compile_rules

__all__ = [
    "AccessPolicy",
    "EntityPolicy",
    "classify_entity_policy",
    "CompiledRules",
    "STORAGE_RULES",
    "compile_rules",
]
