"""Flag member calls that receive literal strings as arguments.

Authentication code tends to pass role names, claim types and permission
identifiers around as bare strings. A typo in one of them fails silently, so
such values belong in a single named location instead of being repeated at
every call site.
"""

from __future__ import annotations

from typing import Optional

from authlint.result import Finding
from authlint.severity import Severity
from authlint.syntax import NodeKind, argument_list_of, classify, is_string_literal, location_of, receiver_of

from . import Rule, RuleDescriptor

RULE_ID = "NoLiteralStringsInAuth"

NO_LITERAL_STRINGS_IN_AUTH = RuleDescriptor(
    id=RULE_ID,
    title="Arguments passed in should not be literal strings",
    message="The arguments should not be literal strings",
    category="Authentication",
    severity=Severity.WARNING,
    description=(
        "Using literal strings as arguments can lead to hard to find errors. "
        "It is preferable to use a value stored in a single location across the application"
    ),
    enabled_by_default=True,
)


class NoLiteralStringsInAuthRule:
    """Warn when a qualified call passes a string literal directly."""

    name = RULE_ID

    def __init__(self, descriptor: RuleDescriptor = NO_LITERAL_STRINGS_IN_AUTH) -> None:
        self.descriptor = descriptor

    def initialize(self, context) -> None:
        context.register_node_action(self.evaluate, NodeKind.CALL)

    def evaluate(self, node: object) -> Optional[Finding]:
        if classify(node) is not NodeKind.CALL:
            return None
        receiver = receiver_of(node)
        if receiver is None:
            return None
        arguments = argument_list_of(node)
        if not arguments:
            return None
        if count_string_literals(arguments) == 0:
            return None
        location = location_of(receiver)
        if location is None:
            return None
        return self.descriptor.create_finding(location)


def count_string_literals(arguments) -> int:
    return sum(1 for argument in arguments if is_string_literal(argument))


def get_rule() -> Rule:
    return NoLiteralStringsInAuthRule()
