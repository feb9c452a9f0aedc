import ast
from concurrent.futures import ThreadPoolExecutor

from authlint.host import Analyzer
from authlint.result import Location
from authlint.rules.no_literal_strings import (
    NO_LITERAL_STRINGS_IN_AUTH,
    NoLiteralStringsInAuthRule,
    count_string_literals,
)
from authlint.severity import Severity


def analyze(source):
    return Analyzer().analyze_source(source)


def call_node(expression):
    return ast.parse(expression, mode="eval").body


def test_literal_argument_in_class_body_is_reported_at_receiver():
    source = 'class TypeName:\n    Console.WriteLine("hello")\n'

    findings = analyze(source)

    assert len(findings) == 1
    finding = findings[0]
    assert finding.rule_id == "NoLiteralStringsInAuth"
    assert finding.message == "The arguments should not be literal strings"
    assert finding.category == "Authentication"
    assert finding.severity is Severity.WARNING
    assert finding.location == Location(line=2, column=5, end_line=2, end_column=22)


def test_empty_source_has_no_findings():
    assert analyze("") == []


def test_identifier_argument_is_not_reported():
    assert analyze("obj.Method(variable)\n") == []


def test_bare_call_with_literal_is_not_reported():
    assert analyze('Method("literal")\n') == []


def test_multiple_literals_produce_one_finding():
    findings = analyze('obj.Method("a", "b")\n')

    assert len(findings) == 1
    assert findings[0].location == Location(line=1, column=1, end_line=1, end_column=11)


def test_keyword_literal_is_reported():
    findings = analyze('client.authorize(user, role="admin")\n')

    assert len(findings) == 1


def test_non_literal_string_expressions_are_ignored():
    source = "\n".join(
        [
            'obj.m(f"role-{name}")',
            'obj.m("prefix" + name)',
            'obj.m(b"raw")',
            'obj.m(*["admin"])',
            'obj.m(**{"role": "admin"})',
            "obj.m(42, None)",
        ]
    )

    assert analyze(source) == []


def test_nested_calls_are_evaluated_independently():
    findings = analyze('outer.check(inner.lookup("claim"), wrap("x"))\n')

    assert len(findings) == 1
    assert findings[0].location.column == len("outer.check(") + 1


def test_qualified_and_chained_receivers_are_reported():
    findings = analyze('pkg.mod.func("x")\nget_user().has_role("admin")\n')

    assert [finding.location for finding in findings] == [
        Location(line=1, column=1, end_line=1, end_column=13),
        Location(line=2, column=1, end_line=2, end_column=20),
    ]


def test_evaluate_declines_non_call_nodes():
    rule = NoLiteralStringsInAuthRule()

    assert rule.evaluate(ast.Name(id="x", ctx=ast.Load())) is None
    assert rule.evaluate(ast.Constant(value="admin")) is None
    assert rule.evaluate(None) is None
    assert rule.evaluate("obj.method('x')") is None


def test_evaluate_declines_malformed_calls():
    rule = NoLiteralStringsInAuthRule()
    receiver = ast.Attribute(value=ast.Name(id="obj", ctx=ast.Load()), attr="m", ctx=ast.Load())

    without_positions = ast.Call(func=receiver, args=[ast.Constant(value="x")], keywords=[])
    without_arguments = ast.Call(func=receiver, args=None, keywords=None)

    assert rule.evaluate(without_positions) is None
    assert rule.evaluate(without_arguments) is None

    keyword_without_value = call_node("obj.m(x)")
    keyword_without_value.keywords.append(ast.keyword(arg="k"))

    assert rule.evaluate(keyword_without_value) is None


def test_evaluate_tolerates_arguments_with_mixed_positions():
    node = call_node("obj.m(x)")
    node.args = [ast.Constant(value="x", lineno=None, col_offset=None), ast.Name(id="y", ctx=ast.Load(), lineno=1)]

    finding = NoLiteralStringsInAuthRule().evaluate(node)

    assert finding is not None
    assert finding.location == Location(line=1, column=1, end_line=1, end_column=6)


def test_evaluate_leaves_path_to_the_host():
    finding = NoLiteralStringsInAuthRule().evaluate(call_node('obj.m("x")'))

    assert finding is not None
    assert finding.path == ""


def test_evaluate_is_idempotent():
    rule = NoLiteralStringsInAuthRule()
    node = call_node('auth.require("admin")')

    assert rule.evaluate(node) == rule.evaluate(node)
    assert rule.evaluate(call_node("auth.require(ADMIN)")) is None


def test_evaluate_is_safe_to_call_concurrently():
    rule = NoLiteralStringsInAuthRule()
    node = call_node('auth.require("admin", "audit")')
    expected = rule.evaluate(node)

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: rule.evaluate(node), range(64)))

    assert all(result == expected for result in results)


def test_descriptor_identity():
    descriptor = NO_LITERAL_STRINGS_IN_AUTH

    assert descriptor.id == "NoLiteralStringsInAuth"
    assert descriptor.title == "Arguments passed in should not be literal strings"
    assert descriptor.severity is Severity.WARNING
    assert descriptor.enabled_by_default
    assert descriptor.description.startswith("Using literal strings as arguments")


def test_count_string_literals():
    node = call_node('obj.m("a", x, "b", key="c")')

    assert count_string_literals(node.args) == 2
