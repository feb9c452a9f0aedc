"""Code fixes offered for literal string findings.

The default provider declines every request: the rule is useful on its own
and rewriting call sites is opt-in. :class:`ExtractConstantFixProvider`
replaces each literal argument with a module-level constant holding the same
value, and refuses whenever that could change what the program does.
"""

from __future__ import annotations

import ast
import copy
import keyword
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Set, Tuple

from .result import Finding, Location
from .syntax import NodeKind, children, classify, is_string_literal, iter_nodes, location_of, receiver_of

MAX_CONSTANT_NAME_LENGTH = 64
_NON_WORD = re.compile(r"\W+")
# the only line breaks the tokenizer counts
_LINE_BREAK = re.compile(r"(?<=\n)|(?<=\r)(?!\n)")
_CONFLICT = object()


class FixError(ValueError):
    """Raised when a proposal cannot be applied to the given source."""


@dataclass(frozen=True)
class FixProposal:
    """Candidate replacement for the call a finding points at."""

    location: Location
    replacement: Optional[str]
    constants: Tuple[Tuple[str, str], ...] = ()
    title: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "location": self.location.to_dict(),
            "replacement": self.replacement,
            "constants": {name: value for name, value in self.constants},
        }


class FixProvider(Protocol):
    def propose_fix(self, finding: Finding, tree: ast.AST) -> Optional[FixProposal]:
        """Return a proposal for ``finding`` or ``None`` to decline."""


class DeclineFixProvider:
    """No automated fix is offered; findings are report-only."""

    def propose_fix(self, finding: Finding, tree: ast.AST) -> Optional[FixProposal]:
        return None


class ExtractConstantFixProvider:
    """Rewrite literal arguments as references to named module constants."""

    title = "Extract literal strings to module constants"

    def propose_fix(self, finding: Finding, tree: ast.AST) -> Optional[FixProposal]:
        if not isinstance(tree, ast.Module):
            return None
        call = find_call(tree, finding.location)
        if call is None:
            return None

        bindings = module_bindings(tree)
        if "*" in bindings:
            # a star import may already provide any derived name
            return None
        reserved = set(bindings) | loaded_names(tree)
        # only constants assigned above the call can be referenced safely
        defined_before = {
            statement.targets[0].id
            for statement in tree.body
            if isinstance(statement, ast.Assign)
            and isinstance(statement.targets[0], ast.Name)
            and statement.end_lineno < call.lineno
        }
        names_by_value = {
            value: name
            for name, value in bindings.items()
            if isinstance(value, str) and name in defined_before
        }
        constants: Dict[str, str] = {}

        rewritten = copy.deepcopy(call)
        changed = 0
        for index, argument in enumerate(rewritten.args):
            name = self._resolve(argument, reserved, names_by_value, constants)
            if name is False:
                return None
            if name:
                rewritten.args[index] = ast.copy_location(ast.Name(id=name, ctx=ast.Load()), argument)
                changed += 1
        for item in rewritten.keywords:
            name = self._resolve(item.value, reserved, names_by_value, constants)
            if name is False:
                return None
            if name:
                item.value = ast.copy_location(ast.Name(id=name, ctx=ast.Load()), item.value)
                changed += 1

        if not changed:
            return None
        replacement = ast.unparse(rewritten)
        try:
            ast.parse(replacement, mode="eval")
        except SyntaxError:
            return None
        return FixProposal(
            location=finding.location,
            replacement=replacement,
            constants=tuple(constants.items()),
            title=self.title,
        )

    def _resolve(self, argument, reserved, names_by_value, constants):
        """Return the constant name for a literal argument.

        ``None`` leaves the argument alone, ``False`` aborts the whole fix.
        """

        if not is_string_literal(argument):
            return None
        value = argument.value
        existing = names_by_value.get(value)
        if existing is not None:
            return existing
        name = constant_name(value)
        if name is None or name in reserved:
            return False
        if constants.get(name, value) != value:
            return False
        constants[name] = value
        return name


def constant_name(value: str) -> Optional[str]:
    """Derive an UPPER_SNAKE_CASE identifier from a literal's value."""

    name = _NON_WORD.sub("_", value).strip("_").upper()
    if not name or len(name) > MAX_CONSTANT_NAME_LENGTH:
        return None
    if not name.isidentifier() or keyword.iskeyword(name) or name[0].isdigit():
        return None
    return name


def module_bindings(tree: ast.Module) -> Dict[str, object]:
    """Map every name bound in ``tree`` to its constant value.

    Only single-target module-level assignments of a string keep their value.
    Names bound any other way, or more than once, map to a conflict marker.
    """

    bindings: Dict[str, object] = {}

    def bind(name: str, value: object = _CONFLICT) -> None:
        if name in bindings and bindings[name] != value:
            bindings[name] = _CONFLICT
        else:
            bindings[name] = value

    top_level = set()
    for statement in children(tree):
        if (
            isinstance(statement, ast.Assign)
            and len(statement.targets) == 1
            and isinstance(statement.targets[0], ast.Name)
            and is_string_literal(statement.value)
        ):
            bind(statement.targets[0].id, statement.value.value)
            top_level.add(id(statement.targets[0]))

    for node in iter_nodes(tree):
        if isinstance(node, ast.Name) and not isinstance(node.ctx, ast.Load):
            if id(node) not in top_level:
                bind(node.id)
        elif isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            bind(node.name)
        elif isinstance(node, ast.arg):
            bind(node.arg)
        elif isinstance(node, ast.alias):
            bind((node.asname or node.name).split(".")[0])
        elif isinstance(node, (ast.Global, ast.Nonlocal)):
            for name in node.names:
                bind(name)
        elif isinstance(node, ast.ExceptHandler) and node.name:
            bind(node.name)
    return bindings


def loaded_names(tree: ast.AST) -> Set[str]:
    """Names read anywhere in ``tree``, bound locally or not."""

    return {node.id for node in iter_nodes(tree) if isinstance(node, ast.Name) and isinstance(node.ctx, ast.Load)}


def find_call(tree: ast.AST, location: Location) -> Optional[ast.Call]:
    """Return the call whose member-access receiver spans ``location``."""

    for node in iter_nodes(tree):
        if classify(node) is not NodeKind.CALL:
            continue
        receiver = receiver_of(node)
        if receiver is not None and location_of(receiver) == location:
            return node
    return None


def apply_fix(source: str, proposal: FixProposal) -> str:
    """Return ``source`` with ``proposal`` applied."""

    if proposal.replacement is None:
        raise FixError("Proposal carries no replacement")
    try:
        tree = ast.parse(source)
    except SyntaxError as exc:
        raise FixError(f"Source does not parse: {exc}") from exc
    call = find_call(tree, proposal.location)
    if call is None:
        raise FixError(f"No call found at {proposal.location}")

    lines = split_source_lines(source)
    start = _char_offset(lines, call.lineno, call.col_offset)
    end = _char_offset(lines, call.end_lineno, call.end_col_offset)
    updated = source[:start] + proposal.replacement + source[end:]
    if not proposal.constants:
        return updated

    lines = split_source_lines(updated)
    newline = _newline_of(lines)
    insert_at = _header_end(tree)
    block: List[str] = [f"{name} = {value!r}{newline}" for name, value in proposal.constants]
    if insert_at < len(lines) and lines[insert_at].strip():
        block.append(newline)
    if insert_at > 0 and lines[insert_at - 1].strip():
        block.insert(0, newline)
    lines[insert_at:insert_at] = block
    return "".join(lines)


def split_source_lines(source: str) -> List[str]:
    """Split on the line breaks that ``ast`` line numbers count, keeping them."""

    return [line for line in _LINE_BREAK.split(source) if line]


def _newline_of(lines: List[str]) -> str:
    for line in lines:
        if line.endswith("\r\n"):
            return "\r\n"
        if line.endswith(("\n", "\r")):
            return line[-1]
    return "\n"


def _char_offset(lines: List[str], lineno: int, byte_column: int) -> int:
    # ast columns count UTF-8 bytes
    prefix = sum(len(line) for line in lines[: lineno - 1])
    current = lines[lineno - 1] if lineno - 1 < len(lines) else ""
    return prefix + len(current.encode("utf-8")[:byte_column].decode("utf-8"))


def _header_end(tree: ast.Module) -> int:
    """Line index just past the module docstring and leading imports."""

    end = 0
    for index, statement in enumerate(tree.body):
        is_docstring = index == 0 and isinstance(statement, ast.Expr) and is_string_literal(statement.value)
        if is_docstring or isinstance(statement, (ast.Import, ast.ImportFrom)):
            end = statement.end_lineno
            continue
        break
    return end
