"""Classification of model-generated command strings into filesystem intents.

Commands are matched against an ordered rule table. The first rule whose
pattern matches the whole command wins; anything left over is handed to a real
shell as ``RAW_SHELL``. Classification has no side effects, so the same string
always yields the same intent.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple


class IntentKind(Enum):
    """High-level meaning of a command string."""
    FILE_CREATE = "file_create"
    DIRECTORY_CREATE = "directory_create"
    LIST = "list"
    PRINT_WORKING_DIRECTORY = "print_working_directory"
    CHANGE_DIRECTORY = "change_directory"
    RAW_SHELL = "raw_shell"


@dataclass(frozen=True)
class CommandIntent:
    """Classification result with the operands extracted from the command."""
    kind: IntentKind
    raw: str
    path: Optional[str] = None
    content: Optional[str] = None
    target: Optional[str] = None


@dataclass(frozen=True)
class Rule:
    """One entry of the classification table."""
    name: str
    pattern: "re.Pattern[str]"
    extract: Callable[["re.Match[str]", str], CommandIntent]


# Order matters: each pair is (escaped sequence, decoded character)
_ESCAPES = (
    ("\\n", "\n"),
    ('\\"', '"'),
    ("\\'", "'"),
    ("\\t", "\t"),
)

_OUTER_QUOTES = re.compile(r"\A[\"']|[\"']\Z")


def decode_escapes(text: str) -> str:
    """Decode the literal two-character escapes models use inside commands."""
    for escaped, decoded in _ESCAPES:
        text = text.replace(escaped, decoded)
    return text


def strip_outer_quotes(text: str) -> str:
    """Drop one leading and one trailing quote character, if present."""
    return _OUTER_QUOTES.sub("", text)


def _file_create(match: "re.Match[str]", raw: str) -> CommandIntent:
    return CommandIntent(
        IntentKind.FILE_CREATE, raw,
        path=match.group(1),
        content=decode_escapes(match.group(2)),
    )


def _write_redirect(match: "re.Match[str]", raw: str) -> CommandIntent:
    content = strip_outer_quotes(match.group(1).strip())
    return CommandIntent(
        IntentKind.FILE_CREATE, raw,
        path=match.group(2).strip(),
        content=decode_escapes(content),
    )


def _directory_create(match: "re.Match[str]", raw: str) -> CommandIntent:
    return CommandIntent(IntentKind.DIRECTORY_CREATE, raw, path=match.group(1).strip())


def _list(match: "re.Match[str]", raw: str) -> CommandIntent:
    return CommandIntent(IntentKind.LIST, raw)


def _print_working_directory(match: "re.Match[str]", raw: str) -> CommandIntent:
    return CommandIntent(IntentKind.PRINT_WORKING_DIRECTORY, raw)


def _change_directory(match: "re.Match[str]", raw: str) -> CommandIntent:
    return CommandIntent(IntentKind.CHANGE_DIRECTORY, raw, target=match.group(1).strip())


def _rule(name: str, pattern: str, extract) -> Rule:
    return Rule(name, re.compile(pattern, re.IGNORECASE), extract)


RULES: Tuple[Rule, ...] = (
    _rule("create_file", r'createFile\s+"([^"]+)"\s+"([\s\S]*)"', _file_create),
    # Fully quoted shapes first, looser ones last
    _rule("write_dq_dq", r'(?:echo|cat)\s+"([^"]*?)"\s*>\s*"([^"]+)"', _write_redirect),
    _rule("write_sq_sq", r"(?:echo|cat)\s+'([^']*?)'\s*>\s*'([^']+)'", _write_redirect),
    _rule("write_dq_bare", r'(?:echo|cat)\s+"([^"]*?)"\s*>\s*([^\s]+)', _write_redirect),
    _rule("write_sq_bare", r"(?:echo|cat)\s+'([^']*?)'\s*>\s*([^\s]+)", _write_redirect),
    _rule("write_bare_dq", r'(?:echo|cat)\s+([^>]+?)\s*>\s*"([^"]+)"', _write_redirect),
    _rule("write_bare_bare", r"(?:echo|cat)\s+([^>]+?)\s*>\s*([^\s]+)", _write_redirect),
    _rule("mkdir_dq", r'mkdir\s+"([^"]+)"', _directory_create),
    _rule("mkdir_sq", r"mkdir\s+'([^']+)'", _directory_create),
    _rule("mkdir_bare", r"mkdir\s+([^\s]+)", _directory_create),
    _rule("list", r"ls|dir", _list),
    _rule("pwd", r"pwd", _print_working_directory),
    _rule("cd", r'cd\s+"?([^"]*)"?', _change_directory),
)


def match_rule(raw: str) -> Optional[Tuple[Rule, CommandIntent]]:
    """Return the first rule matching ``raw`` together with its intent."""
    for rule in RULES:
        match = rule.pattern.fullmatch(raw)
        if match:
            return rule, rule.extract(match, raw)
    return None


def classify(raw: str) -> CommandIntent:
    """Classify a raw command string. Never fails: unmatched input is raw shell."""
    matched = match_rule(raw)
    if matched is None:
        return CommandIntent(IntentKind.RAW_SHELL, raw)
    return matched[1]
