"""模型输出清理：按固定顺序做一组文本替换，把 markdown 去成纯文本。

规则顺序本身就是约定的一部分：后面的规则会看到前面规则的输出。
例如 basic 规则集先删掉所有 `*`，之后的列表规则只认 `-`；
extended 规则集先删整段代码块，再去解包行内代码。

extended 只认 `**` 粗体，不处理 `__`，以免把 `__init__` 这类标识符改掉。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class RewriteRule:
    name: str
    pattern: re.Pattern[str]
    replacement: str = ""

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, pattern: str, replacement: str = "", flags: int = 0) -> RewriteRule:
    return RewriteRule(name, re.compile(pattern, flags), replacement)


TRIM = _rule("trim", r"\A\s+|\s+\Z")
STRIP_QUOTES = _rule("strip_quotes", r'\A"|"\Z')
REMOVE_ASTERISKS = _rule("remove_asterisks", r"\*")
BULLETS = _rule("bullets", r"^([ \t]*)-(?=\s)", r"\1•", re.MULTILINE)
HEADINGS = _rule("headings", r"^#+[ \t]*", "", re.MULTILINE)
HORIZONTAL_RULES = _rule("horizontal_rules", r"^-{3,}[ \t]*$", "", re.MULTILINE)

FENCED_CODE = _rule(
    "fenced_code",
    r"^[ \t]*```.*?^[ \t]*```[ \t]*$\n?",
    "",
    re.MULTILINE | re.DOTALL,
)
IMAGES = _rule("images", r"!\[[^\]\n]*\]\([^)\n]*\)")
BOLD = _rule("bold", r"\*\*(?=\S)(.+?)(?<=\S)\*\*", r"\1")
# 行首 "* " 是列表而不是强调，靠 (?=\S) 排除
ITALIC = _rule("italic", r"\*(?=\S)([^*\n]+?)(?<=\S)\*", r"\1")
STRIKETHROUGH = _rule("strikethrough", r"~~(.+?)~~", r"\1")
INLINE_CODE = _rule("inline_code", r"`([^`\n]+)`", r"\1")
# "a == b" 这种比较式不是高亮，要求标记内侧紧贴文字
HIGHLIGHT = _rule("highlight", r"==(?=\S)([^=\n]+?)(?<=\S)==", r"\1")
STAR_BULLETS = _rule("star_bullets", r"^([ \t]*)[-*](?=\s)", r"\1•", re.MULTILINE)


BASIC_RULES: tuple[RewriteRule, ...] = (
    TRIM,
    STRIP_QUOTES,
    REMOVE_ASTERISKS,
    BULLETS,
    HEADINGS,
    HORIZONTAL_RULES,
)

EXTENDED_RULES: tuple[RewriteRule, ...] = (
    TRIM,
    STRIP_QUOTES,
    FENCED_CODE,
    IMAGES,
    BOLD,
    ITALIC,
    STRIKETHROUGH,
    INLINE_CODE,
    HIGHLIGHT,
    STAR_BULLETS,
    HEADINGS,
    HORIZONTAL_RULES,
    TRIM,
)

RULE_SETS = {
    "basic": BASIC_RULES,
    "extended": EXTENDED_RULES,
}


def rules_for(name: str) -> tuple[RewriteRule, ...]:
    try:
        return RULE_SETS[name]
    except KeyError:
        raise ValueError(f"未知的 sanitizer：{name!r}") from None


def sanitize(raw: str, rules: Sequence[RewriteRule] = BASIC_RULES) -> str:
    text = raw or ""
    for rule in rules:
        text = rule.apply(text)
    return text
