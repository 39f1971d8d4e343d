from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from deepseektrans.config import TranslatorConfig


CUSTOM_MARKER = "///"
CUSTOM_SEPARATOR = ">"

_WHITESPACE_RE = re.compile(r"\s")


class Classification(enum.Enum):
    CUSTOM_INSTRUCTION = "custom"
    PHRASE = "phrase"
    WORD = "word"
    PLAIN_TEXT = "text"


@dataclass(frozen=True)
class ClassifiedInput:
    kind: Classification
    # 发给模型的实际文本（短语模式下已去掉连字符）
    text: str
    # 仅自定义模式有值，直接作为 system prompt
    instruction: str | None = None


def is_custom_instruction(text: str, cfg: TranslatorConfig) -> bool:
    return (
        cfg.custom_mode != "off"
        and text.startswith(CUSTOM_MARKER)
        and CUSTOM_SEPARATOR in text
    )


def split_custom_instruction(text: str) -> tuple[str, str]:
    """把 `///指令>内容` 拆成 (指令, 内容)，按第一个 `>` 切分，两侧去空白。"""

    sep = text.index(CUSTOM_SEPARATOR)
    return text[len(CUSTOM_MARKER):sep].strip(), text[sep + 1:].strip()


def is_phrase(text: str, cfg: TranslatorConfig) -> bool:
    return cfg.hyphen_mode == "on" and text.startswith("-")


def is_word(text: str) -> bool:
    return not _WHITESPACE_RE.search(text.strip())


def dehyphenate(text: str) -> str:
    # "-long-term" -> "long term"
    return text[1:].replace("-", " ")


def classify(text: str, cfg: TranslatorConfig) -> ClassifiedInput:
    text = text or ""

    if is_custom_instruction(text, cfg):
        instruction, payload = split_custom_instruction(text)
        return ClassifiedInput(
            Classification.CUSTOM_INSTRUCTION, payload, instruction)

    if cfg.check_order == "word-first":
        if is_word(text):
            return ClassifiedInput(Classification.WORD, text)
        if is_phrase(text, cfg):
            return ClassifiedInput(Classification.PHRASE, dehyphenate(text))
        return ClassifiedInput(Classification.PLAIN_TEXT, text)

    if is_phrase(text, cfg):
        return ClassifiedInput(Classification.PHRASE, dehyphenate(text))
    if is_word(text):
        return ClassifiedInput(Classification.WORD, text)
    return ClassifiedInput(Classification.PLAIN_TEXT, text)
