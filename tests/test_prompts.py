from __future__ import annotations

import dataclasses

import pytest

from deepseektrans.config import TranslatorConfig
from deepseektrans.pipeline.classify import Classification, ClassifiedInput
from deepseektrans.pipeline.prompts import (
    PHRASE_PROMPTS,
    TEXT_PROMPT,
    WORD_PROMPTS,
    build_user_message,
    select_system_prompt,
)


CFG = TranslatorConfig(api_key="sk-test")

WORD = ClassifiedInput(Classification.WORD, "serendipity")
PHRASE = ClassifiedInput(Classification.PHRASE, "long term")
TEXT = ClassifiedInput(Classification.PLAIN_TEXT, "hello world")
CUSTOM = ClassifiedInput(
    Classification.CUSTOM_INSTRUCTION, "Hello", "tone: formal")


@pytest.mark.parametrize("level", ["none", "basic", "full"])
def test_word_prompt_follows_usages(level: str):
    cfg = dataclasses.replace(CFG, usages=level, phrase_usages="none")
    assert select_system_prompt(WORD, cfg) == WORD_PROMPTS[level]


@pytest.mark.parametrize("level", ["none", "basic", "full"])
def test_phrase_prompt_follows_phrase_usages(level: str):
    cfg = dataclasses.replace(CFG, phrase_usages=level, usages="none")
    assert select_system_prompt(PHRASE, cfg) == PHRASE_PROMPTS[level]


def test_unknown_level_falls_back_to_none():
    cfg = dataclasses.replace(CFG, usages="verbose")
    assert select_system_prompt(WORD, cfg) == WORD_PROMPTS["none"]


def test_default_levels_are_full():
    assert select_system_prompt(WORD, CFG) == WORD_PROMPTS["full"]
    assert select_system_prompt(PHRASE, CFG) == PHRASE_PROMPTS["full"]


def test_none_level_forbids_interpretation():
    assert "never interpret" in WORD_PROMPTS["none"]


@pytest.mark.parametrize("level", ["none", "basic", "full"])
def test_plain_text_ignores_verbosity(level: str):
    cfg = dataclasses.replace(CFG, usages=level, phrase_usages=level)
    assert select_system_prompt(TEXT, cfg) == TEXT_PROMPT


def test_custom_instruction_is_used_verbatim():
    assert select_system_prompt(CUSTOM, CFG) == "tone: formal"


def test_user_message_wraps_text_with_target():
    assert build_user_message(TEXT, "fr") == "Translate into fr:\nhello world"


def test_user_message_in_custom_mode_is_payload_only():
    assert build_user_message(CUSTOM, "fr") == "Hello"
