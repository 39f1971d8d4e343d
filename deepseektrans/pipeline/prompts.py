from __future__ import annotations

from deepseektrans.config import TranslatorConfig
from deepseektrans.pipeline.classify import Classification, ClassifiedInput


TEXT_PROMPT = (
    "You are a professional translation engine, please translate the text "
    "into a colloquial, professional, elegant and fluent content, without "
    "the style of machine translation."
)

WORD_PROMPTS = {
    "none": (
        "You are a professional translation engine, please translate the "
        "word into a colloquial, professional, elegant and fluent content, "
        "without the style of machine translation. You must only translate "
        "the word content, never interpret it."
    ),
    "basic": (
        "You are a professional translation engine. First translate the word "
        "into a colloquial, professional, elegant and fluent content, without "
        "the style of machine translation. Then provide common usages and "
        "examples of this word in sentences. You must translate the word "
        "content first, then provide usages."
    ),
    "full": (
        "You are a professional translation engine. Please provide detailed "
        "information about this word including:\n"
        "1. Pronunciation: Correct pronunciation including stress, phonetic "
        "symbols, linking sounds, weak forms, and silent letters\n"
        "2. Meaning: Chinese translation and different parts of speech "
        "(noun, verb, adjective etc.) with multiple meanings\n"
        "3. Usage: Common collocations, phrases and example sentences\n"
        "Present the information in a clear and organized manner."
    ),
}

PHRASE_PROMPTS = {
    "none": (
        "You are a professional translation engine, please translate the "
        "phrase into a colloquial, professional, elegant and fluent content, "
        "without the style of machine translation."
    ),
    "basic": (
        "You are a professional translation engine. First translate the "
        "phrase into a colloquial, professional, elegant and fluent content. "
        "Then provide:\n"
        "1. Phrase meaning\n"
        "2. Common usage examples\n"
        "3. Related expressions"
    ),
    "full": (
        "You are a professional translation engine. Please provide detailed "
        "analysis of this phrase including:\n"
        "1. Correct pronunciation including stress, phonetic symbols, linking "
        "sounds, weak forms, and silent letters\n"
        "2. Literal meaning of each component\n"
        "3. Overall figurative meaning\n"
        "4. Common usage scenarios\n"
        "5. Similar phrases comparison\n"
        "6. Example sentences in different contexts"
    ),
}


def _by_level(prompts: dict[str, str], level: str) -> str:
    # 未知取值按 none 处理
    return prompts.get(level, prompts["none"])


def select_system_prompt(item: ClassifiedInput, cfg: TranslatorConfig) -> str:
    if item.kind is Classification.CUSTOM_INSTRUCTION:
        return item.instruction or ""
    if item.kind is Classification.PHRASE:
        return _by_level(PHRASE_PROMPTS, cfg.phrase_usages)
    if item.kind is Classification.WORD:
        return _by_level(WORD_PROMPTS, cfg.usages)
    return TEXT_PROMPT


def build_user_message(item: ClassifiedInput, target_lang: str) -> str:
    if item.kind is Classification.CUSTOM_INSTRUCTION:
        return item.text
    return f"Translate into {target_lang}:\n{item.text}"
