from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from deepseektrans.config import TranslatorConfig
from deepseektrans.http import Fetch, FetchResponse, JsonBody
from deepseektrans.pipeline.classify import ClassifiedInput, classify
from deepseektrans.pipeline.prompts import build_user_message, select_system_prompt
from deepseektrans.pipeline.sanitize import rules_for, sanitize


logger = logging.getLogger(__name__)

REQUEST_URL = "https://api.deepseek.com/chat/completions"


class TranslateError(RuntimeError):
    pass


class HttpRequestError(TranslateError):
    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"Http Request Error\nHttp Status: {status}\n{body}")


class MalformedResponseError(TranslateError):
    """接口返回 ok，但没有 choices[0].message.content。"""

    def __init__(self, message: str, data: Any = None):
        self.data = data
        super().__init__(message)


@dataclass(frozen=True)
class TranslateOptions:
    config: TranslatorConfig
    utils: Mapping[str, Any] = field(default_factory=dict)

    @property
    def fetch(self) -> Fetch:
        # 宿主插件里叫 tauriFetch
        fetch = self.utils.get("tauriFetch") or self.utils.get("fetch")
        if fetch is None:
            raise TypeError("options.utils 缺少 fetch")
        return fetch

    @classmethod
    def coerce(cls, options: "TranslateOptions | Mapping[str, Any]") -> "TranslateOptions":
        """接受宿主传来的 {"config": {...}, "utils": {...}} 字典。"""

        if isinstance(options, TranslateOptions):
            return options
        cfg = options.get("config") or {}
        if not isinstance(cfg, TranslatorConfig):
            cfg = TranslatorConfig.from_options(cfg)
        return cls(config=cfg, utils=options.get("utils") or {})


def build_headers(cfg: TranslatorConfig) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {cfg.api_key}",
    }


def build_request_body(
    item: ClassifiedInput,
    target_lang: str,
    cfg: TranslatorConfig,
) -> dict[str, Any]:
    return {
        "model": cfg.model,
        "messages": [
            {"role": "system", "content": select_system_prompt(item, cfg)},
            {"role": "user", "content": build_user_message(item, target_lang)},
        ],
        "temperature": cfg.temperature,
        "top_p": cfg.top_p,
        "frequency_penalty": cfg.frequency_penalty,
        "presence_penalty": cfg.presence_penalty,
        "max_tokens": cfg.max_tokens,
    }


def extract_content(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        raise MalformedResponseError(
            "响应缺少 choices[0].message.content", data) from None
    if not isinstance(content, str):
        raise MalformedResponseError(
            f"choices[0].message.content 不是字符串：{type(content).__name__}",
            data,
        )
    return content


async def dispatch(
    body: dict[str, Any],
    cfg: TranslatorConfig,
    fetch: Fetch,
) -> str:
    """发出唯一一次请求，返回模型原始输出。"""

    res: FetchResponse = await fetch(
        REQUEST_URL,
        method="POST",
        headers=build_headers(cfg),
        body=JsonBody(body),
    )
    if not res.ok:
        logger.warning("deepseek 请求失败：status=%s", res.status)
        raise HttpRequestError(
            res.status, json.dumps(res.data, ensure_ascii=False, default=str))
    return extract_content(res.data)


async def translate(
    text: str,
    source_lang: str,
    target_lang: str,
    options: TranslateOptions | Mapping[str, Any],
) -> str:
    opts = TranslateOptions.coerce(options)
    cfg = opts.config

    item = classify(text, cfg)
    logger.debug(
        "classified as %s (%s -> %s)", item.kind.value, source_lang, target_lang
    )

    body = build_request_body(item, target_lang, cfg)
    raw = await dispatch(body, cfg, opts.fetch)
    return sanitize(raw, rules_for(cfg.sanitizer))
