from __future__ import annotations

import socket
from urllib.parse import urlparse

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    OpenAI,
    PermissionDeniedError,
    RateLimitError,
)

from deepseektrans.config import TranslatorConfig
from deepseektrans.pipeline.translate import REQUEST_URL


def _base_url() -> str:
    # https://api.deepseek.com/chat/completions -> https://api.deepseek.com
    parsed = urlparse(REQUEST_URL)
    return f"{parsed.scheme}://{parsed.netloc}"


def diagnose_deepseek(cfg: TranslatorConfig, *, timeout: float = 10.0) -> str:
    """探测 DeepSeek 接口是否可用，并输出可复制粘贴的诊断文本。"""

    base_url = _base_url()
    host = urlparse(base_url).hostname
    ip = None
    if host:
        try:
            ip = socket.gethostbyname(host)
        except OSError:
            ip = None

    lines: list[str] = []
    lines.append("== deepseektrans 诊断 ==")
    lines.append(f"endpoint: {REQUEST_URL}")
    if host:
        lines.append(f"host: {host} ip: {ip or 'N/A'}")
    lines.append(f"model: {cfg.model}")

    client = OpenAI(
        api_key=cfg.api_key,
        base_url=base_url,
        timeout=timeout,
        max_retries=0,
    )

    conclusion: str | None = None
    try:
        models = client.models.list()
    except AuthenticationError as e:
        conclusion = "鉴权失败：请检查 api_key 是否正确。"
        err: Exception = e
    except PermissionDeniedError as e:
        conclusion = "无权限：请检查账户对该模型的权限。"
        err = e
    except RateLimitError as e:
        conclusion = "触发限流：请稍后重试。"
        err = e
    except APITimeoutError as e:
        conclusion = "请求超时：请检查网络连通性。"
        err = e
    except APIConnectionError as e:
        conclusion = "连接失败：请检查 DNS/代理/证书/网络。"
        err = e
    except APIStatusError as e:
        lines.append("\n-- 响应 --")
        lines.append(f"status: {e.status_code}")
        conclusion = "服务返回非 2xx：可能是鉴权/权限/限流问题。"
        err = e

    if conclusion is not None:
        lines.append("\n-- 结论 --")
        lines.append(conclusion)
        lines.append(f"{type(err).__name__}: {err}")
        if err.__cause__ is not None:
            lines.append(
                f"cause: {type(err.__cause__).__name__}: {err.__cause__}")
        return "\n".join(lines)

    model_ids = [m.id for m in (models.data or []) if getattr(m, "id", None)]
    lines.append("\n-- 响应 --")
    lines.append(f"models: {', '.join(model_ids) or 'N/A'}")
    lines.append("\n-- 结论 --")
    if cfg.model in model_ids:
        lines.append("接口正常，配置的 model 可用。")
    else:
        lines.append(f"接口正常，但列表里没有配置的 model {cfg.model!r}。")

    return "\n".join(lines)
