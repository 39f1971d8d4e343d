from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

try:
    import tomllib  # py>=3.11
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore


DEFAULT_CONFIG_PATH = Path("config.toml")

VERBOSITY_LEVELS = ("basic", "full", "none")
CHECK_ORDERS = ("phrase-first", "word-first")
SANITIZERS = ("basic", "extended")
SWITCHES = ("on", "off")

# 宿主插件传入的是驼峰写法，这里统一映射成字段名
_HOST_KEYS = {
    "apiKey": "api_key",
    "hyphenMode": "hyphen_mode",
    "phraseUsages": "phrase_usages",
    "customMode": "custom_mode",
    "checkOrder": "check_order",
}


@dataclass(frozen=True)
class TranslatorConfig:
    api_key: str
    model: str = "deepseek-chat"
    usages: str = "full"  # basic | full | none
    hyphen_mode: str = "on"  # on | off
    phrase_usages: str = "full"  # basic | full | none
    temperature: float = 0.1
    top_p: float = 0.99
    frequency_penalty: float = 0
    presence_penalty: float = 0
    max_tokens: int = 2000
    # 缺省视为关闭：只有显式打开才识别 ///指令>内容
    custom_mode: str = "off"  # on | off
    check_order: str = "phrase-first"  # phrase-first | word-first
    sanitizer: str = "basic"  # basic | extended

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> "TranslatorConfig":
        """从宿主传入的配置字典构造。

        同时接受驼峰（apiKey）和下划线（api_key）两种键名；
        值为 None 时回退到默认值。
        """

        raw: dict[str, Any] = {}
        for key, value in (options or {}).items():
            raw[_HOST_KEYS.get(str(key), str(key))] = value
        return _build(raw)


def _get(d: Mapping[str, Any], key: str, default: Any) -> Any:
    value = d.get(key, default)
    return default if value is None else value


def _choice(d: Mapping[str, Any], key: str, default: str) -> str:
    return str(_get(d, key, default)).strip().lower() or default


def _switch(d: Mapping[str, Any], key: str, default: str) -> str:
    # TOML 里常写成 true / false
    value = _get(d, key, default)
    if isinstance(value, bool):
        return "on" if value else "off"
    value = str(value).strip().lower() or default
    if value not in SWITCHES:
        raise ValueError(f"{key} 只能是 on 或 off：{value!r}")
    return value


def _build(raw: Mapping[str, Any]) -> TranslatorConfig:
    api_key = str(_get(raw, "api_key", "")).strip()
    if not api_key:
        raise ValueError("deepseek api_key 为空")

    check_order = _choice(raw, "check_order", TranslatorConfig.check_order)
    if check_order not in CHECK_ORDERS:
        raise ValueError(f"未知的 check_order：{check_order!r}")

    sanitizer = _choice(raw, "sanitizer", TranslatorConfig.sanitizer)
    if sanitizer not in SANITIZERS:
        raise ValueError(f"未知的 sanitizer：{sanitizer!r}")

    return TranslatorConfig(
        api_key=api_key,
        model=str(_get(raw, "model", TranslatorConfig.model)).strip()
        or TranslatorConfig.model,
        usages=_choice(raw, "usages", TranslatorConfig.usages),
        hyphen_mode=_switch(raw, "hyphen_mode", TranslatorConfig.hyphen_mode),
        phrase_usages=_choice(
            raw, "phrase_usages", TranslatorConfig.phrase_usages),
        temperature=float(
            _get(raw, "temperature", TranslatorConfig.temperature)),
        top_p=float(_get(raw, "top_p", TranslatorConfig.top_p)),
        frequency_penalty=float(
            _get(raw, "frequency_penalty", TranslatorConfig.frequency_penalty)
        ),
        presence_penalty=float(
            _get(raw, "presence_penalty", TranslatorConfig.presence_penalty)
        ),
        max_tokens=int(_get(raw, "max_tokens", TranslatorConfig.max_tokens)),
        custom_mode=_switch(raw, "custom_mode", TranslatorConfig.custom_mode),
        check_order=check_order,
        sanitizer=sanitizer,
    )


def load_config(path: Path | str | None = None) -> TranslatorConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(config_path)

    raw = tomllib.loads(config_path.read_text(encoding="utf-8"))
    deepseek_raw = raw.get("deepseek") or {}
    if not isinstance(deepseek_raw, dict):
        raise ValueError("config.toml 的 [deepseek] 必须是一个表")
    return _build(deepseek_raw)


def write_default_config(path: Path | str | None = None) -> Path:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if config_path.exists():
        return config_path

    template = ("""# deepseektrans 配置文件

[deepseek]
api_key = "sk-xxxxxxx"
model = "deepseek-chat"

# 单词模式的详细程度：basic | full | none
usages = "full"
# 以 - 开头的输入按短语处理：on | off
hyphen_mode = "on"
# 短语模式的详细程度：basic | full | none
phrase_usages = "full"
# ///指令>内容 自定义模式：on | off
custom_mode = "off"
# 分类顺序：phrase-first | word-first
check_order = "phrase-first"
# 输出清理规则集：basic | extended
sanitizer = "basic"

temperature = 0.1
top_p = 0.99
frequency_penalty = 0
presence_penalty = 0
max_tokens = 2000
""")

    config_path.write_text(template, encoding="utf-8")
    return config_path
