import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx

from deepseektrans.config import load_config, write_default_config
from deepseektrans.http import HttpxFetch
from deepseektrans.pipeline.translate import (
    TranslateError,
    TranslateOptions,
    translate,
)


__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deepseektrans", description="translate text with DeepSeek")
    parser.add_argument("text", nargs="*",
                        help="text to translate (read from stdin if omitted)")
    parser.add_argument("--version", action="store_true",
                        help="print version and exit")
    parser.add_argument("--config", type=str,
                        help="path to configuration file (optional)")
    parser.add_argument("--from", dest="source", default="auto",
                        help="source language (default: auto)")
    parser.add_argument("--to", dest="target", default="zh-CN",
                        help="target language (default: zh-CN)")
    parser.add_argument("--timeout", type=float, default=60.0,
                        help="http timeout in seconds")
    parser.add_argument("--verbose", action="store_true",
                        help="enable debug logging")
    parser.add_argument("--doctor", action="store_true",
                        help="probe the DeepSeek endpoint and exit")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.version:
        print(f"deepseektrans {__version__}")
        return 0

    config_path = Path(args.config) if args.config else None
    try:
        cfg = load_config(config_path)
    except FileNotFoundError:
        created = write_default_config(config_path)
        print(f"已生成配置文件：{created}，请填写 [deepseek].api_key 后重新运行。")
        return 2
    except ValueError as e:
        print(f"配置错误：{e}", file=sys.stderr)
        return 2

    if args.doctor:
        from deepseektrans.diagnostics import diagnose_deepseek

        print(diagnose_deepseek(cfg))
        return 0

    text = " ".join(args.text) if args.text else sys.stdin.read()
    if not text.strip():
        parser.error("no text to translate")

    options = TranslateOptions(
        config=cfg, utils={"fetch": HttpxFetch(timeout=args.timeout)})
    try:
        result = asyncio.run(
            translate(text.strip(), args.source, args.target, options))
    except TranslateError as e:
        print(str(e), file=sys.stderr)
        return 1
    except httpx.HTTPError as e:
        print(f"请求失败：{type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
