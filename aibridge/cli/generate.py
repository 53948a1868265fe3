# aibridge/cli/generate.py
from __future__ import annotations
import argparse
import os
import sys
from typing import Dict, List, Optional

import requests

from aibridge import wiring
from aibridge.client.models import InvalidPromptError
from aibridge.config import ConfigurationError
from aibridge.observability import configure_logging
from aibridge.prompt.messages import Message, MessageType
from aibridge.prompt.prompt import Prompt
from aibridge.prompt.template import PromptTemplate, PromptTemplateError
from aibridge.runner import PromptRunner, build_registry_prompt


def _parse_vars(pairs: List[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"--var expects key=value, got {pair!r}")
        out[key] = value
    return out


def build_prompt(args: argparse.Namespace) -> Prompt:
    if args.prompt_id:
        return build_registry_prompt(
            wiring.get_prompt_registry(), args.prompt_id, _parse_vars(args.var), args.agent, args.prompt_version
        )
    if args.template_file:
        template = PromptTemplate.from_resource(args.template_file)
    else:
        template = PromptTemplate(args.template)
    messages: List[Message] = []
    if args.system:
        messages.append(Message(args.system, MessageType.SYSTEM))
    messages.append(template.create_message(_parse_vars(args.var)))
    return Prompt(messages)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="aibridge-generate", description="Render a prompt template and send it to a backend.")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--template", help="Inline template text, placeholders as {name}")
    src.add_argument("--template-file", help="Template location: a file path or package:<pkg>/<path>")
    src.add_argument("--prompt-id", help="Id of a registry prompt (see $AIBRIDGE_PROMPTS_DIR)")
    p.add_argument("--var", action="append", default=[], help="Template variable key=value (repeatable)")
    p.add_argument("--system", default="", help="Optional system message placed before the rendered text")
    p.add_argument("--agent", default="default", help="Registry persona placed before a --prompt-id prompt")
    p.add_argument("--prompt-version", default="latest", help="Registry prompt version (default: latest)")
    p.add_argument("--provider", default=None, help="vertexai | huggingface (default: $AIBRIDGE_PROVIDER)")
    p.add_argument("--dry-run", action="store_true", help="Print the rendered prompt and exit")
    args = p.parse_args(argv)

    if args.provider:
        os.environ["AIBRIDGE_PROVIDER"] = args.provider
        wiring.reset()
    configure_logging(wiring.get_app_settings().log_level)

    try:
        prompt = build_prompt(args)
    except (PromptTemplateError, ValueError, FileNotFoundError) as e:
        print(f"Template error: {e}", file=sys.stderr)
        return 2
    except KeyError as e:
        print(f"Unknown prompt: {e.args[0] if e.args else e}", file=sys.stderr)
        return 2

    if args.dry_run:
        for m in prompt.messages:
            print(f"[{m.message_type.value}] {m.content}")
        return 0

    try:
        client = wiring.get_ai_client()
        if args.prompt_id:
            runner = PromptRunner(wiring.get_prompt_registry(), client)
            response = runner.generate(
                prompt_id=args.prompt_id, inputs=_parse_vars(args.var), agent=args.agent, version=args.prompt_version
            )
        else:
            response = client.generate(prompt)
    except (InvalidPromptError, ConfigurationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except (requests.RequestException, KeyError) as e:
        # KeyError: the backend answered without an expected field
        print(f"Backend error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    gen = response.generation
    print(gen.text if gen is not None else "")
    return 0


if __name__ == "__main__":
    sys.exit(main())
