"""
LLM-drafted résumé structure.

• Asks the configured provider (OpenAI or Ollama) for JSON in the résumé
  shape.
• Caches replies in <CACHE_DIR>/drafts/<sha256>.json so the model is
  queried only once per unique resume text.
• Returns the draft as-is; ``cleaner.normalize`` reconciles it later.
"""

from __future__ import annotations
import json, logging, re, textwrap
from typing import Dict, Optional

from . import config
from .llm_client import LLMError, chat
from .schema_resume import schema_example
from .utils import _sha

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = textwrap.dedent(
    f"""
You are an expert résumé parser.
Output ONLY valid JSON conforming to this schema (no markdown fences).
Use "" or [] for anything the résumé does not state; do not invent content.

{json.dumps(schema_example(), indent=2)}
"""
)

_JSON_FINDER = re.compile(r"\{.*\}", re.S)


def _extract_json(raw: str) -> dict:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        if m := _JSON_FINDER.search(raw):
            return json.loads(m.group())
        raise


def _cache_path(raw_text: str):
    return config.CACHE_DIR / "drafts" / f"{_sha(raw_text)}.json"


def parse_resume_llm(raw_text: str, model: Optional[str] = None) -> Dict:
    cache_path = _cache_path(raw_text)

    if cache_path.exists():
        logger.debug("draft cache hit %s", cache_path.name)
        return json.loads(cache_path.read_text(encoding="utf-8"))

    messages = [
        {"role": "system", "content": _SYSTEM_PROMPT},
        {"role": "user", "content": raw_text},
    ]
    payload = chat(messages, model=model).strip().strip("`")
    if payload.lower().startswith("json"):
        payload = payload[4:]
    data = _extract_json(payload)
    if not isinstance(data, dict):
        raise LLMError(f"expected a JSON object, got {type(data).__name__}")

    cache_path.parent.mkdir(parents=True, exist_ok=True)
    cache_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    return data
