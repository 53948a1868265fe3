# aibridge/prompts/registry.py
from __future__ import annotations
from dataclasses import dataclass
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple
import json
import os

import yaml

from aibridge.prompt.template import PromptTemplate, SystemPromptTemplate


@dataclass(frozen=True)
class PromptRecord:
    id: str
    version: str
    template: str
    purpose: str = ""
    role: str = "user"


def _version_key(version: str) -> Tuple[Tuple[int, Any], ...]:
    # "1.10.0" sorts after "1.9.2"; non-numeric parts compare as text after numbers
    parts = []
    for piece in version.split("."):
        parts.append((0, int(piece)) if piece.isdigit() else (1, piece))
    return tuple(parts)


class PromptRegistry:
    """
    Loads prompt templates from a directory holding:
      - system_messages.yaml: agent name -> system persona text (must define "default")
      - prompt_db.jsonl: one JSON object per line with id, version, template[, purpose, role]

    The directory defaults to $AIBRIDGE_PROMPTS_DIR, then the prompts shipped in this package.
    """

    def __init__(self, base_dir: Optional[str] = None):
        base = base_dir or os.getenv("AIBRIDGE_PROMPTS_DIR")
        self.base_dir = Path(base) if base else importlib_resources.files("aibridge.prompts")
        self._system_map: Optional[Dict[str, str]] = None
        self._prompts: Optional[Dict[Tuple[str, str], PromptRecord]] = None

    # --- System messages ---
    def get_system_message(self, agent: str = "default") -> str:
        if self._system_map is None:
            with self.base_dir.joinpath("system_messages.yaml").open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            self._system_map = {str(k): (str(v) if v is not None else "") for k, v in data.items()}
        if agent not in self._system_map:
            agent = "default"
        if agent not in self._system_map:
            raise KeyError("system_messages.yaml has no 'default' entry")
        return self._system_map[agent]

    def get_system_template(self, agent: str = "default") -> SystemPromptTemplate:
        return SystemPromptTemplate(self.get_system_message(agent))

    # --- Prompt DB ---
    def _load_prompts(self) -> Dict[Tuple[str, str], PromptRecord]:
        prompts: Dict[Tuple[str, str], PromptRecord] = {}
        with self.base_dir.joinpath("prompt_db.jsonl").open("r", encoding="utf-8") as f:
            for line in f:
                if not line.strip():
                    continue
                obj = json.loads(line)
                record = PromptRecord(
                    id=obj["id"],
                    version=str(obj.get("version", "0.0.0")),
                    template=obj["template"],
                    purpose=obj.get("purpose", ""),
                    role=obj.get("role", "user"),
                )
                prompts[(record.id, record.version)] = record
        return prompts

    def get_prompt(self, prompt_id: str, version: str = "latest") -> PromptRecord:
        if self._prompts is None:
            self._prompts = self._load_prompts()
        if version == "latest":
            versions = [v for (pid, v) in self._prompts if pid == prompt_id]
            if not versions:
                raise KeyError(f"Prompt not found: {prompt_id}")
            version = max(versions, key=_version_key)
        key = (prompt_id, version)
        if key not in self._prompts:
            raise KeyError(f"Prompt not found: {prompt_id}@{version}")
        return self._prompts[key]

    def get_template(self, prompt_id: str, version: str = "latest") -> PromptTemplate:
        record = self.get_prompt(prompt_id, version)
        return PromptTemplate(record.template, message_type=record.role)

    def render_prompt(self, prompt_id: str, data: Mapping[str, Any], version: str = "latest") -> str:
        return self.get_template(prompt_id, version).render(data)
