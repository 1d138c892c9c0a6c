from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"


@dataclass(frozen=True)
class PromptBundle:
    system: str
    user_template: str

    def render_user(self, **values: str) -> str:
        return self.user_template.format(**values)


class PromptLoader:
    """
    YAML prompt loader with English fallback.

    Prompt file structure:
      prompts/{lang}/{agent_name}.yaml
        system: |-
          ...
        user_template: |-
          ... {message} ...
    """

    def __init__(self, prompts_dir: Path = PROMPTS_DIR):
        self.prompts_dir = Path(prompts_dir)
        self._cache: dict[tuple[str, str], PromptBundle] = {}

    def load(self, agent_name: str, language: str = "en") -> PromptBundle:
        lang = (language or "en").lower()
        cache_key = (agent_name, lang)
        if cache_key in self._cache:
            return self._cache[cache_key]

        candidates = [lang] if lang == "en" else [lang, "en"]
        for candidate_lang in candidates:
            path = self.prompts_dir / candidate_lang / f"{agent_name}.yaml"
            if not path.exists():
                continue
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            bundle = self._coerce_bundle(data, path)
            self._cache[cache_key] = bundle
            return bundle

        raise FileNotFoundError(
            f"Prompt file not found for agent={agent_name}, language={language} "
            f"(dir={self.prompts_dir})"
        )

    def _coerce_bundle(self, data: Any, path: Path) -> PromptBundle:
        if not isinstance(data, dict):
            raise ValueError(f"Prompt YAML must be a mapping: {path}")
        system = data.get("system", "")
        user_template = data.get("user_template", "")
        if not isinstance(system, str) or not isinstance(user_template, str):
            raise ValueError(f"Prompt YAML must contain string fields system, user_template: {path}")
        return PromptBundle(system=system, user_template=user_template)
