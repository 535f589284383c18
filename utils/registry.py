# ┏━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┓
# ┃ utils/registry.py — survey definitions & question repository (JSON/YAML) ┃
# ┗━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━┛
from __future__ import annotations
from pathlib import Path
from typing import Dict, Any, List, Optional
import json
import logging

import streamlit as st
import yaml
from streamlit import runtime

from survey.models import Question, TenthQuestion
from utils.config import load_settings

logger = logging.getLogger(__name__)


def _warn(msg: str) -> None:
    logger.warning(msg)
    if runtime.exists():
        st.warning(msg)


def _error(msg: str) -> None:
    logger.error(msg)
    if runtime.exists():
        st.error(msg)


def surveys_dir() -> Path:
    return load_settings().surveys_dir


def _load_json(p: Path) -> Dict[str, Any]:
    with p.open("r", encoding="utf-8") as f:
        return json.load(f)


def _load_yaml(p: Path) -> Dict[str, Any]:
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_survey(key: str, base: Optional[Path] = None) -> Dict[str, Any]:
    """
    Raw survey definition for `key`.
    Lookup order: {key}.json → {key}.yaml → {key}.yml
    """
    base = base or surveys_dir()
    candidates = [
        base / f"{key}.json",
        base / f"{key}.yaml",
        base / f"{key}.yml",
    ]
    for p in candidates:
        if p.exists():
            try:
                doc = _load_json(p) if p.suffix.lower() == ".json" else _load_yaml(p)
            except (OSError, ValueError, yaml.YAMLError) as e:
                _error(f"Failed to load survey definition {p.name}: {e}")
                raise
            logger.info("Loaded survey definition %s", p)
            return doc or {}

    _error(f"Survey definition not found: {key} ({base}/{key}.json|yaml|yml)")
    raise FileNotFoundError(f"No survey file for key={key}")


def _item_text(it: Any) -> str:
    if isinstance(it, dict):
        return str(it.get("text", ""))
    return str(it)


def load_questions(meta: Dict[str, Any]) -> List[Question]:
    """Question repository: the definition's prompts, in order, as Question values."""
    return [Question(_item_text(it)) for it in meta.get("items", [])]


def choices_from(meta: Dict[str, Any]) -> List[str]:
    # four labels, tier order
    return [str(c) for c in meta.get("choices", [])]


def tenth_question_from(meta: Dict[str, Any]) -> Optional[TenthQuestion]:
    tq = meta.get("tenth_question")
    if not tq:
        return None
    return TenthQuestion(text=str(tq.get("text", "")), choices=tuple(str(c) for c in tq.get("choices", [])))

