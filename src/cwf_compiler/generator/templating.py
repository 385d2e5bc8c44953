from __future__ import annotations

from pathlib import Path
from typing import Sequence, Union

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from cwf_compiler.models import TypeTag

DEFAULT_NAMESPACE_BASE = "http://ice.go.cr/"


def tag_equals(value: TypeTag, *candidates: Union[TypeTag, str]) -> bool:
    """Report whether ``value`` equals any of the candidate tags.

    Candidates may be given as TypeTag members or as their keyword text.
    """
    for candidate in candidates:
        if isinstance(candidate, TypeTag):
            if value is candidate:
                return True
        elif value.value == candidate:
            return True
    return False


def is_last_index(sequence: Sequence, index: int) -> bool:
    """Report whether ``index`` is the last index of ``sequence``."""
    return index == len(sequence) - 1


def get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.tests["tagged"] = tag_equals
    env.globals["is_last"] = is_last_index
    return env
