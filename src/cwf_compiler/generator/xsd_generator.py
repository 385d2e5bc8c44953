from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Optional

from cwf_compiler.errors import EmitError
from cwf_compiler.models import Message, TypeTag

from .templating import DEFAULT_NAMESPACE_BASE, get_template_env

# CWF type -> XSD built-in type
XSD_TYPE_MAP: Dict[TypeTag, str] = {
    TypeTag.INT: "xsd:int",
    TypeTag.DECIMAL: "xsd:decimal",
    TypeTag.STRING: "xsd:string",
}


def generate_xsd(message: Message, namespace_base: str = DEFAULT_NAMESPACE_BASE) -> str:
    """Generate the XML Schema describing one message."""
    env = get_template_env()
    template = env.get_template("message.xsd.j2")

    elements = [
        {"name": f.name, "xsd_type": XSD_TYPE_MAP[f.type]}
        for f in message.fields
    ]

    return template.render(
        namespace=f"{namespace_base}{message.name}",
        type_name=message.name,
        elements=elements,
    )


def write_xsd(
    message: Message,
    output_dir: str,
    file_name: Optional[str] = None,
    namespace_base: str = DEFAULT_NAMESPACE_BASE,
) -> str:
    """Write ``<Message>.xsd`` (or ``file_name``) and return its path."""
    source = generate_xsd(message, namespace_base)
    file_path = os.path.join(output_dir, file_name or f"{message.name}.xsd")
    try:
        Path(file_path).write_text(source, encoding="utf-8")
    except OSError as e:
        raise EmitError(file_path, e) from e
    return file_path
