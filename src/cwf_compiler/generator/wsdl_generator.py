from __future__ import annotations

import os
from pathlib import Path

from cwf_compiler.errors import EmitError
from cwf_compiler.models import Operation

from .templating import DEFAULT_NAMESPACE_BASE, get_template_env


def generate_wsdl(operation: Operation, namespace_base: str = DEFAULT_NAMESPACE_BASE) -> str:
    """Generate the WSDL binding an operation's request and response messages.

    The input and output schemas are imported from ``<Message>.xsd`` files
    expected to sit next to the WSDL.
    """
    env = get_template_env()
    template = env.get_template("operation.wsdl.j2")

    return template.render(
        name=operation.name,
        namespace=f"{namespace_base}{operation.name}",
        input_name=operation.input.name,
        input_namespace=f"{namespace_base}{operation.input.name}",
        output_name=operation.output.name,
        output_namespace=f"{namespace_base}{operation.output.name}",
    )


def write_wsdl(
    operation: Operation,
    output_dir: str,
    namespace_base: str = DEFAULT_NAMESPACE_BASE,
) -> str:
    """Write ``<Operation>.wsdl`` and return its path."""
    source = generate_wsdl(operation, namespace_base)
    file_path = os.path.join(output_dir, f"{operation.name}.wsdl")
    try:
        Path(file_path).write_text(source, encoding="utf-8")
    except OSError as e:
        raise EmitError(file_path, e) from e
    return file_path
